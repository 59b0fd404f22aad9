from __future__ import annotations

import pytest

from formsheet.errors import MalformedOrderingError, ValidationRejected
from formsheet.submissions.models import Submission
from formsheet.submissions.parsers import parse_name_order
from formsheet.validation.submission import ensure_human, validate_submission


class TestSubmission:
    def test_pairs_group_repeated_names_in_first_seen_order(self):
        submission = Submission.from_pairs(
            [("color", "red"), ("name", "Ann"), ("color", "blue")]
        )

        assert list(submission.fields) == ["color", "name"]
        assert submission.value("color") == "red, blue"
        assert submission.value("missing") == ""

    def test_reserved_fields(self):
        submission = Submission.from_mapping(
            {
                "name": "Ann",
                "formGoogleSheetName": " signups ",
                "formDataNameOrder": '["name"]',
                "formGoogleSendEmail": "owner@x.com",
            }
        )

        assert submission.data_columns() == ["name"]
        assert submission.sheet_name == "signups"
        assert submission.name_order == '["name"]'
        assert submission.send_email == "owner@x.com"


class TestNameOrder:
    def test_absent_order(self):
        assert parse_name_order("") is None
        assert parse_name_order(None) is None

    def test_valid_order(self):
        assert parse_name_order('["email", "name"]') == ["email", "name"]

    @pytest.mark.parametrize("raw", ["[email", '{"a": 1}', "[1, 2]"])
    def test_invalid_order(self, raw):
        with pytest.raises(MalformedOrderingError):
            parse_name_order(raw)


class TestHoneypot:
    def test_clean_submission_passes(self):
        result = validate_submission(Submission.from_mapping({"name": "Ann"}))
        assert result.is_valid
        assert result.errors == []

    def test_trap_fields_are_reported(self):
        result = validate_submission(Submission.from_mapping({"itsatrap": "", "submit": "Send"}))
        assert not result.is_valid
        assert len(result.errors) == 2

    def test_ensure_human_raises(self):
        with pytest.raises(ValidationRejected, match="trap"):
            ensure_human(Submission.from_mapping({"itsatrap": "1"}))
