# -*- coding: utf-8 -*-
import pytest

from constants.project import validate_percent_complete, validate_priority, validate_task_status
from utils.exceptions import ValidationFailed
from utils.validators import (
    clean_payload,
    optional_bool,
    optional_date,
    optional_email,
    optional_int,
    required_str,
)


class TestCleanPayload:

    def test_accepts_known_fields(self):
        assert clean_payload({"name": "x"}, ("name", "notes")) == {"name": "x"}

    def test_none_is_empty_object(self):
        assert clean_payload(None, ("name",)) == {}

    def test_rejects_non_object(self):
        with pytest.raises(ValidationFailed):
            clean_payload(["name"], ("name",))

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationFailed) as exc:
            clean_payload({"name": "x", "zeta": 1, "alpha": 2}, ("name",))
        assert "alpha, zeta" in exc.value.description

    def test_required_blank(self):
        with pytest.raises(ValidationFailed):
            clean_payload({"name": "   "}, ("name",), required=("name",))


class TestFieldValidators:

    def test_required_str_strips(self):
        assert required_str({"name": "  Acme  "}, "name") == "Acme"
        with pytest.raises(ValidationFailed):
            required_str({"name": "x" * 11}, "name", max_length=10)
        with pytest.raises(ValidationFailed):
            required_str({"name": 5}, "name")

    def test_optional_date(self):
        assert optional_date({"d": "2025-02-28"}, "d") == "2025-02-28"
        assert optional_date({"d": ""}, "d") == ""
        assert optional_date({}, "d") is None
        with pytest.raises(ValidationFailed):
            optional_date({"d": "2025-02-30"}, "d")

    def test_optional_bool_and_int(self):
        assert optional_bool({"a": False}, "a") is False
        with pytest.raises(ValidationFailed):
            optional_bool({"a": "false"}, "a")
        assert optional_int({"n": 3}, "n") == 3
        with pytest.raises(ValidationFailed):
            optional_int({"n": True}, "n")

    def test_optional_email(self):
        assert optional_email({"email": "a.b@example.org"}) == "a.b@example.org"
        assert optional_email({"email": None}) is None
        with pytest.raises(ValidationFailed):
            optional_email({"email": "a@b"})

    def test_enumerations(self):
        assert validate_task_status("Blocked") == "Blocked"
        assert validate_priority("Critical") == "Critical"
        assert validate_percent_complete(0) == 0
        for call, value in (
            (validate_task_status, "blocked"),
            (validate_priority, "urgent"),
            (validate_percent_complete, -1),
            (validate_percent_complete, True),
        ):
            with pytest.raises(ValidationFailed):
                call(value)
