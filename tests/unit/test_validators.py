"""
Unit tests for built-in validators.

Includes property-based testing with hypothesis for validators.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rulegate import ValidationException
from rulegate.core.validators import BUILTIN_VALIDATORS, REQUIRED_RULES, is_empty


def check(rule: str, value, params=(), record=None) -> bool:
    """Run a built-in validator on one value"""
    record = record if record is not None else {"field": value}
    return BUILTIN_VALIDATORS[rule].validate("field", record, list(params), value)


class TestIsEmpty:
    """Tests for the emptiness helper"""

    @pytest.mark.parametrize("value", [None, "", [], (), {}])
    def test_empty_values(self, value):
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", [0, "0", False, " ", [None], {"a": 1}])
    def test_non_empty_values(self, value):
        assert is_empty(value) is False


class TestPresenceValidators:
    """Tests for required and required_file"""

    def test_required(self):
        assert check("required", "x") is True
        assert check("required", 0) is True
        assert check("required", "") is False
        assert check("required", None) is False
        assert check("required", []) is False

    def test_required_file(self):
        assert check("required_file", {"name": "cv.pdf", "error": 0}) is True
        assert check("required_file", {"name": "cv.pdf"}) is True
        assert check("required_file", {"name": "cv.pdf", "error": 4}) is False
        assert check("required_file", {"name": ""}) is False
        assert check("required_file", "cv.pdf") is False

    def test_required_rule_names(self):
        assert REQUIRED_RULES == {"required", "required_file"}

    @given(st.text(min_size=1))
    def test_property_any_nonempty_string_passes(self, value):
        """Property test: any non-empty string satisfies required"""
        assert check("required", value) is True


class TestStringValidators:
    """Tests for length, character class and membership validators"""

    def test_lengths(self):
        assert check("min_len", "abc", ["3"]) is True
        assert check("min_len", "ab", ["3"]) is False
        assert check("max_len", "abc", ["3"]) is True
        assert check("max_len", "abcd", ["3"]) is False
        assert check("exact_len", "abc", ["3"]) is True
        assert check("exact_len", "ab", ["3"]) is False
        assert check("between_len", "abcd", ["3", "8"]) is True
        assert check("between_len", "ab", [3, 8]) is False

    def test_length_counts_characters_not_bytes(self):
        assert check("max_len", "ééé", ["3"]) is True

    def test_length_of_numbers(self):
        assert check("max_len", 12345, ["5"]) is True
        assert check("max_len", 123456, ["5"]) is False

    def test_character_classes(self):
        assert check("alpha", "Éloïse") is True
        assert check("alpha", "abc1") is False
        assert check("alpha_numeric", "abc123") is True
        assert check("alpha_numeric", "abc 123") is False
        assert check("alpha_dash", "first-name_x") is True
        assert check("alpha_dash", "name1") is False
        assert check("alpha_space", "John Smith 3rd") is True
        assert check("alpha_space", "John-Smith") is False

    def test_contains(self):
        assert check("contains", "green", ["red", "green"]) is True
        assert check("contains", "Green", ["red", "green"]) is False

    def test_contains_list(self):
        assert check("contains_list", "Green", ["red", "green"]) is True
        assert check("contains_list", "blue", ["red", "green"]) is False
        assert check("doesnt_contain_list", "blue", ["red", "green"]) is True
        assert check("doesnt_contain_list", "RED", ["red", "green"]) is False

    def test_regex(self):
        assert check("regex", "ABC-123", [r"^[A-Z]{3}-\d{3}$"]) is True
        assert check("regex", "abc-123", [r"^[A-Z]{3}-\d{3}$"]) is False

    def test_regex_with_slash_delimiters_and_flags(self):
        assert check("regex", "abc-123", [r"/^[A-Z]{3}-\d{3}$/i"]) is True

    @pytest.mark.parametrize(
        "rule,params",
        [
            ("min_len", ["abc"]),
            ("max_len", ["3.5"]),
            ("exact_len", []),
            ("between_len", ["3", "x"]),
            ("between_len", ["3"]),
        ],
    )
    def test_non_integer_length_param_raises(self, rule, params):
        """Test a bad length is a configuration error naming the rule"""
        with pytest.raises(ValidationException, match=rule):
            check(rule, "abc", params)

    def test_invalid_regex_raises(self):
        """Test a broken pattern is a configuration error, not a failure"""
        with pytest.raises(ValidationException):
            check("regex", "abc", ["[unclosed"])


class TestNumericValidators:
    """Tests for numeric and type validators"""

    def test_numeric(self):
        assert check("numeric", "12.5") is True
        assert check("numeric", 7) is True
        assert check("numeric", "12a") is False
        assert check("numeric", True) is False

    def test_integer(self):
        assert check("integer", "42") is True
        assert check("integer", "-42") is True
        assert check("integer", 42) is True
        assert check("integer", "4.2") is False
        assert check("integer", True) is False

    def test_float(self):
        assert check("float", "4.2") is True
        assert check("float", "abc") is False

    def test_boolean(self):
        for value in ["1", 1, "true", True, "yes", "on", "0", 0, "false", False, "no", "off"]:
            assert check("boolean", value) is True
        assert check("boolean", "True") is False
        assert check("boolean", "maybe") is False

    def test_min_max_numeric(self):
        assert check("min_numeric", "18", ["18"]) is True
        assert check("min_numeric", 17, ["18"]) is False
        assert check("max_numeric", "99.5", ["100"]) is True
        assert check("max_numeric", 101, ["100"]) is False
        assert check("min_numeric", "abc", ["1"]) is False

    @pytest.mark.parametrize("value", ["nan", "NaN", "inf", "-inf", "Infinity", "1_000", "0x1A", "", "1e"])
    def test_non_decimal_strings_are_not_numbers(self, value):
        assert check("numeric", value) is False
        assert check("float", value) is False
        assert check("min_numeric", value, ["0"]) is False
        assert check("max_numeric", value, ["100"]) is False

    def test_non_finite_floats_are_not_numbers(self):
        assert check("numeric", float("nan")) is False
        assert check("numeric", float("inf")) is False
        assert check("numeric", "1.5e3") is True
        assert check("numeric", " .5 ") is True

    @pytest.mark.parametrize("rule", ["min_numeric", "max_numeric"])
    @pytest.mark.parametrize("params", [["abc"], ["nan"], []])
    def test_non_numeric_bound_raises(self, rule, params):
        """Test a bad bound is a configuration error, not a failure"""
        with pytest.raises(ValidationException, match=rule):
            check(rule, "5", params)

    @given(st.integers(min_value=-10**15, max_value=10**15))
    def test_property_integers_are_integer_and_numeric(self, value):
        """Property test: every int (and its string form) is integer and numeric"""
        assert check("integer", value) is True
        assert check("integer", str(value)) is True
        assert check("numeric", str(value)) is True


class TestFormatValidators:
    """Tests for email, url, ip and date validators"""

    def test_email(self):
        assert check("valid_email", "alice@example.com") is True
        assert check("valid_email", "alice@") is False
        assert check("valid_email", "alice.example.com") is False

    def test_url(self):
        assert check("valid_url", "https://example.com/path?q=1") is True
        assert check("valid_url", "example.com") is False
        assert check("valid_url", "https://exa mple.com") is False

    def test_ip(self):
        assert check("valid_ip", "192.168.0.1") is True
        assert check("valid_ip", "::1") is True
        assert check("valid_ip", "300.1.1.1") is False

    def test_date(self):
        assert check("date", "2024-02-29") is True
        assert check("date", "2023-02-29") is False
        assert check("date", "29/02/2024", ["%d/%m/%Y"]) is True
        assert check("date", "2024-02-29", ["%d/%m/%Y"]) is False


class TestFieldValidators:
    """Tests for validators comparing two fields"""

    def test_equalsfield(self):
        record = {"password": "s3cret", "password_confirm": "s3cret"}
        assert check("equalsfield", "s3cret", ["password"], record) is True
        assert check("equalsfield", "other", ["password"], record) is False

    def test_equalsfield_nested(self):
        record = {"account": {"password": "s3cret"}}
        assert check("equalsfield", "s3cret", ["account.password"], record) is True
