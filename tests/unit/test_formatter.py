"""
Unit tests for error message resolution and rendering.
"""

import pytest

from rulegate import FailureRecord, MissingMessageError
from rulegate.messages import ErrorFormatter, MessageCatalog, substitute, ucwords


@pytest.fixture
def catalog() -> MessageCatalog:
    return MessageCatalog.load("en")


@pytest.fixture
def formatter(context, catalog) -> ErrorFormatter:
    return ErrorFormatter(context, catalog)


def failure(field: str, rule: str, params=None) -> FailureRecord:
    return FailureRecord(field=field, value="x", rule=rule, params=params or [])


class TestMessageResolution:
    """Tests for message template precedence"""

    def test_catalog_message(self, formatter):
        assert formatter.format(failure("first_name", "required")) == "The First Name field is required"

    def test_context_override_beats_catalog(self, context, formatter):
        context.set_error_message("required", "Please fill in {field}")

        assert formatter.format(failure("email", "required")) == "Please fill in Email"

    def test_field_override_beats_context_override(self, context, catalog):
        context.set_error_message("required", "Please fill in {field}")
        formatter = ErrorFormatter(context, catalog, {"email": {"required": "We need your email"}})

        assert formatter.format(failure("email", "required")) == "We need your email"
        assert formatter.format(failure("name", "required")) == "Please fill in Name"

    def test_field_override_with_validate_prefix(self, context, catalog):
        formatter = ErrorFormatter(context, catalog, {"email": {"validate_required": "Email missing"}})

        assert formatter.format(failure("email", "required")) == "Email missing"

    def test_custom_validator_message(self, context, formatter):
        context.add_validator("even", lambda f, r, p, v: int(v) % 2 == 0, "The {field} field must be even")

        assert formatter.format(failure("lucky_number", "even")) == "The Lucky Number field must be even"

    def test_missing_message_raises(self, formatter):
        with pytest.raises(MissingMessageError) as exc_info:
            formatter.format(failure("x", "unregistered"))

        assert exc_info.value.rule_name == "unregistered"


class TestPlaceholders:
    """Tests for {field}, {param} and {param[i]} substitution"""

    def test_indexed_params(self, formatter):
        message = formatter.format(failure("username", "between_len", ["3", "8"]))

        assert message == "The Username field needs to be between 3 and 8 characters"

    def test_joined_params(self, formatter):
        message = formatter.format(failure("color", "contains", ["red", "green"]))

        assert message == "The Color field can only be one of the following: red, green"

    def test_param_naming_a_field_uses_its_label(self, context, formatter):
        context.set_field_name("password", "Your Password")

        message = formatter.format(failure("password_confirm", "equalsfield", ["password"]))

        assert message == "The Password Confirm field does not equal Your Password field"

    def test_registered_field_name(self, context, formatter):
        context.set_field_name("dob", "Date of birth")

        assert formatter.format(failure("dob", "date")) == "The Date of birth field must be a valid date"

    def test_replaced_text_is_not_rescanned(self, context, formatter):
        """Test a label containing a placeholder appears literally"""
        context.set_field_name("x", "{param[0]}")

        assert formatter.format(failure("x", "min_len", ["3"])) == "The {param[0]} field needs to be at least 3 characters"

    def test_transformer_hook(self, formatter):
        def shout(replacements):
            replacements["{field}"] = replacements["{field}"].upper()
            return replacements

        assert formatter.format(failure("name", "required"), shout) == "The NAME field is required"


class TestReadableNames:
    """Tests for field label derivation"""

    @pytest.mark.parametrize(
        "field,expected",
        [
            ("street_name", "Street Name"),
            ("first-name", "First Name"),
            ("iPhone_model", "IPhone Model"),
            ("zip", "Zip"),
        ],
    )
    def test_prettified_key(self, formatter, field, expected):
        assert formatter.readable_name(field) == expected

    def test_ucwords_keeps_the_rest_of_each_word(self):
        assert ucwords("hello wORLD  again") == "Hello WORLD  Again"

    def test_substitute_prefers_longer_placeholders(self):
        replacements = {"{param}": "a, b", "{param[0]}": "a"}

        assert substitute("{param[0]} of {param}", replacements) == "a of a, b"


class TestRendering:
    """Tests for plain lists and the markup renderer"""

    def test_readable_errors_carry_no_markup(self, formatter):
        messages = formatter.readable_errors([failure("name", "required")])

        assert messages == ["The Name field is required"]

    def test_errors_by_field(self, formatter):
        report = [failure("name", "required"), failure("age", "integer")]

        assert formatter.errors_by_field(report) == {
            "name": "The Name field is required",
            "age": "The Age field must be a number without decimals",
        }

    def test_render_markup(self, formatter):
        html = formatter.render_markup([failure("name", "required")])

        assert html == (
            '<span class="rulegate-error-message">The '
            '<span class="rulegate-field">Name</span> field is required</span>'
        )

    def test_render_markup_custom_classes_and_escaping(self, context, formatter):
        context.set_field_name("name", "<b>Name</b>")

        html = formatter.render_markup([failure("name", "required")], field_class="f", error_class="e")

        assert html == '<span class="e">The <span class="f">&lt;b&gt;Name&lt;/b&gt;</span> field is required</span>'
