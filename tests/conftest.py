"""
Pytest configuration and fixtures for rulegate tests

Every test gets a fresh shared context so registrations made through the
class-level Validation API never leak between tests.
"""
import pytest

from rulegate import EngineSettings, Validation, ValidationContext, reset_default_context


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that exercise the CLI and file loading end to end"
    )


# =======================
# CONTEXT FIXTURES
# =======================

@pytest.fixture(autouse=True)
def fresh_default_context(monkeypatch):
    """
    Replace the shared context and instance for each test

    RULEGATE_* variables from the developer's shell are cleared so default
    settings apply.
    """
    for name in (
        "RULEGATE_RULES_DELIMITER",
        "RULEGATE_PARAMETERS_DELIMITER",
        "RULEGATE_PARAMETERS_ARRAY_DELIMITER",
        "RULEGATE_FIELD_CHARS_TO_SPACES",
        "RULEGATE_LANG",
    ):
        monkeypatch.delenv(name, raising=False)

    context = reset_default_context()
    Validation._instance = None
    yield context
    Validation._instance = None


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def context(settings) -> ValidationContext:
    """Private context, independent of the shared one"""
    return ValidationContext(settings)


@pytest.fixture
def validation(context) -> Validation:
    """English Validation bound to the private context"""
    return Validation(lang="en", context=context)


# =======================
# SAMPLE DATA FIXTURES
# =======================

@pytest.fixture
def signup_rules() -> dict:
    return {
        "username": "required|alpha_numeric|between_len,3;16",
        "email": "required|valid_email",
        "age": "integer|min_numeric,18",
        "tags": ["required", ["max_len", 10]],
    }


@pytest.fixture
def valid_signup() -> dict:
    return {
        "username": "alice42",
        "email": "alice@example.com",
        "age": "30",
        "tags": ["python", "rules"],
    }
