"""Pytest configuration and fixtures for fvalidator tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from fvalidator import ValidatorSettings, reset_settings, validator  # noqa: E402


@pytest.fixture(autouse=True)
def default_settings():
    """Restore the process-wide default settings around every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def env_vars(monkeypatch):
    """Helper to set environment variables."""

    def _set_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, str(value))

    return _set_env


@pytest.fixture
def user_schema():
    """Object rule set with nested array and object children."""
    address = validator("address").is_object({
        "city": validator("city").is_required().is_string(),
        "zip": validator("zip").is_string().is_length(5, "Código postal inválido"),
    })
    return (
        validator("user")
        .is_required()
        .is_object({
            "name": validator("name").is_required().is_string(),
            "email": validator("email").is_required().is_email(),
            "age": validator("age").is_number().is_min(0).is_max(130),
            "role": validator("role").is_enum(["admin", "editor", "viewer"]),
            "tags": validator("tags").is_array(validator("tag").is_string()),
            "address": address,
        })
    )


@pytest.fixture
def strict_settings():
    """Settings with a shallow depth limit and custom messages."""
    return ValidatorSettings(max_depth=2, messages={"min": "Al menos {min}"})
