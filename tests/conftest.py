"""
Pytest fixtures and configuration for applicant data tests.
Provides common test utilities and shared fixtures.
"""

import json

import pytest

from applicant_data.config.store_config import CONFIG_ENV_VAR, reset_store_config_cache


@pytest.fixture(autouse=True)
def isolated_store_config(monkeypatch):
    """Run every test against default store settings."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_store_config_cache()
    yield
    reset_store_config_cache()


@pytest.fixture
def sample_document(tmp_path):
    """Create a persisted applicant document for testing."""
    document = tmp_path / "applicant.json"
    data = {
        "applicant": {
            "name": {"first_name": "Ada", "last_name": "Lovelace"},
            "dob": 1620604800000,
            "household": [
                {"entity_name": "Alice", "age": 9},
                {"entity_name": "Bob", "age": 3},
            ],
        }
    }
    document.write_text(json.dumps(data))
    return document
