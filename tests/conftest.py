"""Pytest configuration and fixtures.

Provides environment isolation and shared test data. Fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os
from typing import Any

import pytest

from jsonous.config import clear_settings_cache

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "jsonous.config.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_settings_env(monkeypatch):
    """Clear JSONOUS_* env vars and the cached settings around each test."""
    for key in list(os.environ.keys()):
        if key.startswith("JSONOUS_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def jsonous_debug_logging():
    """Let caplog see the library's DEBUG records."""
    logging.getLogger("jsonous").setLevel(logging.DEBUG)


# =============================================================================
# Shared data
# =============================================================================


@pytest.fixture
def person_payload() -> dict[str, Any]:
    """A small nested document exercising most decoder shapes."""
    return {
        "name": "Ada",
        "age": 36,
        "admin": True,
        "born": "1815-12-10",
        "tags": ["math", "engines"],
        "address": {"city": "London", "lines": ["12 St James's Square"]},
        "nickname": None,
    }
