"""
Shared test fixtures for pp-cli tests.
Patches config module to avoid loading a real .env and making API calls.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or sharing cached data."""
    from pp_cli import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "BAP_TOKEN", "fake-bap-token")
    monkeypatch.setattr(config, "DATAVERSE_TOKEN", "fake-dv-token")
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)
    monkeypatch.setattr(config, "RUNTIME_QUIET", False)
    monkeypatch.setattr(config, "MCP_RESPONSE_MODE", "legacy")
    monkeypatch.setattr(config, "_cache", {})
