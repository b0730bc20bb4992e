"""Shared fixtures for kubectl-ai tests."""

import pytest

CONFIG_ENV_VARS = [
    "OPENAI_DEPLOYMENT_NAME",
    "OPENAI_API_KEY",
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_API_VERSION",
    "REQUIRE_CONFIRMATION",
    "TEMPERATURE",
    "MAX_TOKENS",
    "OPENAI_REQUEST_TIMEOUT",
]


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch, tmp_path):
    """Keep the developer's environment and .env files out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    # Wide terminal so Rich help output is not truncated with ellipses.
    monkeypatch.setenv("COLUMNS", "200")
