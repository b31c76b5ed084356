"""
Global test configuration.
"""

import logging
import os

import pytest

from gimme_readme.config.env_loader import ENV_VARS

_CONFIG_VARS = {name for names in ENV_VARS.values() for name in names}


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_config_env(request, monkeypatch, tmp_path):
    """Ensure a clean configuration environment for each test.

    - Removes GEMINI_*, GIMME_README_* and the bare config variables
      (MODEL, TEMPERATURE, ...) before each test
    - Points the persisted config file at a path that does not exist, so a
      developer's real ~/.gimme_readme_config is never read

    Escape hatch: @pytest.mark.allow_env_pollution keeps the environment.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith(("GEMINI_", "GIMME_README_")) or key in _CONFIG_VARS:
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv(
        "GIMME_README_CONFIG_FILE", str(tmp_path / "isolated" / ".gimme_readme_config")
    )


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "allow_env_pollution: keep the real environment for this test"
    )
