"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

CREDENTIAL_VARS = ("GEMINI_API_KEY", "GEMINI_API_KEY_2", "HF_API_KEY", "HF_API_KEY_2")


@pytest.fixture(autouse=True)
def isolated_credentials(monkeypatch, tmp_path):
    """Run every test without ambient API keys or key files."""
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
