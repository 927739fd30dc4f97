"""Shared fixtures for parser tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def session_json():
    return (FIXTURES_DIR / "session.json").read_bytes()


@pytest.fixture
def votes_csv():
    return (FIXTURES_DIR / "votes.csv").read_bytes()
