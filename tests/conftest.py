"""
Global pytest configuration and fixtures.
"""

import os
from pathlib import Path

import pytest

from sealedenv.crypto import generate_key_pair
from sealedenv.models import KeyPair
from tests.helpers import FIXTURES_DIR, FakeDecrypt, MemorySink

# Variables written by the fixture files; removed from os.environ around each test
FIXTURE_VARIABLES = (
    "DOTENV_PUBLIC_KEY",
    "DOTENV_PRIVATE_KEY",
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "APP_ENV",
    "APP_NAME",
    "EMPTY",
    "SEALEDENV_CONFIG",
    "SEALEDENV_DEBUG",
)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def fake_decrypt() -> FakeDecrypt:
    return FakeDecrypt()


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture(scope="session")
def key_pair() -> KeyPair:
    """A real key pair, generated once per session."""
    return generate_key_pair()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep fixture variables from leaking between tests."""
    for name in FIXTURE_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    yield
    for name in FIXTURE_VARIABLES:
        os.environ.pop(name, None)
