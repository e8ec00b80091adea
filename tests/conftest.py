"""Pytest configuration and shared fixtures.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def memory_backend():
    from paramstore_lib.storage.memory_backend import MemoryParameterBackend
    return MemoryParameterBackend()


@pytest.fixture
def store(memory_backend):
    from paramstore_lib.parameters.service import ParameterStore
    return ParameterStore(memory_backend)


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient
    from paramstore_lib.main import create_app, Config
    app = create_app(Config(parameter_store=store))
    return TestClient(app)
