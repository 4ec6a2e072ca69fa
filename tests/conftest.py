"""
Shared test fixtures and configuration for Writo data layer tests.
"""
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from writo import create_app
from writo.config import TestConfig
from writo.storage.data_dir import DataDirectory
from writo.storage.json_db import JsonDb


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Writable directory standing in for the production volume."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def local_data_dir(tmp_path: Path) -> Path:
    """Fallback location; not created up front."""
    return tmp_path / "local-data"


@pytest.fixture
def data_directory(temp_data_dir: Path, local_data_dir: Path) -> DataDirectory:
    return DataDirectory(temp_data_dir, local_data_dir)


@pytest.fixture
def json_db(data_directory: DataDirectory) -> JsonDb:
    """Create a JsonDb bound to the temporary data directory."""
    return JsonDb(data_directory)


@pytest.fixture
def app(temp_data_dir: Path, local_data_dir: Path) -> Flask:
    """Create a test Flask application pointed at temporary directories."""

    class _Config(TestConfig):
        DATA_DIR = temp_data_dir
        LOCAL_DATA_DIR = local_data_dir

    app = create_app(_Config)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()

