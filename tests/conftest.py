import pytest
from fastapi.testclient import TestClient

from api.server import create_app
from config import Settings

# Test Data Fixtures

SAMPLE_BYTES = bytes(range(256)) * 4  # 1024 bytes, every offset distinct mod 256


@pytest.fixture
def serve_dir(tmp_path):
    """
    Creates a temporary serving root holding a binary and a text sample.
    """
    root = tmp_path / "data"
    root.mkdir()
    (root / "sample.bin").write_bytes(SAMPLE_BYTES)
    (root / "hello.txt").write_bytes(b"Hello, range requests!\n")
    return root


@pytest.fixture
def sample_bytes():
    return SAMPLE_BYTES


@pytest.fixture
def sample_path(serve_dir):
    return serve_dir / "sample.bin"


# App & Client Fixtures

@pytest.fixture
def make_settings(serve_dir, tmp_path):
    """Factory for Settings bound to the temporary serving root."""

    def _make(**overrides):
        values = {
            "serve_dir": serve_dir,
            "log_dir": tmp_path / "logs",
            "log_to_file": False,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def make_client(make_settings):
    """Factory for a TestClient over an app built with custom settings."""

    def _make(**overrides):
        return TestClient(create_app(make_settings(**overrides)))

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
