from __future__ import annotations

import struct
import zlib
from unittest.mock import patch

import pytest

from app import create_app
from config import TestingConfig
from models import db


def _config_for(tmp_path):
    class _Config(TestingConfig):
        OUTPUT_DIR = str(tmp_path / "processed_images")
        UPLOAD_DIR = str(tmp_path / "uploads")
        INPUT_CSV_PATH = str(tmp_path / "products.csv")

    return _Config


# ---------------------------------------------------------------------------
# App / database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def app(tmp_path):
    """Flask app over an in-memory SQLite database and temp directories."""
    flask_app = create_app(_config_for(tmp_path))
    with flask_app.app_context():
        yield flask_app
        db.session.remove()


@pytest.fixture()
def session(app):
    return db.session


@pytest.fixture()
def mock_task():
    """Replace the Celery task so /submit never reaches a broker."""
    with patch("tasks.process_batch") as task:
        yield task


@pytest.fixture()
def client(tmp_path, mock_task):
    flask_app = create_app(_config_for(tmp_path))
    with flask_app.test_client() as c:
        yield c



@pytest.fixture()
def write_oversized_png():
    """Return a writer for PNGs whose header declares 20000x20000 with no pixel data."""
    def chunk(kind, data):
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))

    def write(path, width=20000, height=20000):
        header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
        path.write_bytes(b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IEND", b""))
        return str(path)

    return write
