from pathlib import Path
import os
import sys
import tempfile

import pytest

# Settings are read at import time, so point them at throwaway resources first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="siswa-storage-")
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ.pop("S3_BUCKET", None)
os.environ.pop("APP_URL", None)

sys.path.append(str(Path(__file__).resolve().parents[1]))

from fastapi.testclient import TestClient

from siswa_directory.api.deps import get_file_storage
from siswa_directory.core.database import Base, engine
from siswa_directory.main import app
from siswa_directory.services.storage import LocalFileStorage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
GIF_BYTES = b"GIF89a" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 64


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(tmp_path / "storage")


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_file_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_siswa(client):
    def _make(**overrides):
        payload = {
            "nis": "1001",
            "nama": "Ana",
            "rombel": "7A",
            "rayon": "North",
            "password": "secret1",
        }
        payload.update(overrides)
        response = client.post("/siswas", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make
