import pytest
from botocore.exceptions import ClientError

from siswa_directory.core.config import settings
from siswa_directory.core.errors import StorageError
from siswa_directory.services import storage as storage_module
from siswa_directory.services.storage import LocalFileStorage, S3FileStorage, get_storage


class FakeS3Client:
    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail_with: str | None = None

    def _maybe_fail(self, operation: str):
        if self.fail_with:
            raise ClientError({"Error": {"Code": self.fail_with, "Message": "boom"}}, operation)

    def put_object(self, Bucket, Key, Body, ContentType):
        self._maybe_fail("PutObject")
        self.objects[Key] = Body

    def head_object(self, Bucket, Key):
        self._maybe_fail("HeadObject")
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        return {"ContentLength": len(self.objects[Key])}

    def delete_object(self, Bucket, Key):
        self._maybe_fail("DeleteObject")
        self.objects.pop(Key, None)


def test_local_storage_round_trip(tmp_path):
    store = LocalFileStorage(tmp_path)

    path = store.store("portofolios", b"data", "png")

    assert path.startswith("portofolios/") and path.endswith(".png")
    assert store.exists(path)
    assert (tmp_path / path).read_bytes() == b"data"
    store.delete(path)
    assert not store.exists(path)
    store.delete(path)


def test_local_storage_url(tmp_path):
    store = LocalFileStorage(tmp_path)

    assert store.url(None, "http://localhost:8000/") is None
    assert store.url("", "http://localhost:8000/") is None
    assert store.url("certifikats/x.gif", "http://localhost:8000/") == "http://localhost:8000/storage/certifikats/x.gif"


def test_local_storage_refuses_paths_outside_root(tmp_path):
    store = LocalFileStorage(tmp_path / "root")

    with pytest.raises(StorageError):
        store.exists("../outside.png")


def test_s3_storage_operations():
    client = FakeS3Client()
    store = S3FileStorage("siswa-bucket", region="ap-southeast-1", client=client)

    path = store.store("certifikats", b"img", "webp", "image/webp")

    assert client.objects[path] == b"img"
    assert store.exists(path)
    assert store.url(path, "http://ignored/") == f"https://siswa-bucket.s3.ap-southeast-1.amazonaws.com/{path}"
    store.delete(path)
    assert not store.exists(path)


def test_s3_storage_url_with_custom_endpoint():
    store = S3FileStorage("siswa", endpoint_url="http://minio:9000/", client=FakeS3Client())

    assert store.url("portofolios/a.png", "http://ignored/") == "http://minio:9000/siswa/portofolios/a.png"


def test_s3_errors_become_storage_errors():
    client = FakeS3Client()
    client.fail_with = "AccessDenied"
    store = S3FileStorage("siswa", client=client)

    with pytest.raises(StorageError):
        store.store("portofolios", b"img", "png")
    with pytest.raises(StorageError):
        store.exists("portofolios/a.png")
    with pytest.raises(StorageError):
        store.delete("portofolios/a.png")


def test_get_storage_picks_backend(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "s3_bucket", None)
    monkeypatch.setattr(settings, "storage_dir", str(tmp_path))
    assert isinstance(get_storage(), LocalFileStorage)

    monkeypatch.setattr(settings, "s3_bucket", "siswa-bucket")
    monkeypatch.setattr(storage_module, "_create_s3_client", lambda: FakeS3Client())
    selected = get_storage()
    assert isinstance(selected, S3FileStorage)
    assert selected.describe()["bucket"] == "siswa-bucket"
    assert isinstance(selected.client, FakeS3Client)
