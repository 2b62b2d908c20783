import logging
from pathlib import Path
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from siswa_directory.core.config import settings
from siswa_directory.core.errors import StorageError

logger = logging.getLogger(__name__)

LOCAL_PUBLIC_PATH = "/storage"
MISSING_OBJECT_CODES = {"404", "NoSuchKey", "NotFound"}


def _object_key(prefix: str, extension: str) -> str:
    return f"{prefix.strip('/')}/{uuid4().hex}.{extension.lstrip('.')}"


def _s3_object_url(bucket: str, key: str, region: str | None) -> str:
    if not region or region == "us-east-1":
        return f"https://{bucket}.s3.amazonaws.com/{key}"
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"


def s3_is_enabled() -> bool:
    return bool(settings.s3_bucket)


def _create_s3_client():
    kwargs: dict = {}
    if settings.s3_region:
        kwargs["region_name"] = settings.s3_region
    if settings.s3_endpoint_url:
        kwargs["endpoint_url"] = settings.s3_endpoint_url
    if settings.aws_access_key_id and settings.aws_secret_access_key:
        kwargs["aws_access_key_id"] = settings.aws_access_key_id
        kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
        if settings.aws_session_token:
            kwargs["aws_session_token"] = settings.aws_session_token
    return boto3.client("s3", **kwargs)


class FileStorage:
    """Where uploaded images live.

    Paths handed out by ``store`` are relative (``portofolios/<hex>.png``) and
    are what gets persisted on the row; ``url`` turns them back into
    something a client can fetch.
    """

    backend = "abstract"

    def store(self, prefix: str, content: bytes, extension: str, content_type: str | None = None) -> str:
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def delete(self, path: str) -> None:
        raise NotImplementedError

    def url(self, path: str | None, base_url: str) -> str | None:
        raise NotImplementedError

    def describe(self) -> dict:
        return {"backend": self.backend}


class LocalFileStorage(FileStorage):
    backend = "local"

    def __init__(self, root: str | Path, public_path: str = LOCAL_PUBLIC_PATH):
        self.root = Path(root)
        self.public_path = "/" + public_path.strip("/")

    def _resolve(self, path: str) -> Path:
        root = self.root.resolve()
        target = (root / path).resolve()
        if root not in target.parents:
            raise StorageError(f"Path escapes storage root: {path}")
        return target

    def store(self, prefix: str, content: bytes, extension: str, content_type: str | None = None) -> str:
        key = _object_key(prefix, extension)
        target = self._resolve(key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as handle:
                handle.write(content)
        except OSError as exc:
            raise StorageError(f"Unable to write file {key}: {exc}") from exc
        logger.debug("Stored %s (%d bytes)", key, len(content))
        return key

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def delete(self, path: str) -> None:
        try:
            self._resolve(path).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Unable to delete file {path}: {exc}") from exc
        logger.debug("Deleted %s", path)

    def url(self, path: str | None, base_url: str) -> str | None:
        if not path:
            return None
        return f"{base_url.rstrip('/')}{self.public_path}/{path.lstrip('/')}"

    def describe(self) -> dict:
        return {**super().describe(), "root": str(self.root), "public_path": self.public_path}


class S3FileStorage(FileStorage):
    backend = "s3"

    def __init__(
        self,
        bucket: str,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
        client=None,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = _create_s3_client()
        return self._client

    def store(self, prefix: str, content: bytes, extension: str, content_type: str | None = None) -> str:
        key = _object_key(prefix, extension)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Unable to upload object to S3: {exc}") from exc
        logger.debug("Uploaded s3://%s/%s (%d bytes)", self.bucket, key, len(content))
        return key

    def exists(self, path: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=path)
        except ClientError as exc:
            error_code = str(exc.response.get("Error", {}).get("Code"))
            if error_code in MISSING_OBJECT_CODES:
                return False
            raise StorageError(f"Unable to inspect S3 object: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Unable to inspect S3 object: {exc}") from exc
        return True

    def delete(self, path: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=path)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Unable to delete S3 object: {exc}") from exc
        logger.debug("Deleted s3://%s/%s", self.bucket, path)

    def url(self, path: str | None, base_url: str) -> str | None:
        if not path:
            return None
        key = path.lstrip("/")
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return _s3_object_url(self.bucket, key, self.region)

    def describe(self) -> dict:
        return {
            **super().describe(),
            "bucket": self.bucket,
            "region": self.region,
            "endpoint_url": self.endpoint_url,
        }


def get_storage() -> FileStorage:
    if s3_is_enabled():
        return S3FileStorage(
            settings.s3_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
        )
    return LocalFileStorage(settings.storage_dir)
