import json

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from siswa_directory.core.config import settings
from siswa_directory.core.database import SessionLocal
from siswa_directory.services.siswa import StudentDirectoryService
from siswa_directory.services.storage import FileStorage, get_storage
from siswa_directory.services.uploads import IncomingFile


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_file_storage() -> FileStorage:
    return get_storage()


def get_service(
    request: Request,
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
) -> StudentDirectoryService:
    base_url = settings.app_url or str(request.base_url)
    return StudentDirectoryService(db, storage, base_url)


async def read_payload(request: Request) -> dict:
    """Collect request fields from a JSON body or a (multipart) form.

    Uploaded files are read into memory, capped one byte past the upload
    limit so oversize files can still be reported as such.
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return body if isinstance(body, dict) else {}

    if "multipart/form-data" not in content_type and "application/x-www-form-urlencoded" not in content_type:
        return {}

    limit = settings.max_upload_kb * 1024 + 1
    form = await request.form()
    payload: dict = {}
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            content = await value.read(limit)
            payload[key] = IncomingFile(
                filename=value.filename or "",
                content_type=value.content_type,
                content=content,
            )
            await value.close()
        else:
            payload[key] = value
    return payload
