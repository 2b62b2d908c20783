from fastapi import APIRouter, Depends
from sqlalchemy import text

from siswa_directory.api.deps import get_file_storage
from siswa_directory.core.database import engine
from siswa_directory.services.storage import FileStorage

router = APIRouter(prefix="/meta")


@router.get("/storage")
def storage_meta(storage: FileStorage = Depends(get_file_storage)):
    return storage.describe()


@router.get("/health")
def health_meta(storage: FileStorage = Depends(get_file_storage)):
    db_ok = False
    db_error = None
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_ok = True
    except Exception as exc:
        db_error = str(exc)
    return {
        "ok": db_ok,
        "database": {"ok": db_ok, "error": db_error},
        "storage": storage.describe(),
    }
