from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from siswa_directory.api.deps import get_service, read_payload
from siswa_directory.api.responses import envelope
from siswa_directory.core.errors import operation_guard
from siswa_directory.services.siswa import StudentDirectoryService

router = APIRouter()


@router.post("/login")
async def login(request: Request, service: StudentDirectoryService = Depends(get_service)):
    """Check nis + password. Nothing is issued; the caller only gets the record back."""
    with operation_guard("Gagal melakukan login"):
        payload = await read_payload(request)
        siswa = await run_in_threadpool(service.login, payload)
    return envelope("Login berhasil", siswa)
