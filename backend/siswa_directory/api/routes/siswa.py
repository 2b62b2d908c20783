from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from siswa_directory.api.deps import get_service, read_payload
from siswa_directory.api.responses import envelope
from siswa_directory.core.errors import operation_guard
from siswa_directory.services.siswa import StudentDirectoryService

router = APIRouter(prefix="/siswas")


@router.get("")
def list_siswas(service: StudentDirectoryService = Depends(get_service)):
    with operation_guard("Gagal mengambil data siswa"):
        siswas = service.list_all()
    return envelope("Data siswa berhasil diambil", siswas, total=len(siswas))


@router.post("", status_code=201)
async def create_siswa(request: Request, service: StudentDirectoryService = Depends(get_service)):
    with operation_guard("Gagal menambahkan siswa"):
        payload = await read_payload(request)
        created = await run_in_threadpool(service.create, payload)
    return envelope("Siswa berhasil ditambahkan", created, status_code=201)


# Registered ahead of /{siswa_id} so "search" is never taken for an id.
@router.get("/search")
def search_siswas(request: Request, service: StudentDirectoryService = Depends(get_service)):
    with operation_guard("Gagal melakukan pencarian"):
        siswas = service.search(dict(request.query_params))
    return envelope("Hasil pencarian berhasil diambil", siswas, total=len(siswas))


@router.get("/{siswa_id}")
def show_siswa(siswa_id: str, service: StudentDirectoryService = Depends(get_service)):
    with operation_guard("Gagal mengambil data siswa"):
        siswa = service.show(siswa_id)
    return envelope("Data siswa berhasil diambil", siswa)


@router.delete("/{siswa_id}")
def delete_siswa(siswa_id: str, service: StudentDirectoryService = Depends(get_service)):
    with operation_guard("Gagal menghapus siswa"):
        service.delete(siswa_id)
    return envelope("Siswa berhasil dihapus")
