import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Validasi gagal"


class SiswaDirectoryError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def body(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationFailed(SiswaDirectoryError):
    status_code = 422

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(VALIDATION_MESSAGE)
        self.errors = errors

    def body(self) -> dict:
        return {**super().body(), "errors": self.errors}


class NotFound(SiswaDirectoryError):
    status_code = 404


class AuthenticationFailed(SiswaDirectoryError):
    status_code = 401


class InternalFailure(SiswaDirectoryError):
    status_code = 500

    def __init__(self, message: str, error: str):
        super().__init__(message)
        self.error = error

    def body(self) -> dict:
        return {**super().body(), "error": self.error}


class StorageError(RuntimeError):
    pass


@contextmanager
def operation_guard(failure_message: str):
    """Turn anything that is not a domain error into an InternalFailure."""
    try:
        yield
    except SiswaDirectoryError:
        raise
    except Exception as exc:
        logger.exception("%s: %s", failure_message, exc)
        raise InternalFailure(failure_message, str(exc)) from exc


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SiswaDirectoryError)
    async def handle_domain_error(_: Request, exc: SiswaDirectoryError):
        return JSONResponse(status_code=exc.status_code, content=exc.body())
