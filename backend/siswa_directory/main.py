from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path

from siswa_directory.api.routes import auth, meta, siswa
from siswa_directory.core.config import settings
from siswa_directory.core.database import Base, engine
from siswa_directory.core.errors import register_exception_handlers
from siswa_directory.core.log import configure_logging
from siswa_directory.services.storage import LOCAL_PUBLIC_PATH

logger = configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")
    yield


app = FastAPI(title="Siswa Directory API", version="0.1.0", lifespan=lifespan)

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Request-Id"],
)

register_exception_handlers(app)

storage_dir = Path(settings.storage_dir)
storage_dir.mkdir(parents=True, exist_ok=True)
app.mount(LOCAL_PUBLIC_PATH, StaticFiles(directory=str(storage_dir)), name="storage")


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or uuid4().hex
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


def _register_routes(prefix: str = "") -> None:
    app.include_router(auth.router, tags=["auth"], prefix=prefix)
    app.include_router(siswa.router, tags=["siswa"], prefix=prefix)
    app.include_router(meta.router, tags=["meta"], prefix=prefix)


_register_routes("")
_register_routes("/api")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("siswa_directory.main:app", host=settings.host, port=settings.port)
