import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from siswa_directory.core.config import settings
from siswa_directory.core.errors import AuthenticationFailed, NotFound, ValidationFailed
from siswa_directory.models.entities import Siswa
from siswa_directory.schemas.api import LoginIn, SiswaCreateIn, SiswaOut, SiswaSearchIn
from siswa_directory.services.auth import hash_password, verify_password
from siswa_directory.services.storage import FileStorage
from siswa_directory.services.uploads import is_blank_upload, validate_image
from siswa_directory.services.validation import clean_input, merge_errors, validate_input

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Siswa tidak ditemukan"
INVALID_CREDENTIALS_MESSAGE = "NIS atau password salah"
MAX_ROW_ID = 2**63 - 1

# Upload field -> storage prefix
FILE_FIELDS = {
    "portofolio": "portofolios",
    "certifikat": "certifikats",
}
SEARCHABLE_COLUMNS = (Siswa.nama, Siswa.nis, Siswa.rombel, Siswa.rayon)


class SiswaRepository:
    def __init__(self, db: Session):
        self.db = db

    def _ordered(self):
        return self.db.query(Siswa).order_by(Siswa.nama.asc(), Siswa.id.asc())

    def all(self) -> list[Siswa]:
        return self._ordered().all()

    def find_by_id(self, siswa_id: int) -> Siswa | None:
        return self.db.get(Siswa, siswa_id)

    def find_by_nis(self, nis: str) -> Siswa | None:
        return self.db.query(Siswa).filter(Siswa.nis == nis).one_or_none()

    def nis_exists(self, nis: str) -> bool:
        return self.db.query(Siswa.id).filter(Siswa.nis == nis).first() is not None

    def search(self, keyword: str) -> list[Siswa]:
        conditions = [column.icontains(keyword, autoescape=True) for column in SEARCHABLE_COLUMNS]
        return self._ordered().filter(or_(*conditions)).all()

    def insert(self, siswa: Siswa) -> Siswa:
        self.db.add(siswa)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(siswa)
        return siswa

    def delete(self, siswa: Siswa) -> None:
        self.db.delete(siswa)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class StudentDirectoryService:
    def __init__(self, db: Session, storage: FileStorage, base_url: str):
        self.repo = SiswaRepository(db)
        self.storage = storage
        self.base_url = base_url

    def present(self, siswa: Siswa, *, with_created_at: bool = True) -> dict:
        out = SiswaOut(
            id=siswa.id,
            nis=siswa.nis,
            nama=siswa.nama,
            rombel=siswa.rombel,
            rayon=siswa.rayon,
            medsos=siswa.medsos,
            portofolio=self.storage.url(siswa.portofolio, self.base_url),
            certifikat=self.storage.url(siswa.certifikat, self.base_url),
            created_at=siswa.created_at,
        )
        exclude = None if with_created_at else {"created_at"}
        return out.model_dump(mode="json", exclude=exclude)

    def list_all(self) -> list[dict]:
        return [self.present(siswa) for siswa in self.repo.all()]

    def create(self, raw: dict[str, Any]) -> dict:
        raw = clean_input(raw)
        payload, errors = validate_input(SiswaCreateIn, raw)
        if isinstance(raw.get("nis"), str) and self.repo.nis_exists(raw["nis"]):
            errors = merge_errors(errors, {"nis": ["The nis has already been taken."]})

        images = {}
        for field in FILE_FIELDS:
            value = raw.get(field)
            if is_blank_upload(value):
                continue
            image, image_errors = validate_image(field, value, settings.max_upload_kb)
            if image_errors:
                errors = merge_errors(errors, {field: image_errors})
            else:
                images[field] = image

        if errors or payload is None:
            raise ValidationFailed(errors)

        siswa = Siswa(
            nis=payload.nis,
            nama=payload.nama,
            rombel=payload.rombel,
            rayon=payload.rayon,
            password=hash_password(payload.password),
            medsos=payload.medsos,
        )
        for field, image in images.items():
            path = self.storage.store(FILE_FIELDS[field], image.content, image.extension, image.content_type)
            setattr(siswa, field, path)

        self.repo.insert(siswa)
        logger.info("Created siswa id=%s nis=%s", siswa.id, siswa.nis)
        return self.present(siswa, with_created_at=False)

    def _get_or_404(self, siswa_id: Any) -> Siswa:
        if isinstance(siswa_id, int):
            key = siswa_id
        elif isinstance(siswa_id, str) and siswa_id.isascii() and siswa_id.isdigit():
            key = int(siswa_id)
        else:
            # Signs, whitespace and non-ASCII digits are not ids.
            raise NotFound(NOT_FOUND_MESSAGE)
        if not 0 < key <= MAX_ROW_ID:
            raise NotFound(NOT_FOUND_MESSAGE)
        siswa = self.repo.find_by_id(key)
        if siswa is None:
            raise NotFound(NOT_FOUND_MESSAGE)
        return siswa

    def show(self, siswa_id: Any) -> dict:
        return self.present(self._get_or_404(siswa_id))

    def delete(self, siswa_id: Any) -> None:
        siswa = self._get_or_404(siswa_id)
        for field in FILE_FIELDS:
            path = getattr(siswa, field)
            if path and self.storage.exists(path):
                self.storage.delete(path)
        nis = siswa.nis
        self.repo.delete(siswa)
        logger.info("Deleted siswa id=%s nis=%s", siswa_id, nis)

    def search(self, raw: dict[str, Any]) -> list[dict]:
        params, errors = validate_input(SiswaSearchIn, clean_input(raw))
        if errors or params is None:
            raise ValidationFailed(errors)
        return [self.present(siswa) for siswa in self.repo.search(params.keyword)]

    def login(self, raw: dict[str, Any]) -> dict:
        credentials, errors = validate_input(LoginIn, clean_input(raw))
        if errors or credentials is None:
            raise ValidationFailed(errors)
        siswa = self.repo.find_by_nis(credentials.nis)
        if siswa is None or not verify_password(credentials.password, siswa.password):
            logger.warning("Failed login for nis=%s", credentials.nis)
            raise AuthenticationFailed(INVALID_CREDENTIALS_MESSAGE)
        return self.present(siswa, with_created_at=False)
