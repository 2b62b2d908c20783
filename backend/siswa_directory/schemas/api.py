from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

MAX_TEXT_LENGTH = 255


class SiswaCreateIn(BaseModel):
    nis: str
    nama: str = Field(max_length=MAX_TEXT_LENGTH)
    rombel: str = Field(max_length=MAX_TEXT_LENGTH)
    rayon: str = Field(max_length=MAX_TEXT_LENGTH)
    password: str = Field(min_length=6)
    medsos: Optional[str] = Field(default=None, max_length=MAX_TEXT_LENGTH)


class SiswaSearchIn(BaseModel):
    keyword: str = Field(min_length=2)


class LoginIn(BaseModel):
    nis: str
    password: str


class SiswaOut(BaseModel):
    id: int
    nis: str
    nama: str
    rombel: str
    rayon: str
    medsos: Optional[str] = None
    portofolio: Optional[str] = None
    certifikat: Optional[str] = None
    created_at: Optional[datetime] = None

