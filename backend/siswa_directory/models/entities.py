from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime
from siswa_directory.core.database import Base


class Siswa(Base):
    __tablename__ = "siswas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nis = Column(String(255), unique=True, nullable=False, index=True)
    nama = Column(String(255), nullable=False)
    rombel = Column(String(255), nullable=False)
    rayon = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)
    medsos = Column(String(255), nullable=True)
    portofolio = Column(String(255), nullable=True)
    certifikat = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True)

    def __repr__(self):
        return f"<Siswa {self.nis}>"
