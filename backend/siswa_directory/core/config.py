from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = "sqlite:///./siswa.db"
    database_echo: bool = False
    auto_create_tables: bool = False
    app_url: str | None = None
    storage_dir: str = "storage"
    max_upload_kb: int = 5120
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None
    s3_bucket: str | None = None
    s3_region: str | None = None
    s3_endpoint_url: str | None = None
    cors_origins: str = "*"
    log_level: str = "INFO"
    log_json: bool = False
    password_hash_iterations: int = 120_000
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        # Render/Postgres providers often expose postgres:// URLs.
        if isinstance(value, str) and value.startswith("postgres://"):
            return "postgresql://" + value[len("postgres://"):]
        return value

    @field_validator("app_url", mode="before")
    @classmethod
    def strip_app_url(cls, value: str | None) -> str | None:
        if isinstance(value, str):
            value = value.strip().rstrip("/")
            return value or None
        return value

settings = Settings()
