from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """إعدادات خدمة دمج ملفات PDF مع تحميل القيم من ملف .env عند توفره."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        env_prefix="PDFMERGE_",
    )

    app_name: str = "PDF Merge API"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    public_dir: Optional[Path] = None
    downloads_dir: Optional[Path] = None

    max_files: int = Field(default=50, ge=1)
    max_file_size_mb: int = Field(default=100, ge=1)
    session_ttl_minutes: int = Field(default=120, ge=1)

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def configure_paths(self) -> None:
        """تهيئة المسارات الافتراضية وإنشاء المجلدات في حال غيابها."""
        self.public_dir = (self.public_dir or (self.base_dir / "public")).resolve()
        self.downloads_dir = (self.downloads_dir or (self.public_dir / "downloads")).resolve()

        for directory in (self.public_dir, self.downloads_dir):
            directory.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
