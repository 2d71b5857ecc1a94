from pathlib import Path
from typing import Optional
from uuid import uuid4

from pdfmerge.core.config import get_settings


class LocalStorage:
    """مستقبِل الناتج المحلي: يحفظ الملفات المدمجة في مجلد التنزيلات العام."""

    def __init__(self, download_root: Optional[Path] = None) -> None:
        settings = get_settings()
        self.download_root = Path(download_root or settings.downloads_dir)
        self.download_root.mkdir(parents=True, exist_ok=True)

    def save_download(self, data: bytes, filename: str) -> str:
        """حفظ البايتات باسم الملف المطلوب وإرجاع الاسم النهائي المستخدم في رابط التنزيل."""
        name = Path(filename).name or f"{uuid4().hex}.pdf"
        target = self.download_root / name
        if target.exists():
            target = self.download_root / f"{target.stem}-{uuid4().hex[:6]}{target.suffix}"
        target.write_bytes(data)
        return target.name

    def path_for(self, name: str) -> Path:
        return self.download_root / Path(name).name

    def remove(self, name: str) -> None:
        self.path_for(name).unlink(missing_ok=True)
