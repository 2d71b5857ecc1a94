from __future__ import annotations

import time
from dataclasses import dataclass, field
from io import BytesIO
from typing import Callable, Iterable, Optional

from pypdf import PdfReader, PdfWriter

from pdfmerge.core.errors import ParseError, SerializationError
from pdfmerge.core.logging import configure_logging

logger = configure_logging("merge_engine")


@dataclass(frozen=True, eq=False)
class SourceDocument:
    """ملف PDF مختار: الاسم الأصلي ومحتوى ثنائي لا يتغير بعد الإنشاء."""

    name: str
    content: bytes = field(repr=False)
    page_count: Optional[int] = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class MergedOutput:
    content: bytes = field(repr=False)
    filename: str
    page_count: int

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def timestamp_filename(clock: Callable[[], float] = time.time) -> str:
    """اسم الملف الناتج: الطابع الزمني بالميلي ثانية مع الامتداد .pdf."""
    return f"{int(clock() * 1000)}.pdf"


def count_pages(content: bytes) -> Optional[int]:
    """عدد صفحات المحتوى، أو None إذا تعذرت قراءته كملف PDF."""
    try:
        return len(_open_reader(content).pages)
    except Exception:  # noqa: BLE001
        return None


def _open_reader(content: bytes) -> PdfReader:
    reader = PdfReader(BytesIO(content))
    if reader.is_encrypted:
        raise ValueError("الملف مشفر ولا يمكن دمجه.")
    return reader


class MergeEngine:
    """دمج المستندات بالترتيب المعطى تمامًا في ملف PDF واحد."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self.clock = clock

    def merge(self, documents: Iterable[SourceDocument]) -> MergedOutput:
        writer = PdfWriter()
        total = 0

        for index, document in enumerate(documents):
            try:
                reader = _open_reader(document.content)
                pages = list(reader.pages)
                if not pages:
                    raise ValueError("الملف لا يحتوي على أي صفحة.")
            except Exception as exc:
                logger.warning("فشل تحليل الملف %s (%s): %s", index, document.name, exc)
                raise ParseError(index, document.name, exc) from exc

            for page in pages:
                writer.add_page(page)
            total += len(pages)
            logger.debug("أضيفت %s صفحة من %s", len(pages), document.name)
            del reader, pages

        content = self._write_writer(writer)
        output = MergedOutput(content=content, filename=timestamp_filename(self.clock), page_count=total)
        logger.info("اكتمل الدمج: %s صفحة في %s", total, output.filename)
        return output

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _write_writer(writer: PdfWriter) -> bytes:
        buffer = BytesIO()
        try:
            writer.write(buffer)
        except Exception as exc:
            raise SerializationError(exc) from exc
        finally:
            writer.close()
        return buffer.getvalue()
