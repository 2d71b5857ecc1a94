"""Shared fixtures: an isolated storage root and real PDFs built with reportlab.

The storage root must be configured before anything imports pdfmerge, since
settings are cached on first use.
"""

from __future__ import annotations

import os
import tempfile
from io import BytesIO
from typing import Callable, List

import pytest
from pypdf import PdfReader
from reportlab.pdfgen import canvas

os.environ.setdefault("PDFMERGE_BASE_DIR", tempfile.mkdtemp(prefix="pdfmerge-tests-"))


def build_pdf(labels: List[str]) -> bytes:
    """One page per label, each page carrying its label as text."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer)
    for label in labels:
        c.setFont("Helvetica", 24)
        c.drawString(72, 720, label)
        c.showPage()
    c.save()
    return buffer.getvalue()


def page_labels(content: bytes) -> List[str]:
    reader = PdfReader(BytesIO(content))
    return [page.extract_text().strip() for page in reader.pages]


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    def _make(prefix: str, pages: int) -> bytes:
        return build_pdf([f"{prefix}{n}" for n in range(1, pages + 1)])

    return _make
