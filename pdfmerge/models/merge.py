from typing import List, Optional

from pydantic import BaseModel, Field

from .common import SessionState, SortDirection


class MoveRequest(BaseModel):
    old_index: int = Field(..., description="الموضع الحالي للملف المسحوب.")
    new_index: int = Field(..., description="الموضع الجديد بعد الإفلات.")


class ReorderRequest(BaseModel):
    order: List[int] = Field(..., description="الفهارس الحالية بالترتيب الجديد المطلوب.")


class SortRequest(BaseModel):
    direction: SortDirection = Field(SortDirection.ascending, description="اتجاه الفرز (asc أو desc).")


class DocumentCard(BaseModel):
    index: int
    filename: str
    size_bytes: int
    page_count: Optional[int] = None


class MergeResult(BaseModel):
    filename: str
    download_url: str
    page_count: int
    size_bytes: int


class SessionSummary(BaseModel):
    session_id: str
    state: SessionState
    count: int
    total_bytes: int = 0
    files: List[DocumentCard] = Field(default_factory=list)
    result: Optional[MergeResult] = None
    error: Optional[str] = None
