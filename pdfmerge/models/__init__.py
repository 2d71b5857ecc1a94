from .common import SessionState, SortDirection
from .merge import (
    DocumentCard,
    MergeResult,
    MoveRequest,
    ReorderRequest,
    SessionSummary,
    SortRequest,
)

__all__ = [
    "DocumentCard",
    "MergeResult",
    "MoveRequest",
    "ReorderRequest",
    "SessionState",
    "SessionSummary",
    "SortDirection",
    "SortRequest",
]
