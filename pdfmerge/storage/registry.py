from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional
from uuid import uuid4

from fastapi import HTTPException, status

from pdfmerge.core.config import get_settings
from pdfmerge.models.common import SessionState
from pdfmerge.services.session_controller import OutputSink, SessionController


@dataclass
class MergeSession:
    session_id: str
    controller: SessionController
    created_at: datetime = field(default_factory=datetime.utcnow)
    touched_at: datetime = field(default_factory=datetime.utcnow)


_registry: Dict[str, MergeSession] = {}


def _ttl() -> timedelta:
    return timedelta(minutes=get_settings().session_ttl_minutes)


def create_session(sink: OutputSink, controller: Optional[SessionController] = None) -> MergeSession:
    """إنشاء جلسة دمج جديدة في الذاكرة وإرجاعها."""
    cleanup()
    session = MergeSession(session_id=uuid4().hex, controller=controller or SessionController(sink))
    _registry[session.session_id] = session
    return session


def get_session(session_id: str) -> MergeSession:
    cleanup()
    session = _registry.get(session_id)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="الجلسة المطلوبة غير موجودة أو انتهت صلاحيتها.",
        )
    session.touched_at = datetime.utcnow()
    return session


def drop_session(session_id: str) -> None:
    _registry.pop(session_id, None)


def cleanup() -> None:
    """حذف الجلسات الخاملة بعد انتهاء مدة الاحتفاظ، مع استثناء الجلسات التي تدمج حاليًا."""
    now = datetime.utcnow()
    ttl = _ttl()
    expired = [
        session_id
        for session_id, session in _registry.items()
        if now - session.touched_at > ttl and session.controller.state is not SessionState.merging
    ]
    for session_id in expired:
        _registry.pop(session_id, None)
