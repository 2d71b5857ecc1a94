from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from pdfmerge.core.config import get_settings
from pdfmerge.models.common import SessionState
from pdfmerge.storage import registry


def _sink(data, filename):
    return filename


def _backdate(session):
    ttl = timedelta(minutes=get_settings().session_ttl_minutes)
    session.touched_at = datetime.utcnow() - ttl - timedelta(minutes=1)


def test_get_session_refreshes_touch_time():
    session = registry.create_session(_sink)
    before = session.touched_at
    assert registry.get_session(session.session_id) is session
    assert session.touched_at >= before


def test_idle_session_expires():
    session = registry.create_session(_sink)
    _backdate(session)

    with pytest.raises(HTTPException) as excinfo:
        registry.get_session(session.session_id)
    assert excinfo.value.status_code == 404


def test_merging_session_survives_cleanup(monkeypatch):
    session = registry.create_session(_sink)
    monkeypatch.setattr(session.controller, "_state", SessionState.merging)
    _backdate(session)

    registry.cleanup()
    assert registry.get_session(session.session_id) is session
    registry.drop_session(session.session_id)


def test_drop_session():
    session = registry.create_session(_sink)
    registry.drop_session(session.session_id)
    with pytest.raises(HTTPException):
        registry.get_session(session.session_id)
