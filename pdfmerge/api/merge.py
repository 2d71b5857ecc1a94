from typing import List

from fastapi import APIRouter, File, UploadFile, status

from pdfmerge.core.config import get_settings
from pdfmerge.core.errors import SessionBusyError
from pdfmerge.core.logging import configure_logging
from pdfmerge.models import (
    DocumentCard,
    MergeResult,
    MoveRequest,
    ReorderRequest,
    SessionState,
    SessionSummary,
    SortRequest,
)
from pdfmerge.storage.local import LocalStorage
from pdfmerge.storage.registry import MergeSession, create_session, drop_session, get_session
from pdfmerge.utils.file_utils import read_selection

router = APIRouter(prefix="/pdf/merge", tags=["PDF Merge"])

settings = get_settings()
logger = configure_logging()
storage = LocalStorage()


def _summary(session: MergeSession) -> SessionSummary:
    controller = session.controller
    files = [
        DocumentCard(
            index=index,
            filename=document.name,
            size_bytes=document.size_bytes,
            page_count=document.page_count,
        )
        for index, document in enumerate(controller.collection.documents)
    ]

    result = None
    if controller.state is SessionState.done and controller.last_output:
        receipt = controller.last_output
        result = MergeResult(
            filename=controller.last_delivery,
            download_url=f"/downloads/{controller.last_delivery}",
            page_count=receipt.page_count,
            size_bytes=receipt.size_bytes,
        )

    error = str(controller.last_error) if controller.state is SessionState.failed and controller.last_error else None

    return SessionSummary(
        session_id=session.session_id,
        state=controller.state,
        count=controller.count,
        total_bytes=controller.collection.total_bytes,
        files=files,
        result=result,
        error=error,
    )


async def _selection(files: List[UploadFile]):
    return await read_selection(files, settings.max_files, settings.max_file_size_bytes)


@router.post(
    "/sessions",
    status_code=status.HTTP_201_CREATED,
    summary="إنشاء جلسة دمج من الملفات المختارة بالترتيب الذي وصلت به",
)
async def open_session(files: List[UploadFile] = File(...)) -> SessionSummary:
    documents = await _selection(files)
    session = create_session(storage.save_download)
    session.controller.select(documents)
    logger.info("جلسة دمج جديدة %s بعدد %s ملفات", session.session_id, len(documents))
    return _summary(session)


@router.get("/sessions/{session_id}", summary="حالة الجلسة والملفات بترتيبها الحالي")
async def read_session(session_id: str) -> SessionSummary:
    return _summary(get_session(session_id))


@router.put("/sessions/{session_id}/files", summary="استبدال الملفات المختارة في الجلسة")
async def replace_files(session_id: str, files: List[UploadFile] = File(...)) -> SessionSummary:
    session = get_session(session_id)
    documents = await _selection(files)
    session.controller.select(documents)
    return _summary(session)


@router.post("/sessions/{session_id}/move", summary="نقل ملف واحد إلى موضع جديد (السحب والإفلات)")
async def move_file(session_id: str, payload: MoveRequest) -> SessionSummary:
    session = get_session(session_id)
    session.controller.move(payload.old_index, payload.new_index)
    logger.info("نقل الملف من %s إلى %s في الجلسة %s", payload.old_index, payload.new_index, session_id)
    return _summary(session)


@router.post("/sessions/{session_id}/reorder", summary="تطبيق ترتيب كامل جديد على الملفات")
async def reorder_files(session_id: str, payload: ReorderRequest) -> SessionSummary:
    session = get_session(session_id)
    session.controller.reorder(payload.order)
    return _summary(session)


@router.post("/sessions/{session_id}/sort", summary="فرز الملفات حسب الاسم تصاعديًا أو تنازليًا")
async def sort_files(session_id: str, payload: SortRequest) -> SessionSummary:
    session = get_session(session_id)
    session.controller.sort(payload.direction)
    logger.info("فرز ملفات الجلسة %s (%s)", session_id, payload.direction.value)
    return _summary(session)


@router.post("/sessions/{session_id}/merge", summary="دمج الملفات بالترتيب الحالي وإرجاع رابط التنزيل")
async def merge_files(session_id: str) -> SessionSummary:
    session = get_session(session_id)
    delivered = await session.controller.merge()
    if delivered is None:
        logger.info("الجلسة %s تدمج بالفعل، تم تجاهل الطلب", session_id)
    else:
        logger.info("تم دمج %s ملفات في %s", session.controller.count, delivered)
    return _summary(session)


@router.post("/sessions/{session_id}/reset", summary="العودة إلى حالة الجاهزية بعد انتهاء الدمج")
async def reset_session(session_id: str) -> SessionSummary:
    session = get_session(session_id)
    session.controller.reset()
    return _summary(session)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT, summary="حذف الجلسة")
async def close_session(session_id: str) -> None:
    session = get_session(session_id)
    if session.controller.state is SessionState.merging:
        raise SessionBusyError("لا يمكن حذف الجلسة أثناء عملية الدمج.")
    if session.controller.last_delivery:
        storage.remove(session.controller.last_delivery)
    drop_session(session_id)
    logger.info("تم حذف الجلسة %s", session_id)
