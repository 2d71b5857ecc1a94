from __future__ import annotations

from typing import Any, Callable, Iterable, NamedTuple, Optional, Sequence

from fastapi.concurrency import run_in_threadpool

from pdfmerge.core.errors import (
    DeliveryError,
    InvalidStateError,
    MergeError,
    MergeServiceError,
    SessionBusyError,
)
from pdfmerge.core.logging import configure_logging
from pdfmerge.models.common import SessionState, SortDirection
from pdfmerge.services.merge_engine import MergedOutput, MergeEngine, SourceDocument
from pdfmerge.services.ordered_collection import OrderedCollection
from pdfmerge.services.sort_policy import comparator

logger = configure_logging("session")

OutputSink = Callable[[bytes, str], Any]


class OutputReceipt(NamedTuple):
    filename: str
    page_count: int
    size_bytes: int


class SessionController:
    """آلة الحالة لجلسة دمج واحدة: اختيار ثم ترتيب ثم دمج ثم تسليم الناتج."""

    def __init__(self, sink: OutputSink, engine: Optional[MergeEngine] = None) -> None:
        self.sink = sink
        self.engine = engine or MergeEngine()
        self._collection: OrderedCollection[SourceDocument] = OrderedCollection()
        self._state = SessionState.empty
        self.last_error: Optional[MergeServiceError] = None
        self.last_output: Optional[OutputReceipt] = None
        self.last_delivery: Any = None

    # ------------------------------------------------------------------
    # القراءة (متاحة دائمًا، حتى أثناء الدمج)
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def collection(self) -> OrderedCollection[SourceDocument]:
        return self._collection

    @property
    def count(self) -> int:
        return len(self._collection)

    @property
    def names(self) -> list[str]:
        return self._collection.names

    # ------------------------------------------------------------------
    # الاختيار وإعادة الترتيب
    # ------------------------------------------------------------------
    def select(self, documents: Iterable[SourceDocument]) -> None:
        self._replace(OrderedCollection(documents))
        logger.info("تم اختيار %s ملفات", self.count)

    def move(self, old_index: int, new_index: int) -> None:
        self._ensure_idle()
        self._replace(self._collection.move(old_index, new_index))

    def reorder(self, new_order: Sequence[int]) -> None:
        self._ensure_idle()
        self._replace(self._collection.replace_order(new_order))

    def sort(self, direction: SortDirection = SortDirection.ascending) -> None:
        self._ensure_idle()
        self._replace(self._collection.sorted_by(comparator(direction)))

    def reset(self) -> None:
        self._ensure_idle()
        self._settle()

    # ------------------------------------------------------------------
    # الدمج
    # ------------------------------------------------------------------
    async def merge(self) -> Any:
        """
        تنفيذ الدمج وتسليم الناتج إلى المستقبِل الخارجي.

        تُرجع قيمة المستقبِل عند النجاح، و None إذا كان هناك دمج جارٍ بالفعل
        (لا يتم وضع الطلب في قائمة انتظار).
        """
        if self._state is SessionState.merging:
            logger.info("تم تجاهل طلب دمج متكرر أثناء دمج جارٍ")
            return None
        if self._state is not SessionState.ready:
            raise InvalidStateError(f"لا يمكن بدء الدمج في الحالة {self._state.value}.")

        self._state = SessionState.merging
        self.last_error = None
        self.last_output = None
        self.last_delivery = None
        try:
            output: MergedOutput = await run_in_threadpool(self.engine.merge, self._collection.items)
        except MergeError as exc:
            self._state = SessionState.failed
            self.last_error = exc
            logger.error("فشل الدمج: %s", exc)
            raise
        except BaseException:
            self._state = SessionState.failed
            raise

        try:
            delivery = self.sink(output.content, output.filename)
        except Exception as exc:
            error = DeliveryError(output.filename, exc)
            self._state = SessionState.failed
            self.last_error = error
            logger.error("%s", error)
            raise error from exc

        self.last_output = OutputReceipt(output.filename, output.page_count, output.size_bytes)
        self.last_delivery = delivery
        self._state = SessionState.done
        return delivery

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _ensure_idle(self) -> None:
        if self._state is SessionState.merging:
            raise SessionBusyError("لا يمكن تعديل الملفات أثناء عملية الدمج.")

    def _replace(self, collection: OrderedCollection[SourceDocument]) -> None:
        self._ensure_idle()
        self._collection = collection
        self._settle()

    def _settle(self) -> None:
        self._state = SessionState.ready if self._collection else SessionState.empty
