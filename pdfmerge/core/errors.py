from __future__ import annotations

from typing import Optional


class MergeServiceError(Exception):
    """الأصل المشترك لجميع أخطاء خدمة الدمج."""


class InvalidPermutation(MergeServiceError, ValueError):
    """طلب إعادة ترتيب لا يمثل تبديلًا صالحًا للفهارس الحالية."""


class SessionBusyError(MergeServiceError):
    """الجلسة مشغولة بعملية دمج جارية."""


class InvalidStateError(MergeServiceError):
    """العملية غير متاحة في حالة الجلسة الحالية."""


class MergeError(MergeServiceError):
    """فشل عملية الدمج بالكامل دون أي ناتج جزئي."""

    index: Optional[int] = None
    filename: Optional[str] = None


class ParseError(MergeError):
    def __init__(self, index: int, name: str, cause: BaseException) -> None:
        self.index = index
        self.filename = name
        self.cause = cause
        super().__init__(f"تعذر قراءة الملف رقم {index + 1} ({name}): {cause}")


class SerializationError(MergeError):
    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"تعذر إنشاء ملف PDF المدمج: {cause}")


class DeliveryError(MergeServiceError):
    """نجح الدمج لكن تعذر تسليم الملف الناتج إلى مجلد التنزيل."""

    def __init__(self, filename: str, cause: BaseException) -> None:
        self.filename = filename
        self.cause = cause
        super().__init__(f"تعذر حفظ الملف المدمج {filename}: {cause}")
