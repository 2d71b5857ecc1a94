from typing import List

from fastapi import HTTPException, UploadFile, status

from pdfmerge.services.merge_engine import SourceDocument, count_pages


def ensure_pdf(upload: UploadFile) -> None:
    """التحقق من أن الملف المرفوع هو PDF."""
    content_type = (upload.content_type or "").lower()
    if not content_type.endswith("pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"يجب أن يكون الملف من نوع PDF: {upload.filename}",
        )


async def read_selection(files: List[UploadFile], max_files: int, max_bytes: int) -> List[SourceDocument]:
    """
    تحويل الملفات المرفوعة إلى مستندات مصدرية بالترتيب نفسه الذي وصلت به.

    لا يتم التحقق من صحة محتوى PDF هنا؛ أي ملف تالف يظهر كخطأ أثناء الدمج.
    """
    if not files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="يجب اختيار ملف PDF واحد على الأقل.",
        )
    if len(files) > max_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"الحد الأقصى لعدد الملفات هو {max_files}.",
        )

    documents: List[SourceDocument] = []
    for upload in files:
        ensure_pdf(upload)
        content = await upload.read()
        if len(content) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"حجم الملف {upload.filename} يتجاوز الحد المسموح.",
            )
        documents.append(
            SourceDocument(
                name=upload.filename or "document.pdf",
                content=content,
                page_count=count_pages(content),
            )
        )
    return documents
