# pdfmerge/main.py
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pdfmerge.api import routers
from pdfmerge.core.config import get_settings
from pdfmerge.core.errors import (
    DeliveryError,
    InvalidPermutation,
    InvalidStateError,
    MergeError,
    SessionBusyError,
)
from pdfmerge.core.logging import configure_logging

# === إعدادات وتسجيل ===
settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)


# === CORS ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === أخطاء المجال ===
@app.exception_handler(InvalidPermutation)
async def invalid_permutation_handler(request: Request, exc: InvalidPermutation) -> JSONResponse:
    logger.warning("طلب ترتيب غير صالح على %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(SessionBusyError)
@app.exception_handler(InvalidStateError)
async def session_state_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(MergeError)
async def merge_error_handler(request: Request, exc: MergeError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "index": exc.index, "filename": exc.filename},
    )


@app.exception_handler(DeliveryError)
async def delivery_error_handler(request: Request, exc: DeliveryError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "filename": exc.filename},
    )


# === Routers ===
for router in routers:
    app.include_router(router)

# === Static downloads ===
app.mount("/downloads", StaticFiles(directory=str(settings.downloads_dir)), name="downloads")


# === Basic endpoints ===
@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to PDF Merge API"}


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {"status": "ok", "message": "PDF Merge API is running"}
