# app/routers/uploads.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.utils.authz import require_admin
from app.utils.storage import (
    ALLOWED_FORMATS,
    MAX_FILES_PER_REQUEST,
    MAX_UPLOAD_BYTES,
    S3Storage,
    StorageError,
    build_attachment_url,
    build_inline_url,
    download_filename,
    file_format,
    get_storage,
)

router = APIRouter(prefix="/upload", tags=["uploads"], dependencies=[Depends(require_admin)])


async def _store(storage: S3Storage, file: UploadFile, folder: Optional[str]) -> dict:
    fmt = file_format(file.filename, file.content_type)
    if fmt not in ALLOWED_FORMATS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type. Allowed: {', '.join(ALLOWED_FORMATS)}",
        )
    body = await file.read()
    if len(body) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large (max 20MB)")

    try:
        stored = storage.save(file.filename, body, file.content_type, folder)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "url": stored.url,
        "publicId": stored.public_id,
        "bytes": stored.bytes,
        "resource_type": stored.resource_type,
        "format": stored.format,
        "contentType": stored.content_type,
        "view_url": build_inline_url(stored.url),
        "download_url": build_attachment_url(stored.url, download_filename(stored.public_id, stored.format)),
    }


@router.post("")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    folder: Optional[str] = Form(None),
    storage: S3Storage = Depends(get_storage),
):
    """Multipart upload, field ``file``; optional ``folder`` under the root folder."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")
    return await _store(storage, file, folder)


@router.post("/multiple")
async def upload_files(
    files: List[UploadFile] = File(...),
    folder: Optional[str] = Form(None),
    storage: S3Storage = Depends(get_storage),
):
    if len(files) > MAX_FILES_PER_REQUEST:
        raise HTTPException(status_code=400, detail=f"Too many files (max {MAX_FILES_PER_REQUEST})")
    return {"items": [await _store(storage, f, folder) for f in files]}
