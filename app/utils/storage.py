# app/utils/storage.py
"""
S3-compatible object storage for admin uploads.

Keys look like ``upload/<root>/<folder>/<name>-<id>.<ext>`` so that the
``upload`` path segment can carry transform flags: ``fl_inline`` for an
inline view URL, ``fl_attachment:<filename>`` for a forced download.
"""
from __future__ import annotations

import logging
import os
import re
import uuid
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from app import config

log = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 20 * 1024 * 1024
MAX_FILES_PER_REQUEST = 50
IMAGE_FORMATS = ("jpg", "jpeg", "png", "webp", "gif")
ALLOWED_FORMATS = IMAGE_FORMATS + ("pdf", "mp4")
UPLOAD_SEGMENT = "upload"


class StorageError(RuntimeError):
    pass


@dataclass
class StoredObject:
    url: str
    key: str
    public_id: str
    bytes: int
    resource_type: str
    format: str
    content_type: str


def sanitize_name(name: str) -> str:
    name = re.sub(r"\s+", "-", (name or "").lower())
    return re.sub(r"[^a-z0-9_-]", "", name) or "file"


def sanitize_folder(folder: Optional[str]) -> str:
    s = (folder or "").strip().replace("..", "").strip("/")
    s = re.sub(r"[^a-zA-Z0-9/_-]", "-", s)
    return s or "uploads"


def file_format(filename: Optional[str], content_type: Optional[str]) -> str:
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if not ext and content_type:
        ext = {"application/pdf": "pdf", "video/mp4": "mp4"}.get(content_type, "")
    return ext


def resource_type_for(fmt: str) -> str:
    if fmt == "pdf":
        return "raw"
    if fmt == "mp4":
        return "video"
    return "image"


def default_content_type(fmt: str) -> str:
    if fmt == "pdf":
        return "application/pdf"
    if fmt == "mp4":
        return "video/mp4"
    if fmt in IMAGE_FORMATS:
        return "image/jpeg" if fmt == "jpg" else f"image/{fmt}"
    return "application/octet-stream"


def _insert_after_upload(url: str, flag: str, skip_if_present: bool = False) -> str:
    parts = urlsplit(url)
    if not parts.scheme:
        return url
    segments = [p for p in parts.path.split("/") if p]
    if UPLOAD_SEGMENT not in segments:
        return url
    idx = segments.index(UPLOAD_SEGMENT)
    nxt = segments[idx + 1] if idx + 1 < len(segments) else ""
    if skip_if_present and nxt.startswith(flag):
        return url
    segments.insert(idx + 1, flag)
    return urlunsplit(parts._replace(path="/" + "/".join(segments)))


def build_inline_url(url: str) -> str:
    return _insert_after_upload(url, "fl_inline", skip_if_present=True)


def build_attachment_url(url: str, filename: str) -> str:
    return _insert_after_upload(url, f"fl_attachment:{quote(filename, safe='')}")


def download_filename(public_id: str, fmt: Optional[str]) -> str:
    base = (public_id.rsplit("/", 1)[-1] or "file").strip() or "file"
    return f"{base}.{(fmt or '').lower() or 'dat'}"


class S3Storage:
    def __init__(self):
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not (config.S3_BUCKET and config.S3_ENDPOINT and config.S3_ACCESS_KEY and config.S3_SECRET_KEY):
                raise StorageError(
                    "S3 env is missing. Check S3_REGION, S3_ENDPOINT, S3_ACCESS_KEY, S3_SECRET_KEY, S3_BUCKET."
                )
            self._client = boto3.client(
                "s3",
                region_name=config.S3_REGION or None,
                endpoint_url=config.S3_ENDPOINT,
                aws_access_key_id=config.S3_ACCESS_KEY,
                aws_secret_access_key=config.S3_SECRET_KEY,
                config=BotoConfig(s3={"addressing_style": "virtual"}),
            )
        return self._client

    def public_url(self, key: str) -> str:
        key = key.lstrip("/")
        if config.ASSETS_BASE_URL:
            return f"{config.ASSETS_BASE_URL}/{key}"
        return f"{config.S3_ENDPOINT.rstrip('/')}/{config.S3_BUCKET}/{key}"

    def put(self, key: str, body: bytes, content_type: str) -> None:
        try:
            self.client.put_object(
                Bucket=config.S3_BUCKET,
                Key=key,
                Body=body,
                ContentType=content_type,
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as e:
            log.exception("S3 upload failed for %s", key)
            raise StorageError(f"S3 upload failed: {e}") from e

    def save(self, filename: str, body: bytes, content_type: Optional[str], folder: Optional[str]) -> StoredObject:
        fmt = file_format(filename, content_type)
        base = sanitize_name(os.path.splitext(filename or "")[0])
        public_id = f"{config.UPLOAD_ROOT_FOLDER}/{sanitize_folder(folder)}/{base}-{uuid.uuid4().hex[:8]}"
        key = f"{UPLOAD_SEGMENT}/{public_id}.{fmt}"
        content_type = content_type or default_content_type(fmt)
        self.put(key, body, content_type)
        return StoredObject(
            url=self.public_url(key),
            key=key,
            public_id=public_id,
            bytes=len(body),
            resource_type=resource_type_for(fmt),
            format=fmt,
            content_type=content_type,
        )


_storage: Optional[S3Storage] = None


def get_storage() -> S3Storage:
    global _storage
    if _storage is None:
        _storage = S3Storage()
    return _storage
