"""Object storage for FHE group activity images."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from io import BytesIO
from uuid import UUID

import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from ward_api.core.config import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}


class StorageError(Exception):
    """Upload to object storage failed."""


def _normalize_endpoint(endpoint_url: str | None) -> str | None:
    if endpoint_url:
        return endpoint_url.rstrip("/")
    return None


def get_s3_client() -> BaseClient:
    """Return a configured S3 client (supports S3-compatible endpoints)."""
    return boto3.client(
        "s3",
        region_name=settings.S3_REGION or None,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
        endpoint_url=_normalize_endpoint(settings.S3_ENDPOINT_URL),
    )


def validate_image(filename: str | None, content_type: str | None, size: int) -> str:
    """
    Validate an uploaded image and return the stored file extension.

    Raises:
        ValueError: unsupported type, empty file, or over the size limit
    """
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValueError(f"Content type '{content_type}' not allowed")
    if size == 0:
        raise ValueError("File is empty")
    if size > settings.MAX_IMAGE_UPLOAD_BYTES:
        max_mb = settings.MAX_IMAGE_UPLOAD_BYTES / (1024 * 1024)
        raise ValueError(f"File size exceeds {max_mb:.0f} MB limit")

    ext = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else ""
    if ext in ALLOWED_IMAGE_TYPES.values() or ext == "jpeg":
        return ext
    return ALLOWED_IMAGE_TYPES[content_type]


def group_image_key(group_id: UUID, ext: str, now: datetime | None = None) -> str:
    ts = int((now or datetime.now(timezone.utc)).timestamp() * 1000)
    return f"fhe-groups/{group_id}-{ts}.{ext}"


def public_url(key: str) -> str:
    """Public URL for a stored object."""
    if settings.S3_PUBLIC_BASE_URL:
        return f"{settings.S3_PUBLIC_BASE_URL.rstrip('/')}/{key}"
    endpoint = _normalize_endpoint(settings.S3_ENDPOINT_URL)
    if endpoint:
        return f"{endpoint}/{settings.STORAGE_BUCKET}/{key}"
    region = settings.S3_REGION or "us-east-1"
    return f"https://{settings.STORAGE_BUCKET}.s3.{region}.amazonaws.com/{key}"


def upload_group_image(
    group_id: UUID,
    content: bytes,
    content_type: str,
    ext: str,
    client: BaseClient | None = None,
) -> str:
    """Store an activity image and return its public URL."""
    key = group_image_key(group_id, ext)
    s3 = client or get_s3_client()
    try:
        s3.upload_fileobj(
            BytesIO(content),
            settings.STORAGE_BUCKET,
            key,
            ExtraArgs={"ContentType": content_type},
        )
    except (BotoCoreError, ClientError) as exc:
        logger.error("Image upload failed fhe_group_id=%s", group_id, exc_info=exc)
        raise StorageError("Image upload failed") from exc
    return public_url(key)
