import os
import secrets
import time

from nagarconnect.storage.base import StorageProvider
from nagarconnect.storage.local import PUBLIC_PREFIX, LocalStorageProvider

__all__ = ["StorageProvider", "LocalStorageProvider", "PUBLIC_PREFIX", "photo_key"]

ISSUE_PHOTOS_BUCKET = "issue-photos"


def photo_key(filename: str) -> str:
    """``issue-photos/<millis>-<random>.<ext>`` for an uploaded file name."""
    ext = os.path.splitext(filename or "")[1].lower().lstrip(".") or "jpg"
    return f"{ISSUE_PHOTOS_BUCKET}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"
