import logging
import os

from nagarconnect.storage.base import StorageProvider

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/storage"


class LocalStorageProvider(StorageProvider):
    """Store files on the local filesystem, served under ``/storage``."""

    def __init__(self, upload_folder: str, public_base_url: str):
        self.upload_folder = upload_folder
        self.public_base_url = public_base_url.rstrip("/")

    def save(self, key: str, data: bytes) -> str:
        key = key.lstrip("/")
        dest_path = os.path.abspath(os.path.join(self.upload_folder, key))
        if not dest_path.startswith(os.path.abspath(self.upload_folder) + os.sep):
            raise ValueError(f"storage key escapes upload folder: {key}")

        os.makedirs(os.path.dirname(dest_path), exist_ok=True)
        with open(dest_path, "wb") as fh:
            fh.write(data)

        logger.info("stored %s (%d bytes)", key, len(data))
        return key

    def url_for(self, key: str) -> str:
        return f"{self.public_base_url}{PUBLIC_PREFIX}/{key.lstrip('/')}"
