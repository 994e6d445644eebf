"""Storage service for uploaded images.

Images live in buckets of a remote object store (Supabase Storage). A local
disk backend implements the same interface for development. Object names are
``{uuid}-{shortened original name}`` so they never collide and never contain a
path separator; the public URL ends with that name, which is how an object is
found again when its row is deleted.
"""
import asyncio
import logging
import uuid
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

import httpx

from socialhub.core.config import settings
from socialhub.core.errors import ServerError, StorageError

logger = logging.getLogger(__name__)

POST_IMAGES_BUCKET = "post-images"
STORIES_BUCKET = "stories"
PROFILE_PICTURES_BUCKET = "profile-bg-pictures"

MAX_FILE_NAME_LENGTH = 50


class StorageBackend(Protocol):
    """Protocol for storage backends."""

    async def upload(self, bucket: str, name: str, data: bytes, content_type: str) -> str:
        """Store an object and return its public URL."""
        ...

    async def remove(self, bucket: str, names: list[str]) -> None:
        """Delete objects by name. Raises StorageError on failure."""
        ...


def shorten_file_name(file_name: str, max_length: int = MAX_FILE_NAME_LENGTH) -> str:
    stem, dot, ext = file_name.rpartition(".")
    if not dot:
        return file_name[:max_length]
    return f"{stem[:max_length]}.{ext}"


def generate_object_name(original_name: str | None) -> str:
    short_name = shorten_file_name(original_name or "noname")
    return f"{uuid.uuid4()}-{short_name}".replace("/", "").replace("\\", "")


def object_name_from_url(url: str) -> str:
    return url.rstrip("/").rsplit("/", 1)[-1]


class SupabaseStorage:
    """Supabase Storage over its REST API."""

    def __init__(
        self,
        project_url: str,
        service_key: str,
        bucket_url: str,
        client: httpx.AsyncClient | None = None,
    ):
        self.project_url = project_url.rstrip("/")
        self.bucket_url = bucket_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {service_key}", "apikey": service_key}
        self._client = client or httpx.AsyncClient(timeout=30.0)

    async def upload(self, bucket: str, name: str, data: bytes, content_type: str) -> str:
        url = f"{self.project_url}/storage/v1/object/{bucket}/{quote(name)}"
        try:
            response = await self._client.post(
                url,
                content=data,
                headers={**self._headers, "Content-Type": content_type, "x-upsert": "false"},
            )
        except httpx.HTTPError as exc:
            logger.error("Upload to bucket %s failed: %s", bucket, exc)
            raise StorageError("Something went wrong while uploading the image") from exc
        if response.is_error:
            logger.error("Upload to bucket %s rejected (%s): %s", bucket, response.status_code, response.text)
            raise StorageError("Something went wrong while uploading the image")
        return f"{self.bucket_url}/{bucket}/{name}"

    async def remove(self, bucket: str, names: list[str]) -> None:
        if not names:
            return
        try:
            response = await self._client.request(
                "DELETE",
                f"{self.project_url}/storage/v1/object/{bucket}",
                json={"prefixes": names},
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            logger.error("Removing %s from bucket %s failed: %s", names, bucket, exc)
            raise StorageError("Something went wrong while deleting the image") from exc
        if response.is_error:
            logger.error("Removing %s from bucket %s rejected (%s)", names, bucket, response.status_code)
            raise StorageError("Something went wrong while deleting the image")

    async def aclose(self) -> None:
        await self._client.aclose()


class LocalStorage:
    """Store files on local disk. Path: {UPLOAD_DIR}/{bucket}/{name}"""

    def __init__(self, base_dir: str | None = None, base_url: str | None = None):
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR).resolve()
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")

    async def upload(self, bucket: str, name: str, data: bytes, content_type: str) -> str:
        path = self.base_dir / bucket
        try:
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread((path / name).write_bytes, data)
        except OSError as exc:
            logger.error("Writing %s/%s failed: %s", bucket, name, exc)
            raise StorageError("Something went wrong while uploading the image") from exc
        return f"{self.base_url}/uploads/{bucket}/{name}"

    async def remove(self, bucket: str, names: list[str]) -> None:
        for name in names:
            try:
                await asyncio.to_thread((self.base_dir / bucket / name).unlink, missing_ok=True)
            except OSError as exc:
                logger.error("Deleting %s/%s failed: %s", bucket, name, exc)
                raise StorageError("Something went wrong while deleting the image") from exc


_storage: StorageBackend | None = None


def build_storage() -> StorageBackend:
    if settings.STORAGE_BACKEND == "local":
        return LocalStorage()
    if not (settings.SUPABASE_PROJECT_URL and settings.SUPABASE_SERVICE_KEY and settings.SUPABASE_BUCKET_URL):
        raise ServerError("Some error occurred while connecting to the storage bucket")
    return SupabaseStorage(
        settings.SUPABASE_PROJECT_URL,
        settings.SUPABASE_SERVICE_KEY,
        settings.SUPABASE_BUCKET_URL,
    )


def get_storage() -> StorageBackend:
    global _storage
    if _storage is None:
        _storage = build_storage()
    return _storage


async def close_storage() -> None:
    """Release the shared backend's HTTP client, if one was created."""
    global _storage
    if isinstance(_storage, SupabaseStorage):
        await _storage.aclose()
    _storage = None
