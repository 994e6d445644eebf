"""Image upload validation and blurhash placeholders."""
import asyncio
import io

import blurhash
from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from socialhub.core.config import settings
from socialhub.core.errors import ValidationError
from socialhub.services.storage_service import StorageBackend, generate_object_name

IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}

BLURHASH_COMPONENTS_X = 3
BLURHASH_COMPONENTS_Y = 3
# Blurhash only keeps a few low-frequency components; encoding a thumbnail
# gives the same hash at a fraction of the cost.
BLURHASH_SAMPLE_SIZE = (64, 64)


def compute_blurhash(data: bytes) -> str:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img = img.convert("RGB")
            img.thumbnail(BLURHASH_SAMPLE_SIZE)
            width, height = img.size
            pixels = img.load()
            rows = [[pixels[x, y] for x in range(width)] for y in range(height)]
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationError("Uploaded file is not a valid image") from exc
    return blurhash.encode(rows, components_x=BLURHASH_COMPONENTS_X, components_y=BLURHASH_COMPONENTS_Y)


async def read_image(file: UploadFile) -> bytes:
    content_type = file.content_type or ""
    if content_type not in IMAGE_TYPES:
        raise ValidationError(f"Invalid file type: {content_type}. Allowed: {', '.join(sorted(IMAGE_TYPES))}")
    data = await file.read()
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > settings.MAX_IMAGE_SIZE_MB * 1024 * 1024:
        raise ValidationError(f"File too large. Max {settings.MAX_IMAGE_SIZE_MB}MB")
    return data


async def upload_image(
    storage: StorageBackend,
    bucket: str,
    file: UploadFile,
    with_blurhash: bool = False,
) -> tuple[str, str | None]:
    """Validate and upload ``file``; return its URL and optional blurhash."""
    data = await read_image(file)
    blurhash_string = await asyncio.to_thread(compute_blurhash, data) if with_blurhash else None
    url = await storage.upload(bucket, generate_object_name(file.filename), data, file.content_type)
    return url, blurhash_string
