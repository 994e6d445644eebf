import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from socialhub.core.errors import ValidationError
from socialhub.services.image_service import compute_blurhash, read_image

from tests.conftest import png_bytes


def upload(data: bytes, content_type: str = "image/png", filename: str = "pic.png") -> UploadFile:
    return UploadFile(io.BytesIO(data), filename=filename, headers=Headers({"content-type": content_type}))


def test_blurhash_has_fixed_length():
    assert len(compute_blurhash(png_bytes())) == 22
    assert len(compute_blurhash(png_bytes((0, 128, 0), size=(300, 120)))) == 22


def test_blurhash_differs_by_color():
    assert compute_blurhash(png_bytes((255, 0, 0))) != compute_blurhash(png_bytes((0, 0, 255)))


def test_blurhash_rejects_invalid_image():
    with pytest.raises(ValidationError):
        compute_blurhash(b"definitely not an image")


async def test_read_image_accepts_png():
    data = png_bytes()
    assert await read_image(upload(data)) == data


async def test_read_image_rejects_other_types():
    with pytest.raises(ValidationError):
        await read_image(upload(b"%PDF-1.4", content_type="application/pdf", filename="doc.pdf"))


async def test_read_image_rejects_empty_file():
    with pytest.raises(ValidationError):
        await read_image(upload(b""))
