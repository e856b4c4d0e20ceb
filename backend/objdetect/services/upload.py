import base64
import io
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from ..errors import FileReadError, InvalidUploadError

logger = logging.getLogger(__name__)


@dataclass
class UploadedImage:
    data: bytes
    content_type: str
    payload: str  # base64 without the data URL prefix
    width: int = 0
    height: int = 0

    @property
    def data_url(self) -> str:
        return f"data:{self.content_type};base64,{self.payload}"


def is_image_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith("image/")


def resolve_dimensions(data: bytes) -> Tuple[int, int]:
    """
    Intrinsic pixel size of an encoded image.
    Returns (0, 0) when the bytes cannot be decoded; callers must not
    draw overlays until real dimensions are known.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.size
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Could not resolve image dimensions: %s", e)
        return 0, 0


def read_upload(filename: Optional[str], content_type: Optional[str],
                reader: Callable[[], bytes]) -> UploadedImage:
    """
    Validate and read one uploaded file.

    Validation happens before the file is read, so a rejected upload
    never reaches the detection client.
    """
    if not filename or not is_image_type(content_type):
        raise InvalidUploadError()

    try:
        data = reader()
    except (OSError, ValueError) as e:
        logger.warning("Failed to read upload %s: %s", filename, e)
        raise FileReadError()

    if not data:
        raise InvalidUploadError()

    width, height = resolve_dimensions(data)
    return UploadedImage(
        data=data,
        content_type=content_type,
        payload=base64.b64encode(data).decode("ascii"),
        width=width,
        height=height,
    )


async def read_upload_file(file: Optional[UploadFile]) -> UploadedImage:
    """Adapter for FastAPI uploads"""
    if file is None:
        raise InvalidUploadError()

    data = b""
    read_error = None
    if file.filename and is_image_type(file.content_type):
        try:
            data = await file.read()
        except (OSError, ValueError) as e:
            read_error = e

    def reader() -> bytes:
        if read_error is not None:
            raise read_error
        return data

    return read_upload(file.filename, file.content_type, reader)
