"""
Image utility functions.
"""
import io
import logging
import os
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Pillow format name -> file extension
FORMAT_EXTENSIONS = {
    "JPEG": "jpg",
    "PNG": "png",
    "GIF": "gif",
    "WEBP": "webp",
    "BMP": "bmp",
    "TIFF": "tiff",
}

def detect_image_format(contents: bytes) -> str:
    """
    Identify the image format of raw bytes.

    Args:
        contents: Encoded image content

    Returns:
        Pillow format name (e.g. "JPEG")

    Raises:
        ValueError: The bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(contents)) as img:
            img.verify()
            if not img.format:
                raise ValueError("Unknown image format")
            return img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValueError(f"Invalid image file: {e}") from e

def file_extension(filename: Optional[str], image_format: Optional[str] = None) -> str:
    """
    Extension to store an upload under.

    The original filename's extension wins; otherwise it is derived from the
    detected image format.
    """
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if ext:
        return ext
    if image_format:
        return FORMAT_EXTENSIONS.get(image_format.upper(), image_format.lower())
    return "bin"

def fetch_image_bytes(url: str, timeout: float = 30.0) -> bytes:
    """
    Download an image over HTTP.

    Args:
        url: Image URL
        timeout: Request timeout in seconds

    Returns:
        Response body

    Raises:
        requests.RequestException: Network failure or non-2xx status
    """
    logger.info(f"Fetching image: {url}")
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content
