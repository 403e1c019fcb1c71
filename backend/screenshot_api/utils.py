"""
Utility functions
"""

import io
import os
import re
from typing import Dict, Optional
from urllib.parse import urlparse

from PIL import Image

from .errors import UnsupportedFormatError, ValidationError
from .models import CaptureKind, JpegCapture, PdfCapture, PdfOptions, PngCapture, ScreenshotRequest

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+\-.]*$')
_NETWORK_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def is_absolute_url(url: str) -> bool:
    """Check that url carries a scheme and, for network schemes, a host"""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False

    if not parsed.scheme or not _SCHEME_PATTERN.match(parsed.scheme):
        return False

    if parsed.scheme.lower() in _NETWORK_SCHEMES:
        host = parsed.hostname
        return bool(host) and not re.search(r'\s', host)

    return bool(parsed.netloc or parsed.path)


def validate_request(request: ScreenshotRequest) -> None:
    """Reject a request before any filesystem or browser work.

    Checks run in order and stop at the first failure.
    """
    if not request.url or not request.url.strip():
        raise ValidationError("URL is required")

    if not is_absolute_url(request.url):
        raise ValidationError("Invalid URL format")

    if not request.save_path or not request.save_path.strip():
        raise ValidationError("SavePath is required")


def resolve_capture_kind(request: ScreenshotRequest, default_quality: int = 80) -> CaptureKind:
    """Map the request's format string onto a capture kind"""
    if request.format is None:
        raise UnsupportedFormatError()
    fmt = request.format.lower()

    if fmt in ("jpg", "jpeg"):
        quality = default_quality if request.quality is None else request.quality
        return JpegCapture(quality=quality)
    if fmt == "png":
        return PngCapture()
    if fmt == "pdf":
        return PdfCapture(options=request.pdf_options or PdfOptions())

    raise UnsupportedFormatError()


def resolve_output_path(save_path: str, extension: str) -> str:
    """Create the parent directory of save_path and make sure it ends with extension"""
    directory = os.path.dirname(save_path)
    if directory and not os.path.isdir(directory):
        os.makedirs(directory, exist_ok=True)

    if not save_path.lower().endswith(extension.lower()):
        save_path += extension

    return save_path


def read_image_dimensions(image_bytes: bytes) -> Optional[Dict[str, int]]:
    """Read width and height from encoded image bytes"""
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            return {"width": image.width, "height": image.height}
    except (OSError, ValueError, Image.DecompressionBombError):
        return None
