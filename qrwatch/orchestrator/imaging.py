"""
Pixel-buffer helpers shared by the three tools.

CapturedImage always holds RGBA. Windows bitmaps arrive as BGRA and files
decode to BGR through OpenCV, so both are converted on the way in and back
to BGRA on the way out.
"""
import os
import numpy as np
import cv2
from qrwatch.orchestrator.contracts import CapturedImage
from qrwatch.orchestrator.errors import (
    FileValidationError,
    ImageFormatError,
    ImageNotFoundError,
    ImageReadError,
    ImageWriteError,
    PixelExtractionError,
)
from qrwatch.services.config import DEFAULT_MAX_FILE_BYTES


def bgra_to_image(data: bytes, width: int, height: int) -> CapturedImage:
    expected = width * height * 4
    if len(data) != expected:
        raise PixelExtractionError(
            f"pixel buffer is {len(data)} bytes, expected {expected} for {width}x{height}"
        )
    bgra = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
    rgba = cv2.cvtColor(bgra, cv2.COLOR_BGRA2RGBA)
    return CapturedImage(width=width, height=height, pixels=rgba)


def _bytes_to_bgr(image_bytes: bytes):
    arr = np.frombuffer(image_bytes, dtype=np.uint8)
    return cv2.imdecode(arr, cv2.IMREAD_COLOR)


def load_image(path: str) -> CapturedImage:
    """Read a JPEG/PNG (anything OpenCV decodes) from disk as RGBA."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        raise ImageNotFoundError(f"image file not found: {path}") from None
    except OSError as e:
        raise ImageReadError(f"cannot read image {path}: {e}") from e

    bgr = _bytes_to_bgr(raw) if raw else None
    if bgr is None:
        raise ImageFormatError(f"cannot decode image container: {path}")
    h, w = bgr.shape[:2]
    return CapturedImage(width=w, height=h, pixels=cv2.cvtColor(bgr, cv2.COLOR_BGR2RGBA))


def save_png(image: CapturedImage, path: str):
    ok, buf = cv2.imencode(".png", cv2.cvtColor(image.pixels, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise ImageWriteError(f"PNG encoding failed for {path}")
    try:
        with open(path, "wb") as f:
            f.write(buf.tobytes())
    except OSError as e:
        raise ImageWriteError(f"cannot write {path}: {e}") from e


def validate_file(path: str, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> int:
    """Check a freshly written cache file is plausible; returns its size."""
    try:
        size = os.stat(path).st_size
    except FileNotFoundError:
        raise FileValidationError(f"file does not exist: {path}") from None
    except OSError as e:
        raise FileValidationError(f"cannot stat {path}: {e}") from e
    if size == 0:
        raise FileValidationError(f"file is empty: {path}")
    if size > max_bytes:
        raise FileValidationError(f"file too large ({size} bytes > {max_bytes}): {path}")
    return size
