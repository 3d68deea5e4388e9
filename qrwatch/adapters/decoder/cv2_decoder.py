"""
OpenCV QR decoder.

Runs cv2.QRCodeDetector on a grayscale copy of the RGBA pixels. A detector
that finds nothing (or finds corners but cannot read the payload) is a
negative result, not an error.
"""
import numpy as np
import cv2
from qrwatch.adapters.decoder.base import DecoderAdapter
from qrwatch.orchestrator.contracts import CapturedImage, DecodeResult
from qrwatch.orchestrator.errors import DecodeError


class Cv2QrDecoder(DecoderAdapter):
    def __init__(self):
        self._detector = cv2.QRCodeDetector()

    def decode(self, image: CapturedImage | np.ndarray) -> DecodeResult:
        gray = self._to_gray(image.pixels if isinstance(image, CapturedImage) else image)
        try:
            text, points, _ = self._detector.detectAndDecode(gray)
        except cv2.error as e:
            raise DecodeError(f"QR detector failed: {e}") from e
        if points is None or not text:
            return DecodeResult(found=False, text="")
        return DecodeResult(found=True, text=text)

    def _to_gray(self, pixels) -> np.ndarray:
        if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8:
            raise DecodeError("image must be a uint8 numpy array")
        if pixels.size == 0:
            raise DecodeError("image is empty")
        if pixels.ndim == 2:
            return pixels
        if pixels.ndim == 3 and pixels.shape[2] == 4:
            return cv2.cvtColor(pixels, cv2.COLOR_RGBA2GRAY)
        raise DecodeError(f"unsupported pixel layout {pixels.shape}, expected RGBA")
