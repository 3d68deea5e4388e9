"""Adapter selection shared by the CLIs and the status API."""
from qrwatch.adapters.capture.base import WindowCapture
from qrwatch.adapters.decoder.cv2_decoder import Cv2QrDecoder
from qrwatch.services.config import Settings


def create_capture(settings: Settings, status) -> WindowCapture:
    # Capture adapter: QRWATCH_CAPTURE_ADAPTER = win32 | mock
    if settings.capture_adapter == "win32":
        from qrwatch.adapters.capture.win32_capture import Win32WindowCapture
        capture = Win32WindowCapture(status)
    else:
        from qrwatch.adapters.capture.mock_capture import MockWindowCapture
        capture = MockWindowCapture(status, image_path=settings.mock_image)
    status.log(f"capture adapter: {type(capture).__name__}")
    return capture


def create_decoder() -> Cv2QrDecoder:
    return Cv2QrDecoder()
