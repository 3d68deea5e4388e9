"""Mock window capture: serves an image file (or a blank frame) as the window content."""
import numpy as np
import cv2
from qrwatch.adapters.capture.base import WindowCapture, Rect
from qrwatch.orchestrator.imaging import load_image

MOCK_HWND = 1
BLANK_SIZE = (400, 300)   # width, height


class MockWindowCapture(WindowCapture):
    def __init__(self, status_store, image_path: str | None = None):
        self.status = status_store
        self._image_path = image_path
        self._bgra = None

    def _frame(self) -> np.ndarray:
        if self._bgra is None:
            if self._image_path:
                rgba = load_image(self._image_path).pixels
                self._bgra = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
                self.status.log(f"mock_capture: serving {self._image_path}")
            else:
                w, h = BLANK_SIZE
                self._bgra = np.full((h, w, 4), 255, dtype=np.uint8)
                self.status.log("mock_capture: serving blank frame")
        return self._bgra

    def find_window(self, class_name: str | None, title: str) -> int:
        self.status.log(f"mock_capture: pretending to find class={class_name!r} title={title!r}")
        return MOCK_HWND

    def window_rect(self, hwnd: int) -> Rect:
        h, w = self._frame().shape[:2]
        return (0, 0, w, h)

    def grab_pixels(self, hwnd: int, width: int, height: int) -> bytes:
        return self._frame()[:height, :width].tobytes()
