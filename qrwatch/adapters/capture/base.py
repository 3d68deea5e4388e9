from abc import ABC, abstractmethod

Rect = tuple[int, int, int, int]   # left, top, right, bottom


class WindowCapture(ABC):
    @abstractmethod
    def find_window(self, class_name: str | None, title: str) -> int:
        """Return the window handle. Raises WindowNotFoundError."""
        ...

    @abstractmethod
    def window_rect(self, hwnd: int) -> Rect:
        """Raises WindowRectError."""
        ...

    def dpi_scale(self, hwnd: int) -> float:
        return 1.0

    @abstractmethod
    def grab_pixels(self, hwnd: int, width: int, height: int) -> bytes:
        """Render the full window content off-screen; top-down BGRA bytes.

        Raises SurfaceAllocationError, RenderError or PixelExtractionError.
        """
        ...
