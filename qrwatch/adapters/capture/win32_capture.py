"""
Win32 window capture via pywin32.

Renders the whole window into an off-screen compatible bitmap with
PrintWindow(PW_RENDERFULLCONTENT), so covered or partially off-screen
windows still come back complete. Only importable on Windows.
"""
import ctypes
import pywintypes
import win32gui
import win32ui
from qrwatch.adapters.capture.base import WindowCapture, Rect
from qrwatch.orchestrator.errors import (
    PixelExtractionError,
    RenderError,
    SurfaceAllocationError,
    WindowNotFoundError,
    WindowRectError,
)

PW_RENDERFULLCONTENT = 0x00000002
PROCESS_PER_MONITOR_DPI_AWARE = 2
BASE_DPI = 96.0


class Win32WindowCapture(WindowCapture):
    def __init__(self, status_store):
        self.status = status_store
        # E_ACCESSDENIED just means awareness was already set for this process
        try:
            ctypes.windll.shcore.SetProcessDpiAwareness(PROCESS_PER_MONITOR_DPI_AWARE)
        except (AttributeError, OSError) as e:
            self.status.log(f"win32_capture: SetProcessDpiAwareness unavailable: {e}")

    def find_window(self, class_name: str | None, title: str) -> int:
        try:
            hwnd = win32gui.FindWindow(class_name or None, title or None)
        except pywintypes.error:
            hwnd = 0
        if not hwnd:
            raise WindowNotFoundError(f"window not found: class={class_name!r} title={title!r}")
        self.status.log(f"win32_capture: found window handle {hwnd}")
        return hwnd

    def window_rect(self, hwnd: int) -> Rect:
        try:
            return tuple(win32gui.GetWindowRect(hwnd))
        except pywintypes.error as e:
            raise WindowRectError(f"GetWindowRect failed for hwnd={hwnd}: {e}") from e

    def dpi_scale(self, hwnd: int) -> float:
        try:
            dpi = ctypes.windll.user32.GetDpiForWindow(hwnd)
        except AttributeError:
            return 1.0
        return dpi / BASE_DPI if dpi else 1.0

    def grab_pixels(self, hwnd: int, width: int, height: int) -> bytes:
        try:
            hwnd_dc = win32gui.GetWindowDC(hwnd)
        except pywintypes.error as e:
            raise SurfaceAllocationError(f"GetWindowDC failed: {e}") from e
        if not hwnd_dc:
            raise SurfaceAllocationError("GetWindowDC returned NULL")
        try:
            try:
                window_dc = win32ui.CreateDCFromHandle(hwnd_dc)
                mem_dc = window_dc.CreateCompatibleDC()
            except win32ui.error as e:
                raise SurfaceAllocationError(f"CreateCompatibleDC failed: {e}") from e
            try:
                bitmap = win32ui.CreateBitmap()
                try:
                    bitmap.CreateCompatibleBitmap(window_dc, width, height)
                except win32ui.error as e:
                    raise SurfaceAllocationError(
                        f"CreateCompatibleBitmap {width}x{height} failed: {e}"
                    ) from e
                try:
                    old = mem_dc.SelectObject(bitmap)
                    try:
                        return self._render(hwnd, mem_dc, bitmap, width, height)
                    finally:
                        mem_dc.SelectObject(old)
                finally:
                    win32gui.DeleteObject(bitmap.GetHandle())
            finally:
                mem_dc.DeleteDC()
                window_dc.DeleteDC()
        finally:
            win32gui.ReleaseDC(hwnd, hwnd_dc)

    def _render(self, hwnd, mem_dc, bitmap, width: int, height: int) -> bytes:
        if not ctypes.windll.user32.PrintWindow(hwnd, mem_dc.GetSafeHdc(), PW_RENDERFULLCONTENT):
            raise RenderError(f"PrintWindow failed for hwnd={hwnd}")
        try:
            bits = bitmap.GetBitmapBits(True)
        except win32ui.error as e:
            raise PixelExtractionError(f"GetBitmapBits failed: {e}") from e
        if len(bits) != width * height * 4:
            raise PixelExtractionError(
                f"got {len(bits)} bytes of pixels, expected 32-bit {width}x{height}"
            )
        return bits
