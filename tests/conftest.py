import numpy as np
import cv2
import pytest
import qrcode
from qrwatch.adapters.capture.base import WindowCapture
from qrwatch.adapters.decoder.cv2_decoder import Cv2QrDecoder
from qrwatch.adapters.watch.base import DirectoryWatcher
from qrwatch.orchestrator.contracts import CapturedImage
from qrwatch.orchestrator.errors import WatchSetupError, WindowNotFoundError
from qrwatch.services.status_store import StatusStore

LOGIN_URL = "https://open.work.weixin.qq.com/wwopen/sso/confirm?k=4f89a9c1"
SAMPLE_UUID = "3f2504e0-4f89-41d3-9a0c-0305e82c3301"


def make_qr_rgba(text: str = LOGIN_URL) -> np.ndarray:
    qr = qrcode.QRCode(box_size=8, border=4)
    qr.add_data(text)
    qr.make(fit=True)
    rgb = np.array(qr.make_image().convert("RGB"), dtype=np.uint8)
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2RGBA)


def blank_rgba(width: int = 200, height: int = 150) -> np.ndarray:
    return np.full((height, width, 4), 255, dtype=np.uint8)


def write_image(path, rgba: np.ndarray):
    assert cv2.imwrite(str(path), cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGR))
    return path


class FakeWatcher(DirectoryWatcher):
    def __init__(self, items=()):
        self.items = list(items)
        self.added: list[str] = []
        self.fail_on: set[str] = set()
        self.closed = False

    def add(self, path: str):
        if path in self.fail_on:
            raise WatchSetupError(f"cannot watch {path}")
        self.added.append(path)

    def events(self):
        yield from self.items

    def close(self):
        self.closed = True


class RecordingCapture(WindowCapture):
    """Window backend that serves fixed RGBA pixels and records every call."""

    def __init__(self, rgba: np.ndarray | None = None, found: bool = True, rect=None):
        self.rgba = blank_rgba() if rgba is None else rgba
        self.found = found
        h, w = self.rgba.shape[:2]
        self.rect = rect if rect is not None else (100, 50, 100 + w, 50 + h)
        self.calls: list[str] = []

    def find_window(self, class_name, title):
        self.calls.append("find_window")
        if not self.found:
            raise WindowNotFoundError(f"window not found: class={class_name!r} title={title!r}")
        return 42

    def window_rect(self, hwnd):
        self.calls.append("window_rect")
        return self.rect

    def dpi_scale(self, hwnd):
        self.calls.append("dpi_scale")
        return 1.5

    def grab_pixels(self, hwnd, width, height):
        self.calls.append("grab_pixels")
        return cv2.cvtColor(self.rgba, cv2.COLOR_RGBA2BGRA).tobytes()


class CountingDecoder(Cv2QrDecoder):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def decode(self, image):
        self.calls += 1
        return super().decode(image)


@pytest.fixture
def status():
    return StatusStore()


@pytest.fixture
def decoder():
    return CountingDecoder()


@pytest.fixture
def qr_image() -> CapturedImage:
    rgba = make_qr_rgba()
    return CapturedImage(width=rgba.shape[1], height=rgba.shape[0], pixels=rgba)
