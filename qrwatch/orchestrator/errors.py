"""Error hierarchy shared by the capture, monitor and scan tools.

Setup errors (window not found, watcher creation) are fatal for the CLIs.
Per-file errors are logged by the orchestrators and the item is skipped.
"Not a QR code" is never an error, see DecodeResult.
"""


class QrWatchError(Exception):
    pass


# ── window capture stages ───────────────────────────────────────────────────

class CaptureError(QrWatchError):
    stage = "capture"


class WindowNotFoundError(CaptureError):
    stage = "find_window"


class WindowRectError(CaptureError):
    stage = "window_rect"


class SurfaceAllocationError(CaptureError):
    stage = "allocate_surface"


class RenderError(CaptureError):
    stage = "render"


class PixelExtractionError(CaptureError):
    stage = "extract_pixels"


# ── image files ─────────────────────────────────────────────────────────────

class ImageError(QrWatchError):
    pass


class ImageNotFoundError(ImageError):
    pass


class ImageReadError(ImageError):
    pass


class ImageFormatError(ImageError):
    pass


class ImageWriteError(ImageError):
    pass


class FileValidationError(ImageError):
    pass


# ── decode / watch / scan ───────────────────────────────────────────────────

class DecodeError(QrWatchError):
    pass


class WatchSetupError(QrWatchError):
    pass


class ScanError(QrWatchError):
    pass


class ConfigError(QrWatchError):
    pass
