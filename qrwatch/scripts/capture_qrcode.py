"""
One-shot login-window capture.

Finds the WeChat Work login window, renders it off-screen, looks for a QR
code and saves the frame to screenshot.png.

Usage:
    qrwatch-capture
    QRWATCH_CAPTURE_ADAPTER=mock QRWATCH_MOCK_IMAGE=login.png qrwatch-capture
"""
import sys
from qrwatch.orchestrator.capture_once import capture_once
from qrwatch.orchestrator.errors import CaptureError, ConfigError, QrWatchError
from qrwatch.services.config import load_settings
from qrwatch.services.status_store import StatusStore
from qrwatch.services.wiring import create_capture, create_decoder


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    status = StatusStore(echo=True)
    status.log("looking for window...")
    status.log(f"  class: {settings.window_class}")
    status.log(f"  title: {settings.window_title}")
    try:
        backend = create_capture(settings, status)
        capture_once(backend, create_decoder(), status,
                     settings.window_class, settings.window_title, settings.output)
    except CaptureError as e:
        print(f"[ERROR] capture failed at {e.stage}: {e}", file=sys.stderr)
        return 1
    except QrWatchError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    status.log("capture done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
