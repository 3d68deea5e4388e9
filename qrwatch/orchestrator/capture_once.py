from qrwatch.adapters.capture.base import WindowCapture
from qrwatch.adapters.decoder.base import DecoderAdapter
from qrwatch.orchestrator.contracts import CapturedImage, DecodeResult
from qrwatch.orchestrator.errors import DecodeError, WindowRectError
from qrwatch.orchestrator.imaging import bgra_to_image, save_png


def grab_window_image(backend: WindowCapture, status, class_name: str | None, title: str) -> CapturedImage:
    """find window -> rect -> render -> RGBA. Each stage raises its own CaptureError."""
    status.log(f"capture: looking for window class={class_name!r} title={title!r}")
    hwnd = backend.find_window(class_name, title)

    left, top, right, bottom = backend.window_rect(hwnd)
    width, height = right - left, bottom - top
    if width <= 0 or height <= 0:
        raise WindowRectError(f"window has empty rect {width}x{height} (minimised?)")
    status.log(f"capture: window size {width}x{height}")

    # informational only: the bitmap is always the logical rect size
    status.log(f"capture: dpi scale {backend.dpi_scale(hwnd):.2f}")

    data = backend.grab_pixels(hwnd, width, height)
    return bgra_to_image(data, width, height)


def report_decode(status, decoder: DecoderAdapter, image: CapturedImage, source: str | None) -> DecodeResult | None:
    """Decode and log the outcome; returns None when the decoder itself failed."""
    try:
        result = decoder.decode(image)
    except DecodeError as e:
        status.fail(f"decode error: {e}")
        return None
    status.record(source, result)
    if result.found:
        status.log(f"QR code found: {result.text}")
    else:
        status.log("no QR code in image")
    return result


def capture_once(backend: WindowCapture, decoder: DecoderAdapter, status,
                 class_name: str | None, title: str, output: str | None) -> DecodeResult | None:
    """One-shot capture -> decode -> report -> save.

    Capture and save failures propagate; a decode failure is reported and the
    screenshot is still written so the operator can inspect it.
    """
    if status.busy:
        status.log("capture: busy, skipped")
        return None
    status.set_busy(True)
    try:
        image = grab_window_image(backend, status, class_name, title)
        result = report_decode(status, decoder, image, source=output or "<window>")
        if output:
            save_png(image, output)
            status.log(f"capture: screenshot saved to {output}")
        return result
    finally:
        status.set_busy(False)
