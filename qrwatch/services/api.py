import os
from fastapi import FastAPI
from qrwatch.orchestrator.capture_once import capture_once
from qrwatch.orchestrator.contracts import DecodeResult
from qrwatch.orchestrator.errors import CaptureError, QrWatchError
from qrwatch.orchestrator.poller import QrScanner
from qrwatch.services.config import Settings, load_settings
from qrwatch.services.models import (
    CaptureResponse, HealthResponse, QrResultOut, ScanResponse, StatusResponse,
)
from qrwatch.services.status_store import StatusStore
from qrwatch.services.wiring import create_capture, create_decoder


def _result_out(result: DecodeResult | None) -> QrResultOut | None:
    return QrResultOut(found=result.found, text=result.text) if result else None


def create_app(settings: Settings | None = None, status: StatusStore | None = None,
               capture=None, decoder=None) -> FastAPI:
    settings = settings or load_settings()
    status = status or StatusStore()
    capture = capture or create_capture(settings, status)
    decoder = decoder or create_decoder()
    scanner = QrScanner(settings.image_dir, decoder, status, interval=settings.poll_interval)

    app = FastAPI(title="qrwatch status")

    @app.get("/status", response_model=StatusResponse)
    def get_status():
        return StatusResponse(
            busy=status.busy,
            last_file=status.last_file,
            last_result=_result_out(status.last_result),
            last_error=status.last_error,
            logs=status.logs,
        )

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(
            capture_adapter=type(capture).__name__,
            image_dir=settings.image_dir,
            image_dir_exists=os.path.isdir(settings.image_dir),
        )

    @app.post("/capture", response_model=CaptureResponse)
    def capture_window(save: bool = False):
        """One-shot window capture + decode; writes the screenshot only when save=true."""
        if status.busy:
            return CaptureResponse(ok=False, error="busy")
        output = settings.output if save else None
        try:
            result = capture_once(capture, decoder, status,
                                  settings.window_class, settings.window_title, output)
        except CaptureError as e:
            status.fail(f"CAPTURE failed at {e.stage}: {e}")
            return CaptureResponse(ok=False, stage=e.stage, error=str(e))
        except QrWatchError as e:
            status.fail(f"CAPTURE error: {e}")
            return CaptureResponse(ok=False, error=str(e))
        if result is None:
            return CaptureResponse(ok=False, error=status.last_error or "decode failed")
        return CaptureResponse(ok=True, result=_result_out(result), saved_to=output)

    @app.post("/scan", response_model=ScanResponse)
    def scan():
        """Run a single poll tick against the image cache directory."""
        try:
            result = scanner.scan_once()
        except QrWatchError as e:
            status.fail(f"SCAN failed: {e}")
            return ScanResponse(ok=False, error=str(e))
        if result is None:
            return ScanResponse(ok=True)
        return ScanResponse(ok=True, file=status.last_file, result=_result_out(result))

    return app
