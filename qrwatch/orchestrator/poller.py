import os
import threading
from datetime import datetime
from qrwatch.adapters.decoder.base import DecoderAdapter
from qrwatch.orchestrator.classifier import is_qr_candidate
from qrwatch.orchestrator.contracts import DecodeResult
from qrwatch.orchestrator.errors import QrWatchError, ScanError
from qrwatch.orchestrator.imaging import load_image
from qrwatch.services.config import DEFAULT_POLL_INTERVAL_S


class QrScanner:
    """Every tick, decode the newest QR candidate under target_dir.

    No memory of earlier ticks: the same newest file is decoded again on
    every tick until a newer one shows up.
    """

    def __init__(self, target_dir: str, decoder: DecoderAdapter, status_store,
                 interval: float = DEFAULT_POLL_INTERVAL_S):
        self.target_dir = target_dir
        self.decoder = decoder
        self.status = status_store
        self.interval = interval
        self._stop = threading.Event()

    def _walk(self, directory: str):
        """Regular files in lexical pre-order: entries of a directory sorted by
        name, each subdirectory walked where its name sorts, not after the
        files."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise ScanError(f"cannot walk {directory}: {e.strerror}") from e
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from self._walk(entry.path)
            elif entry.is_file(follow_symlinks=False):
                yield entry

    def find_latest(self) -> str | None:
        """Newest candidate by mtime; on equal mtimes the first one walked wins."""
        if not os.path.isdir(self.target_dir):
            raise ScanError(f"directory does not exist: {self.target_dir}")

        latest_path, latest_mtime = None, None
        for entry in self._walk(self.target_dir):
            if not is_qr_candidate(entry.path):
                continue
            try:
                mtime_ns = entry.stat().st_mtime_ns
            except OSError as e:
                raise ScanError(f"cannot stat {entry.path}: {e}") from e
            if latest_mtime is None or mtime_ns > latest_mtime:
                latest_path, latest_mtime = entry.path, mtime_ns
        return latest_path

    def scan_once(self) -> DecodeResult | None:
        latest = self.find_latest()
        if latest is None:
            self.status.log("scan: no QR image files found")
            return None

        self.status.log(f"scan: latest file {os.path.basename(latest)}")
        result = self.decoder.decode(load_image(latest))
        self.status.record(latest, result)
        if result.found:
            self.status.log("scan: QR code found")
            self.status.log(f"  content: {result.text}")
            self.status.log(f"  time:    {datetime.now():%Y-%m-%d %H:%M:%S}")
        else:
            self.status.log("scan: not a QR code")
        return result

    def _tick(self):
        try:
            self.scan_once()
        except QrWatchError as e:
            self.status.fail(f"scan failed: {e}")

    def run(self):
        self.status.log(f"scan: polling every {self.interval:g}s")
        self.status.log(f"scan: directory {self.target_dir}")
        self._tick()
        while not self._stop.wait(self.interval):
            self._tick()

    def stop(self):
        self._stop.set()
