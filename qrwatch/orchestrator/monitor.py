import os
import time
from datetime import datetime
from qrwatch.adapters.decoder.base import DecoderAdapter
from qrwatch.adapters.watch.base import DirectoryWatcher
from qrwatch.orchestrator.classifier import is_qr_candidate
from qrwatch.orchestrator.contracts import FileEvent, FileOp, MonitorState, WatchError
from qrwatch.orchestrator.dedup_cache import ProcessedFileCache
from qrwatch.orchestrator.errors import (
    DecodeError,
    FileValidationError,
    ImageError,
    WatchSetupError,
)
from qrwatch.orchestrator.imaging import load_image, validate_file
from qrwatch.services.config import (
    DEFAULT_MAX_FILE_BYTES,
    DEFAULT_SETTLE_DELAY_S,
    IMAGE_SUBDIR,
)


class QrCodeMonitor:
    """Watches the WXWork image cache and decodes each new QR image once.

    If the Image directory does not exist yet, its parent is watched until
    the directory is created, then the directory itself is added:

        WAITING_FOR_DIRECTORY --(Image created)--> WATCHING
    """

    def __init__(self, watcher: DirectoryWatcher, decoder: DecoderAdapter,
                 cache: ProcessedFileCache, status_store, parent_dir: str,
                 subdir: str = IMAGE_SUBDIR,
                 settle_delay: float = DEFAULT_SETTLE_DELAY_S,
                 max_bytes: int = DEFAULT_MAX_FILE_BYTES,
                 sleep=time.sleep):
        self.watcher = watcher
        self.decoder = decoder
        self.cache = cache
        self.status = status_store
        self.parent_dir = parent_dir
        self.subdir = subdir
        self.target_dir = os.path.join(parent_dir, subdir)
        self.settle_delay = settle_delay
        self.max_bytes = max_bytes
        self._sleep = sleep
        self.state: MonitorState = "WAITING_FOR_DIRECTORY"

    def setup(self):
        self.status.log(f"monitor: target directory {self.target_dir}")
        if os.path.isdir(self.target_dir):
            self.status.log(f"monitor: {self.subdir} directory exists, watching it")
            self.watcher.add(self.target_dir)
            self.state = "WATCHING"
        else:
            self.status.log(f"monitor: {self.subdir} directory missing, watching parent until it is created")
            self.watcher.add(self.parent_dir)

    def start(self):
        """setup() + run(); WatchSetupError from setup propagates."""
        try:
            self.setup()
            self.run()
        finally:
            self.watcher.close()

    def run(self):
        for item in self.watcher.events():
            if isinstance(item, WatchError):
                self.status.fail(f"monitor: watch error: {item.error}")
                continue
            self.handle_event(item)
        self.status.log("monitor: event stream closed")

    def handle_event(self, event: FileEvent):
        if event.op == FileOp.CREATE and os.path.basename(event.path) == self.subdir:
            self._on_directory_created(event.path)
            return
        if event.op == FileOp.WRITE and is_qr_candidate(event.path):
            self._on_file_written(event.path)

    def _on_directory_created(self, path: str):
        # every creation is added again: a deleted and recreated Image
        # directory has lost its previous watch
        self.status.log(f"monitor: {self.subdir} directory created: {path}")
        try:
            self.watcher.add(path)
        except WatchSetupError as e:
            self.status.fail(f"monitor: failed to watch {path}: {e}")
            return
        self.state = "WATCHING"

    def _on_file_written(self, path: str):
        try:
            mtime_ns = os.stat(path).st_mtime_ns
        except OSError as e:
            self.status.log(f"monitor: cannot stat {path}: {e}")
            return
        if self.cache.is_processed(path, mtime_ns):
            return

        self.status.log(f"monitor: new file {os.path.basename(path)}")
        # give the client time to finish writing before reading it back
        self._sleep(self.settle_delay)
        try:
            self.process_file(path)
        finally:
            self.cache.mark_processed(path, mtime_ns)

    def process_file(self, path: str):
        try:
            validate_file(path, self.max_bytes)
        except FileValidationError as e:
            self.status.fail(f"monitor: file validation failed: {e}")
            return
        try:
            result = self.decoder.decode(load_image(path))
        except (ImageError, DecodeError) as e:
            self.status.fail(f"monitor: QR detection failed for {path}: {e}")
            return

        self.status.record(path, result)
        if result.found:
            self.status.log("monitor: QR code found")
            self.status.log(f"  content: {result.text}")
            self.status.log(f"  time:    {datetime.now():%Y-%m-%d %H:%M:%S}")
            self.status.log(f"  file:    {os.path.basename(path)}")
        else:
            self.status.log(f"monitor: not a QR code: {os.path.basename(path)}")
        self.status.log("monitor: still watching...")
