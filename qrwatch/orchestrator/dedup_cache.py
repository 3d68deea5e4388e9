import threading
from qrwatch.orchestrator.contracts import WatchedFile


class ProcessedFileCache:
    """Last processed mtime per path.

    Safe to share between the watcher thread and the consuming loop: every
    read and write holds the same lock. Entries live as long as the cache.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._processed: dict[str, int] = {}

    def is_processed(self, path: str, mtime_ns: int) -> bool:
        with self._lock:
            last = self._processed.get(path)
        return last is not None and last >= mtime_ns

    def mark_processed(self, path: str, mtime_ns: int):
        with self._lock:
            self._processed[path] = mtime_ns

    def get(self, path: str) -> WatchedFile | None:
        with self._lock:
            last = self._processed.get(path)
        return WatchedFile(path=path, mtime_ns=last) if last is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._processed)
