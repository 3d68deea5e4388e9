"""
watchdog-backed DirectoryWatcher.

The observer thread only enqueues; FileEvent and WatchError items are
consumed by a single loop through events(). close() stops the observer and
enqueues a sentinel, so everything already queued is still delivered.
"""
import os
import queue
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import ObservedWatch
from qrwatch.adapters.watch.base import DirectoryWatcher
from qrwatch.orchestrator.contracts import FileEvent, FileOp, WatchError
from qrwatch.orchestrator.errors import WatchSetupError

_CLOSED = object()


class QueueingHandler(FileSystemEventHandler):
    def __init__(self, q: queue.Queue):
        self._queue = q

    def _put(self, event, op: FileOp):
        self._queue.put(FileEvent(path=os.fsdecode(event.src_path), op=op))

    def on_created(self, event):
        self._put(event, FileOp.CREATE)

    def on_modified(self, event):
        if not event.is_directory:
            self._put(event, FileOp.WRITE)

    def on_closed(self, event):
        # inotify IN_CLOSE_WRITE: the writer is done with the file
        self._put(event, FileOp.WRITE)


class WatchdogWatcher(DirectoryWatcher):
    def __init__(self, status_store, poll_timeout: float = 1.0):
        self.status = status_store
        self._poll_timeout = poll_timeout
        self._queue: queue.Queue = queue.Queue()
        self._handler = QueueingHandler(self._queue)
        self._observer = Observer()
        self._watches: dict[str, ObservedWatch] = {}
        self._closed = False

    def add(self, path: str):
        """Watch path; adding a path again replaces its previous watch.

        A watched directory that is deleted leaves a stopped emitter behind,
        and watchdog hands that same watch back from schedule() for an equal
        path, so the old one is unscheduled first.
        """
        try:
            stale = self._watches.pop(path, None)
            if stale is not None:
                self._observer.unschedule(stale)
            self._watches[path] = self._observer.schedule(self._handler, path, recursive=False)
            if not self._observer.is_alive():
                self._observer.start()
        except OSError as e:
            raise WatchSetupError(f"cannot watch {path}: {e}") from e
        self.status.log(f"watcher: watching {path}")

    def events(self):
        while True:
            try:
                item = self._queue.get(timeout=self._poll_timeout)
            except queue.Empty:
                if not self._closed and self._observer.ident is not None and not self._observer.is_alive():
                    yield WatchError(RuntimeError("file watch observer stopped unexpectedly"))
                    return
                continue
            if item is _CLOSED:
                return
            yield item

    def close(self):
        if self._closed:
            return
        self._closed = True
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join(timeout=5)
        self._queue.put(_CLOSED)
