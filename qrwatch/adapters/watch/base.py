from abc import ABC, abstractmethod
from typing import Iterator
from qrwatch.orchestrator.contracts import FileEvent, WatchError


class DirectoryWatcher(ABC):
    @abstractmethod
    def add(self, path: str):
        """Start watching one directory (non-recursive). Raises WatchSetupError."""
        ...

    @abstractmethod
    def events(self) -> Iterator[FileEvent | WatchError]:
        """Events and errors in arrival order; ends once the watcher is closed."""
        ...

    @abstractmethod
    def close(self):
        ...
