from dataclasses import dataclass, field
from typing import Optional, List
from qrwatch.orchestrator.contracts import DecodeResult

MAX_LOG_LINES = 200

@dataclass
class StatusStore:
    busy: bool = False
    echo: bool = False                 # CLIs print every line to stdout
    last_file: Optional[str] = None
    last_result: Optional[DecodeResult] = None
    last_error: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    def set_busy(self, v: bool):
        self.busy = v

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > MAX_LOG_LINES:
            self.logs = self.logs[-MAX_LOG_LINES:]
        if self.echo:
            print(msg, flush=True)

    def record(self, path: Optional[str], result: DecodeResult):
        self.last_file = path
        self.last_result = result
        self.last_error = None

    def fail(self, msg: str):
        self.last_error = msg
        self.log(msg)
