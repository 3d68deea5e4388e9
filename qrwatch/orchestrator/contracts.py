from dataclasses import dataclass
from enum import Enum
from typing import Literal

import numpy as np

MonitorState = Literal["WAITING_FOR_DIRECTORY", "WATCHING"]


@dataclass
class CapturedImage:
    width: int
    height: int
    pixels: np.ndarray        # (height, width, 4) uint8, RGBA


@dataclass
class DecodeResult:
    found: bool
    text: str = ""


@dataclass
class WatchedFile:
    path: str
    mtime_ns: int


class FileOp(str, Enum):
    CREATE = "create"
    WRITE = "write"


@dataclass
class FileEvent:
    path: str
    op: FileOp


@dataclass
class WatchError:
    error: Exception
