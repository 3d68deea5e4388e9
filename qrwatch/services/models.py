from pydantic import BaseModel
from typing import Optional

class QrResultOut(BaseModel):
    found: bool
    text: str = ""

class StatusResponse(BaseModel):
    busy: bool
    last_file: Optional[str] = None
    last_result: Optional[QrResultOut] = None
    last_error: Optional[str] = None
    logs: list[str]

class CaptureResponse(BaseModel):
    ok: bool
    result: Optional[QrResultOut] = None
    saved_to: Optional[str] = None
    stage: Optional[str] = None     # failing capture stage, e.g. "find_window"
    error: Optional[str] = None

class ScanResponse(BaseModel):
    ok: bool
    file: Optional[str] = None      # None when no candidate file exists
    result: Optional[QrResultOut] = None
    error: Optional[str] = None

class HealthResponse(BaseModel):
    api: bool = True
    capture_adapter: str
    image_dir: str
    image_dir_exists: bool
