"""
Cache-file classifier.

WeChat Work drops the login QR into its image cache as <uuid>.jpg, so a
candidate is any .jpg (any case) whose stem is a canonical 8-4-4-4-12 hex UUID.
"""
import os
import re

QR_IMAGE_EXT = ".jpg"
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_qr_candidate(path: str) -> bool:
    stem, ext = os.path.splitext(os.path.basename(path))
    if ext.lower() != QR_IMAGE_EXT:
        return False
    return _UUID_RE.match(stem) is not None
