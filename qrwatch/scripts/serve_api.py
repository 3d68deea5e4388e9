"""
Serve the qrwatch status API.

Usage:
    qrwatch-api
    QRWATCH_API_PORT=9100 qrwatch-api
"""
import sys
import uvicorn
from qrwatch.orchestrator.errors import ConfigError
from qrwatch.services.api import create_app
from qrwatch.services.config import load_settings


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    print(f"qrwatch status API on http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
