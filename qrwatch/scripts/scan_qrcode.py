"""
Polling QR scanner: decodes the newest <uuid>.jpg in the image cache every tick.

Usage:
    qrwatch-scan                 # default WXWork\\Global\\Image directory
    qrwatch-scan D:\\some\\dir
"""
import argparse
import sys
from qrwatch.orchestrator.errors import ConfigError
from qrwatch.orchestrator.poller import QrScanner
from qrwatch.services.config import load_settings
from qrwatch.services.status_store import StatusStore
from qrwatch.services.wiring import create_decoder


def main(argv: list[str] | None = None) -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    parser = argparse.ArgumentParser(description="Poll a directory for the newest QR image")
    parser.add_argument("target_dir", nargs="?", default=settings.image_dir,
                        help=f"directory to scan (default: {settings.image_dir})")
    args = parser.parse_args(argv)

    status = StatusStore(echo=True)
    status.log("WeChat Work QR scanner (polling mode)")
    scanner = QrScanner(args.target_dir, create_decoder(), status, interval=settings.poll_interval)
    try:
        scanner.run()
    except KeyboardInterrupt:
        scanner.stop()
        status.log("scanner stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
