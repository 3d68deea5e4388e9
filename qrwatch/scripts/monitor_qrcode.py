"""
Event-driven QR monitor for the WeChat Work image cache.

Watches %USERPROFILE%\\Documents\\WXWork\\Global\\Image (or waits for it to
be created) and decodes every new <uuid>.jpg once.

Usage:
    qrwatch-monitor
"""
import sys
from qrwatch.adapters.watch.watchdog_watcher import WatchdogWatcher
from qrwatch.orchestrator.dedup_cache import ProcessedFileCache
from qrwatch.orchestrator.errors import ConfigError, WatchSetupError
from qrwatch.orchestrator.monitor import QrCodeMonitor
from qrwatch.services.config import load_settings
from qrwatch.services.status_store import StatusStore
from qrwatch.services.wiring import create_decoder


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    status = StatusStore(echo=True)
    status.log("WeChat Work QR monitor starting")
    monitor = QrCodeMonitor(
        watcher=WatchdogWatcher(status),
        decoder=create_decoder(),
        cache=ProcessedFileCache(),
        status_store=status,
        parent_dir=settings.wxwork_dir,
        settle_delay=settings.settle_delay,
        max_bytes=settings.max_file_bytes,
    )
    try:
        monitor.start()
    except WatchSetupError as e:
        print(f"[ERROR] monitor setup failed: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        status.log("monitor stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
