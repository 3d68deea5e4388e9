"""
Runtime settings for the qrwatch tools.

Every value comes from an environment variable (optionally loaded from a
.env file in the working directory). Unset variables fall back to the
defaults the tools have always used against the WeChat Work client.
"""
import os
import sys
from dataclasses import dataclass
from dotenv import load_dotenv
from qrwatch.orchestrator.errors import ConfigError

DEFAULT_WINDOW_CLASS = "WeChatLogin"
DEFAULT_WINDOW_TITLE = "企业微信"
DEFAULT_OUTPUT = "screenshot.png"
DEFAULT_POLL_INTERVAL_S = 5.0
DEFAULT_SETTLE_DELAY_S = 0.5
DEFAULT_MAX_FILE_BYTES = 10 * 1024 * 1024
IMAGE_SUBDIR = "Image"

_FALLBACK_WXWORK_DIR = r"C:\Users\Default\Documents\WXWork\Global"
_GLOBAL_SUBPATH = ("Documents", "WXWork", "Global")


@dataclass
class Settings:
    window_class: str = DEFAULT_WINDOW_CLASS
    window_title: str = DEFAULT_WINDOW_TITLE
    output: str = DEFAULT_OUTPUT
    capture_adapter: str = "mock"
    mock_image: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL_S
    settle_delay: float = DEFAULT_SETTLE_DELAY_S
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    wxwork_dir: str = ""
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @property
    def image_dir(self) -> str:
        return os.path.join(self.wxwork_dir, IMAGE_SUBDIR)


def default_wxwork_dir(env=None) -> str:
    """WXWork\\Global under the user profile; the Default profile if USERPROFILE is unset."""
    env = os.environ if env is None else env
    profile = env.get("USERPROFILE")
    if not profile:
        return _FALLBACK_WXWORK_DIR
    return os.path.join(profile, *_GLOBAL_SUBPATH)


def _number(env, name: str, default, kind):
    raw = env.get(name, default)
    try:
        return kind(raw)
    except ValueError:
        what = "an integer" if kind is int else "a number"
        raise ConfigError(f"{name} must be {what}, got {raw!r}") from None


def load_settings(env=None, dotenv_path: str | None = ".env") -> Settings:
    if env is None:
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)
        env = os.environ

    default_adapter = "win32" if sys.platform == "win32" else "mock"
    return Settings(
        window_class=env.get("QRWATCH_WINDOW_CLASS", DEFAULT_WINDOW_CLASS),
        window_title=env.get("QRWATCH_WINDOW_TITLE", DEFAULT_WINDOW_TITLE),
        output=env.get("QRWATCH_OUTPUT", DEFAULT_OUTPUT),
        capture_adapter=env.get("QRWATCH_CAPTURE_ADAPTER", default_adapter).lower(),
        mock_image=env.get("QRWATCH_MOCK_IMAGE") or None,
        poll_interval=_number(env, "QRWATCH_POLL_INTERVAL", DEFAULT_POLL_INTERVAL_S, float),
        settle_delay=_number(env, "QRWATCH_SETTLE_DELAY", DEFAULT_SETTLE_DELAY_S, float),
        max_file_bytes=_number(env, "QRWATCH_MAX_FILE_BYTES", DEFAULT_MAX_FILE_BYTES, int),
        wxwork_dir=env.get("QRWATCH_WXWORK_DIR") or default_wxwork_dir(env),
        api_host=env.get("QRWATCH_API_HOST", "127.0.0.1"),
        api_port=_number(env, "QRWATCH_API_PORT", "8000", int),
    )
