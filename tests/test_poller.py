import os
import pytest
from conftest import LOGIN_URL, make_qr_rgba, blank_rgba, write_image
from qrwatch.orchestrator.contracts import DecodeResult
from qrwatch.orchestrator.errors import ScanError
from qrwatch.orchestrator.poller import QrScanner

BASE_NS = 1_700_000_000 * 10**9


def _touch(path, offset_s: int):
    ns = BASE_NS + offset_s * 10**9
    os.utime(path, ns=(ns, ns))
    return str(path)


def _uuid(n: int) -> str:
    return f"{n:08x}-4f89-41d3-9a0c-0305e82c3301"


def test_newest_candidate_wins_regardless_of_walk_order(tmp_path, status, decoder):
    nested = tmp_path / "2024-05"
    nested.mkdir()
    newest = _touch(write_image(nested / f"{_uuid(9)}.jpg", blank_rgba()), 3)
    _touch(write_image(tmp_path / f"{_uuid(1)}.jpg", blank_rgba()), 2)
    _touch(write_image(tmp_path / f"{_uuid(2)}.jpg", blank_rgba()), 1)
    # newer, but not a candidate
    _touch(write_image(tmp_path / "avatar.jpg", blank_rgba()), 10)

    assert QrScanner(str(tmp_path), decoder, status).find_latest() == newest


def test_equal_mtimes_keep_first_walked(tmp_path, status, decoder):
    first = _touch(write_image(tmp_path / f"{_uuid(1)}.jpg", blank_rgba()), 5)
    _touch(write_image(tmp_path / f"{_uuid(2)}.jpg", blank_rgba()), 5)
    assert QrScanner(str(tmp_path), decoder, status).find_latest() == first


def test_equal_mtimes_follow_lexical_order_across_directories(tmp_path, status, decoder):
    # "0-nested" sorts before "00000001-...", so its file is walked first
    nested = tmp_path / "0-nested"
    nested.mkdir()
    first = _touch(write_image(nested / f"{_uuid(9)}.jpg", blank_rgba()), 5)
    _touch(write_image(tmp_path / f"{_uuid(1)}.jpg", blank_rgba()), 5)
    assert QrScanner(str(tmp_path), decoder, status).find_latest() == first


def test_missing_directory_is_a_scan_error(tmp_path, status, decoder):
    with pytest.raises(ScanError, match="does not exist"):
        QrScanner(str(tmp_path / "Image"), decoder, status).find_latest()


def test_scan_once_without_candidates(tmp_path, status, decoder):
    (tmp_path / "readme.txt").write_text("x")
    assert QrScanner(str(tmp_path), decoder, status).scan_once() is None
    assert status.logs == ["scan: no QR image files found"]
    assert decoder.calls == 0


def test_scan_once_decodes_latest(tmp_path, status, decoder):
    _touch(write_image(tmp_path / f"{_uuid(1)}.jpg", blank_rgba()), 1)
    latest = _touch(write_image(tmp_path / f"{_uuid(2)}.jpg", make_qr_rgba()), 2)
    result = QrScanner(str(tmp_path), decoder, status).scan_once()
    assert result == DecodeResult(found=True, text=LOGIN_URL)
    assert status.last_file == latest


def test_run_rescans_immediately_and_every_tick(tmp_path, status, decoder):
    write_image(tmp_path / f"{_uuid(1)}.jpg", make_qr_rgba())
    scanner = QrScanner(str(tmp_path), decoder, status, interval=0.01)

    original = decoder.decode

    def decode_then_maybe_stop(image):
        result = original(image)
        if decoder.calls == 3:
            scanner.stop()
        return result

    decoder.decode = decode_then_maybe_stop
    scanner.run()
    # same latest file decoded on every tick
    assert decoder.calls == 3
    assert status.logs.count("scan: QR code found") == 3


def test_run_survives_tick_errors(tmp_path, status, decoder):
    scanner = QrScanner(str(tmp_path / "missing"), decoder, status, interval=0.01)
    ticks = []
    original = scanner._tick

    def counting_tick():
        ticks.append(1)
        original()
        if len(ticks) == 2:
            scanner.stop()

    scanner._tick = counting_tick
    scanner.run()
    assert len(ticks) == 2
    assert status.last_error.startswith("scan failed: directory does not exist")
