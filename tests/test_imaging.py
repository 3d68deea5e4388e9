import numpy as np
import pytest
from conftest import make_qr_rgba, write_image
from qrwatch.orchestrator.errors import (
    FileValidationError,
    ImageFormatError,
    ImageNotFoundError,
    ImageReadError,
    ImageWriteError,
    PixelExtractionError,
)
from qrwatch.orchestrator.imaging import bgra_to_image, load_image, save_png, validate_file


def test_bgra_buffer_is_converted_to_rgba():
    # one blue pixel, one red pixel, in Windows BGRA order
    data = bytes([255, 0, 0, 255, 0, 0, 255, 128])
    image = bgra_to_image(data, width=2, height=1)
    assert (image.width, image.height) == (2, 1)
    assert image.pixels[0, 0].tolist() == [0, 0, 255, 255]
    assert image.pixels[0, 1].tolist() == [255, 0, 0, 128]


def test_short_pixel_buffer_is_rejected():
    with pytest.raises(PixelExtractionError):
        bgra_to_image(b"\x00" * 15, width=2, height=2)


@pytest.mark.parametrize("suffix", [".png", ".jpg"])
def test_load_image_supports_png_and_jpeg(tmp_path, suffix):
    rgba = make_qr_rgba()
    path = write_image(tmp_path / f"qr{suffix}", rgba)
    image = load_image(str(path))
    assert (image.height, image.width) == rgba.shape[:2]
    assert image.pixels.shape[2] == 4
    assert image.pixels.dtype == np.uint8


def test_load_missing_file(tmp_path):
    with pytest.raises(ImageNotFoundError):
        load_image(str(tmp_path / "nope.jpg"))


def test_load_unreadable_path(tmp_path):
    with pytest.raises(ImageReadError):
        load_image(str(tmp_path))


@pytest.mark.parametrize("content", [b"", b"definitely not a jpeg"])
def test_load_undecodable_container(tmp_path, content):
    path = tmp_path / "broken.jpg"
    path.write_bytes(content)
    with pytest.raises(ImageFormatError):
        load_image(str(path))


def test_save_png_keeps_pixels(tmp_path):
    rgba = make_qr_rgba()
    image = bgra_to_image(rgba[..., [2, 1, 0, 3]].tobytes(), rgba.shape[1], rgba.shape[0])
    out = tmp_path / "screenshot.png"
    save_png(image, str(out))
    assert np.array_equal(load_image(str(out)).pixels[..., :3], rgba[..., :3])


def test_save_png_into_missing_directory(tmp_path, qr_image):
    with pytest.raises(ImageWriteError):
        save_png(qr_image, str(tmp_path / "missing" / "screenshot.png"))


def test_validate_file(tmp_path):
    good = tmp_path / "good.jpg"
    good.write_bytes(b"x" * 100)
    assert validate_file(str(good), max_bytes=100) == 100

    empty = tmp_path / "empty.jpg"
    empty.write_bytes(b"")
    with pytest.raises(FileValidationError, match="empty"):
        validate_file(str(empty))

    with pytest.raises(FileValidationError, match="too large"):
        validate_file(str(good), max_bytes=99)

    with pytest.raises(FileValidationError, match="does not exist"):
        validate_file(str(tmp_path / "gone.jpg"))
