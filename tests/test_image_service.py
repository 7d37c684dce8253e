import pytest
from PIL import Image

from pnm_viewer.main import build_parser
from pnm_viewer.models.pnm_model import DecodeError
from pnm_viewer.services.image_service import (
    ImageService,
    PNMDecodeError,
    describe_error,
)


@pytest.fixture
def service():
    return ImageService()


def test_load_pnm(tmp_path, service):
    path = tmp_path / "gray.pgm"
    path.write_bytes(b"P2\n# test\n2 1\n255\n0 255\n")
    data = service.load_image(path)
    assert (data.width, data.height) == (2, 1)
    assert data.mode == "RGBA"
    assert data.source_format == "PGM (P2)"
    assert data.max_value == 255
    assert data.size_bytes == path.stat().st_size
    assert not data.truncated
    assert data.pil_image.getpixel((0, 0)) == (0, 0, 0, 255)
    assert data.pil_image.getpixel((1, 0)) == (255, 255, 255, 255)


def test_load_pnm_by_magic_regardless_of_extension(tmp_path, service):
    path = tmp_path / "image.bin"
    path.write_bytes(b"P6 1 1 255\n" + bytes([10, 20, 30]))
    data = service.load_image(path)
    assert data.source_format == "PPM (P6)"
    assert data.pil_image.getpixel((0, 0)) == (10, 20, 30, 255)


def test_truncated_pnm_pads_with_transparent_pixels(tmp_path, service):
    path = tmp_path / "short.pbm"
    path.write_bytes(b"P1 2 2\n1 0 1\n")
    data = service.load_image(path)
    assert data.truncated
    assert data.pil_image.getpixel((0, 1)) == (0, 0, 0, 255)
    assert data.pil_image.getpixel((1, 1)) == (0, 0, 0, 0)


@pytest.mark.parametrize(
    "content, error",
    [
        (b"not an image", DecodeError.INVALID_FORMAT),
        (b"P2 1 1 65535\n0\n", DecodeError.UNSUPPORTED_SAMPLE_DEPTH),
        (b"P1 80 1\n" + b"0" * 80 + b"\n", DecodeError.LINE_TOO_LONG),
    ],
)
def test_pnm_failures_raise_classified_error(tmp_path, service, content, error):
    path = tmp_path / "broken.pgm"
    path.write_bytes(content)
    with pytest.raises(PNMDecodeError) as excinfo:
        service.load_image(path)
    assert excinfo.value.error is error
    assert excinfo.value.path == path
    assert isinstance(excinfo.value, ValueError)
    assert describe_error(error) in str(excinfo.value)


def test_load_other_formats_via_pillow(tmp_path, service):
    path = tmp_path / "red.png"
    Image.new("RGB", (3, 2), (255, 0, 0)).save(path)
    data = service.load_image(path)
    assert data.source_format == "PNG"
    assert (data.width, data.height) == (3, 2)
    assert data.max_value is None
    assert data.pil_image.getpixel((2, 1)) == (255, 0, 0, 255)


def test_unknown_file_raises_value_error(tmp_path, service):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hello")
    with pytest.raises(ValueError):
        service.load_image(path)


def test_missing_file(tmp_path, service):
    with pytest.raises(FileNotFoundError):
        service.load_image(tmp_path / "absent.ppm")


def test_size_limit(tmp_path):
    path = tmp_path / "big.pgm"
    path.write_bytes(b"P5 2 2 255\n" + bytes(4))
    with pytest.raises(ValueError):
        ImageService(max_file_bytes=8).load_image(path)


def test_huge_declared_dimensions_are_refused(tmp_path, service):
    path = tmp_path / "huge.pgm"
    path.write_bytes(b"P5 100000 100000 255\n\x00")
    with pytest.raises(ValueError) as excinfo:
        service.load_image(path)
    assert not isinstance(excinfo.value, PNMDecodeError)


def test_pixel_limit_follows_pillow(tmp_path, service, monkeypatch):
    path = _write(tmp_path / "small.pgm", b"P5 2 2 255\n" + bytes(4))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 3)
    with pytest.raises(ValueError):
        service.load_image(path)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", None)
    assert service.load_image(path).width == 2


@pytest.mark.parametrize("suffix, fmt",[(".png", "PNG"), (".bmp", "BMP"), (".gif", "GIF")])
def test_save_image(tmp_path, service, suffix, fmt):
    image = service.load_image(_write(tmp_path / "src.ppm", b"P3 1 1 255\n255 255 255\n")).pil_image
    target = service.save_image(image, tmp_path / f"out{suffix}")
    with Image.open(target) as saved:
        assert saved.format == fmt
        assert saved.size == (1, 1)
        assert saved.convert("RGB").getpixel((0, 0)) == (255, 255, 255)


def test_png_keeps_alpha(tmp_path, service):
    image = Image.new("RGBA", (1, 1), (0, 0, 0, 0))
    target = service.save_image(image, tmp_path / "clear.png")
    with Image.open(target) as saved:
        assert saved.convert("RGBA").getpixel((0, 0))[3] == 0


@pytest.mark.parametrize("name", ["out.ppm", "out.pgm", "out.pbm", "out.pnm", "out.tiff", "out"])
def test_save_rejects_unsupported_extensions(tmp_path, service, name):
    with pytest.raises(ValueError):
        service.save_image(Image.new("RGBA", (1, 1)), tmp_path / name)
    assert not (tmp_path / name).exists()


def test_cli_parser():
    args = build_parser().parse_args(["image.pgm", "--log-level", "debug"])
    assert args.path == "image.pgm"
    assert args.log_level == "DEBUG"
    assert build_parser().parse_args([]).path is None


def _write(path, content):
    path.write_bytes(content)
    return path
