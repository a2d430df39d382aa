import pytest

from imagehost.services.sniffing import (
    declared_media_type,
    is_image_media_type,
    sniff_image_format,
)


@pytest.mark.parametrize(
    ("image_format", "mime"),
    [
        ("PNG", "image/png"),
        ("JPEG", "image/jpeg"),
        ("GIF", "image/gif"),
        ("BMP", "image/bmp"),
    ],
)
def test_sniff_detects_image_formats(make_image, image_format, mime):
    assert sniff_image_format(make_image(image_format)) == mime


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"hello world",
        b"%PDF-1.7\n",
        b"\x89PNG\r\n\x1a\n",
    ],
)
def test_sniff_rejects_non_images(data):
    assert sniff_image_format(data) is None


@pytest.mark.parametrize(
    ("content_type", "expected"),
    [
        ("image/png", True),
        ("IMAGE/JPEG; charset=binary", True),
        ("image/svg+xml", True),
        ("image/", False),
        ("image", False),
        ("text/plain", False),
        ("application/octet-stream", False),
        ("", False),
        (None, False),
    ],
)
def test_is_image_media_type(content_type, expected):
    assert is_image_media_type(content_type) is expected


def test_declared_media_type_strips_parameters():
    assert declared_media_type(" Image/PNG ; q=1") == "image/png"
