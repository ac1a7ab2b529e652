import pytest

from errors import ValidationError
from services.media_service import normalize_images, parse_images, prepare_images, upload_image


def test_upload_requires_data_uri():
    assert upload_image("data:image/jpeg;base64,AAAA").endswith(".jpg")
    with pytest.raises(ValidationError):
        upload_image("https://example.com/x.jpg")


def test_normalize_shapes():
    assert normalize_images(None) == []
    assert normalize_images("https://a/1.jpg") == ["https://a/1.jpg"]
    assert normalize_images(["https://a/1.jpg", "  ", "https://a/2.jpg"]) == ["https://a/1.jpg", "https://a/2.jpg"]


@pytest.mark.parametrize("bad", [{"url": "x"}, 42, ["ok", 3]])
def test_normalize_rejects_other_shapes(bad):
    with pytest.raises(ValidationError):
        normalize_images(bad)


def test_prepare_keeps_order_and_urls():
    prepared = prepare_images(["https://a/1.jpg", "data:image/png;base64,AA"])

    assert prepared[0] == "https://a/1.jpg"
    assert prepared[1].startswith("https://placeholder.com/")

    with pytest.raises(ValidationError):
        prepare_images(["ftp://a/1.jpg"])


@pytest.mark.parametrize("raw, expected", [
    (None, []),
    ("", []),
    ('["https://a/1.jpg", "https://a/2.jpg"]', ["https://a/1.jpg", "https://a/2.jpg"]),
    ('"https://a/1.jpg"', ["https://a/1.jpg"]),
    ("https://a/1.jpg", ["https://a/1.jpg"]),
    ('{"a": 1}', []),
    ("[1, null, \"https://a/1.jpg\"]", ["https://a/1.jpg"]),
    ("garbage{", []),
    (["https://a/1.jpg"], ["https://a/1.jpg"]),
])
def test_parse_is_tolerant(raw, expected):
    assert parse_images(raw) == expected
