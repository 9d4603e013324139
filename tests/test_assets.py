import base64

import pytest

from app.services.report.assets import AssetResolver, resolve_asset_url, to_data_url
from tests.factories import make_photo


@pytest.mark.parametrize("candidate,base,expected", [
    ("data:image/png;base64,AAA", "https://x", "data:image/png;base64,AAA"),
    ("https://cdn.example.com/a.jpg", "https://x", "https://cdn.example.com/a.jpg"),
    ("http://cdn.example.com/a.jpg", None, "http://cdn.example.com/a.jpg"),
    ("abc.jpg", "https://x", "https://x/abc.jpg"),
    ("/abc.jpg", "https://x", "https://x/abc.jpg"),
    ("abc.jpg", None, "/abc.jpg"),
    ("", "https://x", ""),
    (None, "https://x", ""),
])
def test_resolve_asset_url(candidate, base, expected):
    assert resolve_asset_url(candidate, base) == expected


def test_photo_precedence_embedded_then_url_then_filename():
    resolver = AssetResolver(base_url="https://host")

    embedded = make_photo(data_url="data:image/jpeg;base64,QQ==", url="https://bucket/a.jpg")
    remote = make_photo(url="https://bucket/a.jpg")
    relative_url = make_photo(url="uploads/a.jpg")
    by_name = make_photo(filename="a.jpg")

    assert resolver.photo_src(embedded) == "data:image/jpeg;base64,QQ=="
    assert resolver.photo_src(remote) == "https://bucket/a.jpg"
    assert resolver.photo_src(relative_url) == "https://host/uploads/a.jpg"
    assert resolver.photo_src(by_name) == "https://host/uploads/a.jpg"


def test_embedded_only_strategy_keeps_relative_paths():
    resolver = AssetResolver()
    assert resolver.photo_src(make_photo(filename="a.jpg")) == "/uploads/a.jpg"


def test_custom_upload_prefix():
    resolver = AssetResolver(base_url="https://bucket.example.com", upload_prefix="media/")
    assert resolver.photo_src(make_photo(filename="a.jpg")) == "https://bucket.example.com/media/a.jpg"


def test_photo_without_any_source():
    assert AssetResolver().photo_src(make_photo(filename=None)) == ""


def test_site_photo_override_wins():
    resolver = AssetResolver(base_url="https://host")
    assert resolver.site_photo_src("data:image/png;base64,AA", "/uploads/site.jpg") == "data:image/png;base64,AA"
    assert resolver.site_photo_src(None, "/uploads/site.jpg") == "https://host/uploads/site.jpg"
    assert resolver.site_photo_src(None, None) == ""


def test_to_data_url_mime_from_extension():
    assert to_data_url(b"abc", "photo.PNG") == "data:image/png;base64," + base64.b64encode(b"abc").decode()
    assert to_data_url(b"abc", "photo.heic").startswith("data:image/jpeg;base64,")
    assert to_data_url(b"abc").startswith("data:image/jpeg;base64,")
