import pytest

from hlsrec.utils.url import absolute_url, is_http_url, normalize_url, update_scheme


@pytest.mark.parametrize(("url", "expected"), [
    ("segment.ts", "http://test.se/live/segment.ts"),
    ("../vod/segment.ts", "http://test.se/vod/segment.ts"),
    ("/abs/segment.ts", "http://test.se/abs/segment.ts"),
    ("//cdn.test.se/segment.ts", "http://cdn.test.se/segment.ts"),
    ("https://cdn.test.se/segment.ts", "https://cdn.test.se/segment.ts"),
    ("segment.ts?token=abc", "http://test.se/live/segment.ts?token=abc"),
])
def test_absolute_url(url, expected):
    assert absolute_url("http://test.se/live/index.m3u8", url) == expected


def test_absolute_url_invalid():
    with pytest.raises(ValueError):  # noqa: PT011
        absolute_url("http://test.se/live/index.m3u8", "http://[::1/segment.ts")


def test_normalize_url():
    assert normalize_url("http://test.se/seg%41%20b.ts") == "http://test.se/segA b.ts"
    assert normalize_url("http://test.se/segA b.ts") == "http://test.se/segA b.ts"


@pytest.mark.parametrize(("url", "expected"), [
    ("http://test.se/index.m3u8", True),
    ("https://test.se/index.m3u8", True),
    ("ftp://test.se/index.m3u8", False),
    ("file:///index.m3u8", False),
    ("test.se/index.m3u8", False),
    ("http://", False),
])
def test_is_http_url(url, expected):
    assert is_http_url(url) is expected


@pytest.mark.parametrize(("current", "target", "force", "expected"), [
    ("https://", "proxy.test:8080", True, "https://proxy.test:8080"),
    ("https://", "//proxy.test", True, "https://proxy.test"),
    ("https://", "http://proxy.test", True, "https://proxy.test"),
    ("https://", "http://proxy.test", False, "http://proxy.test"),
    ("https://", "socks5://proxy.test", False, "socks5://proxy.test"),
])
def test_update_scheme(current, target, force, expected):
    assert update_scheme(current, target, force=force) == expected
