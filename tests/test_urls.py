"""Tests for the origin guard and file URL helpers."""

from __future__ import annotations

import pytest

from drupal_headless.errors import (
    ConfigError,
    DrupalHeadlessError,
    FeedFormatError,
    OriginMismatchError,
    UnsupportedSchemeError,
)
from drupal_headless.urls import (
    get_file_url,
    get_image_style_url,
    resolve_file_url,
    resolve_url,
)

BASE = "https://cms.example.com"


# ---------------------------------------------------------------------------
# resolve_url
# ---------------------------------------------------------------------------


def test_resolve_url_accepts_same_origin():
    url = resolve_url("https://cms.example.com/jsonapi/routes?page=2", BASE)
    assert str(url) == "https://cms.example.com/jsonapi/routes?page=2"


def test_resolve_url_joins_relative_input():
    assert str(resolve_url("/jsonapi/node/page", BASE)) == "https://cms.example.com/jsonapi/node/page"


def test_resolve_url_treats_explicit_default_port_as_same_origin():
    url = resolve_url("https://cms.example.com:443/x", BASE)
    assert url.host == "cms.example.com"


@pytest.mark.parametrize(
    "value",
    [
        "https://evil.example.com/x",
        "http://cms.example.com/x",
        "https://cms.example.com:8443/x",
        "//evil.example.com/x",
    ],
)
def test_resolve_url_rejects_other_origins(value):
    with pytest.raises(OriginMismatchError) as exc_info:
        resolve_url(value, BASE)
    assert exc_info.value.expected == "https://cms.example.com"


def test_resolve_url_cross_origin_opt_out():
    url = resolve_url("https://cdn.example.com/x", BASE, allow_cross_origin=True)
    assert url.host == "cdn.example.com"


def test_resolve_url_rejects_non_http_schemes():
    with pytest.raises(UnsupportedSchemeError) as exc_info:
        resolve_url("ftp://cms.example.com/x", BASE)
    assert exc_info.value.scheme == "ftp"


def test_resolve_url_scheme_check_ignores_cross_origin_opt_out():
    with pytest.raises(UnsupportedSchemeError):
        resolve_url("ftp://cms.example.com/x", BASE, allow_cross_origin=True)


@pytest.mark.parametrize("value", ["http://[::1/x", "https://cms.example.com:abc/x"])
def test_resolve_url_wraps_malformed_input(value):
    with pytest.raises(FeedFormatError) as exc_info:
        resolve_url(value, BASE)
    assert isinstance(exc_info.value, DrupalHeadlessError)


@pytest.mark.parametrize("base", ["", "/relative", "cms.example.com", "ftp://cms.example.com"])
def test_resolve_url_rejects_bad_base(base):
    with pytest.raises(ConfigError):
        resolve_url("/x", base)


# ---------------------------------------------------------------------------
# resolve_file_url / get_file_url
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("/sites/default/files/a.png", "https://cms.example.com/sites/default/files/a.png"),
        ("sites/default/files/a.png", "https://cms.example.com/sites/default/files/a.png"),
        ("//cdn.example.com/a.png", "https://cdn.example.com/a.png"),
        ("data:image/png;base64,AA==", "data:image/png;base64,AA=="),
        ("http://other.example.com/a.png", "http://other.example.com/a.png"),
        ("https://other.example.com/a.png", "https://other.example.com/a.png"),
    ],
)
def test_resolve_file_url(raw, expected):
    assert resolve_file_url(raw, base_url=BASE) == expected


@pytest.mark.parametrize("raw", [None, ""])
def test_resolve_file_url_empty(raw):
    assert resolve_file_url(raw, base_url=BASE) is None


def test_resolve_file_url_ignores_environment(monkeypatch):
    monkeypatch.setenv("DRUPAL_BASE_URL", "https://env.example.com/")

    with pytest.raises(ConfigError):
        resolve_file_url("/a.png")
    assert resolve_file_url("/a.png", base_url="https://cms.example.com/") == "https://cms.example.com/a.png"


def test_resolve_file_url_without_base_raises():
    with pytest.raises(ConfigError):
        resolve_file_url("/a.png")


def test_get_file_url_prefers_uri_url():
    file = {"attributes": {"uri": {"url": "/files/a.png", "value": "public://a.png"}, "url": "/b.png"}}
    assert get_file_url(file, base_url=BASE) == "https://cms.example.com/files/a.png"


def test_get_file_url_falls_back_to_plain_url():
    file = {"attributes": {"uri": {}, "url": "//cdn.example.com/b.png"}}
    assert get_file_url(file, base_url=BASE) == "https://cdn.example.com/b.png"


@pytest.mark.parametrize("file", [None, {}, {"attributes": {}}, {"attributes": {"uri": "x"}}])
def test_get_file_url_missing(file):
    assert get_file_url(file, base_url=BASE) is None


# ---------------------------------------------------------------------------
# get_image_style_url
# ---------------------------------------------------------------------------


def test_image_style_spliced_after_files_marker():
    url = get_image_style_url("https://cms.example.com/sites/default/files/a.png", "thumbnail", BASE)
    assert url == "https://cms.example.com/sites/default/files/styles/thumbnail/public/a.png"


def test_image_style_rewrites_existing_style_segment():
    styled = get_image_style_url("https://cms.example.com/sites/default/files/a.png", "thumbnail", BASE)
    restyled = get_image_style_url(styled, "large", BASE)
    assert restyled == "https://cms.example.com/sites/default/files/styles/large/public/a.png"


def test_image_style_keeps_query_string():
    url = get_image_style_url(
        "https://cms.example.com/sites/default/files/styles/wide/public/a.png?itok=abc", "large", BASE
    )
    assert url == "https://cms.example.com/sites/default/files/styles/large/public/a.png?itok=abc"


def test_image_style_resolves_relative_input():
    url = get_image_style_url("/sites/default/files/dir/a.png", "hero", BASE)
    assert url == "https://cms.example.com/sites/default/files/styles/hero/public/dir/a.png"


def test_image_style_without_files_marker_is_unchanged():
    assert get_image_style_url("https://cdn.example.com/img/a.png", "large", BASE) == "https://cdn.example.com/img/a.png"


def test_image_style_uses_first_files_marker():
    url = get_image_style_url("https://cms.example.com/files/private/files/a.png", "large", BASE)
    assert url == "https://cms.example.com/files/styles/large/public/private/files/a.png"


def test_image_style_returns_input_when_unresolvable():
    assert get_image_style_url("sites/default/files/a.png", "large") == "sites/default/files/a.png"
    assert get_image_style_url("", "large", BASE) == ""
