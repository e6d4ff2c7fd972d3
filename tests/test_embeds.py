from __future__ import annotations

import pytest

from drupal_headless.embeds import extract_embedded_media_uuids, parse_drupal_media_tag


def test_extracts_single_embed():
    html = '<p><drupal-media data-entity-uuid="abc-123" data-align="center"></drupal-media></p>'
    assert extract_embedded_media_uuids(html) == ["abc-123"]


def test_extracts_in_document_order_with_duplicates():
    html = (
        "<drupal-media data-entity-type=\"media\" data-entity-uuid='one'></drupal-media>"
        "<p>text</p>"
        '<drupal-media data-entity-uuid="two"></drupal-media>'
        '<drupal-media data-entity-uuid="one"></drupal-media>'
    )
    assert extract_embedded_media_uuids(html) == ["one", "two", "one"]


def test_skips_tags_without_usable_uuid():
    html = (
        '<drupal-media data-align="left"></drupal-media>'
        "<drupal-media data-entity-uuid=unquoted></drupal-media>"
        '<drupal-media data-entity-uuid=""></drupal-media>'
        '<drupal-media data-entity-uuid="ok"></drupal-media>'
    )
    assert extract_embedded_media_uuids(html) == ["ok"]


def test_unterminated_tag_does_not_crash():
    html = '<drupal-media data-entity-uuid="a"></drupal-media><drupal-media data-entity-uuid="b"'
    assert extract_embedded_media_uuids(html) == ["a"]


def test_uuid_attribute_outside_tag_is_ignored():
    html = '<p data-entity-uuid="nope">x</p><drupal-media data-entity-uuid="yes">'
    assert extract_embedded_media_uuids(html) == ["yes"]


@pytest.mark.parametrize("html", ["", "<p>no media</p>", "<drupal-media"])
def test_no_embeds(html):
    assert extract_embedded_media_uuids(html) == []


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ('<drupal-media data-entity-uuid= "spaced">', "spaced"),
        ("<drupal-media data-entity-uuid='single'>", "single"),
        ('<drupal-media data-entity-uuid="unterminated>', None),
        ("<drupal-media data-entity-uuid=", None),
        ("<drupal-media>", None),
    ],
)
def test_parse_drupal_media_tag(tag, expected):
    assert parse_drupal_media_tag(tag) == expected
