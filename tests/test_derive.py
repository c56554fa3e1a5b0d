"""Tests for derived entry fields."""

from conftest import make_remote_entry, utc

from feedshelf.ingestion import RemoteContent, RemoteText
from feedshelf.ingestion.derive import (
    derive_featured_image,
    derive_published,
    derive_summary,
    is_html,
    link_origin,
    slugify,
    stable_id,
)


def test_stable_id_is_md5_hex_of_native_id():
    assert stable_id("urn:entry:1") == stable_id("urn:entry:1")
    assert stable_id("urn:entry:1") != stable_id("urn:entry:2")
    assert len(stable_id("urn:entry:1")) == 32
    assert stable_id("") == "d41d8cd98f00b204e9800998ecf8427e"


def test_slugify_lowercases_and_hyphen_joins_words():
    assert slugify("Hello, World!") == "hello-world"
    assert slugify("  Rust 1.76 released  ") == "rust-1-76-released"
    assert slugify("camelCaseTitle") == "camel-case-title"
    assert slugify("snake_case_title") == "snake-case-title"


def test_slugify_without_words_is_empty():
    assert slugify(None) == ""
    assert slugify("") == ""
    assert slugify("!!! ???") == ""


def test_is_html():
    assert is_html("text/html")
    assert is_html("text/html; charset=utf-8")
    assert is_html("application/xhtml+xml")
    assert not is_html("text/plain")
    assert not is_html(None)


def test_explicit_plain_summary_wins_over_content():
    entry = make_remote_entry(
        summary=RemoteText(content="Short version"),
        body="<p>Long version</p>",
    )
    assert derive_summary(entry) == "Short version"


def test_explicit_html_summary_is_stripped():
    entry = make_remote_entry(
        summary=RemoteText(content="<p>Hi <b>there</b></p>", content_type="text/html"),
    )
    assert derive_summary(entry) == "Hi there"


def test_summary_falls_back_to_first_paragraph():
    entry = make_remote_entry(body="<h1>Title</h1><p> First </p><p>Second</p>")
    assert derive_summary(entry) == "First"


def test_summary_from_content_without_paragraph_is_empty():
    entry = make_remote_entry(body="<div>No paragraphs here</div>")
    assert derive_summary(entry) == ""


def test_no_summary_or_content_means_no_summary():
    assert derive_summary(make_remote_entry()) is None


def test_link_origin():
    assert link_origin("https://example.com/post/1?x=1") == "https://example.com"
    assert link_origin("http://example.com:8080/a") == "http://example.com:8080"
    assert link_origin("/relative/path") is None
    assert link_origin(None) is None


def test_featured_image_resolves_relative_src_against_link_origin():
    content = RemoteContent(content_type="text/html", body='<p>x</p><img src="/pic.png">')
    origin = link_origin("https://example.com/post/1")
    assert derive_featured_image(content, origin) == "https://example.com/pic.png"


def test_featured_image_keeps_absolute_src():
    content = RemoteContent(
        content_type="text/html",
        body='<img src="https://cdn.example.org/a.jpg"><img src="/second.png">',
    )
    assert derive_featured_image(content, "https://example.com") == "https://cdn.example.org/a.jpg"


def test_featured_image_malformed_src_falls_back_to_raw_string():
    raw = "http://example.com:abc/pic.png"
    content = RemoteContent(content_type="text/html", body=f'<img src="{raw}">')
    assert derive_featured_image(content, "https://example.com") == raw


def test_featured_image_relative_src_without_link_is_raw():
    content = RemoteContent(content_type="text/html", body='<img src="/pic.png">')
    assert derive_featured_image(content, None) == "/pic.png"


def test_featured_image_requires_html_content_with_an_image():
    assert derive_featured_image(None, "https://example.com") is None
    plain = RemoteContent(content_type="text/plain", body='<img src="/pic.png">')
    assert derive_featured_image(plain, "https://example.com") is None
    no_image = RemoteContent(content_type="text/html", body="<p>text only</p>")
    assert derive_featured_image(no_image, "https://example.com") is None
    empty_src = RemoteContent(content_type="text/html", body='<img alt="x">')
    assert derive_featured_image(empty_src, "https://example.com") is None


def test_published_prefers_published_over_updated():
    published, updated = utc(2024, 3, 1), utc(2024, 3, 5)
    assert derive_published(make_remote_entry(published=published, updated=updated)) == published


def test_published_falls_back_to_updated():
    updated = utc(2024, 3, 5)
    assert derive_published(make_remote_entry(updated=updated)) == updated


def test_published_absent_when_both_missing():
    assert derive_published(make_remote_entry()) is None
