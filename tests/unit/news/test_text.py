"""Tests for newsdesk.news.text module."""

import re
import time
from datetime import datetime, timezone

from newsdesk.news.text import (
    clean_html,
    create_article_id,
    decode_html_entities,
    extract_full_content,
    extract_image_url,
    extract_short_description,
    parse_published_date,
    truncate,
)

TAG = re.compile(r"<[^>]+>")


class TestDecodeHtmlEntities:
    def test_decodes_common_entities(self) -> None:
        text = "Tom &amp; Jerry&#39;s &quot;show&quot; &lt;3 &gt;"
        assert decode_html_entities(text) == "Tom & Jerry's \"show\" <3 >"

    def test_smart_quotes_become_straight(self) -> None:
        assert decode_html_entities("&ldquo;Hi&rdquo; &lsquo;there&rsquo;") == "\"Hi\" 'there'"

    def test_dashes_and_nbsp(self) -> None:
        assert decode_html_entities("1&ndash;2&nbsp;&mdash; end") == "1–2 — end"

    def test_hex_entities(self) -> None:
        assert decode_html_entities("it&#x27;s a&#x2F;b") == "it's a/b"

    def test_decodes_only_once(self) -> None:
        assert decode_html_entities("&amp;lt;") == "&lt;"

    def test_leaves_plain_ampersands(self) -> None:
        assert decode_html_entities("R&D and M&S") == "R&D and M&S"


class TestCleanHtml:
    def test_paragraphs_become_blank_lines(self) -> None:
        result = clean_html("<p>First para.</p><p>Second &amp; more</p>")
        assert result == "First para.\n\nSecond & more"

    def test_br_becomes_newline(self) -> None:
        assert clean_html("line one<br/>line two<br>three") == "line one\nline two\nthree"

    def test_collapses_three_or_more_newlines(self) -> None:
        assert clean_html("a<br><br><br><br>b") == "a\n\nb"

    def test_removes_continue_reading_link(self) -> None:
        html = '<p>Story text.</p> <a href="https://example.com">Continue reading...</a>'
        assert clean_html(html) == "Story text."

    def test_removes_plain_continue_reading(self) -> None:
        assert clean_html("Story text. Continue reading...") == "Story text."

    def test_no_residual_tags(self) -> None:
        html = '<div class="x"><p>Hello <strong>world</strong></p><img src="a.jpg"/><p>Bye</p></div>'
        result = clean_html(html)
        assert not TAG.search(result)
        assert "Hello world" in result

    def test_empty_input(self) -> None:
        assert clean_html("") == ""


class TestTruncate:
    def test_short_text_unchanged(self) -> None:
        assert truncate("abc", 10) == "abc"

    def test_long_text_gets_ellipsis(self) -> None:
        result = truncate("a" * 20, 10)
        assert result == "a" * 7 + "..."
        assert len(result) == 10


class TestExtractFullContent:
    def test_prefers_longer_content(self) -> None:
        entry = {
            "summary": "Short summary",
            "content": [{"value": "<p>Much longer body text here.</p><p>Another paragraph.</p>"}],
        }
        assert extract_full_content(entry) == "Much longer body text here.\n\nAnother paragraph."

    def test_prefers_longer_summary(self) -> None:
        entry = {"summary": "<p>A reasonably long summary text.</p>", "content": [{"value": "Tiny"}]}
        assert extract_full_content(entry) == "A reasonably long summary text."

    def test_caps_at_800_chars(self) -> None:
        entry = {"summary": "word " * 400}
        result = extract_full_content(entry)
        assert len(result) == 800
        assert result.endswith("...")

    def test_missing_fields(self) -> None:
        assert extract_full_content({}) == ""


class TestExtractShortDescription:
    def test_short_first_paragraph_returned(self) -> None:
        assert extract_short_description("First.\n\nSecond.") == "First."

    def test_cuts_at_sentence_boundary_after_80(self) -> None:
        text = "x" * 90 + ". " + "y" * 100
        assert extract_short_description(text) == "x" * 90 + "."

    def test_hard_truncates_when_boundary_too_early(self) -> None:
        text = "x" * 50 + ". " + "y" * 150
        result = extract_short_description(text)
        assert len(result) == 150
        assert result.endswith("...")

    def test_length_bound(self) -> None:
        text = "This is a sentence. " * 30
        assert len(extract_short_description(text)) <= 150


class TestExtractImageUrl:
    def test_media_content_first(self) -> None:
        entry = {
            "media_content": [{"url": "https://img.example.com/content.jpg"}],
            "media_thumbnail": [{"url": "https://img.example.com/thumb.jpg"}],
        }
        assert extract_image_url(entry) == "https://img.example.com/content.jpg"

    def test_media_thumbnail(self) -> None:
        entry = {"media_thumbnail": [{"url": "https://img.example.com/thumb.jpg"}]}
        assert extract_image_url(entry) == "https://img.example.com/thumb.jpg"

    def test_enclosure_requires_image_extension(self) -> None:
        entry = {
            "enclosures": [
                {"href": "https://example.com/episode.mp3"},
                {"href": "https://example.com/picture.PNG"},
            ]
        }
        assert extract_image_url(entry) == "https://example.com/picture.PNG"

    def test_img_in_summary(self) -> None:
        entry = {"summary": '<p><img src="https://example.com/s.jpg" /> Text</p>'}
        assert extract_image_url(entry) == "https://example.com/s.jpg"

    def test_img_in_content_encoded(self) -> None:
        entry = {"summary": "No image", "content": [{"value": '<img alt="" src="https://example.com/c.jpg">'}]}
        assert extract_image_url(entry) == "https://example.com/c.jpg"

    def test_no_image(self) -> None:
        assert extract_image_url({"summary": "Just text", "enclosures": [{"href": "a.mp3"}]}) is None


class TestCreateArticleId:
    def test_deterministic(self) -> None:
        assert create_article_id("https://bbc.com/a", "bbc") == create_article_id("https://bbc.com/a", "bbc")

    def test_16_char_hex(self) -> None:
        result = create_article_id("https://bbc.com/a", "bbc")
        assert len(result) == 16
        assert all(c in "0123456789abcdef" for c in result)

    def test_source_is_part_of_identity(self) -> None:
        assert create_article_id("https://x.com/a", "bbc") != create_article_id("https://x.com/a", "sky")

    def test_no_collisions_across_urls(self) -> None:
        ids = {create_article_id(f"https://bbc.com/news/article-{i}", "bbc-uk") for i in range(5000)}
        assert len(ids) == 5000


class TestParsePublishedDate:
    def test_published_parsed(self) -> None:
        entry = {"published_parsed": time.struct_time((2024, 1, 1, 12, 0, 0, 0, 1, 0))}
        assert parse_published_date(entry) == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_falls_back_to_updated(self) -> None:
        entry = {"updated_parsed": time.struct_time((2024, 2, 3, 4, 5, 6, 5, 34, 0))}
        assert parse_published_date(entry) == datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc)

    def test_missing_date(self) -> None:
        assert parse_published_date({}) is None
