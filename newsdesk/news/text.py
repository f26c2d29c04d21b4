"""Pure text helpers for turning raw feed entries into article fields.

Nothing here touches the network or holds state, so every function can be
exercised directly with hand-written entry dicts.
"""

import hashlib
import html
import re
from datetime import datetime, timezone
from typing import Any, Optional

ELLIPSIS = "..."

_CONTINUE_READING_LINK = re.compile(r"<a[^>]*>\s*Continue reading[^<]*</a>", re.IGNORECASE)
_CONTINUE_READING_TEXT = re.compile(r"\s*Continue reading(?:\.{3}|…)\s*$", re.IGNORECASE)
_PARAGRAPH_BREAK = re.compile(r"</p>\s*<p[^>]*>", re.IGNORECASE)
_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]*>")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")
_ENTITY = re.compile(r"&(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")
_IMG_SRC = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE)
_IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|webp)", re.IGNORECASE)

# Entities whose decoded form is flattened to plain ASCII punctuation.
# Everything else goes through html.unescape.
_ENTITY_OVERRIDES = {
    "&nbsp;": " ",
    "&#160;": " ",
    "&ldquo;": '"',
    "&rdquo;": '"',
    "&lsquo;": "'",
    "&rsquo;": "'",
}


def decode_html_entities(text: str) -> str:
    """Decode named and numeric HTML entities."""
    return _ENTITY.sub(
        lambda m: _ENTITY_OVERRIDES.get(m.group(0), html.unescape(m.group(0))),
        text,
    )


def clean_html(text: str) -> str:
    """Strip markup from feed HTML while keeping paragraph and line breaks."""
    if not text:
        return ""

    clean = _CONTINUE_READING_LINK.sub("", text)

    clean = _PARAGRAPH_BREAK.sub("\n\n", clean)
    clean = _LINE_BREAK.sub("\n", clean)
    clean = _TAG.sub("", clean)

    clean = decode_html_entities(clean)

    # Plain-text trailer left behind by some feeds
    clean = _CONTINUE_READING_TEXT.sub("", clean)

    clean = _EXTRA_NEWLINES.sub("\n\n", clean)
    return clean.strip()


def truncate(text: str, max_length: int) -> str:
    """Hard-cap text at max_length, ending with an ellipsis when cut."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def extract_full_content(entry: dict[str, Any], max_length: int = 800) -> str:
    """Return the richer of the entry's content and summary, cleaned and capped."""
    cleaned_content = clean_html(_content_html(entry))
    cleaned_summary = clean_html(entry.get("summary") or "")

    full_text = cleaned_content if len(cleaned_content) > len(cleaned_summary) else cleaned_summary
    return truncate(full_text, max_length)


def extract_short_description(full_content: str, max_length: int = 150) -> str:
    """
    First paragraph of the full content, shortened for compact cards.

    Cuts at the last sentence boundary inside the limit when that boundary
    is past the first 80 characters, otherwise hard-truncates.
    """
    first_para = full_content.split("\n\n")[0] or full_content

    if len(first_para) > max_length:
        sentence_end = first_para[:max_length].rfind(". ")
        if sentence_end > 80:
            return first_para[: sentence_end + 1]
        return truncate(first_para, max_length)

    return first_para


def extract_image_url(entry: dict[str, Any]) -> Optional[str]:
    """
    Find a lead image for the entry. First match wins:

    1. media:content
    2. media:thumbnail
    3. enclosure with an image file extension
    4. <img> in the summary/description HTML
    5. <img> in content:encoded
    """
    for key in ("media_content", "media_thumbnail"):
        url = _first_media_url(entry.get(key))
        if url:
            return url

    for enclosure in entry.get("enclosures") or []:
        url = enclosure.get("href") or enclosure.get("url")
        if url and _IMAGE_EXTENSION.search(url):
            return url

    for raw in (entry.get("summary") or "", _content_html(entry)):
        match = _IMG_SRC.search(raw)
        if match:
            return match.group(1)

    return None


def create_article_id(url: str, source_id: str) -> str:
    """Stable 16-char id for a (source, url) pair."""
    return hashlib.md5(f"{source_id}:{url}".encode()).hexdigest()[:16]


def parse_published_date(entry: dict[str, Any]) -> Optional[datetime]:
    """Parse the entry's publish (or update) date as a UTC datetime."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if not parsed:
            continue
        try:
            return datetime(*parsed[:6], tzinfo=timezone.utc)
        except (TypeError, ValueError):
            continue
    return None


def _content_html(entry: dict[str, Any]) -> str:
    content = entry.get("content")
    if isinstance(content, list) and content:
        return content[0].get("value") or ""
    if isinstance(content, str):
        return content
    return ""


def _first_media_url(media: Any) -> Optional[str]:
    if isinstance(media, dict):
        media = [media]
    if not isinstance(media, list):
        return None
    for item in media:
        if isinstance(item, dict) and item.get("url"):
            return item["url"]
    return None
