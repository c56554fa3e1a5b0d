"""Derived entry fields: stable id, slug, summary, featured image, publish date."""

import hashlib
import logging
import re
from datetime import datetime
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from .models import RemoteContent, RemoteEntry

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml", "html", "xhtml")

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_WORD_SEPARATORS = re.compile(r"[\W_]+")


def is_html(content_type: Optional[str]) -> bool:
    """Check whether a declared content type carries markup."""
    if not content_type:
        return False
    return content_type.split(";")[0].strip().lower() in HTML_CONTENT_TYPES


def stable_id(native_id: str) -> str:
    """Hex digest of the remote native id."""
    return hashlib.md5(native_id.encode("utf-8")).hexdigest()


def slugify(text: Optional[str]) -> str:
    """Lowercase, hyphen-joined word tokens of text ("" when there are none)."""
    if not text:
        return ""
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", text)
    tokens = [token for token in _WORD_SEPARATORS.split(spaced) if token]
    return "-".join(token.lower() for token in tokens)


def html_to_text(html: str) -> str:
    """Visible text of an HTML fragment."""
    return BeautifulSoup(html, "html.parser").get_text().strip()


def first_paragraph_text(html: str) -> str:
    """Text of the first <p> in the fragment, or an empty string."""
    paragraph = BeautifulSoup(html, "html.parser").find("p")
    if paragraph is None:
        return ""
    return paragraph.get_text().strip()


def derive_summary(entry: RemoteEntry) -> Optional[str]:
    """
    Pick the entry summary.

    An explicit summary wins (markup stripped when it is HTML). Otherwise the
    first paragraph of the content body is used. Entries with neither have
    no summary.
    """
    if entry.summary is not None:
        if is_html(entry.summary.content_type):
            return html_to_text(entry.summary.content)
        return entry.summary.content

    if entry.content is not None and entry.content.body:
        return first_paragraph_text(entry.content.body)

    return None


def link_origin(link: Optional[str]) -> Optional[str]:
    """Scheme and host of an absolute URL."""
    if not link:
        return None
    try:
        url = httpx.URL(link)
    except httpx.InvalidURL as e:
        logger.warning("Could not parse entry link %r: %s", link, e)
        return None
    if not url.scheme or not url.host:
        return None
    return f"{url.scheme}://{url.netloc.decode('ascii')}"


def resolve_image_src(src: str, origin: Optional[str]) -> str:
    """Absolute form of an image source, or the raw source if it cannot be resolved."""
    try:
        if origin:
            return str(httpx.URL(origin).join(src))
        url = httpx.URL(src)
    except (httpx.InvalidURL, ValueError) as e:
        logger.warning("Could not resolve image source %r: %s", src, e)
        return src
    if url.is_relative_url:
        return src
    return str(url)


def derive_featured_image(
    content: Optional[RemoteContent],
    origin: Optional[str],
) -> Optional[str]:
    """Source of the first image in an HTML body."""
    if content is None or not content.body or not is_html(content.content_type):
        return None

    img = BeautifulSoup(content.body, "html.parser").find("img")
    if img is None:
        return None

    src = img.get("src")
    if not src:
        return None

    return resolve_image_src(src, origin)


def derive_published(entry: RemoteEntry) -> Optional[datetime]:
    """Published timestamp, falling back to updated."""
    if entry.published is not None:
        return entry.published
    return entry.updated
