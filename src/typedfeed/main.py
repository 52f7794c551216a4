from __future__ import annotations

import logging
import re
from typing import Literal

from . import rdf, rss2
from .coerce import coerce_text
from .errors import MalformedInputError, UnrecognizedStructureError
from .models import Feed
from .tree import Node, build_tree

logger = logging.getLogger(__name__)

FeedType = Literal["rss", "rdf"]

_RSS_ROOT = "rss"
_RDF_ROOTS = frozenset({"rdf:RDF", "RDF"})
_RSS1_VERSION = "1.0"
_RSS2_DEFAULT_VERSION = "2.0"

_RE_XML_DECL_ENCODING = re.compile(
    r'(<\?xml[^>]*encoding=["\'])([^"\']+)(["\'][^>]*\?>)', re.IGNORECASE
)
_XML_START_PATTERNS = (b"<?xml", b"<rss", b"<rdf:rdf", b"<rdf")


def _ensure_utf8_xml_declaration(content: str) -> str:
    """Ensure the XML declaration's encoding matches the UTF-8 bytes we emit."""
    if not content.lstrip().startswith("<?xml"):
        return content
    return _RE_XML_DECL_ENCODING.sub(r"\1utf-8\3", content, count=1)


def _clean_feed_bytes(content: bytes) -> bytes:
    """Extract the XML document from bytes that may carry leading junk."""
    stripped_content = content.lstrip()
    preview_lower = stripped_content[:2000].lower()

    # Skip UTF-8 BOM when doing ASCII prefix checks
    if preview_lower.startswith(b"\xef\xbb\xbf"):
        stripped_content = stripped_content[3:].lstrip()
        preview_lower = stripped_content[:2000].lower()

    if preview_lower.startswith(_XML_START_PATTERNS):
        return stripped_content

    if preview_lower.startswith((b"<!doctype html", b"<html")):
        raise MalformedInputError("Content appears to be HTML, not an RSS feed")

    # Find() scans in place; no need to split large payloads into lines.
    search_chunk = content[:8192].lower()
    earliest = -1
    for pattern in _XML_START_PATTERNS:
        idx = search_chunk.find(pattern)
        if idx != -1 and (earliest == -1 or idx < earliest):
            earliest = idx
    if earliest != -1:
        return content[earliest:]

    return content


def _prepare_xml_bytes(xml_content: str | bytes) -> bytes:
    if isinstance(xml_content, bytes):
        cleaned = _clean_feed_bytes(xml_content)
        if not cleaned.strip():
            raise MalformedInputError("Empty content")
        return cleaned

    # Str input: fix encoding declaration, encode to bytes, then use bytes path.
    xml_content = _ensure_utf8_xml_declaration(xml_content)
    return _prepare_xml_bytes(xml_content.encode("utf-8", errors="replace"))


def detect_format(root: Node) -> FeedType:
    """Select the dialect from the root element's name alone.

    Raises:
        UnrecognizedStructureError: If the root is neither ``rss`` nor
            ``rdf:RDF``.
    """
    if root.name in _RDF_ROOTS:
        return "rdf"
    if root.name == _RSS_ROOT:
        return "rss"
    raise UnrecognizedStructureError(f"unknown root element <{root.name}>")


def _require_channel(root: Node) -> Node:
    channel = root.child("channel")
    if channel is None:
        raise UnrecognizedStructureError("missing <channel> element")
    return channel


def parse_tree(
    root: Node,
    *,
    include_items: bool = True,
    include_categories: bool = True,
    include_image: bool = True,
    include_enclosures: bool = True,
) -> Feed:
    """Build a :class:`Feed` from an already tokenized document tree."""
    feed_type = detect_format(root)
    channel_node = _require_channel(root)

    if feed_type == "rss":
        version = coerce_text(root.attribute("version")) or _RSS2_DEFAULT_VERSION
        channel = rss2.parse_channel(
            channel_node,
            include_items=include_items,
            include_categories=include_categories,
            include_image=include_image,
            include_enclosures=include_enclosures,
        )
    else:
        # RSS 1.0 items and image sit next to the channel, not inside it
        version = _RSS1_VERSION
        channel = rdf.parse_channel(
            channel_node,
            root.children_named("item"),
            root.child("image"),
            include_items=include_items,
            include_categories=include_categories,
            include_image=include_image,
        )

    logger.debug(
        "Parsed %s feed version %s with %d items",
        feed_type,
        version,
        len(channel.items),
    )
    return Feed(version=version, channel=channel)


def parse(
    source: str | bytes,
    *,
    include_items: bool = True,
    include_categories: bool = True,
    include_image: bool = True,
    include_enclosures: bool = True,
) -> Feed:
    """Parse an RSS 2.0 or RSS 1.0 document.

    Args:
        source: XML content as a string or bytes
        include_items: Include channel items
        include_categories: Include channel and item categories
        include_image: Include the channel image
        include_enclosures: Include RSS 2.0 item enclosures

    Returns:
        Feed holding the version string and the parsed channel

    Raises:
        MalformedInputError: If the content is empty or not well-formed XML
        UnrecognizedStructureError: If the document is not an RSS feed
        MissingRequiredElementError: If the channel lacks title, link or
            description
    """
    xml_content = _prepare_xml_bytes(source)
    root = build_tree(xml_content)
    return parse_tree(
        root,
        include_items=include_items,
        include_categories=include_categories,
        include_image=include_image,
        include_enclosures=include_enclosures,
    )
