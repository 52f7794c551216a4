"""RSS 2.0 channel, item and image extraction.

Elements are looked up by their plain names directly under the node being
parsed. Only ``title``, ``link`` and ``description`` of the channel are
mandatory; everything else is best effort.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from .coerce import coerce_bool, coerce_date, coerce_int, coerce_text, coerce_url
from .errors import MissingRequiredElementError
from .models import Category, Channel, Enclosure, Guid, Image, Item, Source
from .tree import Node

logger = logging.getLogger(__name__)

_DC_CREATOR = "dc:creator"
_DC_DATE = "dc:date"


def parse_channel(
    node: Node,
    *,
    include_items: bool = True,
    include_categories: bool = True,
    include_image: bool = True,
    include_enclosures: bool = True,
) -> Channel:
    """Build a :class:`Channel` from a ``<channel>`` node.

    Raises:
        MissingRequiredElementError: If title, link or description is
            missing, blank, or (for link) not a valid URL.
    """
    title = node.text_of("title")
    if title is None:
        raise MissingRequiredElementError("title")

    link = coerce_url(node.text_of("link"))
    if link is None:
        raise MissingRequiredElementError("link")

    description = node.text_of("description")
    if description is None:
        raise MissingRequiredElementError("description")

    image: Optional[Image] = None
    if include_image:
        image_node = node.child("image")
        if image_node is not None:
            image = parse_image(image_node)

    items: tuple[Item, ...] = ()
    if include_items:
        items = tuple(
            parse_item(
                item_node,
                include_categories=include_categories,
                include_enclosures=include_enclosures,
            )
            for item_node in node.iter_children("item")
        )

    return Channel(
        title=title,
        link=link,
        description=description,
        language=node.text_of("language"),
        copyright=node.text_of("copyright"),
        managing_editor=node.text_of("managingEditor"),
        web_master=node.text_of("webMaster"),
        pub_date=_parse_pub_date(node),
        last_build_date=coerce_date(node.text_of("lastBuildDate")),
        categories=_parse_categories(node) if include_categories else (),
        generator=node.text_of("generator"),
        docs=coerce_url(node.text_of("docs")),
        ttl=coerce_int(node.text_of("ttl")),
        image=image,
        items=items,
    )


def parse_item(
    node: Node,
    *,
    include_categories: bool = True,
    include_enclosures: bool = True,
) -> Item:
    """Build an :class:`Item` from an ``<item>`` node. Never fails."""
    author = node.text_of("author") or node.text_of(_DC_CREATOR)
    return Item(
        title=node.text_of("title"),
        link=coerce_url(node.text_of("link")),
        description=node.text_of("description"),
        author=author,
        categories=_parse_categories(node) if include_categories else (),
        comments=coerce_url(node.text_of("comments")),
        enclosure=_parse_enclosure(node) if include_enclosures else None,
        guid=_parse_guid(node),
        pub_date=_parse_pub_date(node),
        source=_parse_source(node),
    )


def parse_image(node: Node) -> Optional[Image]:
    """Build an :class:`Image` from an ``<image>`` node.

    Returns ``None`` unless url, title and link are all present and valid.
    """
    url = coerce_url(node.text_of("url"))
    title = node.text_of("title")
    link = coerce_url(node.text_of("link"))
    if url is None or title is None or link is None:
        logger.debug("Dropping incomplete <image> element")
        return None

    return Image(
        url=url,
        title=title,
        link=link,
        width=coerce_int(node.text_of("width")),
        height=coerce_int(node.text_of("height")),
        description=node.text_of("description"),
    )


def _parse_pub_date(node: Node) -> Optional[datetime.datetime]:
    # Some producers lower-case the element or use Dublin Core instead
    for name in ("pubDate", "pubdate", _DC_DATE):
        value = node.text_of(name)
        if value is not None:
            return coerce_date(value)
    return None


def _parse_categories(node: Node) -> tuple[Category, ...]:
    categories: list[Category] = []
    for category_node in node.iter_children("category"):
        value = category_node.trimmed_text
        if value is None:
            continue
        domain = coerce_text(category_node.attribute("domain"))
        categories.append(Category(value=value, domain=domain))
    return tuple(categories)


def _parse_enclosure(node: Node) -> Optional[Enclosure]:
    enclosure_node = node.child("enclosure")
    if enclosure_node is None:
        return None

    url = coerce_url(enclosure_node.attribute("url"))
    length = coerce_int(enclosure_node.attribute("length"))
    mime_type = coerce_text(enclosure_node.attribute("type"))
    if url is None or length is None or mime_type is None:
        logger.debug("Dropping incomplete <enclosure> element")
        return None
    return Enclosure(url=url, length=length, type=mime_type)


def _parse_guid(node: Node) -> Optional[Guid]:
    guid_node = node.child("guid")
    if guid_node is None:
        return None

    value = guid_node.trimmed_text
    if value is None:
        return None
    return Guid(
        value=value,
        is_perma_link=coerce_bool(guid_node.attribute("isPermaLink"), default=True),
    )


def _parse_source(node: Node) -> Optional[Source]:
    source_node = node.child("source")
    if source_node is None:
        return None

    value = source_node.trimmed_text
    url = coerce_url(source_node.attribute("url"))
    if value is None or url is None:
        logger.debug("Dropping <source> element without name or valid url")
        return None
    return Source(value=value, url=url)
