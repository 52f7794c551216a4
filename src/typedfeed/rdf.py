"""RSS 1.0 (RDF) channel, item and image extraction.

RSS 1.0 keeps ``<item>`` and ``<image>`` as siblings of ``<channel>`` under
the ``rdf:RDF`` root, and carries most metadata in Dublin Core elements. The
Dublin Core names are matched literally with their conventional ``dc:``
prefix.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .coerce import coerce_date, coerce_text, coerce_url
from .errors import MissingRequiredElementError
from .models import Category, Channel, Image, Item, Source
from .tree import Node

logger = logging.getLogger(__name__)

_DC_CREATOR = "dc:creator"
_DC_DATE = "dc:date"
_DC_LANGUAGE = "dc:language"
_DC_RIGHTS = "dc:rights"
_DC_SOURCE = "dc:source"
_DC_SUBJECT = "dc:subject"
_ADMIN_GENERATOR_AGENT = "admin:generatorAgent"
_RDF_RESOURCE = "rdf:resource"


def parse_channel(
    node: Node,
    item_nodes: Iterable[Node] = (),
    image_node: Optional[Node] = None,
    *,
    include_items: bool = True,
    include_categories: bool = True,
    include_image: bool = True,
) -> Channel:
    """Build a :class:`Channel` from a ``<channel>`` node.

    Args:
        node: The ``<channel>`` element.
        item_nodes: The ``<item>`` elements found next to the channel.
        image_node: The ``<image>`` element found next to the channel, if any.

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

    image = None
    if include_image and image_node is not None:
        image = parse_image(image_node)

    items: tuple[Item, ...] = ()
    if include_items:
        items = tuple(
            parse_item(item_node, include_categories=include_categories)
            for item_node in item_nodes
        )

    return Channel(
        title=title,
        link=link,
        description=description,
        language=node.text_of(_DC_LANGUAGE),
        copyright=node.text_of(_DC_RIGHTS),
        managing_editor=node.text_of(_DC_CREATOR),
        pub_date=coerce_date(node.text_of(_DC_DATE)),
        categories=_parse_subjects(node) if include_categories else (),
        generator=_parse_generator(node),
        image=image,
        items=items,
    )


def parse_item(node: Node, *, include_categories: bool = True) -> Item:
    """Build an :class:`Item` from an RSS 1.0 ``<item>``. Never fails.

    This dialect has no enclosure, comments or guid.
    """
    return Item(
        title=node.text_of("title"),
        link=coerce_url(node.text_of("link")),
        description=node.text_of("description"),
        author=node.text_of(_DC_CREATOR),
        categories=_parse_subjects(node) if include_categories else (),
        pub_date=coerce_date(node.text_of(_DC_DATE)),
        source=_parse_source(node),
    )


def parse_image(node: Node) -> Optional[Image]:
    url = coerce_url(node.text_of("url"))
    title = node.text_of("title")
    link = coerce_url(node.text_of("link"))
    if url is None or title is None or link is None:
        logger.debug("Dropping incomplete RDF <image> element")
        return None
    return Image(url=url, title=title, link=link)


def _parse_subjects(node: Node) -> tuple[Category, ...]:
    categories: list[Category] = []
    for subject in node.iter_children(_DC_SUBJECT):
        value = subject.trimmed_text
        if value:
            categories.append(Category(value=value))
    return tuple(categories)


def _parse_source(node: Node) -> Optional[Source]:
    # dc:source is a bare URL; it serves as both name and address
    value = node.text_of(_DC_SOURCE)
    url = coerce_url(value)
    if value is None or url is None:
        return None
    return Source(value=value, url=url)


def _parse_generator(node: Node) -> Optional[str]:
    agent = node.child(_ADMIN_GENERATOR_AGENT)
    if agent is None:
        return None
    return coerce_text(agent.attribute(_RDF_RESOURCE)) or agent.trimmed_text
