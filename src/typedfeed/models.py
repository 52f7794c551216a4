"""Unified feed model shared by the RSS 2.0 and RSS 1.0 parsers.

URL fields hold strings that passed :func:`typedfeed.coerce.coerce_url`;
timestamps are timezone-aware UTC datetimes.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Category:
    """A category for a channel or item."""

    value: str
    domain: Optional[str] = None


@dataclass(frozen=True)
class Enclosure:
    """A media object attached to an item (podcasts and the like)."""

    url: str
    length: int
    type: str


@dataclass(frozen=True)
class Guid:
    """A unique identifier for an item.

    When ``is_perma_link`` is true the value can be dereferenced as a URL.
    """

    value: str
    is_perma_link: bool = True


@dataclass(frozen=True)
class Source:
    """The channel an aggregated item came from."""

    value: str
    url: str


@dataclass(frozen=True)
class Image:
    url: str
    title: str
    link: str
    width: Optional[int] = None
    height: Optional[int] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Item:
    """A single feed item. Every field is optional."""

    title: Optional[str] = None
    link: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    categories: tuple[Category, ...] = ()
    comments: Optional[str] = None
    enclosure: Optional[Enclosure] = None
    guid: Optional[Guid] = None
    pub_date: Optional[datetime.datetime] = None
    source: Optional[Source] = None


@dataclass(frozen=True)
class Channel:
    """Channel metadata and items.

    ``title``, ``link`` and ``description`` are always present; a channel
    missing any of them is never constructed by the parsers.
    """

    title: str
    link: str
    description: str
    language: Optional[str] = None
    copyright: Optional[str] = None
    managing_editor: Optional[str] = None
    web_master: Optional[str] = None
    pub_date: Optional[datetime.datetime] = None
    last_build_date: Optional[datetime.datetime] = None
    categories: tuple[Category, ...] = ()
    generator: Optional[str] = None
    docs: Optional[str] = None
    ttl: Optional[int] = None
    image: Optional[Image] = None
    items: tuple[Item, ...] = ()


@dataclass(frozen=True)
class Feed:
    version: str
    channel: Channel
