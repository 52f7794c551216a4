from .dates import parse_date
from .errors import (
    FeedParseError,
    MalformedInputError,
    MissingRequiredElementError,
    UnrecognizedStructureError,
)
from .main import FeedType, detect_format, parse, parse_tree
from .models import Category, Channel, Enclosure, Feed, Guid, Image, Item, Source
from .tree import Node, TreeBuilder, build_tree

__all__ = [
    "Category",
    "Channel",
    "Enclosure",
    "Feed",
    "FeedParseError",
    "FeedType",
    "Guid",
    "Image",
    "Item",
    "MalformedInputError",
    "MissingRequiredElementError",
    "Node",
    "Source",
    "TreeBuilder",
    "UnrecognizedStructureError",
    "build_tree",
    "detect_format",
    "parse",
    "parse_date",
    "parse_tree",
]
