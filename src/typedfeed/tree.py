"""Generic element tree built from push-style XML parse events.

The tree is dialect agnostic: element and attribute names are kept exactly as
the tokenizer reports them, so namespace-prefixed names such as ``dc:creator``
are matched as literal strings by the dialect parsers.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional
from xml.sax import SAXException
from xml.sax.handler import ContentHandler

import defusedxml.sax
from defusedxml import DefusedXmlException

from .errors import MalformedInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """A single element of the parsed document."""

    name: str
    text: Optional[str] = None
    # a mapping proxy is unhashable; equality still compares it
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(
                self, "attributes", MappingProxyType(dict(self.attributes))
            )
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def child(self, name: str) -> Optional[Node]:
        """Return the first child element called ``name``."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def children_named(self, name: str) -> list[Node]:
        return [child for child in self.children if child.name == name]

    def iter_children(self, name: str) -> Iterator[Node]:
        return (child for child in self.children if child.name == name)

    def attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    @property
    def trimmed_text(self) -> Optional[str]:
        """Text content with surrounding whitespace removed, ``None`` if blank."""
        if self.text is None:
            return None
        stripped = self.text.strip()
        return stripped or None

    def text_of(self, name: str) -> Optional[str]:
        """Trimmed text of the first child called ``name``."""
        child = self.child(name)
        return child.trimmed_text if child is not None else None


class _NodeAccumulator:
    __slots__ = ("name", "attributes", "text_parts", "children")

    def __init__(self, name: str, attributes: Mapping[str, str]) -> None:
        self.name = name
        self.attributes = dict(attributes)
        self.text_parts: list[str] = []
        self.children: list[Node] = []

    def build(self) -> Node:
        text = "".join(self.text_parts)
        return Node(
            name=self.name,
            text=text or None,
            attributes=self.attributes,
            children=tuple(self.children),
        )


class TreeBuilder:
    """Assemble a :class:`Node` tree from tokenizer events.

    Nodes are finalized bottom-up as each element ends. The builder keeps an
    explicit stack instead of recursing, so nesting depth is bounded only by
    memory.
    """

    def __init__(self) -> None:
        self._stack: list[_NodeAccumulator] = []
        self._root: Optional[Node] = None

    def start_element(self, name: str, attributes: Mapping[str, str]) -> None:
        self._stack.append(_NodeAccumulator(name, attributes))

    def character_data(self, text: str) -> None:
        if self._stack and text:
            self._stack[-1].text_parts.append(text)

    def cdata_block(self, data: bytes) -> None:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Discarding CDATA block with invalid UTF-8")
            return
        self.character_data(text)

    def end_element(self, name: str) -> None:
        if not self._stack:
            return
        node = self._stack.pop().build()
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self._root = node

    def close(self) -> Node:
        if self._root is None:
            raise MalformedInputError("No root element found")
        return self._root


class _SAXEventSource(ContentHandler):
    """Forward SAX callbacks from the expat reader to a :class:`TreeBuilder`."""

    def __init__(self, builder: TreeBuilder) -> None:
        super().__init__()
        self.builder = builder

    def startElement(self, name, attrs):
        self.builder.start_element(name, dict(attrs.items()))

    def endElement(self, name):
        self.builder.end_element(name)

    def characters(self, content):
        self.builder.character_data(content)


def build_tree(content: bytes) -> Node:
    """Tokenize ``content`` and return the root :class:`Node`.

    Raises:
        MalformedInputError: If the tokenizer reports a well-formedness error,
            refuses the document (entity declarations, external references),
            or no element was produced.
    """
    builder = TreeBuilder()
    handler = _SAXEventSource(builder)
    reader = defusedxml.sax.make_parser()
    reader.setContentHandler(handler)
    try:
        reader.parse(io.BytesIO(content))
    except SAXException as e:
        raise MalformedInputError(str(e)) from e
    except DefusedXmlException as e:
        raise MalformedInputError(str(e)) from e
    return builder.close()
