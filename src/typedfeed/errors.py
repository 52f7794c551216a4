from __future__ import annotations


class FeedParseError(ValueError):
    """Base class for every error raised while parsing a feed."""


class MalformedInputError(FeedParseError):
    """The XML tokenizer rejected the document or it contained no elements."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid XML: {message}")


class UnrecognizedStructureError(FeedParseError):
    """The root element is not a known feed root, or <channel> is missing."""

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        msg = "Invalid RSS structure: missing <rss>, <rdf:RDF> or <channel> element"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class MissingRequiredElementError(FeedParseError):
    """A channel's title, link or description is absent after coercion."""

    def __init__(self, element: str) -> None:
        self.element = element
        super().__init__(f"Missing required element: <{element}>")
