import datetime

import pytest

from typedfeed import (
    Category,
    Channel,
    Feed,
    FeedParseError,
    MalformedInputError,
    MissingRequiredElementError,
    Node,
    UnrecognizedStructureError,
    detect_format,
    parse,
)

MINIMAL_RSS = (
    '<rss version="2.0"><channel><title>T</title><link>https://e.com</link>'
    "<description>D</description></channel></rss>"
)
MINIMAL_RDF = (
    "<rdf:RDF><channel><title>T</title><link>https://e.com</link>"
    "<description>D</description></channel></rdf:RDF>"
)


def test_minimal_rss_feed():
    feed = parse(MINIMAL_RSS)
    assert feed == Feed(
        version="2.0",
        channel=Channel(title="T", link="https://e.com", description="D"),
    )
    channel = feed.channel
    assert channel.items == ()
    assert channel.categories == ()
    assert channel.image is None
    assert channel.language is None
    assert channel.ttl is None


def test_minimal_rdf_feed():
    feed = parse(MINIMAL_RDF)
    assert feed.version == "1.0"
    assert feed.channel.title == "T"
    assert feed.channel.items == ()


def test_rdf_root_items():
    feed = parse(
        MINIMAL_RDF.replace(
            "</rdf:RDF>",
            "<item><title>A</title></item><item><title>B</title></item></rdf:RDF>",
        )
    )
    assert [item.title for item in feed.channel.items] == ["A", "B"]


def test_bytes_and_str_agree():
    assert parse(MINIMAL_RSS.encode("utf-8")) == parse(MINIMAL_RSS)


@pytest.mark.parametrize(
    ("root", "expected"),
    [
        ('<rss version="0.92">', "0.92"),
        ("<rss>", "2.0"),
        ('<rss version="  ">', "2.0"),
    ],
)
def test_rss_version(root, expected):
    xml = MINIMAL_RSS.replace('<rss version="2.0">', root)
    assert parse(xml).version == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [("rss", "rss"), ("rdf:RDF", "rdf"), ("RDF", "rdf")],
)
def test_detect_format(name, expected):
    assert detect_format(Node(name=name)) == expected


@pytest.mark.parametrize("name", ["feed", "RSS", "rdf:rdf", "html", "channel", "x:rss"])
def test_detect_format_rejects_other_roots(name):
    with pytest.raises(UnrecognizedStructureError):
        detect_format(Node(name=name))


def test_detect_format_ignores_attributes_and_children():
    root = Node(name="rss", attributes={"version": "1.0"}, children=(Node(name="feed"),))
    assert detect_format(root) == "rss"


@pytest.mark.parametrize(
    "xml",
    [
        '<feed xmlns="http://www.w3.org/2005/Atom"><title>T</title></feed>',
        '<rss version="2.0"></rss>',
        '<rss version="2.0"><title>T</title></rss>',
        "<rdf:RDF><item><title>orphan</title></item></rdf:RDF>",
    ],
)
def test_unrecognized_structure(xml):
    with pytest.raises(UnrecognizedStructureError):
        parse(xml)


@pytest.mark.parametrize("missing", ["title", "link", "description"])
@pytest.mark.parametrize("document", [MINIMAL_RSS, MINIMAL_RDF])
def test_missing_required_field_is_named(document, missing):
    start = document.index(f"<{missing}>")
    end = document.index(f"</{missing}>") + len(f"</{missing}>")
    with pytest.raises(MissingRequiredElementError) as exc_info:
        parse(document[:start] + document[end:])
    assert exc_info.value.element == missing


@pytest.mark.parametrize(
    "content",
    [
        "This is not XML at all",
        '<?xml version="1.0" encoding="UTF-8"?>\n<rss version="2.0">\n<channel>\n<title>Unclosed',
        "",
        b"   \n",
    ],
)
def test_malformed_input(content):
    with pytest.raises(MalformedInputError):
        parse(content)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse("<html><body>nope</body></html>")
    assert issubclass(FeedParseError, ValueError)


def test_html_is_rejected_early():
    with pytest.raises(MalformedInputError) as exc_info:
        parse(b"<!DOCTYPE html><html><head></head><body></body></html>")
    assert "HTML" in exc_info.value.message


def test_whitespace_is_trimmed_everywhere():
    feed = parse(
        '<rss version="2.0"><channel>\n'
        "  <title>  Whitespace Title  </title>\n"
        "  <link>\n https://e.com \n</link>\n"
        "  <description>\n    Multiline\n    description\n  </description>\n"
        "  <language>   </language>\n"
        "  <copyright></copyright>\n"
        "</channel></rss>"
    )
    assert feed.channel.title == "Whitespace Title"
    assert feed.channel.link == "https://e.com"
    assert feed.channel.description.startswith("Multiline")
    assert feed.channel.language is None
    assert feed.channel.copyright is None


def test_category_order_with_empty_sibling():
    feed = parse(
        MINIMAL_RSS.replace(
            "</channel>",
            "<category></category><category>Kept</category>"
            "<category> </category><category>Also kept</category></channel>",
        )
    )
    assert feed.channel.categories == (Category("Kept"), Category("Also kept"))


def test_unknown_elements_have_no_effect():
    extended = MINIMAL_RSS.replace(
        "</channel>",
        "<foo:bar>ignored</foo:bar><cloud domain='x'/><textInput/></channel>",
    )
    assert parse(extended) == parse(MINIMAL_RSS)


def test_out_of_range_pub_date_is_absent():
    feed = parse(
        MINIMAL_RSS.replace(
            "</channel>",
            "<pubDate>Mon, 01 Jan 0001 00:00:00 +0100</pubDate></channel>",
        )
    )
    assert feed.channel.pub_date is None


def test_oversized_ttl_is_absent():
    ttl = "<ttl>" + "9" * 5000 + "</ttl>"
    feed = parse(MINIMAL_RSS.replace("</channel>", ttl + "</channel>"))
    assert feed.channel.ttl is None


def test_real_world_style_feed():
    xml = """<?xml version="1.0" encoding="UTF-8"?>
<rss xmlns:dc="http://purl.org/dc/elements/1.1/"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:atom="http://www.w3.org/2005/Atom" version="2.0">
  <channel>
    <title><![CDATA[BBC News - Technology]]></title>
    <description><![CDATA[BBC News - Technology]]></description>
    <link>https://www.bbc.co.uk/news/technology</link>
    <generator>RSS for Node</generator>
    <lastBuildDate>Mon, 15 Jan 2024 10:00:00 GMT</lastBuildDate>
    <atom:link href="https://feeds.bbci.co.uk/news/technology/rss.xml" rel="self" type="application/rss+xml"/>
    <copyright><![CDATA[Copyright: (C) British Broadcasting Corporation]]></copyright>
    <language><![CDATA[en-gb]]></language>
    <ttl>15</ttl>
    <item>
      <title><![CDATA[Tech giants face new regulations]]></title>
      <link>https://www.bbc.co.uk/news/technology-1</link>
      <guid isPermaLink="false">https://www.bbc.co.uk/news/technology-1#0</guid>
      <pubDate>Mon, 15 Jan 2024 09:30:00 GMT</pubDate>
      <content:encoded><![CDATA[<p>ignored</p>]]></content:encoded>
    </item>
    <item>
      <title>テック最新ニュース</title>
      <category>プログラミング</category>
    </item>
  </channel>
</rss>
"""
    feed = parse(xml)
    channel = feed.channel
    assert channel.title == "BBC News - Technology"
    assert channel.language == "en-gb"
    assert channel.copyright == "Copyright: (C) British Broadcasting Corporation"
    assert channel.ttl == 15
    assert channel.last_build_date == datetime.datetime(
        2024, 1, 15, 10, tzinfo=datetime.timezone.utc
    )
    assert len(channel.items) == 2
    assert channel.items[0].guid.is_perma_link is False
    assert channel.items[0].description is None
    assert channel.items[1].title == "テック最新ニュース"
    assert channel.items[1].categories[0].value == "プログラミング"
