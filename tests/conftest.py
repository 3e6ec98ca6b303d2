"""Shared test fixtures for rss_batch tests."""

import threading
from typing import Dict, Union

import pytest

from rss_batch.models import EnrichedArticle, Source
from rss_batch.parser import FeedDocument, FeedItem


SAMPLE_RSS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>Test Feed</title>
    <link>https://example.com</link>
    <description>A test RSS feed</description>
    <language>en-gb</language>
    <item>
      <title>First Article</title>
      <link>https://example.com/article-1</link>
      <guid>article-1</guid>
      <description>Description of the &lt;b&gt;first&lt;/b&gt; article</description>
      <content:encoded><![CDATA[<p>Full body of the first article</p>]]></content:encoded>
      <pubDate>Fri, 13 Feb 2026 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Second Article</title>
      <link>https://example.com/article-2</link>
      <guid>article-2</guid>
      <description>Description of the second article</description>
      <pubDate>Fri, 13 Feb 2026 09:00:00 GMT</pubDate>
    </item>
  </channel>
</rss>"""

SAMPLE_ATOM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Test Atom Feed</title>
  <link href="https://example.com"/>
  <subtitle>A test Atom feed</subtitle>
  <entry>
    <title>Atom Entry 1</title>
    <link href="https://example.com/entry-1"/>
    <id>urn:uuid:entry-1</id>
    <summary>Summary of entry 1</summary>
    <updated>2026-02-13T10:00:00Z</updated>
  </entry>
</feed>"""

SAMPLE_NOT_A_FEED = """<html>
  <body><p>This is not a feed</p>
"""


class FakeFeedClient:
    """Feed retriever returning canned documents (or raising canned errors) per URL."""

    def __init__(self, responses: Dict[str, Union[FeedDocument, Exception]]):
        self.responses = responses
        self.calls = []
        self._lock = threading.Lock()

    def retrieve(self, url: str) -> FeedDocument:
        with self._lock:
            self.calls.append(url)
        result = self.responses[url]
        if isinstance(result, Exception):
            raise result
        return result


def make_source(n: int, **overrides) -> Source:
    data = dict(
        id=f"src-{n}",
        name=f"Source {n}",
        url=f"https://source{n}.example.com",
        rss_feed_url=f"https://source{n}.example.com/rss",
        score=n,
    )
    data.update(overrides)
    return Source(**data)


def make_document(n_items: int = 2, title: str = "Feed") -> FeedDocument:
    return FeedDocument(
        title=title,
        description=f"{title} description",
        language="en",
        link="https://feed.example.com",
        items=[
            FeedItem(
                title=f"{title} item {i}",
                link=f"https://feed.example.com/{i}",
                guid=f"guid-{i}",
                content=f"<p>Body {i}</p>",
                content_snippet=f"Body {i}",
                pub_date="2024-01-15T10:00:00Z",
            )
            for i in range(n_items)
        ],
    )


def make_article(title: str = "", description: str = "", **overrides) -> EnrichedArticle:
    data = dict(
        title=title,
        description=description,
        content="",
        content_snippet="",
        summary="",
        full_content_body="",
        content_encoded="",
        content_snippet_encoded="",
        link="",
        pub_date="",
        author="",
        guid="",
        source="Source 1",
        source_id="src-1",
        source_score=1,
    )
    data.update(overrides)
    return EnrichedArticle(**data)


@pytest.fixture
def sample_rss_xml():
    """Sample valid RSS 2.0 XML."""
    return SAMPLE_RSS_XML


@pytest.fixture
def sample_atom_xml():
    """Sample valid Atom XML."""
    return SAMPLE_ATOM_XML


@pytest.fixture
def sample_not_a_feed():
    """A body that is not an RSS/Atom feed."""
    return SAMPLE_NOT_A_FEED


@pytest.fixture
def no_sleep():
    """Records pacing delays instead of sleeping."""
    calls = []
    return calls.append, calls
