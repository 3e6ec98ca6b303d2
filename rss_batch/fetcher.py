from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

import feedparser
import requests

from .exceptions import FeedTimeoutError, MissingFeedUrlError, ParseError, RSSFetchError
from .models import Article, ProcessedSource, Source
from .normalizer import to_safe_iso_date, to_safe_string, utc_now_iso
from .parser import FeedDocument, FeedItem, parse_feed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 20000
DEFAULT_USER_AGENT = "RSS-Feed-Fetcher/1.0"
DEFAULT_ACCEPT = "application/rss+xml, application/xml, text/xml, application/atom+xml, */*"
UNKNOWN_ERROR = "Unknown error occurred"


def default_headers(user_agent: str = DEFAULT_USER_AGENT) -> Dict[str, str]:
    return {"Accept": DEFAULT_ACCEPT, "User-Agent": user_agent}


@dataclass(frozen=True)
class FeedClientConfig:
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    headers: Dict[str, str] = field(default_factory=default_headers)


class FeedRetriever(Protocol):
    def retrieve(self, url: str) -> FeedDocument:  # pragma: no cover - interface
        ...


class FeedClient:
    """
    Retrieves and parses one feed per call. Holds configuration only, so a
    single instance is safe to share between worker threads.
    """

    def __init__(self, config: Optional[FeedClientConfig] = None) -> None:
        self.config = config or FeedClientConfig()

    def retrieve(self, url: str) -> FeedDocument:
        """
        Fetch a single feed URL and return its parsed document.

        Raises FeedTimeoutError on deadline, RSSFetchError on transport or HTTP
        status errors and ParseError when the body is not an RSS/Atom feed.
        """
        timeout_sec = self.config.timeout_ms / 1000
        try:
            response = requests.get(url, timeout=timeout_sec, headers=self.config.headers)
            response.raise_for_status()
        except requests.Timeout as e:
            raise FeedTimeoutError(f"Request timed out after {self.config.timeout_ms}ms: {url}") from e
        except requests.RequestException as e:
            raise RSSFetchError(f"Failed to fetch feed: {url} ({e})") from e

        parsed = feedparser.parse(response.content)

        feed = parsed.get("feed", {}) or {}
        unknown = parsed.get("bozo") or not parsed.get("version")
        if unknown and not feed.get("title") and not parsed.get("entries"):
            # bozo_exception may exist; include a short message for diagnostics
            exc = parsed.get("bozo_exception")
            msg = f"Invalid RSS/Atom feed: {url}"
            if exc:
                msg += f" ({exc})"
            raise ParseError(msg)

        return parse_feed(parsed)


def to_article(item: FeedItem, source: Source) -> Article:
    """Map a FeedItem to an Article, resolving field fallbacks in fixed order."""
    return Article(
        title=to_safe_string(item.title),
        description=to_safe_string(item.content_snippet or item.content),
        content=to_safe_string(item.content),
        content_snippet=to_safe_string(item.content_snippet),
        summary=to_safe_string(item.summary),
        full_content_body=to_safe_string(item.full_content_body),
        content_encoded=to_safe_string(item.content_encoded),
        content_snippet_encoded=to_safe_string(item.content_encoded_snippet),
        link=to_safe_string(item.link),
        pub_date=to_safe_iso_date(item.pub_date or item.iso_date),
        author=to_safe_string(item.creator or item.author),
        guid=to_safe_string(item.guid or item.id),
        source=source.name,
        source_id=source.id,
        source_score=source.score,
    )


def error_message(exc: BaseException) -> str:
    return str(exc) or UNKNOWN_ERROR


def fetch_source(source: Source, client: FeedRetriever) -> ProcessedSource:
    """
    Fetch and map the feed for a single source.

    Never raises: any failure is returned as a ProcessedSource with
    success=False and the failure's message.
    """
    try:
        if not source.rss_feed_url:
            raise MissingFeedUrlError("No RSS feed URL provided")

        feed = client.retrieve(source.rss_feed_url)
        articles: List[Article] = [to_article(item, source) for item in feed.items]

        return ProcessedSource(
            source=source,
            success=True,
            last_fetched=utc_now_iso(),
            articles=articles,
            articles_count=len(articles),
            feed_title=to_safe_string(feed.title) or source.name,
            feed_description=to_safe_string(feed.description),
            feed_language=to_safe_string(feed.language) or source.language or "",
            feed_link=to_safe_string(feed.link) or source.url,
        )
    except Exception as e:
        logger.warning("Error fetching RSS feed for %s: %s", source.name, e)
        return ProcessedSource(
            source=source,
            success=False,
            last_fetched=utc_now_iso(),
            error=error_message(e),
        )
