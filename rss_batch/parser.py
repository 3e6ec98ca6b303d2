from __future__ import annotations

import calendar
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .normalizer import format_iso, strip_html


@dataclass
class FeedItem:
    """
    One feed entry with loosely-typed fields.

    Each field holds whatever the feed carried (usually a string, possibly
    None or a nested structure); the fetcher resolves fallbacks between them.
    """
    title: Any = None
    link: Any = None
    creator: Any = None
    author: Any = None
    guid: Any = None
    id: Any = None
    pub_date: Any = None
    iso_date: Any = None
    content: Any = None
    content_snippet: Any = None
    summary: Any = None
    full_content_body: Any = None
    content_encoded: Any = None
    content_encoded_snippet: Any = None


@dataclass
class FeedDocument:
    """Feed-level metadata plus its items, in document order."""
    title: Any = None
    description: Any = None
    language: Any = None
    link: Any = None
    items: List[FeedItem] = field(default_factory=list)


def _struct_to_iso(entry: Dict[str, Any]) -> Optional[str]:
    """
    Convert feedparser's parsed date tuples to an ISO string.
    Priority: published_parsed -> updated_parsed -> created_parsed -> None.
    """
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                # feedparser normalizes *_parsed to UTC
                ts = calendar.timegm(val)
                return format_iso(datetime.fromtimestamp(ts, tz=timezone.utc))
            except (ValueError, OverflowError, OSError):
                continue
    return None


def _encoded_content(entry: Dict[str, Any]) -> Optional[str]:
    # content:encoded (RSS) and <content> (Atom) both land in entry.content
    content = entry.get("content")
    if isinstance(content, list) and content:
        first = content[0]
        if isinstance(first, dict):
            return first.get("value")
    return None


def parse_item(entry: Dict[str, Any]) -> FeedItem:
    """
    Map a raw feed entry (from feedparser) to a FeedItem.

    `content` is the entry's description markup and `content_encoded` its full
    encoded body; snippets are their tag-stripped text.
    """
    content = entry.get("description") or entry.get("summary")
    encoded = _encoded_content(entry)
    return FeedItem(
        title=entry.get("title"),
        link=entry.get("link"),
        creator=entry.get("creator") or entry.get("dc_creator"),
        author=entry.get("author"),
        guid=entry.get("guid"),
        id=entry.get("id"),
        pub_date=entry.get("published") or entry.get("updated"),
        iso_date=_struct_to_iso(entry),
        content=content,
        content_snippet=strip_html(content) if content else None,
        summary=entry.get("summary"),
        full_content_body=entry.get("full_content_body"),
        content_encoded=encoded,
        content_encoded_snippet=strip_html(encoded) if encoded else None,
    )


def parse_feed(parsed: Any) -> FeedDocument:
    """Map a feedparser result into a FeedDocument."""
    feed = parsed.get("feed", {}) or {}
    entries = parsed.get("entries", []) or []
    return FeedDocument(
        title=feed.get("title"),
        description=feed.get("description") or feed.get("subtitle"),
        language=feed.get("language"),
        link=feed.get("link"),
        items=[parse_item(e) for e in entries],
    )
