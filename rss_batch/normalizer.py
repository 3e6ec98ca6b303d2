from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser

OBJECT_PLACEHOLDER = "[Object]"

# Timezone abbreviations seen in RSS pubDate values
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}

_FILL_DATE = datetime(2001, 1, 1)
_ALT_FILL_DATE = datetime(2002, 1, 1)

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


def to_safe_string(value: Any) -> str:
    """
    Convert any feed field to a string without ever raising.

    None -> "", str -> itself, bool -> "true"/"false", numbers -> str()
    (integral floats without ".0"),
    dict/list/tuple -> compact JSON (or "[Object]" if not serializable).
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return OBJECT_PLACEHOLDER
    try:
        return str(value)
    except Exception:
        return OBJECT_PLACEHOLDER


def to_safe_iso_date(value: Any) -> str:
    """
    Parse an RSS/Atom date into ISO-8601 UTC ("2024-01-15T10:00:00.000Z").
    Returns "" when the value is empty, has no year or is not a valid date.
    Missing month, day and time parts are filled from 2001-01-01T00:00:00.
    """
    text = to_safe_string(value).strip()
    if not text:
        return ""
    try:
        dt = date_parser.parse(text, default=_FILL_DATE, tzinfos=TZINFOS)
        # a year taken from the fill date means the input carried none
        alt = date_parser.parse(text, default=_ALT_FILL_DATE, tzinfos=TZINFOS)
    except (ValueError, OverflowError, TypeError):
        return ""
    if dt.year != alt.year:
        return ""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return format_iso(dt)
    except (ValueError, OverflowError):
        return ""


def strip_html(value: Any) -> str:
    """Remove tags and collapse whitespace. Stored content fields keep their markup."""
    text = to_safe_string(value)
    text = _TAG_RE.sub(" ", text)
    return _WS_RE.sub(" ", text).strip()


def format_iso(ts: datetime) -> str:
    """Format an aware datetime as ISO-8601 UTC with millisecond precision."""
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return format_iso(datetime.now(timezone.utc))
