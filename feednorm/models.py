"""Data models for normalized feeds."""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any

from dateutil import parser as date_parser


class FeedType(str, Enum):
    """Feed dialect a Feed was extracted from."""

    RSS = "rss"
    ATOM = "atom"


def parse_date(value: str | None) -> datetime | None:
    """Parse an RSS/Atom date string into a timezone-aware datetime.

    Naive values are assumed to be in the local timezone. Returns None for
    absent, empty or unparseable values.
    """
    if not value or not value.strip():
        return None

    try:
        # dateutil handles both RFC 822 and ISO 8601 forms
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError, TypeError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.now().astimezone().tzinfo)
    return parsed


def _to_dict(record: Any) -> dict[str, Any]:
    """Convert a record to a plain dict, leaving out absent fields."""
    result: dict[str, Any] = {}
    for field in fields(record):
        value = getattr(record, field.name)
        if value is None:
            continue
        if isinstance(value, FeedType):
            value = value.value
        elif isinstance(value, tuple):
            value = [entry.to_dict() for entry in value]
        result[field.name] = value
    return result


@dataclass(frozen=True)
class Link:
    """A single Atom link element."""

    rel: str | None = None
    href: str | None = None
    type: str | None = None
    hreflang: str | None = None
    title: str | None = None
    length: str | None = None
    # Some feeds put the URL inside <link>...</link> instead of href
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _to_dict(self)


@dataclass(frozen=True)
class RssItem:
    """Represents a single RSS item."""

    id: str | None = None
    link: str | None = None
    date: str | None = None
    title: str | None = None
    author: str | None = None
    description: str | None = None

    @property
    def parsed_date(self) -> datetime | None:
        return parse_date(self.date)

    def to_dict(self) -> dict[str, Any]:
        return _to_dict(self)


@dataclass(frozen=True)
class AtomItem:
    """Represents a single Atom entry."""

    id: str | None = None
    links: tuple[Link, ...] = ()
    title: str | None = None
    date: str | None = None
    author: str | None = None
    summary: str | None = None
    content: str | None = None

    @property
    def parsed_date(self) -> datetime | None:
        return parse_date(self.date)

    def to_dict(self) -> dict[str, Any]:
        return _to_dict(self)


@dataclass(frozen=True)
class Feed:
    """A feed normalized from either RSS or Atom.

    Optional fields are None when the source element is absent and an empty
    string when the element is present without text.
    """

    type: FeedType
    title: str | None = None
    id: str | None = None
    link: str | None = None
    description: str | None = None
    author: str | None = None
    items: tuple[RssItem | AtomItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the plain mapping handed to host applications."""
        return _to_dict(self)
