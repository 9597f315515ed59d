"""Atom 1.0 extraction."""

from .models import AtomItem, Feed, FeedType, Link
from .xmltree import Element, read_text

LINK_ATTRIBUTES = ("rel", "href", "type", "hreflang", "title", "length")


def extract_atom(feed: Element, extract_content: bool = True) -> Feed:
    """Extract a Feed from the root ``feed`` element.

    Args:
        feed: The ``feed`` root element
        extract_content: Whether to read entry summaries and content

    Returns:
        Feed of type ATOM with one AtomItem per ``entry`` element
    """
    # Only the href of the first link counts at feed level
    link = None
    link_element = feed.find("link")
    if link_element is not None:
        link = link_element.get("href")

    items = tuple(
        extract_atom_entry(entry, extract_content)
        for entry in feed.iter_children("entry")
    )

    return Feed(
        type=FeedType.ATOM,
        title=read_text(feed, "title"),
        id=read_text(feed, "id"),
        link=link,
        author=read_text(feed, "author"),
        items=items,
    )


def extract_link(link: Element) -> Link:
    """Build a Link from the attributes and text of a ``link`` element.

    The text is not part of Atom, but some feeds write
    ``<link>http://example.com</link>`` instead of using href.
    """
    attributes = {
        name: link.attributes[name]
        for name in LINK_ATTRIBUTES
        if name in link.attributes
    }
    return Link(text=link.value, **attributes)


def extract_atom_entry(entry: Element, extract_content: bool = True) -> AtomItem:
    """Extract a single Atom ``entry`` element."""
    links = tuple(extract_link(link) for link in entry.iter_children("link"))

    # updated overwrites published
    date = read_text(entry, "published")
    updated = read_text(entry, "updated")
    if updated is not None:
        date = updated

    summary = None
    content = None
    if extract_content:
        summary = read_text(entry, "summary")
        content = read_text(entry, "content")

    return AtomItem(
        id=read_text(entry, "id"),
        links=links,
        title=read_text(entry, "title"),
        date=date,
        author=read_text(entry, "author"),
        summary=summary,
        content=content,
    )
