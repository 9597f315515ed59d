"""RSS 2.0 extraction."""

from .errors import InvalidChannelError
from .models import Feed, FeedType, RssItem
from .xmltree import Element, read_text


def extract_rss(rss: Element, extract_content: bool = True) -> Feed:
    """Extract a Feed from the root ``rss`` element.

    Args:
        rss: The ``rss`` root element
        extract_content: Whether to read item descriptions

    Returns:
        Feed of type RSS with one RssItem per ``item`` element

    Raises:
        InvalidChannelError: If there is no ``channel`` element
    """
    channel = rss.find("channel")
    if channel is None:
        raise InvalidChannelError()

    items = tuple(
        extract_rss_item(item, extract_content)
        for item in channel.iter_children("item")
    )

    return Feed(
        type=FeedType.RSS,
        title=read_text(channel, "title"),
        description=read_text(channel, "description"),
        link=read_text(channel, "link"),
        author=read_text(channel, "author"),
        items=items,
    )


def extract_rss_item(item: Element, extract_content: bool = True) -> RssItem:
    """Extract a single RSS ``item`` element."""
    date = read_text(item, "pubDate")

    # Sometimes given in the Dublin Core extension, which wins over pubDate
    dc_date = read_text(item, "dc:date")
    if dc_date is not None:
        date = dc_date

    description = None
    if extract_content:
        description = read_text(item, "description")

    return RssItem(
        id=read_text(item, "guid"),
        link=read_text(item, "link"),
        date=date,
        title=read_text(item, "title"),
        author=read_text(item, "author"),
        description=description,
    )
