"""Feed dispatching: turns raw RSS or Atom text into a Feed."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .atom import extract_atom
from .config import Config
from .errors import FeedError, UnsupportedFormatError
from .logging_config import create_execution_logger
from .models import Feed
from .rss import extract_rss
from .xmltree import parse_xml

logger = logging.getLogger("feednorm.parser")


def parse_feed(xml_text: str | bytes, extract_content: bool = True) -> Feed:
    """Parse an RSS 2.0 or Atom 1.0 document.

    Args:
        xml_text: The complete feed document
        extract_content: When False, RSS descriptions and Atom
            summaries/content are not extracted

    Returns:
        The normalized Feed

    Raises:
        TypeError: If xml_text is neither str nor bytes
        XmlSyntaxError: If the document is not well-formed XML
        InvalidChannelError: If an RSS document has no channel
        UnsupportedFormatError: If the root is neither rss nor feed
    """
    if not isinstance(xml_text, (str, bytes)):
        raise TypeError(
            f"xml_text must be str or bytes, not {type(xml_text).__name__}"
        )

    root = parse_xml(xml_text)

    if root.name == "rss":
        feed = extract_rss(root, extract_content)
    elif root.name == "feed":
        feed = extract_atom(root, extract_content)
    else:
        logger.debug("Unsupported root element %r", root.name)
        raise UnsupportedFormatError()

    logger.debug("Parsed %s feed with %d items", feed.type.value, len(feed.items))
    return feed


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one document: either a feed or an error."""

    source: str
    feed: Feed | None = None
    error: FeedError | None = None

    def __post_init__(self):
        if (self.feed is None) == (self.error is None):
            raise ValueError("ParseResult needs exactly one of feed or error")

    @property
    def ok(self) -> bool:
        return self.error is None


class FeedProcessor:
    """Parses batches of feed documents without stopping on bad ones."""

    def __init__(
        self, extract_content: bool | None = None, execution_id: str | None = None
    ):
        """Initialize FeedProcessor.

        Args:
            extract_content: Whether to extract item content, taken from
                the environment configuration when None
            execution_id: Execution ID for logging context
        """
        if extract_content is None:
            extract_content = Config().get_parser_config().extract_content
        self.extract_content = extract_content
        self.logger = create_execution_logger("processor", execution_id)

        self.logger.info("FeedProcessor initialized", extract_content=extract_content)

    def process(self, source: str, xml_text: str | bytes) -> ParseResult:
        """Parse a single document, capturing feed errors in the result.

        Args:
            source: Name of the document used in logs (e.g. its URL)
            xml_text: The complete feed document

        Returns:
            ParseResult holding either the Feed or the FeedError
        """
        try:
            feed = parse_feed(xml_text, self.extract_content)
        except FeedError as e:
            self.logger.log_feed_failure(source, e)
            return ParseResult(source=source, error=e)

        self.logger.log_feed_processing(source, feed.type.value, len(feed.items))
        return ParseResult(source=source, feed=feed)

    def process_all(
        self,
        documents: Mapping[str, str | bytes] | Iterable[tuple[str, str | bytes]],
    ) -> list[ParseResult]:
        """Parse several documents, in order.

        Args:
            documents: Mapping of source name to text, or (source, text) pairs

        Returns:
            One ParseResult per document, in input order
        """
        if isinstance(documents, Mapping):
            documents = documents.items()
        documents = list(documents)

        self.logger.log_execution_start(document_count=len(documents))

        results = [self.process(source, xml_text) for source, xml_text in documents]

        failures = [result for result in results if not result.ok]
        metrics = {
            "documents_processed": len(results),
            "feeds_parsed": len(results) - len(failures),
            "items_found": sum(len(r.feed.items) for r in results if r.ok),
            "errors": [f"{r.source}: {r.error}" for r in failures],
        }
        self.logger.log_metrics(metrics)
        self.logger.log_execution_end(success=True, failed_documents=len(failures))
        return results
