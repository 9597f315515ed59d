"""Error types raised while turning a feed document into a Feed."""


class FeedError(ValueError):
    """Base class for every error raised by feed parsing."""


class XmlSyntaxError(FeedError):
    """The document is not well-formed XML.

    Carries the 1-based line and column of the offending byte together with
    the message reported by the XML parser.
    """

    def __init__(self, line: int, column: int, message: str):
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"Error on line {line} column {column}: {message}")


class InvalidChannelError(FeedError):
    """An RSS document has no channel element."""

    def __init__(self):
        super().__init__("Invalid RSS channel.")


class UnsupportedFormatError(FeedError):
    """The root element is neither rss nor feed."""

    def __init__(self):
        super().__init__("Invalid feed.")
