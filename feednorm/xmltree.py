"""Minimal namespace-unaware XML tree built on top of expat.

Element names are kept exactly as written in the document, so a prefixed
name such as ``dc:date`` is matched literally. Text runs made only of XML
whitespace between tags are dropped. Any other run is kept verbatim.
"""

from collections.abc import Iterator
from xml.parsers import expat

from .errors import XmlSyntaxError

XML_WHITESPACE = " \t\r\n"


class Element:
    """A parsed element: its name, attributes and ordered content nodes."""

    __slots__ = ("name", "attributes", "children")

    def __init__(self, name: str, attributes: dict[str, str] | None = None):
        self.name = name
        self.attributes = attributes or {}
        self.children: list["Element | str"] = []

    def __repr__(self) -> str:
        return f"<Element {self.name!r} at {id(self):#x}>"

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the value of attribute ``name`` or ``default``."""
        return self.attributes.get(name, default)

    def find(self, name: str) -> "Element | None":
        """Return the first child element called ``name``."""
        for child in self.children:
            if isinstance(child, Element) and child.name == name:
                return child
        return None

    def iter_children(self, name: str) -> Iterator["Element"]:
        """Yield every child element called ``name`` in document order."""
        for child in self.children:
            if isinstance(child, Element) and child.name == name:
                yield child

    @property
    def own_text(self) -> str:
        """First text run directly inside this element, or an empty string."""
        for child in self.children:
            if isinstance(child, str):
                return child
        return ""

    @property
    def value(self) -> str | None:
        """Value of the first content node, None when there is no content.

        A text run yields its text. A nested element yields its own text.
        """
        if not self.children:
            return None
        first = self.children[0]
        if isinstance(first, Element):
            return first.own_text
        return first


class _TreeBuilder:
    def __init__(self):
        self.root: Element | None = None
        self._stack: list[Element] = []
        self._text: list[str] = []
        self._in_cdata = False

    def start_element(self, name: str, attributes: dict[str, str]) -> None:
        self._flush()
        element = Element(name, attributes)
        if self._stack:
            self._stack[-1].children.append(element)
        else:
            self.root = element
        self._stack.append(element)

    def end_element(self, name: str) -> None:
        self._flush()
        self._stack.pop()

    def character_data(self, data: str) -> None:
        self._text.append(data)

    def start_cdata(self) -> None:
        self._flush()
        self._in_cdata = True

    def end_cdata(self) -> None:
        self._flush()
        self._in_cdata = False

    def comment(self, data: str) -> None:
        # Comments and processing instructions end a text run
        self._flush()

    def processing_instruction(self, target: str, data: str) -> None:
        self._flush()

    def _flush(self) -> None:
        if not self._text:
            return
        text = "".join(self._text)
        self._text = []
        if not self._stack:
            return
        # CDATA sections are content even when blank
        if self._in_cdata or text.strip(XML_WHITESPACE):
            self._stack[-1].children.append(text)


def parse_xml(data: str | bytes) -> Element:
    """Parse ``data`` into a tree and return the root element.

    Raises:
        XmlSyntaxError: If the document is not well-formed
    """
    builder = _TreeBuilder()
    parser = expat.ParserCreate()
    parser.StartElementHandler = builder.start_element
    parser.EndElementHandler = builder.end_element
    parser.CharacterDataHandler = builder.character_data
    parser.StartCdataSectionHandler = builder.start_cdata
    parser.EndCdataSectionHandler = builder.end_cdata
    parser.CommentHandler = builder.comment
    parser.ProcessingInstructionHandler = builder.processing_instruction

    try:
        parser.Parse(data, True)
    except expat.ExpatError as e:
        message = expat.ErrorString(e.code)
        if parser.ErrorByteIndex >= 0:
            line, column = locate_error(data, parser.ErrorByteIndex)
        else:
            # expat columns are 0-based, the first line counts from 1
            line = e.lineno
            column = e.offset + 1 if line == 1 else e.offset
        raise XmlSyntaxError(line, column, message) from e

    return builder.root


def read_text(parent: Element, name: str) -> str | None:
    """Read the text of the first child called ``name``.

    Returns None when there is no such child, an empty string when the child
    has no content and the child's text otherwise.
    """
    child = parent.find(name)
    if child is None:
        return None
    value = child.value
    return value if value is not None else ""


def locate_error(data: str | bytes, byte_offset: int) -> tuple[int, int]:
    """Convert a byte offset into a (line, column) pair.

    Lines count from 1. Columns count from 1 on the first line and from 0 on
    every line after a newline. Text is measured in its UTF-8 encoding,
    which is what expat reports offsets against when it is fed a ``str``.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    line = 1
    column = 1
    for byte in data[: max(byte_offset, 0)]:
        if byte == 0x0A:
            line += 1
            column = 0
        else:
            column += 1
    return line, column
