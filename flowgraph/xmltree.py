# flowgraph/xmltree.py
"""Minimal XML element tree that keeps the raw source text of every element.

ElementTree drops the original markup (and rewrites namespace prefixes on
serialization), so the tree is built directly from expat events and each
element's source is sliced out of the input by byte offset.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional
from xml.parsers import expat

from .errors import MalformedDocumentError


def local_name(qualified: str) -> str:
    """Drop a namespace prefix (`int:router` -> `router`)."""
    _, sep, rest = qualified.partition(":")
    return rest if sep else qualified


@dataclass
class XmlElement:
    name: str
    attrs: dict[str, str]
    children: list["XmlElement"] = field(default_factory=list)
    source: str = ""

    @property
    def local_name(self) -> str:
        return local_name(self.name)

    def get(self, attr: str) -> Optional[str]:
        """Attribute value, or None when absent or empty."""
        value = self.attrs.get(attr)
        return value if value else None

    def iter_children(self, name: Optional[str] = None) -> Iterator["XmlElement"]:
        for child in self.children:
            if name is None or child.local_name == name:
                yield child


def _tag_end(data: bytes, start: int) -> int:
    """Index just past the `>` closing the tag that begins at `start`."""
    quote: Optional[int] = None
    for i in range(start, len(data)):
        ch = data[i]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in (0x22, 0x27):  # " or '
            quote = ch
        elif ch == 0x3E:  # >
            return i + 1
    return len(data)


def _element_end(data: bytes, start: int, end_event_index: int) -> int:
    start_tag_end = _tag_end(data, start)
    if data[start_tag_end - 2 : start_tag_end] == b"/>":
        return start_tag_end
    # Otherwise the end event sits on the `</name>` tag.
    return data.index(b">", end_event_index) + 1


def parse_document(text: str) -> XmlElement:
    """Parse XML text and return the root element.

    Raises MalformedDocumentError when the text is not well-formed.
    """
    # A str is always fed to expat as UTF-8, so byte offsets index this buffer.
    data = text.encode("utf-8")
    parser = expat.ParserCreate()

    stack: list[tuple[XmlElement, int]] = []
    roots: list[XmlElement] = []

    def on_start(name: str, attrs: dict[str, str]) -> None:
        elem = XmlElement(name=name, attrs=dict(attrs))
        if stack:
            stack[-1][0].children.append(elem)
        else:
            roots.append(elem)
        stack.append((elem, parser.CurrentByteIndex))

    def on_end(name: str) -> None:
        elem, start = stack.pop()
        end = _element_end(data, start, parser.CurrentByteIndex)
        elem.source = data[start:end].decode("utf-8")

    parser.StartElementHandler = on_start
    parser.EndElementHandler = on_end

    try:
        parser.Parse(text, True)
    except expat.ExpatError as exc:
        raise MalformedDocumentError(
            f"Cannot parse XML: {expat.ErrorString(exc.code)} "
            f"(line {exc.lineno}, column {exc.offset})"
        ) from exc

    if not roots:
        raise MalformedDocumentError("Cannot parse XML: no root element")
    return roots[0]
