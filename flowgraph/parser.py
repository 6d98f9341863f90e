# flowgraph/parser.py
from __future__ import annotations

from typing import Sequence

from .constants import (
    ATTR_EXPRESSION,
    ATTR_FAILSAFE_OUTPUT_CHANNEL,
    ATTR_INPUT_CHANNEL,
    ATTR_NAME,
    ATTR_OUTPUT_CHANNEL,
    ATTR_REQUEST_CHANNEL,
    GATEWAY_ELEMENT,
    IGNORED_ELEMENTS,
    METHOD_ELEMENT,
    ROUTER_ELEMENT,
    SIMPLE_ELEMENTS,
)
from .errors import (
    EmptyExpressionOutputError,
    MalformedElementError,
    NoInputError,
    UnknownElementError,
)
from .expression import output_channels_from_expression
from .issues import IssueLog
from .registry import Registry, RegistryBuilder
from .xmltree import XmlElement, parse_document


def _require(elem: XmlElement, attr: str, what: str) -> str:
    value = elem.get(attr)
    if value is None:
        raise MalformedElementError(f"Node {elem.source} does not have {what}!")
    return value


class ConfigParser:
    """Turns integration XML documents into a Registry."""

    def __init__(self, issues: IssueLog) -> None:
        self._issues = issues
        self._builder = RegistryBuilder(issues)

    def parse(self, texts: Sequence[str]) -> Registry:
        if not texts:
            raise NoInputError("No XML provided!")

        for doc_id, text in enumerate(texts):
            self._process_document(doc_id, text)

        return self._builder.build()

    def _process_document(self, doc_id: int, text: str) -> None:
        root = parse_document(text)

        for elem in root.children:
            name = elem.local_name

            if name in IGNORED_ELEMENTS:
                continue
            if name == GATEWAY_ELEMENT:
                self._add_methods(doc_id, elem)
            elif name in SIMPLE_ELEMENTS:
                self._add_simple_node(doc_id, elem)
            elif name == ROUTER_ELEMENT:
                self._add_router_node(doc_id, elem)
            else:
                raise UnknownElementError(f"Unknown node: {elem.source}")

    def _add_methods(self, doc_id: int, gateway: XmlElement) -> None:
        for elem in gateway.iter_children(METHOD_ELEMENT):
            name = _require(elem, ATTR_NAME, "a method name")
            channel = _require(elem, ATTR_REQUEST_CHANNEL, "a method channel")
            self._builder.add_method(doc_id, name, elem.source, channel)

    def _add_simple_node(self, doc_id: int, elem: XmlElement) -> None:
        output_channel = elem.get(ATTR_OUTPUT_CHANNEL)
        self._add_node(doc_id, elem, [output_channel] if output_channel else [])

    def _add_router_node(self, doc_id: int, elem: XmlElement) -> None:
        expression = _require(elem, ATTR_EXPRESSION, "an expression")

        output_channels = output_channels_from_expression(expression, self._issues)
        if not output_channels:
            raise EmptyExpressionOutputError(
                f'Error parsing expression "{expression}": no output channels found!'
            )

        self._add_node(doc_id, elem, output_channels)

    def _add_node(self, doc_id: int, elem: XmlElement, output_channels: list[str]) -> None:
        input_channel = _require(elem, ATTR_INPUT_CHANNEL, "an input channel")

        failsafe = elem.get(ATTR_FAILSAFE_OUTPUT_CHANNEL)
        if failsafe and failsafe not in output_channels:
            output_channels.append(failsafe)

        self._builder.add_node(
            doc_id, elem.local_name, elem.source, input_channel, output_channels
        )


def parse_documents(texts: Sequence[str], issues: IssueLog) -> Registry:
    """Parse all documents into a fresh Registry.

    Raises a FlowGraphError subclass on any fatal condition.
    """
    return ConfigParser(issues).parse(texts)
