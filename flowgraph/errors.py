# flowgraph/errors.py
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Stable codes for every fatal condition."""

    NO_INPUT = "E_NO_INPUT"
    NO_METHODS_FOUND = "E_NO_METHODS_FOUND"
    MALFORMED_DOCUMENT = "E_MALFORMED_DOCUMENT"
    UNKNOWN_ELEMENT = "E_UNKNOWN_ELEMENT"
    MALFORMED_ELEMENT = "E_MALFORMED_ELEMENT"
    DUPLICATE_METHOD = "E_DUPLICATE_METHOD"
    EMPTY_EXPRESSION_OUTPUT = "E_EMPTY_EXPRESSION_OUTPUT"
    NO_METHOD_SELECTED = "E_NO_METHOD_SELECTED"
    UNKNOWN_ID = "E_UNKNOWN_ID"


class FlowGraphError(ValueError):
    """Fatal error: aborts the current parse/build action."""

    kind: ErrorKind = ErrorKind.MALFORMED_DOCUMENT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        return self.message


class NoInputError(FlowGraphError):
    kind = ErrorKind.NO_INPUT


class NoMethodsFoundError(FlowGraphError):
    kind = ErrorKind.NO_METHODS_FOUND


class MalformedDocumentError(FlowGraphError):
    """Raised when a document is not well-formed XML."""

    kind = ErrorKind.MALFORMED_DOCUMENT


class UnknownElementError(FlowGraphError):
    kind = ErrorKind.UNKNOWN_ELEMENT


class MalformedElementError(FlowGraphError):
    """Raised when a recognized element lacks a required attribute."""

    kind = ErrorKind.MALFORMED_ELEMENT


class DuplicateMethodError(FlowGraphError):
    kind = ErrorKind.DUPLICATE_METHOD


class EmptyExpressionOutputError(FlowGraphError):
    kind = ErrorKind.EMPTY_EXPRESSION_OUTPUT


class NoMethodSelectedError(FlowGraphError):
    kind = ErrorKind.NO_METHOD_SELECTED


class UnknownIdError(FlowGraphError):
    """Raised when a method or node id does not exist in the registry."""

    kind = ErrorKind.UNKNOWN_ID
