# flowgraph/model.py
from __future__ import annotations

from dataclasses import dataclass

from .constants import METHOD_LABEL_PREFIX, NOT_FOUND_LABEL_PREFIX


@dataclass(frozen=True)
class EntryPoint:
    """A gateway method: a named trigger that sends into a request channel."""

    id: str
    source_doc_id: int
    name: str
    source: str
    channel: str

    @property
    def label(self) -> str:
        return f"{METHOD_LABEL_PREFIX} {self.name}"

    @property
    def title(self) -> str:
        return f"Method {self.name}"


@dataclass(frozen=True)
class ProcessingNode:
    """A configured element with one input channel and its output channels."""

    id: str
    source_doc_id: int
    kind: str
    source: str
    input_channel: str
    output_channels: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        return f"[{self.kind}] {self.input_channel}"

    @property
    def title(self) -> str:
        return f"Node {self.input_channel} ({self.kind})"


@dataclass(frozen=True)
class PlaceholderNode:
    """Stand-in for a channel that no registered node consumes."""

    id: str
    channel: str

    @property
    def label(self) -> str:
        return f"{NOT_FOUND_LABEL_PREFIX} {self.channel}"


@dataclass(frozen=True)
class NodeDetails:
    """What the detail view shows for a clicked node."""

    id: str
    title: str
    source: str
