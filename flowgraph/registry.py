# flowgraph/registry.py
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Optional, Sequence

from .constants import METHOD_ID_PREFIX, NODE_ID_PREFIX
from .errors import DuplicateMethodError, NoMethodsFoundError
from .issues import W_DUPLICATE_INPUT_CHANNEL, IssueLog
from .model import EntryPoint, ProcessingNode


class Registry:
    """Read-only index of the entry points and nodes of one document set."""

    def __init__(
        self, methods: Iterable[EntryPoint], nodes: Iterable[ProcessingNode]
    ) -> None:
        methods = tuple(methods)
        nodes = tuple(nodes)
        self._method_ids: tuple[str, ...] = tuple(m.id for m in methods)
        self._methods_by_id = MappingProxyType({m.id: m for m in methods})
        self._methods_by_name = MappingProxyType({m.name: m for m in methods})
        self._nodes_by_id = MappingProxyType({n.id: n for n in nodes})
        self._nodes_by_input_channel = MappingProxyType(
            {n.input_channel: n for n in nodes}
        )

    @property
    def method_ids(self) -> tuple[str, ...]:
        return self._method_ids

    def method_by_id(self, method_id: str) -> Optional[EntryPoint]:
        return self._methods_by_id.get(method_id)

    def method_by_name(self, name: str) -> Optional[EntryPoint]:
        return self._methods_by_name.get(name)

    def node_by_id(self, node_id: str) -> Optional[ProcessingNode]:
        return self._nodes_by_id.get(node_id)

    def node_by_input_channel(self, channel: str) -> Optional[ProcessingNode]:
        return self._nodes_by_input_channel.get(channel)

    def methods(self) -> Iterator[EntryPoint]:
        return iter(self._methods_by_id.values())

    def nodes(self) -> Iterator[ProcessingNode]:
        return iter(self._nodes_by_id.values())

    def has_method_ids(self, method_ids: Sequence[str]) -> bool:
        """True when `method_ids` is exactly this registry's ids, in order."""
        return tuple(method_ids) == self._method_ids


class RegistryBuilder:
    """Collects entities while documents are parsed and assigns their ids.

    Entry point names and node input channels must be unique across all
    documents. A repeated method name is fatal; a repeated input channel is
    reported as a warning and the later node is dropped.
    """

    def __init__(self, issues: IssueLog) -> None:
        self._issues = issues
        self._methods: dict[str, EntryPoint] = {}
        self._nodes: dict[str, ProcessingNode] = {}
        self._method_counter = 0
        self._node_counter = 0

    def add_method(
        self, source_doc_id: int, name: str, source: str, channel: str
    ) -> EntryPoint:
        if name in self._methods:
            raise DuplicateMethodError(f"Method {name} is repeated!")

        method = EntryPoint(
            id=f"{METHOD_ID_PREFIX}{self._method_counter}",
            source_doc_id=source_doc_id,
            name=name,
            source=source,
            channel=channel,
        )
        self._method_counter += 1
        self._methods[name] = method
        return method

    def add_node(
        self,
        source_doc_id: int,
        kind: str,
        source: str,
        input_channel: str,
        output_channels: Sequence[str],
    ) -> Optional[ProcessingNode]:
        if input_channel in self._nodes:
            self._issues.warn(
                W_DUPLICATE_INPUT_CHANNEL,
                f"Input channel {input_channel} is not unique! Only the first one was added.",
            )
            return None

        node = ProcessingNode(
            id=f"{NODE_ID_PREFIX}{self._node_counter}",
            source_doc_id=source_doc_id,
            kind=kind,
            source=source,
            input_channel=input_channel,
            output_channels=tuple(output_channels),
        )
        self._node_counter += 1
        self._nodes[input_channel] = node
        return node

    def build(self) -> Registry:
        if not self._methods:
            raise NoMethodsFoundError("No method found!")
        return Registry(self._methods.values(), self._nodes.values())
