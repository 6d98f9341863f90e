# flowgraph/builder.py
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .constants import (
    METHOD_CLASS,
    METHOD_CLICK_HANDLER,
    NODE_CLASS_PREFIX,
    NODE_CLICK_HANDLER,
    NOT_FOUND_CLASS,
    PLACEHOLDER_ID_PREFIX,
)
from .errors import UnknownIdError
from .issues import W_CHANNEL_NOT_FOUND, IssueLog
from .model import PlaceholderNode, ProcessingNode
from .registry import Registry


@dataclass(frozen=True)
class NodeDef:
    node_id: str
    label: str


@dataclass(frozen=True)
class EdgeDef:
    source: str
    target: str


@dataclass(frozen=True)
class StyleDef:
    node_id: str
    class_name: str


@dataclass(frozen=True)
class ClickDef:
    node_id: str
    handler: str


@dataclass
class GraphDefinition:
    """Definitions of one build, each list in first-emitted order."""

    nodes_by_doc: dict[int, list[NodeDef]] = field(default_factory=dict)
    ungrouped: list[NodeDef] = field(default_factory=list)
    edges: list[EdgeDef] = field(default_factory=list)
    styles: list[StyleDef] = field(default_factory=list)
    clicks: list[ClickDef] = field(default_factory=list)
    placeholders: dict[str, PlaceholderNode] = field(default_factory=dict)

    def add_node(self, node_id: str, label: str, source_doc_id: Optional[int] = None) -> None:
        definition = NodeDef(node_id, label)
        if source_doc_id is None:
            self.ungrouped.append(definition)
        else:
            self.nodes_by_doc.setdefault(source_doc_id, []).append(definition)

    def groups(self) -> list[tuple[int, list[NodeDef]]]:
        """Document groups in ascending document order."""
        return sorted(self.nodes_by_doc.items())

    def node_count(self) -> int:
        return sum(len(defs) for defs in self.nodes_by_doc.values()) + len(self.ungrouped)


class GraphBuilder:
    """Breadth-first walk from the selected entry points over channel links.

    Each real node is emitted once. Channels with no consuming node become
    placeholder leaves shared by every edge that points at them.
    """

    def __init__(self, registry: Registry, issues: IssueLog) -> None:
        self._registry = registry
        self._issues = issues

    def build(self, selected_method_ids: Sequence[str]) -> GraphDefinition:
        graph = GraphDefinition()
        queue: deque[ProcessingNode] = deque()
        visited: set[str] = set()

        for method_id in dict.fromkeys(selected_method_ids):
            self._seed(graph, queue, method_id)

        while queue:
            node = queue.popleft()
            if node.id in visited:
                continue
            visited.add(node.id)

            graph.add_node(node.id, node.label, node.source_doc_id)
            graph.styles.append(StyleDef(node.id, f"{NODE_CLASS_PREFIX}{node.kind}"))
            graph.clicks.append(ClickDef(node.id, NODE_CLICK_HANDLER))

            for channel in node.output_channels:
                self._link(graph, queue, node.id, channel)

        return graph

    def _seed(self, graph: GraphDefinition, queue: deque[ProcessingNode], method_id: str) -> None:
        method = self._registry.method_by_id(method_id)
        if method is None:
            raise UnknownIdError(f"Method {method_id} not found!")

        graph.add_node(method.id, method.label, method.source_doc_id)
        graph.styles.append(StyleDef(method.id, METHOD_CLASS))
        graph.clicks.append(ClickDef(method.id, METHOD_CLICK_HANDLER))

        self._link(graph, queue, method.id, method.channel)

    def _link(
        self,
        graph: GraphDefinition,
        queue: deque[ProcessingNode],
        source_id: str,
        channel: str,
    ) -> None:
        target = self._registry.node_by_input_channel(channel)
        if target is not None:
            graph.edges.append(EdgeDef(source_id, target.id))
            queue.append(target)
            return

        placeholder = graph.placeholders.get(channel)
        if placeholder is None:
            placeholder = PlaceholderNode(
                id=f"{PLACEHOLDER_ID_PREFIX}{len(graph.placeholders)}", channel=channel
            )
            graph.placeholders[channel] = placeholder

            graph.add_node(placeholder.id, placeholder.label)
            graph.styles.append(StyleDef(placeholder.id, NOT_FOUND_CLASS))
            self._issues.warn(
                W_CHANNEL_NOT_FOUND,
                f"There is no node with {channel} as input channel.",
                hint="Maybe you need to import another XML?",
            )

        graph.edges.append(EdgeDef(source_id, placeholder.id))


def build_graph(
    registry: Registry, selected_method_ids: Sequence[str], issues: IssueLog
) -> GraphDefinition:
    return GraphBuilder(registry, issues).build(selected_method_ids)
