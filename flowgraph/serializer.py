# flowgraph/serializer.py
from __future__ import annotations

from typing import Optional

from .builder import GraphDefinition
from .constants import (
    GRAPH_HEADER,
    GROUP_TITLE_PREFIX,
    SECTION_CLASSES,
    SECTION_CLICKS,
    SECTION_EDGES,
    SECTION_UNGROUPED,
)
from .mermaid_fmt import (
    mm_class_apply,
    mm_click_callback,
    mm_flow_edge,
    mm_flow_node,
    mm_section_end,
    mm_section_start,
    mm_subgraph_close,
    mm_subgraph_open,
)


def _section(
    lines: list[str],
    definitions: list[str],
    name: str,
    subgraph_title: Optional[str] = None,
) -> None:
    """Append one bracketed section; nothing at all when it has no entries."""
    if not definitions:
        return

    lines.append(mm_section_start(name))
    if subgraph_title is not None:
        lines.append(mm_subgraph_open(subgraph_title))
    lines.extend(f"{definition};" for definition in definitions)
    if subgraph_title is not None:
        lines.append(mm_subgraph_close())
    lines.append(mm_section_end(name))


def render_graph(graph: GraphDefinition) -> str:
    """Render a GraphDefinition as Mermaid flowchart text (no trailing newline)."""
    lines: list[str] = [GRAPH_HEADER]

    for doc_id, nodes in graph.groups():
        title = f"{GROUP_TITLE_PREFIX} {doc_id}"
        _section(
            lines,
            [mm_flow_node(n.node_id, n.label) for n in nodes],
            f"NODES - {title}",
            subgraph_title=title,
        )

    _section(
        lines,
        [mm_flow_node(n.node_id, n.label) for n in graph.ungrouped],
        SECTION_UNGROUPED,
    )
    _section(lines, [mm_flow_edge(e.source, e.target) for e in graph.edges], SECTION_EDGES)
    _section(
        lines, [mm_class_apply(s.node_id, s.class_name) for s in graph.styles], SECTION_CLASSES
    )
    _section(
        lines, [mm_click_callback(c.node_id, c.handler) for c in graph.clicks], SECTION_CLICKS
    )

    return "\n".join(lines)
