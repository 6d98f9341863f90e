# flowgraph/mermaid_fmt.py
from __future__ import annotations

import re

# Mermaid node IDs must be alphanumeric/underscore and must not start with a
# digit.
MERMAID_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Handler names are bound as JS callbacks by the renderer.
MERMAID_CALLBACK_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def mermaid_block(code: str) -> str:
    """Wrap Mermaid source in a Markdown Mermaid code fence."""
    return "```mermaid\n" + code.rstrip() + "\n```\n"


def mm_text(text: str) -> str:
    """Escape text for Mermaid labels.

    Input is already entity-decoded; only line breaks are replaced.
    """
    flat = re.sub(r"\r\n|[\r\n]", " ", str(text))
    return (
        flat.replace("&", "#amp;")
        .replace("<", "#lt;")
        .replace(">", "#gt;")
        .replace('"', "#quot;")
        .replace("|", "#124;")
    )


def assert_mm_id(value: str) -> str:
    if not MERMAID_ID_RE.match(value):
        raise ValueError(f"Not Mermaid-safe id: {value!r}")
    return value


def mm_flow_node(node_id: str, label: str) -> str:
    return f'{assert_mm_id(node_id)}["{mm_text(label)}"]'


def mm_flow_edge(src: str, dst: str) -> str:
    return f"{src} ---> {dst}"


def mm_class_apply(node_id: str, class_name: str) -> str:
    return f"class {node_id} {class_name}"


def mm_click_callback(node_id: str, callback: str) -> str:
    if not MERMAID_CALLBACK_RE.match(callback):
        raise ValueError(f"Not a valid click callback name: {callback!r}")
    return f"click {node_id} {callback}"


def mm_subgraph_open(title: str) -> str:
    return f'subgraph "{mm_text(title)}"'


def mm_subgraph_close() -> str:
    return "end"


def mm_comment(text: str) -> str:
    # Ensure it won't be parsed as a directive.
    t = str(text).replace("\n", " ").strip()
    if t.startswith("{"):
        t = " " + t
    return f"%% {t}"


def mm_section_start(name: str) -> str:
    return mm_comment(f"---------- START {name} ----------")


def mm_section_end(name: str) -> str:
    return mm_comment(f"---------- END {name} ----------")
