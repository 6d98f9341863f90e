from __future__ import annotations

from pathlib import Path

from .mermaid_fmt import mermaid_block


def write_md(path: Path, title: str, diagram_code: str) -> None:
    """Write a titled Markdown file containing a Mermaid diagram block."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = f"# {title}\n\n{mermaid_block(diagram_code)}"
    path.write_text(content, encoding="utf-8")


def write_mmd(path: Path, diagram_code: str) -> None:
    """Write bare Mermaid source, newline-terminated."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(diagram_code.rstrip("\n") + "\n", encoding="utf-8")


def write_graph(path: Path, title: str, diagram_code: str) -> None:
    """Pick the output format from the file suffix (`.md` gets a fence)."""
    if path.suffix.lower() == ".md":
        write_md(path, title, diagram_code)
    else:
        write_mmd(path, diagram_code)
