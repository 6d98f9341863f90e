from pathlib import Path

import pytest

from flowgraph.io import load_config, read_documents
from flowgraph.writer import write_graph

FLOWS = Path(__file__).resolve().parents[1] / "fixtures" / "flows"


def test_load_config_resolves_relative_paths():
    cfg = load_config(FLOWS / "flowgraph.yaml")
    base = FLOWS.resolve()
    assert cfg.documents == (base / "orders.xml", base / "billing.xml")
    assert cfg.methods == ("placeOrder",)
    assert cfg.out is None
    assert cfg.strict is False
    assert cfg.ignore == frozenset({"W_CHANNEL_NOT_FOUND"})
    assert cfg.escalate == frozenset()


def test_empty_config_file(tmp_path):
    path = tmp_path / "flowgraph.yaml"
    path.write_text("", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.documents == ()
    assert cfg.methods == ()


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unparseable_yaml(tmp_path):
    path = tmp_path / "flowgraph.yaml"
    path.write_text("documents: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to parse YAML"):
        load_config(path)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "flowgraph.yaml"
    path.write_text("- a\n", encoding="utf-8")
    with pytest.raises(TypeError, match="must be a mapping"):
        load_config(path)


def test_read_documents_keeps_order():
    texts = read_documents([FLOWS / "billing.xml", FLOWS / "orders.xml"])
    assert "billing.in" in texts[0]
    assert "placeOrder" in texts[1]


def test_write_graph_by_suffix(tmp_path):
    write_graph(tmp_path / "out" / "g.md", "Title", "graph TD")
    write_graph(tmp_path / "g.mmd", "Title", "graph TD")
    assert (tmp_path / "out" / "g.md").read_text(encoding="utf-8") == (
        "# Title\n\n```mermaid\ngraph TD\n```\n"
    )
    assert (tmp_path / "g.mmd").read_text(encoding="utf-8") == "graph TD\n"
