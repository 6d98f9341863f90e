# flowgraph/io.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

_CONFIG_KEYS = frozenset({"documents", "methods", "out", "strict", "ignore", "escalate"})


@dataclass(frozen=True)
class FlowGraphConfig:
    """Settings read from a flowgraph YAML file."""

    documents: tuple[Path, ...] = ()
    methods: tuple[str, ...] = ()
    out: Optional[Path] = None
    strict: bool = False
    ignore: frozenset[str] = field(default_factory=frozenset)
    escalate: frozenset[str] = field(default_factory=frozenset)


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML {path}: {e}") from e

    # An empty file is an empty config.
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise TypeError(
            f"Top-level YAML must be a mapping in {path}, got {type(data).__name__}"
        )

    return data


def _str_list(data: dict[str, Any], key: str, path: Path) -> list[str]:
    value = data.get(key, []) or []
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise TypeError(f"{path}: `{key}` must be a list of non-empty strings")
    return value


def load_config(path: Path) -> FlowGraphConfig:
    """Load a flowgraph config file.

    Relative document and output paths are resolved against the directory
    holding the config file.
    """
    if not path.exists():
        raise FileNotFoundError(str(path))

    data = _load_yaml_mapping(path)
    base = path.resolve().parent

    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        raise ValueError(f"{path}: unknown config key(s): {', '.join(unknown)}")

    out = data.get("out")
    if out is not None and not (isinstance(out, str) and out):
        raise TypeError(f"{path}: `out` must be a non-empty string")

    strict = data.get("strict", False)
    if not isinstance(strict, bool):
        raise TypeError(f"{path}: `strict` must be a boolean")

    return FlowGraphConfig(
        documents=tuple(base / p for p in _str_list(data, "documents", path)),
        methods=tuple(_str_list(data, "methods", path)),
        out=base / out if out else None,
        strict=strict,
        ignore=frozenset(_str_list(data, "ignore", path)),
        escalate=frozenset(_str_list(data, "escalate", path)),
    )


def read_documents(paths: Sequence[Path]) -> list[str]:
    """Read XML documents in the given order."""
    return [p.read_text(encoding="utf-8") for p in paths]
