# flowgraph/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from .constants import CONFIG_FILENAME_DEFAULT
from .io import FlowGraphConfig, load_config, read_documents
from .issues import Issue, IssueConfig
from .session import FlowGraphSession, ProcessResult
from .writer import write_graph


def _print_issue(issue: Issue) -> None:
    print(f"{issue.severity}: {issue.message}", file=sys.stderr)
    if issue.hint:
        print(f"hint: {issue.hint}", file=sys.stderr)


def _fail(message: str) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(2)


def _check_issues(result: ProcessResult, strict: bool) -> None:
    # Issues were already printed as they were recorded.
    if result.errors:
        _fail(f"{len(result.errors)} escalated warning(s)")
    if strict and result.warnings:
        _fail(f"{len(result.warnings)} warning(s) with --strict")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flowgraph",
        description="Generate a Mermaid flowchart from Spring Integration XML files.",
    )
    parser.add_argument(
        "documents",
        nargs="*",
        type=Path,
        help="Integration XML files (document order defines subgraph order)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"YAML config file (default: ./{CONFIG_FILENAME_DEFAULT} when no documents are given)",
    )
    parser.add_argument(
        "--method",
        dest="methods",
        action="append",
        default=[],
        metavar="NAME",
        help="Gateway method to start from (repeatable; default: all methods)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file (.md wraps the diagram in a mermaid fence); default stdout",
    )
    parser.add_argument(
        "--list-methods",
        action="store_true",
        help="List gateway methods (id, name, request channel) and exit",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on warnings (duplicate channels, dynamic expressions, missing channels).",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="CODE",
        help="Warning code to suppress, e.g. W_CHANNEL_NOT_FOUND (repeatable)",
    )
    parser.add_argument(
        "--escalate",
        action="append",
        default=[],
        metavar="CODE",
        help="Warning code to report as an error and fail on (repeatable)",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> FlowGraphConfig:
    config_path: Optional[Path] = args.config
    if config_path is None and not args.documents:
        default = Path.cwd() / CONFIG_FILENAME_DEFAULT
        if default.exists():
            config_path = default

    cfg = load_config(config_path) if config_path is not None else FlowGraphConfig()

    # Command line values win over the config file.
    return FlowGraphConfig(
        documents=tuple(args.documents) or cfg.documents,
        methods=tuple(args.methods) or cfg.methods,
        out=args.out or cfg.out,
        strict=args.strict or cfg.strict,
        ignore=cfg.ignore | frozenset(args.ignore),
        escalate=cfg.escalate | frozenset(args.escalate),
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    args = _build_parser().parse_args(argv)

    try:
        cfg = _resolve_config(args)
        texts = read_documents(cfg.documents)
    except (OSError, ValueError, TypeError) as exc:
        _fail(str(exc))

    session = FlowGraphSession(
        issue_config=IssueConfig(ignore=cfg.ignore, escalate=cfg.escalate),
        on_issue=_print_issue,
    )

    parsed = session.process(texts)
    if not parsed.ok:
        _fail(str(parsed.error))
    _check_issues(parsed, cfg.strict)

    registry = session.registry
    if registry is None:
        _fail("No XML processed!")

    if args.list_methods:
        for method in registry.methods():
            print(f"{method.id}\t{method.name}\t{method.channel}")
        return

    selected: list[str] = []
    for name in cfg.methods:
        method = registry.method_by_name(name)
        if method is None:
            _fail(f"Method {name} not found!")
        selected.append(method.id)
    if not selected:
        selected = list(registry.method_ids)

    rendered = session.render(selected)
    if not rendered.ok or rendered.graph is None:
        _fail(str(rendered.error))
    _check_issues(rendered, cfg.strict)

    if cfg.out is None:
        sys.stdout.write(rendered.graph + "\n")
        return

    try:
        title = "Integration flow: " + ", ".join(
            registry.method_by_id(mid).name for mid in dict.fromkeys(selected)
        )
        write_graph(cfg.out, title, rendered.graph)
    except OSError as exc:
        _fail(f"failed to write output file: {cfg.out} ({exc})")
    print(f"Wrote {cfg.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
