# flowgraph/session.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, TypeVar

from .builder import GraphDefinition, build_graph
from .errors import FlowGraphError, NoInputError, NoMethodSelectedError, UnknownIdError
from .issues import Issue, IssueConfig, IssueLog
from .model import EntryPoint, NodeDetails
from .parser import parse_documents
from .registry import Registry
from .serializer import render_graph

T = TypeVar("T")


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one "process configs" action.

    Exactly one of `method_choices` (a new method list to choose from) or
    `graph` (rendered text for the current selection) is set on success.
    """

    ok: bool
    method_choices: tuple[EntryPoint, ...] = ()
    graph: Optional[str] = None
    issues: tuple[Issue, ...] = ()
    error: Optional[FlowGraphError] = None

    @property
    def errors(self) -> list[str]:
        """Messages of issues escalated to errors."""
        return [iss.message for iss in self.issues if iss.severity == "error"]

    @property
    def warnings(self) -> list[str]:
        return [iss.message for iss in self.issues if iss.severity == "warning"]


@dataclass
class FlowGraphSession:
    """Holds the current Registry between user actions.

    Every `process` call discards the previous Registry and graph before
    parsing. Fatal errors are caught here, once per action.
    """

    issue_config: IssueConfig = field(default_factory=IssueConfig)
    on_issue: Optional[Callable[[Issue], None]] = None
    registry: Optional[Registry] = field(default=None, init=False)
    graph: Optional[GraphDefinition] = field(default=None, init=False)
    last_error: Optional[FlowGraphError] = field(default=None, init=False)

    def process(
        self,
        texts: Sequence[str],
        selected_ids: Sequence[str] = (),
        available_ids: Optional[Sequence[str]] = None,
    ) -> ProcessResult:
        """Parse `texts`; render the selection if the method list is unchanged.

        `available_ids` is the method id list the caller currently offers for
        selection. When it matches the new Registry the selection is rendered,
        otherwise the new method list is returned instead.
        """
        self.registry = None
        self.graph = None
        self.last_error = None
        issues = IssueLog(self.issue_config, on_issue=self.on_issue)

        try:
            # Blank inputs are treated as not supplied.
            documents = [text for text in texts if text and text.strip()]
            registry = parse_documents(documents, issues)
            self.registry = registry

            if available_ids is None or not registry.has_method_ids(available_ids):
                return ProcessResult(
                    ok=True,
                    method_choices=tuple(registry.methods()),
                    issues=issues.issues,
                )

            if not selected_ids:
                raise NoMethodSelectedError("No method selected!")

            self.graph = build_graph(registry, selected_ids, issues)
            return ProcessResult(
                ok=True, graph=render_graph(self.graph), issues=issues.issues
            )
        except FlowGraphError as exc:
            self._discard(exc)
            return ProcessResult(ok=False, issues=issues.issues, error=exc)

    def render(self, selected_ids: Sequence[str]) -> ProcessResult:
        """Render a selection against the current Registry without re-parsing."""
        issues = IssueLog(self.issue_config, on_issue=self.on_issue)
        try:
            if self.registry is None:
                raise NoInputError("No XML processed yet!")
            if not selected_ids:
                raise NoMethodSelectedError("No method selected!")
            self.graph = build_graph(self.registry, selected_ids, issues)
            return ProcessResult(
                ok=True, graph=render_graph(self.graph), issues=issues.issues
            )
        except FlowGraphError as exc:
            self._discard(exc)
            return ProcessResult(ok=False, issues=issues.issues, error=exc)

    def method_details(self, method_id: str) -> NodeDetails:
        method = self.registry.method_by_id(method_id) if self.registry else None
        if method is None:
            raise UnknownIdError(f"Method {method_id} not found!")
        return NodeDetails(id=method.id, title=method.title, source=method.source)

    def node_details(self, node_id: str) -> NodeDetails:
        node = self.registry.node_by_id(node_id) if self.registry else None
        if node is None:
            raise UnknownIdError(f"Node {node_id} not found!")
        return NodeDetails(id=node.id, title=node.title, source=node.source)

    def handle_click(self, lookup: Callable[[str], T], node_id: str) -> Optional[T]:
        """Run a click lookup; on failure discard state and return None."""
        try:
            return lookup(node_id)
        except FlowGraphError as exc:
            self._discard(exc)
            return None

    def _discard(self, exc: FlowGraphError) -> None:
        self.registry = None
        self.graph = None
        self.last_error = exc
