"""Public API for flowgraph."""
from .builder import GraphDefinition, build_graph
from .errors import ErrorKind, FlowGraphError
from .issues import Issue, IssueConfig, IssueLog
from .parser import parse_documents
from .registry import Registry
from .serializer import render_graph
from .session import FlowGraphSession, ProcessResult

__all__ = [
    "ErrorKind",
    "FlowGraphError",
    "FlowGraphSession",
    "GraphDefinition",
    "Issue",
    "IssueConfig",
    "IssueLog",
    "ProcessResult",
    "Registry",
    "build_graph",
    "parse_documents",
    "render_graph",
]
