# flowgraph/issues.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Optional

Severity = Literal["error", "warning"]

W_DUPLICATE_INPUT_CHANNEL = "W_DUPLICATE_INPUT_CHANNEL"
W_AMBIGUOUS_EXPRESSION = "W_AMBIGUOUS_EXPRESSION"
W_DYNAMIC_EXPRESSION = "W_DYNAMIC_EXPRESSION"
W_CHANNEL_NOT_FOUND = "W_CHANNEL_NOT_FOUND"


@dataclass(frozen=True)
class Issue:
    """A non-fatal finding recorded while parsing or building."""

    severity: Severity
    code: str
    message: str
    hint: Optional[str] = None


@dataclass(frozen=True)
class IssueConfig:
    """Per-code controls: drop a warning code, or report it as an error."""

    ignore: frozenset[str] = field(default_factory=frozenset)
    escalate: frozenset[str] = field(default_factory=frozenset)


class IssueLog:
    """Ordered collector of issues.

    Warnings never change control flow. `on_issue` is called as soon as an
    issue is recorded so callers can surface it immediately.
    """

    def __init__(
        self,
        cfg: Optional[IssueConfig] = None,
        on_issue: Optional[Callable[[Issue], None]] = None,
    ) -> None:
        self._cfg = cfg or IssueConfig()
        self._on_issue = on_issue
        self._issues: list[Issue] = []

    def warn(self, code: str, message: str, hint: Optional[str] = None) -> None:
        if code in self._cfg.ignore:
            return
        severity: Severity = "error" if code in self._cfg.escalate else "warning"
        issue = Issue(severity=severity, code=code, message=message, hint=hint)
        self._issues.append(issue)
        if self._on_issue is not None:
            self._on_issue(issue)

    def clear(self) -> None:
        self._issues.clear()

    @property
    def issues(self) -> tuple[Issue, ...]:
        return tuple(self._issues)

    def codes(self) -> list[str]:
        return [iss.code for iss in self._issues]

    def __len__(self) -> int:
        return len(self._issues)
