# flowgraph/expression.py
from __future__ import annotations

import re

from .issues import W_AMBIGUOUS_EXPRESSION, W_DYNAMIC_EXPRESSION, IssueLog

_QUOTED_RE = re.compile(r"'([^']+)'")


def _dedupe_into(out: list[str], items: list[str]) -> None:
    for item in items:
        if item not in out:
            out.append(item)


def _channels_from_value(expression: str, value: str, issues: IssueLog) -> list[str]:
    """Literal channel names of one sub-expression value."""
    matches = _QUOTED_RE.findall(value)
    if len(matches) == 1:
        return matches

    if matches:
        issues.warn(
            W_AMBIGUOUS_EXPRESSION,
            f"Unexpected multiple output channels in sub-expression: {value.strip()} "
            f"of {expression}. This may be a bug.",
        )
        return matches

    issues.warn(
        W_DYNAMIC_EXPRESSION,
        f"Cannot find any output channel as a string in sub-expression: {value.strip()} "
        f"of {expression}. This may be a bug or a dynamic output channel computation.",
        hint="If the channel is computed dynamically, replace it in the XML with fixed values.",
    )
    fallback = value.strip()
    # A blank fallback names no channel, so nothing is registered under "".
    return [fallback] if fallback else []


def output_channels_from_expression(expression: str, issues: IssueLog) -> list[str]:
    """Extract candidate output channels from a router expression.

    Handles ternary chains such as `a ? 'X' : b ? 'Y' : 'Z'`: condition clauses
    are dropped and each branch value contributes its quoted literal(s).
    Result order is first appearance; duplicates are removed across the whole
    expression.
    """
    channels: list[str] = []

    in_literal = False
    current = ""
    for char in expression:
        if char == "?" and not in_literal:
            current = ""
        elif char == ":" and not in_literal:
            _dedupe_into(channels, _channels_from_value(expression, current, issues))
            current = ""
        else:
            if char == "'":
                in_literal = not in_literal
            current += char

    _dedupe_into(channels, _channels_from_value(expression, current, issues))
    return channels
