"""Decide, per source line, whether a comment is a known directive."""

from dataclasses import dataclass
from enum import Enum

from directivemig.directives import DIRECTIVE_MARKER, MARKER, DirectiveSet
from directivemig.errors import InvariantViolation

LINE_TERMINATORS = "\r\n"


class MatchMode(Enum):
    """How a comment line is compared against the DirectiveSet."""

    # Whole line (terminator removed) equals a member
    LINE = "line"
    # Trimmed comment body equals a member's trimmed body
    BODY = "body"


@dataclass(frozen=True)
class Unchanged:
    """The line is not a directive and is written back verbatim."""

    line: str


@dataclass(frozen=True)
class Rewritten:
    """The line is a directive; new_line carries the `//@` marker."""

    line: str
    new_line: str


Classification = Unchanged | Rewritten


class LineClassifier:
    """Classify raw lines against one DirectiveSet.

    Lines are passed with their terminator attached; a rewritten line keeps
    every byte except the inserted ``@``.
    """

    def __init__(self, directives: DirectiveSet, mode: MatchMode = MatchMode.LINE):
        self.directives = directives
        self.mode = MatchMode(mode)

    def classify(self, raw_line: str) -> Classification:
        if not raw_line.lstrip().startswith(MARKER):
            return Unchanged(raw_line)

        before, after = raw_line.split(MARKER, 1)
        if before.strip():
            raise InvariantViolation(
                f"comment marker is not in leading position: {raw_line.rstrip(LINE_TERMINATORS)!r}"
            )

        if not self._matches(raw_line, after):
            return Unchanged(raw_line)

        return Rewritten(raw_line, before + DIRECTIVE_MARKER + after)

    def _matches(self, raw_line: str, after: str) -> bool:
        if self.mode is MatchMode.LINE:
            return raw_line.rstrip(LINE_TERMINATORS) in self.directives

        body = after.strip()
        return bool(body) and body in self.directives.bodies
