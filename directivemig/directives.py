"""Known directive strings, collected from disk and filtered for matching.

The collected-headers files list every comment line the test harness parsed
as a directive, one per line, e.g.::

    // run-pass
    //[rev1] compile-flags: -O
    // ignore-tidy-linelength

Some of those lines are noise for migration purposes and are filtered out
(see ``is_matchable``); the raw count is still reported.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from directivemig.errors import FileAccessError
from directivemig.utils.logging import logger

MARKER = "//"
DIRECTIVE_MARKER = "//@"

# Tidy lint suppressions, not understood by the new harness
NON_PORTABLE_PREFIXES = ("ignore-tidy",)


def strip_marker(directive: str) -> str:
    """Return the directive text after its leading marker, trimmed."""
    _, _, body = directive.strip().partition(MARKER)
    return body.strip()


def is_matchable(line: str) -> bool:
    """Whether a collected line may take part in matching."""
    stripped = line.strip()
    # Also rejects empty lines and "#" comments collected from run-make scripts
    if not stripped.startswith(MARKER):
        return False
    if stripped.startswith(DIRECTIVE_MARKER):
        return False
    body = strip_marker(stripped)
    if not body:
        return False
    return not body.startswith(NON_PORTABLE_PREFIXES)


def read_directive_lines(path: Path) -> list[str]:
    """Read one directive per line, terminators removed.

    Only LF (optionally preceded by CR) ends a line; a lone CR, form feeds
    and other Unicode line breaks stay part of the directive text.
    """
    try:
        with open(path, encoding="utf-8", newline="\n") as f:
            return [line.removesuffix("\n").removesuffix("\r") for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(path, "read collected directives from", e) from e


class DirectiveSet:
    """Immutable, deduplicated set of directive strings.

    Iteration is in sorted order so that dry runs and name listings are
    reproducible.
    """

    __slots__ = ("_members", "_bodies", "raw_count")

    def __init__(self, members: Iterable[str], raw_count: int | None = None):
        frozen = frozenset(members)
        object.__setattr__(self, "_members", frozen)
        object.__setattr__(self, "_bodies", frozenset(strip_marker(m) for m in frozen))
        object.__setattr__(self, "raw_count", len(frozen) if raw_count is None else raw_count)

    def __setattr__(self, name, value):
        raise AttributeError("DirectiveSet is immutable")

    def __contains__(self, line: object) -> bool:
        return line in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._members))

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"DirectiveSet({len(self)} directives, {self.raw_count} collected)"

    @property
    def bodies(self) -> frozenset[str]:
        """Member texts with the leading marker stripped and trimmed."""
        return self._bodies

    @classmethod
    def from_lines(cls, lines: Iterable[str], overrides: Iterable[str] = ()) -> "DirectiveSet":
        """Build from in-memory collected lines plus manual overrides.

        Collected lines are filtered through ``is_matchable``; overrides are
        merged afterwards as given (only empty strings are dropped).
        """
        raw = {line.rstrip("\r\n") for line in lines}
        members = {line for line in raw if is_matchable(line)}
        extra = {o.rstrip("\r\n") for o in overrides if o.strip()}
        return cls(members | extra, raw_count=len(raw | extra))

    @classmethod
    def build(
        cls,
        primary_source: Path,
        secondary_tree: Path | None = None,
        overrides: Iterable[str] = (),
    ) -> "DirectiveSet":
        """Collect directives from the primary list and the secondary tree.

        Args:
            primary_source: Flat list, one directive per line. Must exist.
            secondary_tree: Directory whose regular files (any depth) each
                hold more directive lines. Skipped with a warning if absent.
            overrides: Manually supplied directive strings.

        Raises:
            FileAccessError: A source file could not be read.
        """
        primary_source = Path(primary_source)
        logger.debug(f"Reading primary directive list {primary_source}")
        lines = read_directive_lines(primary_source)

        if secondary_tree is not None:
            secondary_tree = Path(secondary_tree)
            if secondary_tree.is_dir():
                paths = sorted(p for p in secondary_tree.rglob("*") if p.is_file())
                logger.info(f"There are {len(paths)} collected directive files")
                for path in paths:
                    logger.debug(f"Processing collected directive file {path}")
                    lines.extend(read_directive_lines(path))
            else:
                logger.warning(f"Secondary directive tree {secondary_tree} not found, skipping")

        directive_set = cls.from_lines(lines, overrides)
        dropped = directive_set.raw_count - len(directive_set)
        logger.info(
            f"There are {len(directive_set)} matchable directives "
            f"({dropped} filtered out of {directive_set.raw_count} collected)"
        )
        return directive_set
