"""Two-phase migration run over a corpus.

The ui suite is migrated first against the directives collected while
running it; the remaining suites follow with their own collected set.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from directivemig.classifier import LineClassifier
from directivemig.context import RunContext
from directivemig.directives import DirectiveSet
from directivemig.migrator import FileMigrator, FileResult
from directivemig.names import extract_names
from directivemig.utils.logging import logger
from directivemig.walker import enumerate_files

DIRECTIVE_LINES_STEM = "__directive_lines"


@dataclass(frozen=True)
class Phase:
    """One walk over the corpus with its own collected directives.

    Paths are relative: walk_root and exclude to the corpus root,
    build_subdir to RunContext.build_dir.
    """

    name: str
    walk_root: str
    exclude: tuple[str, ...] = ()
    build_subdir: str = ""

    def primary_source(self, ctx: RunContext) -> Path:
        return ctx.build_dir / self.build_subdir / f"{DIRECTIVE_LINES_STEM}.txt"

    def secondary_tree(self, ctx: RunContext) -> Path:
        return ctx.build_dir / self.build_subdir / DIRECTIVE_LINES_STEM


PHASES = (
    Phase("ui", walk_root="tests/ui", build_subdir="ui"),
    Phase("rest", walk_root="tests", exclude=("tests/ui",)),
)


def get_phases(names: Iterable[str] | None = None) -> list[Phase]:
    """Phases in run order, optionally restricted to the given names."""
    if not names:
        return list(PHASES)
    wanted = set(names)
    return [phase for phase in PHASES if phase.name in wanted]


@dataclass
class PhaseSummary:
    """Counts for one phase."""

    name: str
    directive_count: int = 0
    files_scanned: int = 0
    files_changed: int = 0
    lines_rewritten: int = 0
    changed_paths: list[Path] = field(default_factory=list)


@dataclass
class MigrationSummary:
    """Counts for a whole run."""

    phases: list[PhaseSummary] = field(default_factory=list)

    @property
    def files_scanned(self) -> int:
        return sum(p.files_scanned for p in self.phases)

    @property
    def files_changed(self) -> int:
        return sum(p.files_changed for p in self.phases)

    @property
    def lines_rewritten(self) -> int:
        return sum(p.lines_rewritten for p in self.phases)


def build_phase_directives(ctx: RunContext, phase: Phase) -> DirectiveSet:
    """Collect the DirectiveSet a phase classifies against."""
    return DirectiveSet.build(
        phase.primary_source(ctx),
        phase.secondary_tree(ctx),
        overrides=ctx.manual_directives,
    )


def run_phase(
    ctx: RunContext,
    phase: Phase,
    on_result: Callable[[FileResult], None] | None = None,
) -> PhaseSummary:
    """Migrate every candidate file of one phase.

    Raises on the first failure; files committed before it stay migrated.
    """
    logger.info(f"Phase '{phase.name}': collecting directives")
    directives = build_phase_directives(ctx, phase)

    classifier = LineClassifier(directives, ctx.match_mode)
    migrator = FileMigrator(classifier, dry_run=ctx.dry_run, keep_text=ctx.show_diff)

    walk_root = ctx.corpus_root / phase.walk_root
    if walk_root.is_dir():
        paths = enumerate_files(
            walk_root,
            ctx.extensions,
            exclude_subtrees=[ctx.corpus_root / p for p in phase.exclude],
        )
    else:
        logger.warning(f"Phase '{phase.name}': {walk_root} not found, no files to migrate")
        paths = []
    logger.info(f"Phase '{phase.name}': there are {len(paths)} test files")

    summary = PhaseSummary(phase.name, directive_count=len(directives))
    for idx, path in enumerate(paths, 1):
        result = migrator.migrate(path)
        summary.files_scanned += 1
        if result.changed:
            summary.files_changed += 1
            summary.lines_rewritten += result.rewritten
            summary.changed_paths.append(path)
        if on_result is not None:
            on_result(result)
        if ctx.progress_interval > 0 and idx % ctx.progress_interval == 0:
            logger.info(f"Progress: {idx}/{len(paths)} files processed")

    logger.info(
        f"Phase '{phase.name}': {summary.files_changed}/{summary.files_scanned} files changed, "
        f"{summary.lines_rewritten} directive lines rewritten"
    )
    return summary


def run_migration(
    ctx: RunContext,
    phases: Iterable[Phase] = PHASES,
    on_result: Callable[[FileResult], None] | None = None,
) -> MigrationSummary:
    """Run the given phases in order."""
    summary = MigrationSummary()
    with ctx.activate():
        for phase in phases:
            summary.phases.append(run_phase(ctx, phase, on_result))
    return summary


def collect_directive_names(ctx: RunContext, phases: Iterable[Phase] = PHASES) -> list[str]:
    """Sorted bare names over the directive sets of the given phases."""
    names: set[str] = set()
    with ctx.activate():
        for phase in phases:
            names |= extract_names(build_phase_directives(ctx, phase))
    return sorted(names)
