"""Per-invocation run context shared by every migration component."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from directivemig.classifier import MatchMode
from directivemig.errors import ArgumentError
from directivemig.utils.logging import get_run_id, logger


@dataclass
class RunContext:
    """Everything a run needs, built once by the CLI and passed down.

    Replaces process-wide state: components read settings from here and log
    inside ``activate()`` so every record carries the run id.
    """

    corpus_root: Path
    target: str = "x86_64-apple-darwin"
    match_mode: MatchMode = MatchMode.LINE
    extensions: tuple[str, ...] = (".rs",)
    manual_directives: tuple[str, ...] = ()
    progress_interval: int = 500
    dry_run: bool = False
    show_diff: bool = False
    run_id: str = field(default_factory=get_run_id)

    @classmethod
    def from_config(cls, corpus_root: Path | str | None, config: dict[str, Any], **overrides: Any) -> "RunContext":
        """Build a context from a loaded runtime config plus CLI overrides.

        Overrides whose value is None are ignored so unset CLI options fall
        back to the config.

        Raises:
            ArgumentError: corpus_root is missing or has no tests directory.
        """
        root = validate_corpus_root(corpus_root)
        directives = config["directives"]

        manual = []
        for entry in directives["manual_directives"]:
            if isinstance(entry, str):
                manual.append(entry)
            else:
                logger.warning(f"Ignoring non-string manual directive {entry!r}")

        values = {
            "target": directives["target"],
            "match_mode": directives["match_mode"],
            "extensions": tuple(config["walk"]["extensions"]),
            "manual_directives": tuple(manual),
            "progress_interval": config["report"]["progress_interval"],
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            values["match_mode"] = MatchMode(values["match_mode"])
        except ValueError as e:
            raise ArgumentError(f"unknown match mode {values['match_mode']!r}") from e

        return cls(corpus_root=root, **values)

    @property
    def build_dir(self) -> Path:
        """Directory holding the collected directive lists for the target."""
        return self.corpus_root / "build" / self.target / "test"

    @contextmanager
    def activate(self) -> Iterator["RunContext"]:
        """Stamp log records emitted during the run with this run's id."""
        with logger.contextualize(run_id=self.run_id):
            yield self


def validate_corpus_root(corpus_root: Path | str | None) -> Path:
    """Resolve the corpus root argument or raise ArgumentError."""
    if corpus_root is None or str(corpus_root) == "":
        raise ArgumentError("CORPUS_ROOT is required")

    root = Path(corpus_root)
    if not root.exists():
        raise ArgumentError(f"corpus root {root} does not exist")
    if not (root / "tests").is_dir():
        raise ArgumentError(f"corpus root {root} has no tests directory")
    return root
