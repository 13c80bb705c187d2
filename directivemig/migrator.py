"""Rewrite one source file through the LineClassifier, atomically."""

import difflib
import os
import stat
import tempfile
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from directivemig.classifier import LineClassifier, Rewritten
from directivemig.errors import FileAccessError
from directivemig.utils.logging import logger

# newline="\n" splits on "\n" only (a lone "\r" stays inside its line) and
# writes untranslated; surrogateescape round-trips stray bytes
_IO_OPTIONS = {"encoding": "utf-8", "errors": "surrogateescape", "newline": "\n"}


@dataclass
class FileResult:
    """Outcome of migrating a single file."""

    path: Path
    lines: int = 0
    rewritten: int = 0
    original: list[str] = field(default_factory=list, repr=False)
    migrated: list[str] = field(default_factory=list, repr=False)

    @property
    def changed(self) -> bool:
        return self.rewritten > 0

    def unified_diff(self) -> str:
        """Diff between original and migrated text (empty if unchanged)."""
        if not self.changed:
            return ""
        return "".join(
            difflib.unified_diff(
                self.original,
                self.migrated,
                fromfile=f"a/{self.path}",
                tofile=f"b/{self.path}",
            )
        )


class FileMigrator:
    """Apply a LineClassifier to files, replacing each one atomically.

    Lines stream from the source into a temporary file next to it, which is
    moved over the source with os.replace once every line is written, so
    readers see either the old or the new content. Files without directive
    lines are left untouched and the temporary file is removed on every
    path that does not commit.
    """

    def __init__(self, classifier: LineClassifier, dry_run: bool = False, keep_text: bool = False):
        self.classifier = classifier
        self.dry_run = dry_run
        self.keep_text = keep_text or dry_run

    def migrate(self, path: Path) -> FileResult:
        path = Path(path)
        result = FileResult(path)

        try:
            with open(path, **_IO_OPTIONS) as source:
                if self.dry_run:
                    for _ in self._process(source, result):
                        pass
                else:
                    self._stream_and_replace(path, source, result)
        except OSError as e:
            raise FileAccessError(path, "read", e) from e

        if result.changed and not self.dry_run:
            logger.debug(f"Rewrote {result.rewritten} directive lines in {path}")
        return result

    def _process(self, source: Iterable[str], result: FileResult) -> Iterator[str]:
        """Yield output lines in source order, updating result counts."""
        for line in source:
            outcome = self.classifier.classify(line)
            result.lines += 1
            if isinstance(outcome, Rewritten):
                out = outcome.new_line
                result.rewritten += 1
            else:
                out = line
            if self.keep_text:
                result.original.append(line)
                result.migrated.append(out)
            yield out

    def _stream_and_replace(self, path: Path, source: Iterable[str], result: FileResult) -> None:
        try:
            mode = stat.S_IMODE(os.stat(path).st_mode)
            tmp = tempfile.NamedTemporaryFile(
                "w",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
                **_IO_OPTIONS,
            )
        except OSError as e:
            raise FileAccessError(path, "create temporary file for", e) from e

        tmp_path = Path(tmp.name)
        committed = False
        try:
            with tmp:
                for line in self._process(source, result):
                    tmp.write(line)
                tmp.flush()
                os.fsync(tmp.fileno())
            if result.changed:
                os.chmod(tmp_path, mode)
                os.replace(tmp_path, path)
                committed = True
        except OSError as e:
            raise FileAccessError(path, "write", e) from e
        finally:
            if not committed:
                tmp_path.unlink(missing_ok=True)
