"""Pytest configuration and fixtures."""
from pathlib import Path

import pytest

from directivemig.classifier import LineClassifier, MatchMode
from directivemig.context import RunContext
from directivemig.directives import DirectiveSet

TARGET = "x86_64-apple-darwin"


def write(path: Path, text: str) -> Path:
    """Write text with exact line endings (no newline translation)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path


def read(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


@pytest.fixture
def directive_set():
    """The two-directive set used by the end-to-end scenario."""
    return DirectiveSet.from_lines(["// run-pass", "//[rev] edition: 2021"])


@pytest.fixture
def classifier(directive_set):
    return LineClassifier(directive_set, MatchMode.LINE)


@pytest.fixture
def corpus(tmp_path):
    """Miniature rustc checkout with collected directives for both phases.

    Layout:
        tests/ui/basic.rs          -> has ui directives
        tests/ui/nested/rev.rs     -> revisioned directive
        tests/ui/fix.fixed         -> only migrated with --extension .fixed
        tests/codegen/simd.rs      -> rest phase
        build/<target>/test/ui/__directive_lines.txt (+ tree)
        build/<target>/test/__directive_lines.txt
    """
    root = tmp_path / "rust"
    build = root / "build" / TARGET / "test"

    write(build / "ui" / "__directive_lines.txt", "// run-pass\n// ignore-tidy-linelength\n#ignore-cross-compile\n//\n")
    write(build / "ui" / "__directive_lines" / "nested" / "rev.rs.txt", "//[a] compile-flags: -O\n")
    write(build / "ui" / "__directive_lines" / "fix.txt", "// run-rustfix\n")
    write(build / "__directive_lines.txt", "// compile-flags: -C opt-level=3\n")

    write(
        root / "tests" / "ui" / "basic.rs",
        "// run-pass\n// This test checks that run-pass works\nfn main() {}\n",
    )
    write(
        root / "tests" / "ui" / "nested" / "rev.rs",
        "//[a] compile-flags: -O\r\n//[b] compile-flags: -O\r\nfn main() {}",
    )
    write(root / "tests" / "ui" / "fix.fixed", "// run-rustfix\nfn main() {}\n")
    write(
        root / "tests" / "codegen" / "simd.rs",
        "// compile-flags: -C opt-level=3\n// run-pass\n#![crate_type = \"lib\"]\n",
    )
    return root


@pytest.fixture
def run_ctx(corpus):
    return RunContext(corpus_root=corpus, target=TARGET, progress_interval=1)
