"""Enumerate migration candidate files under a corpus subtree."""

import os
from collections.abc import Iterable
from pathlib import Path

from directivemig.errors import FileAccessError
from directivemig.utils.logging import logger


def _is_excluded(path: Path, excluded: list[Path]) -> bool:
    return any(path.is_relative_to(subtree) for subtree in excluded)


def enumerate_files(
    root: Path,
    extensions: Iterable[str],
    exclude_subtrees: Iterable[Path] = (),
) -> list[Path]:
    """List regular files below root with a matching extension, sorted.

    Args:
        root: Directory to walk recursively.
        extensions: Accepted suffixes, e.g. [".rs", ".fixed"].
        exclude_subtrees: Directories whose contents are skipped entirely.

    Raises:
        FileAccessError: root or one of its subdirectories cannot be listed.
    """
    root = Path(root)
    suffixes = {ext if ext.startswith(".") else f".{ext}" for ext in extensions}
    excluded = [Path(p) for p in exclude_subtrees]

    if not root.is_dir():
        raise FileAccessError(root, "walk corpus directory")

    def _raise(err: OSError) -> None:
        raise FileAccessError(err.filename or root, "walk corpus directory", err) from err

    found = []
    for dirpath, dirs, files in os.walk(root, onerror=_raise):
        current = Path(dirpath)
        # Prune excluded subtrees instead of filtering their files later
        dirs[:] = [d for d in dirs if not _is_excluded(current / d, excluded)]

        for name in files:
            path = current / name
            if path.suffix in suffixes and path.is_file() and not _is_excluded(path, excluded):
                found.append(path)

    found.sort()
    logger.debug(f"Found {len(found)} candidate files under {root}")
    return found
