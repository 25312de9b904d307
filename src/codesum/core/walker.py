# src/codesum/core/walker.py
import logging
import os
import stat
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from codesum.core.ignore import IgnoreMatcher
from codesum.errors import FatalPathError, TraversalEntryError, UnknownEntryTypeError
from codesum.log import get_logger
from codesum.models import WalkOptions

FILE = "file"
OTHER = "other"

def resolve_root(root: Union[str, os.PathLike]) -> Path:
    """Absolute form of ``root``; a path that does not exist is fatal."""
    try:
        return Path(root).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise FatalPathError(root, e) from e

def classify(mode: int) -> Optional[str]:
    """FILE for regular files, OTHER for every known non-file kind, None if unknown."""
    if stat.S_ISREG(mode):
        return FILE
    if (
        stat.S_ISDIR(mode)
        or stat.S_ISLNK(mode)
        or stat.S_ISFIFO(mode)
        or stat.S_ISSOCK(mode)
        or stat.S_ISCHR(mode)
        or stat.S_ISBLK(mode)
        or stat.S_ISDOOR(mode)
        or stat.S_ISPORT(mode)
        or stat.S_ISWHT(mode)
    ):
        return OTHER
    return None

def is_hidden(name: str) -> bool:
    return name.startswith(".")

def walk_files(
    root: Union[str, os.PathLike],
    options: Optional[WalkOptions] = None,
    logger: Optional[logging.Logger] = None,
) -> Iterator[Path]:
    """
    Walks the tree under ``root`` and yields the absolute path of every
    regular file that survives the hidden and ignore rules.
    Ignored and hidden directories are pruned, so nothing below them is visited.
    Symlinks are never followed. A failing entry is logged and skipped; only
    an unresolvable root raises (FatalPathError, before anything is yielded).
    """
    options = options or WalkOptions()
    logger = logger or get_logger("walker")
    root_path = resolve_root(root)
    logger.debug("Starting walk of %s", root_path)

    if not root_path.is_dir():
        # A single file root is its own only entry; no rules apply to it
        kind = _lstat_kind(root_path, logger)
        if kind == FILE:
            yield root_path
        logger.debug("Finished walk of %s", root_path)
        return

    filenames = options.ignore_filenames if options.respect_ignore_files else ()
    base = IgnoreMatcher.for_root(root_path, filenames, options.extra_patterns, logger)
    matchers: Dict[str, IgnoreMatcher] = {}

    def on_error(error: OSError) -> None:
        logger.error("%s", TraversalEntryError(error.filename, error))

    for current, dirs, files in os.walk(root_path, onerror=on_error, followlinks=False):
        current_path = Path(current)
        parent_matcher = matchers.pop(current, None)
        if parent_matcher is None:
            parent_matcher = base
        matcher = parent_matcher.descend(current_path)

        # Prune in place so os.walk never enters skipped directories
        for d in list(dirs):
            dir_path = current_path / d
            if (not options.hidden and is_hidden(d)) or matcher.is_ignored(dir_path, is_dir=True):
                logger.debug("Pruning directory %s", dir_path)
                dirs.remove(d)
            else:
                matchers[os.path.join(current, d)] = matcher

        for f in files:
            file_path = current_path / f
            if not options.hidden and is_hidden(f):
                continue
            if matcher.is_ignored(file_path, is_dir=False):
                logger.debug("Ignoring %s", file_path)
                continue
            if _lstat_kind(file_path, logger) == FILE:
                yield file_path

    logger.debug("Finished walk of %s", root_path)

def _lstat_kind(path: Path, logger: logging.Logger) -> Optional[str]:
    try:
        mode = os.lstat(path).st_mode
    except OSError as e:
        logger.error("%s", TraversalEntryError(path, e))
        return None
    kind = classify(mode)
    if kind is None:
        logger.warning("%s", UnknownEntryTypeError(path))
    elif kind == OTHER:
        logger.debug("Skipping non-file %s", path)
    return kind
