# src/codesum/core/ignore.py
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import pathspec

from codesum.config import GIT_DIR_NAME, GIT_EXCLUDE_FILE
from codesum.log import get_logger

# One layer of rules: the directory the patterns are relative to, and the patterns
Layer = Tuple[Path, pathspec.GitIgnoreSpec]

def build_spec(lines: Iterable[str]) -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines(lines)

def load_ignore_spec(
    ignore_file: Path,
    extra_patterns: Optional[Sequence[str]] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[pathspec.GitIgnoreSpec]:
    """
    Loads rules from an ignore file and creates a GitIgnoreSpec.
    Returns None when the file is missing and there is nothing else to match.
    An unreadable file is reported and treated as empty.
    """
    logger = logger or get_logger("ignore")
    lines: List[str] = []

    if ignore_file.is_file():
        try:
            with open(ignore_file, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read ignore file %s: %s", ignore_file, e)

    if extra_patterns:
        lines.extend(extra_patterns)

    if not lines:
        return None
    return build_spec(lines)

def find_git_root(path: Path) -> Optional[Path]:
    """Returns the closest directory at or above ``path`` holding a .git entry."""
    for candidate in (path, *path.parents):
        if (candidate / GIT_DIR_NAME).exists():
            return candidate
    return None

class IgnoreMatcher:
    """
    Stack of ignore layers, outermost first. Deeper layers take precedence,
    and within a layer the last matching pattern wins, so a nested
    '!pattern' can re-include what a parent directory excluded.
    Override patterns are checked before every layer.
    """

    def __init__(
        self,
        filenames: Sequence[str],
        layers: Tuple[Layer, ...] = (),
        overrides: Optional[Layer] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.filenames = tuple(filenames)
        self.layers = layers
        self.overrides = overrides
        self.logger = logger or get_logger("ignore")

    @classmethod
    def for_root(
        cls,
        root: Path,
        filenames: Sequence[str],
        extra_patterns: Sequence[str] = (),
        logger: Optional[logging.Logger] = None,
    ) -> "IgnoreMatcher":
        """
        Builds the matcher that applies above ``root``: when root lives in a
        git work tree, the repository's info/exclude file and the ignore files
        of every ancestor up to the work tree root are honoured.
        """
        overrides = (root, build_spec(extra_patterns)) if extra_patterns else None
        matcher = cls(filenames, overrides=overrides, logger=logger)
        if not filenames:
            return matcher

        git_root = find_git_root(root)
        if git_root is None:
            return matcher

        exclude_file = git_root.joinpath(GIT_DIR_NAME, *GIT_EXCLUDE_FILE)
        exclude_spec = load_ignore_spec(exclude_file, logger=matcher.logger)
        if exclude_spec is not None:
            matcher = matcher._push((git_root, exclude_spec))

        ancestors = [git_root]
        ancestors.extend(p for p in reversed(root.parents) if git_root in p.parents)
        for directory in ancestors:
            if directory != root:
                matcher = matcher.descend(directory)
        return matcher

    def _push(self, layer: Layer) -> "IgnoreMatcher":
        return IgnoreMatcher(self.filenames, self.layers + (layer,), self.overrides, self.logger)

    def descend(self, directory: Path) -> "IgnoreMatcher":
        """Returns the matcher for entries inside ``directory``."""
        result = self
        for name in self.filenames:
            spec = load_ignore_spec(directory / name, logger=self.logger)
            if spec is not None:
                result = result._push((directory, spec))
        return result

    @staticmethod
    def _check(layer: Layer, path: Path, is_dir: bool) -> Optional[bool]:
        base, spec = layer
        try:
            rel = path.relative_to(base).as_posix()
        except ValueError:
            return None
        if is_dir:
            rel += "/"
        return spec.check_file(rel).include

    def is_ignored(self, path: Path, is_dir: bool = False) -> bool:
        if self.overrides is not None:
            verdict = self._check(self.overrides, path, is_dir)
            if verdict is not None:
                return verdict
        for layer in reversed(self.layers):
            verdict = self._check(layer, path, is_dir)
            if verdict is not None:
                return verdict
        return False
