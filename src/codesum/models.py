# src/codesum/models.py
from dataclasses import dataclass, field
from typing import Tuple

from codesum.config import DEFAULT_IGNORE_FILENAMES

@dataclass(frozen=True)
class AggregationResult:
    """Concatenated text of every file read, and how many files contributed."""
    content: str
    file_count: int

@dataclass(frozen=True)
class WalkOptions:
    """Traversal settings shared by every aggregation strategy."""
    hidden: bool = False
    respect_ignore_files: bool = True
    ignore_filenames: Tuple[str, ...] = DEFAULT_IGNORE_FILENAMES
    extra_patterns: Tuple[str, ...] = field(default_factory=tuple)
