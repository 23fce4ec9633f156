"""Pattern based ranking used to order files that the module graph leaves unordered."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Iterable, List, Sequence, Tuple

from .models import SourceFile


def pattern_matches(path: str, pattern: str) -> bool:
    """Case-insensitive glob match; patterns without ``/`` match the basename."""
    normalized = path.replace("\\", "/").lower()
    pattern = pattern.replace("\\", "/").lower()
    if "/" not in pattern:
        return fnmatchcase(normalized.rsplit("/", 1)[-1], pattern)
    if pattern.startswith("**/"):
        return fnmatchcase(normalized, pattern) or fnmatchcase(normalized, pattern[3:])
    return fnmatchcase(normalized, pattern)


def rank(path: str, patterns: Sequence[str]) -> int:
    """Return the index of the first matching pattern, ``len(patterns)`` if none match."""
    for index, pattern in enumerate(patterns):
        if pattern_matches(path, pattern):
            return index
    return len(patterns)


class PatternRanker:
    """Orders files by user patterns, then by case-normalized path."""

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self.patterns: List[str] = [pattern for pattern in patterns if pattern]

    def rank(self, file: SourceFile) -> int:
        return rank(file.path, self.patterns)

    def sort_key(self, file: SourceFile) -> Tuple[int, str]:
        return (self.rank(file), file.path.replace("\\", "/").lower())

    def sort(self, files: Iterable[SourceFile]) -> List[SourceFile]:
        return sorted(files, key=self.sort_key)


__all__ = ["PatternRanker", "pattern_matches", "rank"]
