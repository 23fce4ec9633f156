"""Single-run state object tying the graph builder to the order resolver."""

from __future__ import annotations

from typing import Iterable, List

from .graph import GraphBuilder
from .logging import get_logger
from .models import Extraction, SourceFile
from .ranking import PatternRanker
from .registry import ModuleRegistry
from .resolver import OrderResolver


class FileSorter:
    """Owns the registry, edges and loose files of one sort run.

    Create a new instance for every independent set of files.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self.ranker = PatternRanker(patterns)
        self.registry = ModuleRegistry()
        self.builder = GraphBuilder(self.registry)
        self.logger = get_logger("sorter")
        self._resolved = False

    def add(self, file: SourceFile, extraction: Extraction) -> None:
        if self._resolved:
            raise RuntimeError("FileSorter.add() called after the order was resolved")
        self.builder.ingest(file, extraction)

    def resolve(self) -> List[SourceFile]:
        if self._resolved:
            raise RuntimeError("FileSorter.resolve() may only be called once")
        self._resolved = True
        ordered = OrderResolver(self.builder, self.ranker).resolve()
        self.logger.info(
            "Sorted %d file(s) across %d module(s)", len(ordered), len(self.registry.declared())
        )
        return ordered


__all__ = ["FileSorter"]
