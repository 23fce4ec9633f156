"""Builds the module dependency graph one file at a time."""

from __future__ import annotations

from typing import List, Tuple

from .logging import get_logger
from .models import Extraction, SourceFile
from .registry import ModuleRegistry

ROOT_MODULE = "ng"

Edge = Tuple[str, str]


class GraphBuilder:
    """Classifies files and records edges between dependent files and modules."""

    def __init__(self, registry: ModuleRegistry | None = None) -> None:
        self.registry = registry if registry is not None else ModuleRegistry()
        self.edges: List[Edge] = []
        self.loose_files: List[SourceFile] = []
        self.logger = get_logger("graph")

    def ingest(self, file: SourceFile, extraction: Extraction) -> None:
        if extraction.is_empty():
            self.loose_files.append(file)
            return

        modules = extraction.modules
        for module_id, dependency_ids in modules.items():
            self.registry.register_declaration(module_id, file, dependency_ids)

        module_dependencies = {dep for deps in modules.values() for dep in deps}
        placed = bool(modules)
        for module_id in extraction.dependencies:
            if module_id == ROOT_MODULE or module_id in modules:
                continue
            placed = True
            if module_id in module_dependencies:
                self.edges.append((file.path, module_id))
                self.registry.register_incoming_edge(module_id)
            else:
                self.registry.add_attachment(module_id, file)

        if not placed:
            # Only references to the framework or to itself.
            self.loose_files.append(file)

        self.logger.debug(
            "Ingested %s: %d module(s), %d reference(s)",
            file.relative,
            len(modules),
            len(extraction.dependencies),
        )


__all__ = ["Edge", "GraphBuilder", "ROOT_MODULE"]
