"""In-memory store of module records for a single sort run."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence

from .models import ModuleRecord, SourceFile


class ModuleRegistry:
    """Module records keyed by id and by the path of their declaring file.

    Records are created lazily on first reference, so forward references and
    modules that are never declared are both representable.
    """

    def __init__(self) -> None:
        self._by_id: Dict[str, ModuleRecord] = {}
        self._by_path: Dict[str, List[ModuleRecord]] = {}

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._by_id

    def get_or_create(self, module_id: str) -> ModuleRecord:
        record = self._by_id.get(module_id)
        if record is None:
            record = self._by_id[module_id] = ModuleRecord(id=module_id)
        return record

    def lookup(self, module_id: str) -> Optional[ModuleRecord]:
        return self._by_id.get(module_id)

    def by_path(self, path: str) -> Optional[ModuleRecord]:
        """Return the module declared by ``path``.

        A file declaring several modules maps to the last one it declares;
        :meth:`declared_in` lists all of them.
        """
        declared = self._by_path.get(path)
        return declared[-1] if declared else None

    def declared_in(self, path: str) -> List[ModuleRecord]:
        """Return every module declared by ``path``, in declaration order."""
        return list(self._by_path.get(path, ()))

    def register_declaration(
        self, module_id: str, file: SourceFile, dependency_ids: Sequence[str]
    ) -> ModuleRecord:
        record = self.get_or_create(module_id)
        record.declaration_files.append(file)
        if dependency_ids:
            record.has_dependencies = True
        declared = self._by_path.setdefault(file.path, [])
        if record not in declared:
            declared.append(record)
        return record

    def register_incoming_edge(self, module_id: str) -> ModuleRecord:
        record = self.get_or_create(module_id)
        record.has_dependents = True
        return record

    def add_attachment(self, module_id: str, file: SourceFile) -> ModuleRecord:
        record = self.get_or_create(module_id)
        record.attachments.append(file)
        return record

    def declared(self) -> List[ModuleRecord]:
        return [record for record in self._by_id.values() if record.is_declared]

    def undeclared(self) -> List[ModuleRecord]:
        return [record for record in self._by_id.values() if not record.is_declared]

    def standalone(self) -> List[ModuleRecord]:
        return [record for record in self._by_id.values() if record.is_standalone]


__all__ = ["ModuleRegistry"]
