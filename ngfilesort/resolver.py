"""Turns the accumulated module graph into a concatenation-safe file order."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .graph import GraphBuilder
from .logging import get_logger
from .models import ModuleRecord, SourceFile
from .ranking import PatternRanker

ModulePair = Tuple[ModuleRecord, ModuleRecord]

_LOGGER = get_logger("resolver")


def toposort(pairs: Sequence[ModulePair]) -> List[ModuleRecord]:
    """Depth-first topological sort; for a pair ``(x, y)``, ``x`` precedes ``y``.

    Back edges are skipped instead of raising, so cycles longer than two
    nodes are broken wherever the traversal first closes them.
    """
    nodes = list(dict.fromkeys(node for pair in pairs for node in pair))
    outgoing: Dict[ModuleRecord, List[ModuleRecord]] = {node: [] for node in nodes}
    for source, target in pairs:
        if target not in outgoing[source]:
            outgoing[source].append(target)

    ordered: List[ModuleRecord] = []
    visited: Set[ModuleRecord] = set()
    active: Set[ModuleRecord] = set()

    def visit(node: ModuleRecord) -> None:
        visited.add(node)
        active.add(node)
        for child in reversed(outgoing[node]):
            if child in active:
                _LOGGER.debug("Ignoring cyclic dependency %s -> %s", node.id, child.id)
                continue
            if child not in visited:
                visit(child)
        active.discard(node)
        ordered.append(node)

    for node in reversed(nodes):
        if node not in visited:
            visit(node)

    ordered.reverse()
    return ordered


def drop_reversed_pairs(pairs: Iterable[ModulePair]) -> List[ModulePair]:
    """Remove duplicate and self pairs, keeping the first direction of a two-node cycle."""
    seen: Set[ModulePair] = set()
    result: List[ModulePair] = []
    for source, target in pairs:
        if source is target or (source, target) in seen:
            continue
        if (target, source) in seen:
            _LOGGER.debug(
                "Modules %s and %s depend on each other; keeping %s -> %s",
                source.id,
                target.id,
                target.id,
                source.id,
            )
            continue
        seen.add((source, target))
        result.append((source, target))
    return result


class OrderResolver:
    """Computes the output sequence once every file has been ingested."""

    def __init__(self, builder: GraphBuilder, ranker: PatternRanker | None = None) -> None:
        self.builder = builder
        self.registry = builder.registry
        self.ranker = ranker if ranker is not None else PatternRanker()

    def resolve(self) -> List[SourceFile]:
        orphans = self.orphan_files()
        groups = self.module_groups()
        members: Dict[ModuleRecord, List[ModuleRecord]] = {}
        for record, leader in groups.items():
            members.setdefault(leader, []).append(record)

        order = toposort(drop_reversed_pairs(self.module_pairs(groups)))
        order.extend(self._unordered_modules(order, members))
        graph_files = self._flatten(order, members)

        emitted = set(graph_files)
        leading = [file for file in orphans if file not in emitted]
        _LOGGER.debug(
            "Resolved %d module group(s): %d leading file(s), %d module file(s)",
            len(order),
            len(leading),
            len(graph_files),
        )
        return leading + graph_files

    def orphan_files(self) -> List[SourceFile]:
        """Attachments of modules never declared, plus loose files, ranker-sorted."""
        files: List[SourceFile] = []
        for record in self.registry.undeclared():
            files.extend(record.attachments)
        files.extend(self.builder.loose_files)
        return self.ranker.sort(dict.fromkeys(files))

    def module_groups(self) -> Dict[ModuleRecord, ModuleRecord]:
        """Map each declared module to the leader of the modules sharing its files.

        A file is emitted once, so every module it declares has to be ordered
        as a single node. The leader of a group is its first registered module.
        """
        declared = self.registry.declared()
        position = {record: index for index, record in enumerate(declared)}
        parent: Dict[ModuleRecord, ModuleRecord] = {record: record for record in declared}

        def find(record: ModuleRecord) -> ModuleRecord:
            while parent[record] is not record:
                parent[record] = parent[parent[record]]
                record = parent[record]
            return record

        for record in parent:
            for file in record.declaration_files:
                for other in self.registry.declared_in(file.path):
                    leader, other_leader = find(record), find(other)
                    if leader is other_leader:
                        continue
                    if position[other_leader] < position[leader]:
                        leader, other_leader = other_leader, leader
                    parent[other_leader] = leader
        return {record: find(record) for record in parent}

    def module_pairs(self, groups: Dict[ModuleRecord, ModuleRecord]) -> List[ModulePair]:
        """Map recorded edges onto module groups, dropping unresolvable ones."""
        pairs: List[ModulePair] = []
        for path, module_id in self.builder.edges:
            source = self.registry.by_path(path)
            target = self.registry.lookup(module_id)
            if source is None or target is None or not target.is_declared:
                _LOGGER.debug("Skipping dependency on external module %s", module_id)
                continue
            pairs.append((groups[source], groups[target]))
        return pairs

    def _unordered_modules(
        self,
        order: Sequence[ModuleRecord],
        members: Dict[ModuleRecord, List[ModuleRecord]],
    ) -> List[ModuleRecord]:
        # Standalone groups, plus declared groups whose every dependency was
        # dropped. Sorted so they come out in ranker order after the reversal.
        placed = set(order)
        tail = [leader for leader in members if leader not in placed]
        return sorted(
            tail,
            key=lambda leader: self.ranker.sort_key(leader.declaration_files[0]),
            reverse=True,
        )

    def _flatten(
        self,
        order: Sequence[ModuleRecord],
        members: Dict[ModuleRecord, List[ModuleRecord]],
    ) -> List[SourceFile]:
        # Built back to front: each group contributes its attachments, then its
        # declarations, and the whole sequence is reversed at the end. A file
        # listed under several groups keeps the position closest to the end.
        sequence: List[SourceFile] = []
        for leader in order:
            group = members[leader]
            attachments = self.ranker.sort(
                dict.fromkeys(file for record in group for file in record.attachments)
            )
            declarations = list(
                dict.fromkeys(file for record in group for file in record.declaration_files)
            )
            sequence.extend(reversed(attachments))
            sequence.extend(reversed(declarations))
        unique = list(dict.fromkeys(sequence))
        unique.reverse()
        return unique


__all__ = ["ModulePair", "OrderResolver", "drop_reversed_pairs", "toposort"]
