"""Tree-sitter powered extraction of AngularJS module declarations."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from .errors import ExtractionError
from .models import Extraction


class ModuleExtractor:
    """Finds ``angular.module(...)`` calls in JavaScript sources.

    ``angular.module('name', [deps])`` declares a module; its dependencies are
    also reported as references. ``angular.module('name')`` references an
    existing module. Names that are not string literals are ignored.
    """

    def __init__(self) -> None:
        self._parser = Parser(Language(tree_sitter_javascript.language()))

    def extract(self, source: bytes, path: str = "<source>") -> Extraction:
        if not source.strip():
            return Extraction()

        tree = self._parser.parse(source)
        if tree.root_node.has_error:
            raise ExtractionError(path, _describe_error(tree.root_node))

        modules: Dict[str, List[str]] = {}
        references: Dict[str, None] = {}
        for node in _walk(tree.root_node):
            if node.type != "call_expression" or not _is_module_call(node):
                continue
            arguments = node.child_by_field_name("arguments")
            values = arguments.named_children if arguments is not None else []
            values = [value for value in values if value.type != "comment"]
            if not values:
                continue
            name = _string_value(values[0])
            if name is None:
                continue
            if len(values) == 1:
                references.setdefault(name, None)
                continue
            dependencies = modules.setdefault(name, [])
            for dependency in _array_strings(values[1]):
                if dependency not in dependencies:
                    dependencies.append(dependency)
                references.setdefault(dependency, None)

        return Extraction(modules=modules, dependencies=list(references))


def _walk(root: Node) -> Iterator[Node]:
    # Pre-order, so references are reported in source order.
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _is_module_call(node: Node) -> bool:
    function = node.child_by_field_name("function")
    if function is None or function.type != "member_expression":
        return False
    target = function.child_by_field_name("object")
    member = function.child_by_field_name("property")
    return (
        target is not None
        and member is not None
        and target.type == "identifier"
        and _text(target) == "angular"
        and _text(member) == "module"
    )


def _string_value(node: Node) -> Optional[str]:
    if node.type != "string":
        return None
    return _text(node)[1:-1]


def _array_strings(node: Node) -> List[str]:
    if node.type != "array":
        return []
    values = []
    for element in node.named_children:
        value = _string_value(element)
        if value is not None:
            values.append(value)
    return values


def _text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def _describe_error(root: Node) -> str:
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            return f"Unexpected token at line {row + 1}, column {column + 1}"
    return "Unable to parse source"


__all__ = ["ModuleExtractor"]
