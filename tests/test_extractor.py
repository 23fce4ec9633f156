"""Tests for the tree-sitter module extractor."""

from __future__ import annotations

import pytest

from ngfilesort.errors import ExtractionError
from ngfilesort.extractor import ModuleExtractor


@pytest.fixture(scope="module")
def extractor() -> ModuleExtractor:
    return ModuleExtractor()


def test_extracts_declaration_and_dependencies(extractor: ModuleExtractor) -> None:
    extraction = extractor.extract(
        b"angular.module('widgets', ['app', \"ui.router\"]);\n"
    )

    assert extraction.modules == {"widgets": ["app", "ui.router"]}
    assert extraction.dependencies == ["app", "ui.router"]


def test_getter_calls_are_references(extractor: ModuleExtractor) -> None:
    extraction = extractor.extract(
        b"""
angular.module('app').controller('MainCtrl', function () {});
angular.module('app').factory('Data', function () { return {}; });
angular.module('other').run(function () {});
"""
    )

    assert extraction.modules == {}
    assert extraction.dependencies == ["app", "other"]


def test_declared_and_used_in_same_file(extractor: ModuleExtractor) -> None:
    extraction = extractor.extract(
        b"angular.module('circular', []);\nangular.module('circular').run(function () {});\n"
    )

    assert extraction.modules == {"circular": []}
    assert extraction.dependencies == ["circular"]


def test_non_literal_arguments_are_ignored(extractor: ModuleExtractor) -> None:
    extraction = extractor.extract(
        b"var name = 'dyn';\nangular.module(name, []);\nangular.module('app', [dep, 'core']);\n"
    )

    assert extraction.modules == {"app": ["core"]}
    assert extraction.dependencies == ["core"]


def test_plain_javascript_yields_empty_extraction(extractor: ModuleExtractor) -> None:
    extraction = extractor.extract(b"var helpers = { module: function () {} };\nmodule('x');\n")
    assert extraction.is_empty()


def test_empty_source_yields_empty_extraction(extractor: ModuleExtractor) -> None:
    assert extractor.extract(b"").is_empty()
    assert extractor.extract(b"  \n").is_empty()


def test_malformed_source_raises_with_path(extractor: ModuleExtractor) -> None:
    with pytest.raises(ExtractionError) as excinfo:
        extractor.extract(b"angular.module('broken', [\n", "src/broken.js")

    assert excinfo.value.path == "src/broken.js"
    assert "src/broken.js" in str(excinfo.value)
