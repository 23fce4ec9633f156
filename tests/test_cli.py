"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngfilesort.cli import _build_parser, main


def test_cli_parser_defaults() -> None:
    args = _build_parser().parse_args([])
    assert args.path == "."
    assert args.verbose is False
    assert args.patterns is None
    assert args.concat is None


def test_cli_collects_repeated_patterns() -> None:
    args = _build_parser().parse_args(["src", "-p", "*.module.js", "--pattern", "*.config.js"])
    assert args.path == "src"
    assert args.patterns == ["*.module.js", "*.config.js"]


def test_cli_prints_sorted_paths(source_builder, capsys) -> None:
    source_builder.write(
        {
            "feature.js": "angular.module('feature', ['app']);\n",
            "app.js": "angular.module('app', []);\n",
            "app.controller.js": "angular.module('app').controller('Ctrl', function () {});\n",
        }
    )

    main([str(source_builder.path())])

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["app.js", "app.controller.js", "feature.js"]


def test_cli_uses_config_patterns_and_cli_overrides(source_builder, capsys) -> None:
    source_builder.write(
        {
            ".ngfilesort.yml": "order_patterns: ['b*.js']\n",
            "a.js": "var a;\n",
            "b.js": "var b;\n",
        }
    )

    main([str(source_builder.path())])
    assert capsys.readouterr().out.splitlines() == ["b.js", "a.js"]

    main([str(source_builder.path()), "--pattern", "a*.js"])
    assert capsys.readouterr().out.splitlines() == ["a.js", "b.js"]


def test_cli_concatenates_to_file(source_builder, tmp_path: Path) -> None:
    source_builder.write(
        {
            "widgets.js": "angular.module('widgets', ['app']);",
            "app.js": "angular.module('app', []);\n",
        }
    )
    output = tmp_path / "bundle.js"

    main([str(source_builder.path()), "--concat", str(output)])

    assert output.read_text(encoding="utf-8") == (
        "angular.module('app', []);\nangular.module('widgets', ['app']);\n"
    )


def test_cli_exits_on_parse_error(source_builder, capsys) -> None:
    source_builder.write({"broken.js": "angular.module('broken', [\n"})

    with pytest.raises(SystemExit) as excinfo:
        main([str(source_builder.path())])

    assert excinfo.value.code == 1
    assert "broken.js" in capsys.readouterr().err


def test_cli_exits_on_missing_directory(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err
