"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from jsxinfo.cli import _build_parser, build_options, main
from jsxinfo.config import JsxInfoConfig
from jsxinfo.options import ReportFacet
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_defaults() -> None:
    args = _build_parser().parse_args([])
    options = build_options(args, JsxInfoConfig())
    assert options.components == []
    assert options.report == ["usage"]
    assert options.sort == "usage"
    assert options.files == ["**/*.{js,jsx,tsx}"]
    assert options.gitignore is True
    assert args.format == "text"
    assert args.progress is True


def test_star_means_all_components() -> None:
    args = _build_parser().parse_args(["--components", "*"])
    assert build_options(args, JsxInfoConfig()).components == []


def test_cli_values_override_and_extend_config() -> None:
    config = JsxInfoConfig(
        components=["div"],
        directory="/from/config",
        ignore=["dist/"],
        plugins=["jsx"],
        prop="id",
        report=["props"],
        gitignore=False,
    )
    args = _build_parser().parse_args(
        [
            "src",
            "--components",
            "Button",
            "Tab.Container",
            "--ignore",
            "legacy/**",
            "--plugins",
            "typescript",
            "--report",
            "lines",
            "--prop",
            "kind=primary",
        ]
    )
    options = build_options(args, config)
    assert options.components == ["Button", "Tab.Container"]
    assert options.directory == "src"
    assert options.ignore == ["dist/", "legacy/**"]
    assert options.plugins == ["jsx", "typescript"]
    assert options.report == ["lines"]
    assert options.prop == "kind=primary"
    assert options.gitignore is False


def test_cli_rejects_unknown_report() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["--report", "children"])


def test_main_prints_json(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    project_builder.write({"a.jsx": '<div id="a" />;\n'})
    main([str(project_builder.path()), "--format", "json", "--report", "usage", "props", "--no-config"])

    data = json.loads(capsys.readouterr().out)
    assert data["component_usage"] == {"div": 1}
    assert data["prop_usage"] == {"div": {"id": 1}}
    assert data["totals"]["component_usage_total"] == 1


def test_main_prints_text_report(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    project_builder.write({"a.jsx": '<div id="a" />;\n'})
    main([str(project_builder.path()), "--no-progress"])

    out = capsys.readouterr().out
    assert "Scanned 1 files in" in out
    assert "1 components used 1 times:" in out
    assert "<div>" in out


def test_main_uses_config_file(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    project_builder.write(
        {
            ".jsx-info.yml": "components: [span]\n",
            "a.jsx": "<div><span /></div>;\n",
        }
    )
    main([str(project_builder.path()), "--format", "json"])
    assert json.loads(capsys.readouterr().out)["component_usage"] == {"span": 1}


def test_main_exits_for_lines_without_prop(project_builder: ProjectBuilder) -> None:
    with pytest.raises(SystemExit) as info:
        main([str(project_builder.path()), "--report", "lines", "--no-config"])
    assert info.value.code == 1


def test_main_exits_for_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "missing"), "--no-config"])
    assert info.value.code == 1
