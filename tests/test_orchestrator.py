"""End-to-end tests for jsxinfo.orchestrator."""

from __future__ import annotations

from typing import List

import pytest

from jsxinfo import analyze
from jsxinfo.options import AnalyzeOptions, InvalidOptionsError, ReportFacet
from jsxinfo.orchestrator import Orchestrator
from jsxinfo.sorting import SortPolicy
from tests._fixtures.project_builder import ProjectBuilder

BASIC = """
export function Page() {
  return (
    <main>
      <div id="a" />
      <Tab.Container kind="primary" />
    </main>
  );
}
"""


def _options(project_builder: ProjectBuilder, **kwargs) -> AnalyzeOptions:  # type: ignore[no-untyped-def]
    return AnalyzeOptions(directory=str(project_builder.path()), **kwargs)


def test_analyze_empty_directory(project_builder: ProjectBuilder) -> None:
    analysis = analyze(_options(project_builder))

    assert analysis.filenames == []
    assert analysis.component_total == 0
    assert analysis.component_usage == {}
    assert analysis.prop_usage == {}
    assert analysis.line_usage == {}
    assert analysis.errors == {}
    assert analysis.elapsed_time >= 0


def test_analyze_basic_usage(project_builder: ProjectBuilder) -> None:
    project_builder.write({"Page.jsx": BASIC})
    analysis = analyze(_options(project_builder, components=["div", "Tab.Container"]))

    assert analysis.filenames == [project_builder.file("Page.jsx")]
    assert analysis.component_usage == {"div": 1, "Tab.Container": 1}
    assert list(analysis.component_usage) == ["div", "Tab.Container"]
    assert analysis.prop_usage == {"div": {"id": 1}, "Tab.Container": {"kind": 1}}
    assert analysis.component_usage_total == 2


def test_analyze_lines_report(project_builder: ProjectBuilder) -> None:
    project_builder.write({"Page.jsx": BASIC})
    analysis = analyze(
        _options(project_builder, prop="kind=primary", report=[ReportFacet.LINES])
    )

    (record,) = analysis.line_usage["Tab.Container"]["kind"]
    assert record.rendered_excerpt == '   5 |       <Tab.Container kind="primary" />'
    assert record.prop_source_text == 'kind="primary"'
    assert record.filename == project_builder.file("Page.jsx")
    assert record.start.line == 5
    assert analysis.line_usage["div"] == {}
    assert analysis.line_usage["main"] == {}


def test_analyze_absence_filter(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "Form.jsx": """
            const form = (
              <form>
                <Button disabled>Save</Button>
                <Button
                  kind="secondary"
                >
                  Cancel
                </Button>
              </form>
            );
            """
        }
    )
    analysis = analyze(
        _options(project_builder, components=["Button"], prop="!disabled", report=[ReportFacet.LINES])
    )

    assert analysis.prop_usage == {"Button": {"!disabled": 1}}
    (record,) = analysis.line_usage["Button"]["!disabled"]
    assert record.start.line == 4
    assert record.end.line == 8
    assert record.rendered_excerpt.splitlines()[0] == "   4 |     <Button"
    assert len(record.rendered_excerpt.splitlines()) == 5


def test_analyze_records_parse_errors_and_continues(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "good.jsx": "<div id='x' />;\n",
            "broken.js": "const = <div;\n",
            "typed.js": "const n: number = 1;\nexport const el = <span />;\n",
        }
    )
    analysis = analyze(_options(project_builder))

    assert set(analysis.errors) == {project_builder.file("broken.js"), project_builder.file("typed.js")}
    assert analysis.suggested_plugins == ["typescript"]
    assert analysis.component_usage == {"div": 1}
    assert analysis.prop_usage == {"div": {"id": 1}}


def test_bare_attribute_expression_is_recorded_per_file(project_builder: ProjectBuilder) -> None:
    project_builder.write({"good.jsx": "<div id='a' />;\n", "bad.jsx": "<div {/* note */} id='b' />;\n"})
    analysis = analyze(_options(project_builder))

    assert list(analysis.errors) == [project_builder.file("bad.jsx")]
    assert analysis.errors[project_builder.file("bad.jsx")].location.column == 5
    assert analysis.component_usage == {"div": 1}
    assert analysis.prop_usage == {"div": {"id": 1}}


def test_analyze_with_plugin_parses_typescript_in_js(project_builder: ProjectBuilder) -> None:
    project_builder.write({"typed.js": "const n: number = 1;\nexport const el = <span />;\n"})
    analysis = analyze(_options(project_builder, plugins=["typescript"]))
    assert analysis.errors == {}
    assert analysis.component_usage == {"span": 1}


def test_alphabetical_sort(project_builder: ProjectBuilder) -> None:
    project_builder.write({"a.jsx": "<>\n<b />\n<b />\n<a />\n<c />\n</>;\n"})
    analysis = analyze(_options(project_builder, sort=SortPolicy.ALPHABETICAL))
    assert list(analysis.component_usage.items()) == [("a", 1), ("b", 2), ("c", 1)]

    by_usage = analyze(_options(project_builder))
    assert list(by_usage.component_usage.items()) == [("b", 2), ("c", 1), ("a", 1)]


def test_hooks_run_once_per_file(project_builder: ProjectBuilder) -> None:
    project_builder.write({"a.jsx": "<a />;", "b.jsx": "<b />;"})
    seen: List[str] = []
    started: List[bool] = []

    Orchestrator().run(
        _options(project_builder),
        on_start=lambda: started.append(True),
        on_file=seen.append,
    )

    assert started == [True]
    assert seen == [project_builder.file("a.jsx"), project_builder.file("b.jsx")]


def test_invalid_options_fail_before_discovery(project_builder: ProjectBuilder) -> None:
    class ExplodingDiscoverer:
        def discover(self, *args, **kwargs):  # type: ignore[no-untyped-def]
            raise AssertionError("discovery must not run")

    orchestrator = Orchestrator(discoverer=ExplodingDiscoverer())  # type: ignore[arg-type]
    with pytest.raises(InvalidOptionsError):
        orchestrator.run(_options(project_builder, report=[ReportFacet.LINES]))
