"""Tests for jsxinfo.options."""

from __future__ import annotations

import pytest

from jsxinfo.options import AnalyzeOptions, InvalidOptionsError, ReportFacet
from jsxinfo.sorting import SortPolicy


def test_defaults_validate_without_query() -> None:
    options = AnalyzeOptions()
    assert options.validate() is None
    assert options.report == [ReportFacet.USAGE, ReportFacet.PROPS]
    assert options.sort is SortPolicy.USAGE


def test_string_values_are_normalized() -> None:
    options = AnalyzeOptions(report=["lines"], prop="id", sort="alphabetical")  # type: ignore[list-item,arg-type]
    query = options.validate()
    assert query is not None and query.key == "id"
    assert options.report == [ReportFacet.LINES]
    assert options.sort is SortPolicy.ALPHABETICAL


@pytest.mark.parametrize(
    "options",
    [
        AnalyzeOptions(report=[ReportFacet.LINES]),
        AnalyzeOptions(report=["children"]),  # type: ignore[list-item]
        AnalyzeOptions(sort="random"),  # type: ignore[arg-type]
        AnalyzeOptions(plugins=["decorators-legacy"]),
        AnalyzeOptions(prop="=value"),
    ],
)
def test_invalid_options_are_rejected(options: AnalyzeOptions) -> None:
    with pytest.raises(InvalidOptionsError):
        options.validate()
