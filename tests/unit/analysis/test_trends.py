# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for the trend engine."""

from __future__ import annotations

import pytest

from cargolens.analysis.statistics import WarningStatistics
from cargolens.analysis.trends import TrendAnalysis, analyze_trends, historical_average
from cargolens.core.model_types import CategoryType, Priority
from tests.fixtures.builders import make_warning

pytestmark = pytest.mark.unit


def _trend(total: int, **kwargs: object) -> TrendAnalysis:
    return TrendAnalysis(dates=["2025-01-01"], total_warnings=total, **kwargs)  # type: ignore[arg-type]


def test_improvement_rate_against_history() -> None:
    trend = _trend(10)
    rate = trend.calculate_improvement_rate([10, 20])
    assert rate == pytest.approx(1 / 3)
    assert trend.improvement_rate == pytest.approx(1 / 3)


def test_improvement_rate_is_negative_for_regressions() -> None:
    trend = _trend(30)
    assert trend.calculate_improvement_rate([10, 20]) == pytest.approx(-1.0)


@pytest.mark.parametrize("history", [[], [0, 0]])
def test_improvement_rate_is_zero_without_usable_history(history: list[int]) -> None:
    trend = _trend(10)
    assert trend.calculate_improvement_rate(history) == 0.0
    assert trend.improvement_rate == 0.0


@pytest.mark.parametrize("history", [[], [0, 0]])
def test_improvement_rate_resets_previous_value(history: list[int]) -> None:
    trend = _trend(10)
    _ = trend.calculate_improvement_rate([20])
    assert trend.improvement_rate == pytest.approx(0.5)
    assert trend.calculate_improvement_rate(history) == 0.0
    assert trend.improvement_rate == 0.0


def test_from_statistics_copies_counts_and_dates() -> None:
    warnings = [
        make_warning(CategoryType.SAFETY, "unsafe_code", priority=Priority.HIGH),
        make_warning(CategoryType.STYLE, "clippy::use_self"),
    ]
    stats = WarningStatistics.from_warnings(warnings, 1)
    trend = TrendAnalysis.from_statistics(stats, date="2025-03-04")
    assert trend.dates == ["2025-03-04"]
    assert trend.total_warnings == 2
    assert trend.by_category == {CategoryType.SAFETY: 1, CategoryType.STYLE: 1}
    assert trend.recurring_issues == {"unsafe_code": 1, "clippy::use_self": 1}
    assert trend.improvement_rate == 0.0


def test_from_statistics_defaults_to_today() -> None:
    trend = TrendAnalysis.from_statistics(WarningStatistics())
    assert len(trend.dates) == 1
    assert len(trend.dates[0]) == len("2025-01-01")


def test_increase_insight_when_above_twenty_percent() -> None:
    current = _trend(130, by_category={CategoryType.STYLE: 130})
    insights = analyze_trends(current, [_trend(100)])
    assert insights[0] == "Warning count increased by 30.0% compared to historical average"


def test_no_increase_insight_at_exactly_twenty_percent() -> None:
    current = _trend(120)
    assert analyze_trends(current, [_trend(100)]) == []


def test_category_concentration_threshold() -> None:
    current = _trend(
        100,
        by_category={
            CategoryType.SAFETY: 35,
            CategoryType.PERFORMANCE: 25,
            CategoryType.STYLE: 20,
            CategoryType.DOCUMENTATION: 20,
        },
    )
    insights = analyze_trends(current, [])
    assert insights == ["High concentration of Safety issues (35.0%)"]


def test_priority_insights_only_for_critical_and_high() -> None:
    current = _trend(
        10,
        by_priority={Priority.MEDIUM: 5, Priority.HIGH: 3, Priority.CRITICAL: 2},
    )
    insights = analyze_trends(current, [])
    assert insights == ["Significant number of High priority issues (30.0%)"]


def test_insight_groups_are_ordered() -> None:
    current = _trend(
        10,
        by_category={CategoryType.STYLE: 4, CategoryType.SAFETY: 6},
        by_priority={Priority.CRITICAL: 10},
        recurring_issues={"a": 1, "b": 5, "c": 3, "d": 2},
    )
    insights = analyze_trends(current, [_trend(5)])
    assert insights == [
        "Warning count increased by 100.0% compared to historical average",
        "High concentration of Safety issues (60.0%)",
        "High concentration of Style issues (40.0%)",
        "Significant number of Critical priority issues (100.0%)",
        "Frequently occurring issue: b (5 occurrences)",
        "Frequently occurring issue: c (3 occurrences)",
        "Frequently occurring issue: d (2 occurrences)",
    ]


def test_top_issues_limit() -> None:
    trend = _trend(6, recurring_issues={"x": 1, "y": 3, "z": 2})
    assert trend.get_top_issues(2) == [("y", 3), ("z", 2)]


def test_distributions_of_empty_trend_are_empty() -> None:
    trend = _trend(0)
    assert trend.get_category_distribution() == []
    assert trend.get_priority_distribution() == []


def test_historical_average() -> None:
    assert historical_average([]) is None
    assert historical_average([_trend(10), _trend(20)]) == 15
