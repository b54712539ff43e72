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

"""Trend analysis against historical runs.

The history is an explicit, ordered input: callers load it once per run and
append the new record only after the run succeeds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Final

from cargolens.core.model_types import CategoryType, Priority

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .statistics import WarningStatistics

DATE_FORMAT: Final[str] = "%Y-%m-%d"
INCREASE_THRESHOLD: Final[float] = 1.2
CATEGORY_SHARE_THRESHOLD: Final[float] = 30.0
PRIORITY_SHARE_THRESHOLD: Final[float] = 20.0
FLAGGED_PRIORITIES: Final[tuple[Priority, ...]] = (Priority.CRITICAL, Priority.HIGH)
TOP_RECURRING_ISSUES: Final[int] = 3


def _default_dates() -> list[str]:
    return []


def _default_category_counts() -> dict[CategoryType, int]:
    return {}


def _default_priority_counts() -> dict[Priority, int]:
    return {}


def _default_recurring() -> dict[str, int]:
    return {}


@dataclass(slots=True)
class TrendAnalysis:
    """Snapshot of one run used for trend comparison.

    Attributes:
        dates: Dates covered by the snapshot (``YYYY-MM-DD``).
        total_warnings: Number of warnings in the run.
        by_category: Count per category.
        by_priority: Count per priority.
        improvement_rate: Signed fraction versus the historical average;
            positive means fewer warnings than before.
        recurring_issues: Count per subcategory label.
    """

    dates: list[str] = field(default_factory=_default_dates)
    total_warnings: int = 0
    by_category: dict[CategoryType, int] = field(default_factory=_default_category_counts)
    by_priority: dict[Priority, int] = field(default_factory=_default_priority_counts)
    improvement_rate: float = 0.0
    recurring_issues: dict[str, int] = field(default_factory=_default_recurring)

    @classmethod
    def from_statistics(cls, stats: WarningStatistics, *, date: str | None = None) -> TrendAnalysis:
        """Build a snapshot of ``stats`` dated today unless ``date`` is given."""
        return cls(
            dates=[date if date is not None else datetime.now().astimezone().strftime(DATE_FORMAT)],
            total_warnings=stats.total_warnings,
            by_category=dict(stats.by_category),
            by_priority=dict(stats.by_priority),
            recurring_issues=dict(stats.by_subcategory),
        )

    def calculate_improvement_rate(self, history_totals: Sequence[int]) -> float:
        """Compute and store the improvement rate against past warning totals.

        Args:
            history_totals: Total warning counts of earlier runs.

        Returns:
            ``(average - current) / average``, or 0.0 when there is no history
            or the historical average is zero.
        """
        self.improvement_rate = 0.0
        if not history_totals:
            return self.improvement_rate
        average = sum(history_totals) / len(history_totals)
        if average == 0:
            return self.improvement_rate
        self.improvement_rate = (average - self.total_warnings) / average
        return self.improvement_rate

    def get_top_issues(self, limit: int) -> list[tuple[str, int]]:
        """Return up to ``limit`` recurring issues by descending count.

        Labels with equal counts keep their insertion order, which callers
        should not rely on.
        """
        ranked = sorted(self.recurring_issues.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    def get_category_distribution(self) -> list[tuple[CategoryType, float]]:
        """Return each present category's share in percent, most severe first."""
        total = sum(self.by_category.values())
        if total == 0:
            return []
        return [
            (category, self.by_category[category] / total * 100.0)
            for category in CategoryType.by_severity()
            if category in self.by_category
        ]

    def get_priority_distribution(self) -> list[tuple[Priority, float]]:
        """Return each present priority's share in percent, most severe first."""
        total = sum(self.by_priority.values())
        if total == 0:
            return []
        return [
            (priority, self.by_priority[priority] / total * 100.0)
            for priority in Priority
            if priority in self.by_priority
        ]


def historical_average(history: Sequence[TrendAnalysis]) -> float | None:
    if not history:
        return None
    return sum(record.total_warnings for record in history) / len(history)


def analyze_trends(current: TrendAnalysis, history: Sequence[TrendAnalysis]) -> list[str]:
    """Derive textual insights for the current run.

    Insights are emitted in a fixed order: a warning-count increase of more
    than 20% over the historical average, categories holding more than 30% of
    the warnings, Critical or High priorities above 20%, then the three most
    frequent issues.

    Args:
        current: Snapshot of the current run.
        history: Earlier snapshots, oldest first.

    Returns:
        Ordered insight messages.
    """
    insights: list[str] = []
    average = historical_average(history)
    if average is not None and current.total_warnings > average * INCREASE_THRESHOLD:
        increase = (current.total_warnings - average) / average * 100.0
        insights.append(f"Warning count increased by {increase:.1f}% compared to historical average")

    insights.extend(
        f"High concentration of {category} issues ({percentage:.1f}%)"
        for category, percentage in current.get_category_distribution()
        if percentage > CATEGORY_SHARE_THRESHOLD
    )
    insights.extend(
        f"Significant number of {priority} priority issues ({percentage:.1f}%)"
        for priority, percentage in current.get_priority_distribution()
        if priority in FLAGGED_PRIORITIES and percentage > PRIORITY_SHARE_THRESHOLD
    )
    insights.extend(
        f"Frequently occurring issue: {label} ({count} occurrences)"
        for label, count in current.get_top_issues(TOP_RECURRING_ISSUES)
    )
    return insights


__all__ = ["TrendAnalysis", "analyze_trends", "historical_average"]
