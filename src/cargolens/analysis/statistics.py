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

"""Aggregate statistics over a batch of classified warnings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cargolens.core.model_types import CategoryType, LogComponent, Priority
from cargolens.exceptions import CargolensError
from cargolens.logging import structured_extra

from .details import (
    DocStatistics,
    PerformanceStatistics,
    SafetyStatistics,
    StyleStatistics,
    merge_counts,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cargolens.core.types import Warning  # noqa: A004

logger: logging.Logger = logging.getLogger("cargolens.analysis")


class StatisticsMismatchError(CargolensError):
    """Raised when category or priority counts disagree with the warning total."""

    def __init__(self, dimension: str, counted: int, total: int) -> None:
        self.dimension = dimension
        self.counted = counted
        self.total = total
        super().__init__(f"Sum of {dimension} counts ({counted}) does not match total warnings ({total})")


def _default_category_counts() -> dict[CategoryType, int]:
    return {}


def _default_priority_counts() -> dict[Priority, int]:
    return {}


def _default_subcategory_counts() -> dict[str, int]:
    return {}


@dataclass(slots=True)
class WarningStatistics:
    """Counts derived from one analysis run.

    Attributes:
        total_warnings: Number of warnings aggregated.
        total_input_warnings: Number of warnings before any filtering.
        files_affected: Number of distinct source files with warnings.
        by_category: Count per category; absent categories have no key.
        by_priority: Count per priority; absent priorities have no key.
        by_subcategory: Count per subcategory label (normally the lint code).
        safety_details: Safety drill-down.
        performance_details: Performance drill-down.
        style_details: Style drill-down.
        doc_details: Documentation drill-down.
    """

    total_warnings: int = 0
    total_input_warnings: int = 0
    files_affected: int = 0
    by_category: dict[CategoryType, int] = field(default_factory=_default_category_counts)
    by_priority: dict[Priority, int] = field(default_factory=_default_priority_counts)
    by_subcategory: dict[str, int] = field(default_factory=_default_subcategory_counts)
    safety_details: SafetyStatistics = field(default_factory=SafetyStatistics)
    performance_details: PerformanceStatistics = field(default_factory=PerformanceStatistics)
    style_details: StyleStatistics = field(default_factory=StyleStatistics)
    doc_details: DocStatistics = field(default_factory=DocStatistics)

    @classmethod
    def from_warnings(
        cls,
        warnings: Iterable[Warning],
        file_count: int,
        *,
        input_count: int | None = None,
    ) -> WarningStatistics:
        """Fold warnings into a new aggregate in a single pass.

        Every warning is counted once per dimension and is offered to all four
        domain drill-downs.

        Args:
            warnings: Warnings to aggregate.
            file_count: Number of distinct files the warnings came from.
            input_count: Number of warnings before filtering. Defaults to the
                number of warnings aggregated.

        Returns:
            The populated ``WarningStatistics``.
        """
        stats = cls(files_affected=file_count)
        visitors = (
            stats.safety_details,
            stats.performance_details,
            stats.style_details,
            stats.doc_details,
        )
        for warning in warnings:
            stats.total_warnings += 1
            category = warning.category_type
            stats.by_category[category] = stats.by_category.get(category, 0) + 1
            stats.by_priority[warning.priority] = stats.by_priority.get(warning.priority, 0) + 1
            label = warning.subcategory
            stats.by_subcategory[label] = stats.by_subcategory.get(label, 0) + 1
            for visitor in visitors:
                visitor.update(warning)
        stats.total_input_warnings = stats.total_warnings if input_count is None else input_count
        logger.debug(
            "Aggregated %d warnings across %d files",
            stats.total_warnings,
            file_count,
            extra=structured_extra(
                LogComponent.ANALYSIS,
                counts={"warnings": stats.total_warnings, "files": file_count},
            ),
        )
        return stats

    def merge(self, other: WarningStatistics) -> WarningStatistics:
        """Return a new aggregate whose counters are the sums of both inputs.

        Summation is commutative, so partial aggregates can be combined in any
        order. Display order of equal counts is not preserved across merges.
        """
        return WarningStatistics(
            total_warnings=self.total_warnings + other.total_warnings,
            total_input_warnings=self.total_input_warnings + other.total_input_warnings,
            files_affected=self.files_affected + other.files_affected,
            by_category=merge_counts(self.by_category, other.by_category),
            by_priority=merge_counts(self.by_priority, other.by_priority),
            by_subcategory=merge_counts(self.by_subcategory, other.by_subcategory),
            safety_details=self.safety_details.merged(other.safety_details),
            performance_details=self.performance_details.merged(other.performance_details),
            style_details=self.style_details.merged(other.style_details),
            doc_details=self.doc_details.merged(other.doc_details),
        )

    def verify_totals(self) -> None:
        """Check that category and priority counts both add up to the total.

        Raises:
            StatisticsMismatchError: If either dimension disagrees with
                ``total_warnings``.
        """
        category_sum = sum(self.by_category.values())
        if category_sum != self.total_warnings:
            raise StatisticsMismatchError("category", category_sum, self.total_warnings)
        priority_sum = sum(self.by_priority.values())
        if priority_sum != self.total_warnings:
            raise StatisticsMismatchError("priority", priority_sum, self.total_warnings)

    def top_subcategories(self, limit: int) -> list[tuple[str, int]]:
        ranked = sorted(self.by_subcategory.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    def category_count(self, category: CategoryType) -> int:
        return self.by_category.get(category, 0)

    def priority_count(self, priority: Priority) -> int:
        return self.by_priority.get(priority, 0)

    def detailed_stats(
        self,
    ) -> tuple[SafetyStatistics, PerformanceStatistics, StyleStatistics, DocStatistics]:
        return (self.safety_details, self.performance_details, self.style_details, self.doc_details)


__all__ = ["StatisticsMismatchError", "WarningStatistics"]
