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

"""Markdown fix plan grouped by risk level.

Warnings are grouped by the risk priority of their category, then by
category, then by identical message. Each group carries an impact
assessment, an optional worked example, an optional specific fix and every
occurrence.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, cast

from cargolens.analysis.charts import ChartConfig
from cargolens.analysis.statistics import WarningStatistics
from cargolens.core.categories import CATEGORY_RISK_PRIORITY
from cargolens.core.model_types import CategoryType, ChartStyle, Priority
from cargolens.fixes.examples import get_fix_example
from cargolens.fixes.suggestions import generate_fix_suggestion

from .charts import md_chart
from .formatter import percentage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.core.types import Warning  # noqa: A004

CHILD_MESSAGES_PREFIX: Final[str] = "Child messages: "
WIDESPREAD_THRESHOLD: Final[int] = 5
PLAN_PRIORITIES: Final[tuple[Priority, ...]] = (Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW)
RISK_LEVEL_DEFINITIONS: Final[tuple[str, ...]] = (
    "- 5: Critical - Immediate action required (safety issues, potential bugs)",
    "- 4: High - Should be fixed soon (correctness issues, performance problems)",
    "- 3: Medium - Plan to fix (maintainability issues)",
    "- 2: Low - Fix when convenient (style issues)",
    "- 1: Trivial - Optional fixes",
)


def _default_files() -> set[str]:
    return set()


def _default_groups() -> dict[str, list[Warning]]:
    return {}


@dataclass(slots=True)
class CategoryGroup:
    """Warnings of one category inside a risk level."""

    count: int = 0
    files: set[str] = field(default_factory=_default_files)
    messages: dict[str, list[Warning]] = field(default_factory=_default_groups)

    def add(self, warning: Warning) -> None:
        self.count += 1
        self.files.add(warning.file)
        self.messages.setdefault(warning.message, []).append(warning)


def group_by_risk(warnings: Sequence[Warning]) -> dict[Priority, dict[CategoryType, CategoryGroup]]:
    """Group warnings by the risk priority of their category."""
    groups: dict[Priority, dict[CategoryType, CategoryGroup]] = {}
    for warning in warnings:
        risk = CATEGORY_RISK_PRIORITY[warning.category_type]
        groups.setdefault(risk, {}).setdefault(warning.category_type, CategoryGroup()).add(warning)
    return groups


def impact_assessment(category: CategoryType, priority: Priority) -> tuple[str, str]:
    """Return the severity heading and impact text for a warning group."""
    match category:
        case CategoryType.SAFETY if priority is Priority.CRITICAL:
            return (
                "CRITICAL SAFETY ISSUE",
                "Could cause production failures or security vulnerabilities.",
            )
        case CategoryType.SAFETY:
            return "SAFETY CONCERN", "May affect program correctness."
        case CategoryType.PERFORMANCE if priority is Priority.HIGH:
            return (
                "HIGH PERFORMANCE IMPACT",
                "May affect system responsiveness and resource usage.",
            )
        case CategoryType.PERFORMANCE:
            return "PERFORMANCE CONCERN", "Could impact efficiency."
        case CategoryType.STYLE:
            return "MAINTAINABILITY CONCERN", "Affects code readability and maintenance."
        case CategoryType.DOCUMENTATION:
            return "DOCUMENTATION GAP", "Impacts code understanding and usability."


def extract_child_messages(message: str) -> list[str]:
    """Return the child messages embedded in a synthesised warning message."""
    for line in message.splitlines():
        if not line.startswith(CHILD_MESSAGES_PREFIX):
            continue
        try:
            decoded: object = json.loads(line.removeprefix(CHILD_MESSAGES_PREFIX))
        except json.JSONDecodeError:
            return []
        if isinstance(decoded, list):
            return [str(item) for item in cast("list[object]", decoded)]
        return []
    return []


def _md_statistics(stats: WarningStatistics, chart: ChartConfig) -> list[str]:
    lines = [
        "## Summary",
        "",
        f"Total warnings: {stats.total_warnings}",
        f"Files affected: {stats.files_affected}",
        "",
        "### Category Breakdown",
        "",
    ]
    data = [(category.value, count) for category, count in stats.by_category.items()]
    lines.extend(md_chart(None, data, chart, with_breakdown=False))
    lines.extend(
        f"- {category}: {count} ({percentage(count, stats.total_warnings):.1f}%)"
        for category, count in stats.by_category.items()
    )
    lines.append("")
    return lines


def _md_message_group(category: CategoryType, message: str, warnings: Sequence[Warning]) -> list[str]:
    first = warnings[0]
    headline = message.split("\n", 1)[0]
    severity, impact = impact_assessment(category, first.priority)
    pattern = (
        "Widespread issue affecting multiple files - consider systematic fix."
        if len(warnings) > WIDESPREAD_THRESHOLD
        else "Isolated occurrences - can be fixed individually."
    )
    lines = [
        f"### {headline}",
        "",
        f"**Risk Assessment**: {severity}: {headline}",
        f"**Impact**: {impact}",
        f"**Pattern**: {pattern}",
        "",
    ]
    example = get_fix_example(first)
    if example is not None:
        lines.extend(
            [
                "#### Fix Template",
                "",
                "```rust",
                example.before,
                "",
                "// After applying fix:",
                "",
                example.after,
                "```",
                "",
            ]
        )
    suggestion = generate_fix_suggestion(first)
    if suggestion is not None:
        lines.extend(
            [
                "#### Specific Fix",
                "",
                "```rust",
                suggestion.code,
                "```",
                "",
                f"Confidence: {suggestion.confidence * 100:.0f}%",
                "",
            ]
        )
    lines.extend(["#### All Occurrences", ""])
    for warning in warnings:
        lines.extend([f"**{warning.file}:{warning.line}**", "```", f"Message: {warning.message}"])
        children = extract_child_messages(warning.message)
        if children:
            lines.extend(["", "Child Messages:"])
            lines.extend(f"- {child}" for child in children)
        lines.extend(["```", ""])
    return lines


def _md_priority_section(priority: Priority, categories: dict[CategoryType, CategoryGroup]) -> list[str]:
    lines = ["", f"# {priority} Priority Warnings (Risk Level: {priority.severity_score})", ""]
    for category, group in categories.items():
        lines.extend(
            [
                f"## {category} Issues",
                "",
                f"**Frequency**: {group.count} occurrences",
                f"**Affected Files**: {len(group.files)} files",
                "",
            ]
        )
        for message, warnings in group.messages.items():
            lines.extend(_md_message_group(category, message, warnings))
    return lines


def render_fix_plan(warnings: Sequence[Warning], *, chart: ChartConfig | None = None) -> str:
    """Render the prioritised fix plan for ``warnings``.

    Args:
        warnings: Warnings of the current run.
        chart: Chart options; defaults to 50-cell block charts.

    Returns:
        The Markdown fix plan.
    """
    chart_config = chart or ChartConfig(style=ChartStyle.BLOCKS, width=50)
    stats = WarningStatistics.from_warnings(warnings, len({warning.file for warning in warnings}))
    lines = [
        "# Comprehensive Fix Priority Plan",
        "",
        "This plan outlines all detected issues, prioritized by risk level and impact.",
        "",
        "## Overview",
        "",
        "This plan covers all warning types, prioritized by risk level and frequency.",
        "",
    ]
    lines.extend(_md_statistics(stats, chart_config))
    lines.extend(["## Risk Level Definitions", "", *RISK_LEVEL_DEFINITIONS, ""])
    groups = group_by_risk(warnings)
    for priority in PLAN_PRIORITIES:
        if priority in groups:
            lines.extend(_md_priority_section(priority, groups[priority]))
    return "\n".join(lines) + "\n"


__all__ = [
    "CategoryGroup",
    "extract_child_messages",
    "group_by_risk",
    "impact_assessment",
    "render_fix_plan",
]
