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

"""Text, CSV and JSON report assemblers."""

from __future__ import annotations

import csv
import io
from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING, Final

from cargolens.json import dump_json

from .formatter import format_warning, percentage

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from cargolens.analysis.statistics import WarningStatistics
    from cargolens.analysis.trends import TrendAnalysis
    from cargolens.core.types import FileWarnings, Warning  # noqa: A004

CSV_HEADER: Final[tuple[str, ...]] = ("File", "Line", "Category", "Message", "Priority", "Suggested Fix")


def _csv_safe(text: str) -> str:
    return text.replace(",", ";")


def render_csv(warnings: Sequence[Warning]) -> str:
    """Render one CSV row per warning.

    Commas inside the message and the suggested fix are replaced with
    semicolons so spreadsheet tools split columns predictably; fields with
    line breaks are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for warning in warnings:
        writer.writerow(
            (
                warning.file,
                warning.line,
                _csv_safe(warning.category.full_description()),
                _csv_safe(warning.message),
                warning.priority.value,
                _csv_safe(warning.suggested_fix or ""),
            )
        )
    return buffer.getvalue()


def render_json(warnings: Sequence[Warning]) -> str:
    """Render warnings as a pretty-printed JSON array."""
    return dump_json([warning.to_payload() for warning in warnings]) + "\n"


def render_summary(stats: WarningStatistics) -> str:
    """Render the plain-text summary of category, priority and subcategory counts."""
    lines = [
        f"Total Warnings: {stats.total_warnings}",
        f"Files Affected: {stats.files_affected}",
        "",
        "Category Distribution:",
    ]
    lines.extend(
        f"{category}: {count} ({percentage(count, stats.total_warnings):.1f}%)"
        for category, count in stats.by_category.items()
    )
    lines.extend(["", "Priority Distribution:"])
    lines.extend(f"{priority}: {count}" for priority, count in stats.by_priority.items())
    lines.extend(["", "Subcategory Distribution:"])
    lines.extend(f"{label}: {count}" for label, count in stats.by_subcategory.items())
    return "\n".join(lines) + "\n"


def render_trend_section(trend: TrendAnalysis) -> str:
    lines = ["", "=== Trend Analysis ===", "", f"Total Warnings: {trend.total_warnings}", "", "Warnings by Category:"]
    lines.extend(f"  {category} - {count} issues" for category, count in trend.by_category.items())
    lines.extend(["", "Warnings by Priority:"])
    lines.extend(f"  {priority} - {count} warnings" for priority, count in trend.by_priority.items())
    lines.extend(["", "Recurring Issues:"])
    lines.extend(f"  {label} - {count} occurrences" for label, count in trend.recurring_issues.items())
    lines.extend(["", f"Improvement Rate: {trend.improvement_rate * 100:.1f}%"])
    return "\n".join(lines) + "\n"


def _describe(value: object, indent: int = 0) -> list[str]:
    pad = "  " * indent
    lines: list[str] = []
    if not is_dataclass(value):
        return [f"{pad}{value}"]
    for item in fields(value):
        attr = getattr(value, item.name)
        if is_dataclass(attr):
            lines.append(f"{pad}{item.name}:")
            lines.extend(_describe(attr, indent + 1))
        elif isinstance(attr, dict):
            lines.append(f"{pad}{item.name}: {len(attr)} distinct")
            mapping: Mapping[object, object] = attr
            lines.extend(f"{pad}  - {key}: {count}" for key, count in mapping.items())
        else:
            lines.append(f"{pad}{item.name}: {attr}")
    return lines


def _section(title: str, body: Sequence[str]) -> list[str]:
    return [f"=== {title} ===", "", *body, ""]


def render_warning_list(warnings: Sequence[Warning], *, show_fixes: bool = True) -> str:
    """Render warnings grouped under consecutive file headings."""
    lines = ["Warning Report", ""]
    current_file: str | None = None
    for warning in warnings:
        if warning.file != current_file:
            current_file = warning.file
            lines.extend(["", f"File: {current_file}"])
        lines.append(format_warning(warning))
        if show_fixes and warning.suggested_fix is not None:
            lines.extend([f"Suggested fix:\n{warning.suggested_fix}", ""])
    return "\n".join(lines) + "\n"


def render_detailed_report(
    warnings: Sequence[Warning],
    files: Mapping[str, FileWarnings],
    stats: WarningStatistics,
    trend: TrendAnalysis,
) -> str:
    """Render the file-by-file report with domain drill-downs and the warning list.

    Args:
        warnings: Warnings of the current run.
        files: Warnings grouped by file.
        stats: Aggregate statistics of the current run.
        trend: Trend snapshot of the current run.

    Returns:
        The report text.
    """
    lines = ["File-by-File Analysis", "", "===================", ""]
    for path, file_warnings in files.items():
        lines.extend([f"File: {path}", f"Total warnings: {len(file_warnings.warnings)}"])
        lines.extend(f"- [{severity}] {impact}" for severity, impact in file_warnings.analyze_file())
        lines.append("")
    safety, performance, style, docs = stats.detailed_stats()
    lines.extend(_section("Safety Issues", _describe(safety)))
    lines.extend(_section("Performance Issues", _describe(performance)))
    lines.extend(_section("Style Issues", _describe(style)))
    lines.extend(_section("Documentation Issues", _describe(docs)))
    lines.append(render_trend_section(trend))
    lines.extend(["Detailed Warning List", ""])
    lines.append(render_warning_list(warnings))
    return "\n".join(lines)


__all__ = [
    "CSV_HEADER",
    "render_csv",
    "render_detailed_report",
    "render_json",
    "render_summary",
    "render_trend_section",
    "render_warning_list",
]
