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

"""Markdown analysis report.

The report contains the run summary with severity and category charts, the
most frequent subcategories, a build configuration overview and the trend
section comparing the run against history.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cargolens.analysis.charts import ChartConfig
from cargolens.analysis.trends import analyze_trends
from cargolens.core.categories import CATEGORY_DISPLAY_ORDER, CATEGORY_RISK_PRIORITY
from cargolens.core.model_types import ChartStyle, Priority
from cargolens.core.types import BuildInfo

from .charts import md_chart

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.analysis.statistics import WarningStatistics
    from cargolens.analysis.trends import TrendAnalysis
    from cargolens.core.type_aliases import ChartDatum
    from cargolens.core.types import AnalysisContext

REPORT_TITLE = "Clippy Analysis Report"
_SEVERITY_ORDER: tuple[Priority, ...] = (Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW)


def severity_distribution(stats: WarningStatistics) -> list[ChartDatum]:
    """Return warning counts per category-derived risk level, most severe first."""
    counts = dict.fromkeys(_SEVERITY_ORDER, 0)
    for category, count in stats.by_category.items():
        counts[CATEGORY_RISK_PRIORITY[category]] += count
    return [(priority.value, counts[priority]) for priority in _SEVERITY_ORDER]


def _md_summary(
    stats: WarningStatistics,
    *,
    chart: ChartConfig,
    top_subcategories: int,
    fix_plan_name: str | None,
) -> list[str]:
    lines = [
        "## Analysis Summary",
        "",
        f"Total warnings: {stats.total_warnings}",
        f"Files affected: {stats.files_affected}",
        "",
        "### Warning Distribution by Severity",
        "",
    ]
    lines.extend(md_chart("Severity Distribution", severity_distribution(stats), chart))
    lines.extend(["### Warning Distribution by Category", ""])
    category_data = sorted(
        ((category.value, count) for category, count in stats.by_category.items()),
        key=lambda item: item[1],
        reverse=True,
    )
    lines.extend(md_chart("Category Distribution", category_data, chart))
    lines.extend(["### Top Warning Subcategories", ""])
    lines.extend(
        f"- {label}: {count} warnings" for label, count in stats.top_subcategories(top_subcategories)
    )
    if fix_plan_name:
        lines.extend(["", f"For detailed fix instructions, see {fix_plan_name}"])
    return lines


def _md_build_info(contexts: Sequence[AnalysisContext]) -> list[str]:
    lines = ["## Build Configuration Analysis", "", "### Build Complexity Overview", ""]
    features_by_crate: dict[str, list[int]] = {}
    for context in contexts:
        if isinstance(context, BuildInfo):
            features_by_crate.setdefault(context.crate_name, []).append(len(context.features))
    if not features_by_crate:
        lines.append("- No build artifacts recorded")
        return lines
    for crate_name, feature_counts in features_by_crate.items():
        average = sum(feature_counts) / len(feature_counts)
        lines.append(f"- {crate_name}: {average:.1f} features on average")
    return lines


def _md_trend_without_history(trend: TrendAnalysis) -> list[str]:
    lines = [
        "No historical data available for trend analysis.",
        "",
        "Current Analysis Summary:",
        f"- Total Warnings: {trend.total_warnings}",
        "",
        "Warning Distribution:",
    ]
    for category in CATEGORY_DISPLAY_ORDER:
        risk = CATEGORY_RISK_PRIORITY[category].value.upper()
        lines.append(f"- {category} ({risk} Risk): {trend.by_category.get(category, 0)} warnings")
    return lines


def _md_trend_with_history(trend: TrendAnalysis, history: Sequence[TrendAnalysis], chart: ChartConfig) -> list[str]:
    trend_data: list[ChartDatum] = [
        (f"Analysis {index}", record.total_warnings) for index, record in enumerate(history, start=1)
    ]
    trend_data.append(("Current", trend.total_warnings))
    lines = ["### Warning Count Trends", ""]
    lines.extend(md_chart("Historical Trends", trend_data, chart))
    lines.extend(["### Category Trends", ""])
    lines.extend(f"- {insight}" for insight in analyze_trends(trend, history))
    lines.extend(["", "### Risk Level Changes", ""])
    previous = history[-1]
    for category in CATEGORY_DISPLAY_ORDER:
        change = trend.by_category.get(category, 0) - previous.by_category.get(category, 0)
        if change > 0:
            direction = "increased"
        elif change < 0:
            direction = "decreased"
        else:
            direction = "unchanged"
        lines.append(f"- {category} issues have {direction} ({change:+d})")
    lines.extend(["", f"Improvement rate: {trend.improvement_rate * 100:.1f}%"])
    return lines


def render_trend_markdown(trend: TrendAnalysis, history: Sequence[TrendAnalysis], chart: ChartConfig) -> list[str]:
    lines = ["## Trend Analysis", ""]
    if not history:
        lines.extend(_md_trend_without_history(trend))
    else:
        lines.extend(_md_trend_with_history(trend, history, chart))
    return lines


def render_markdown_report(
    stats: WarningStatistics,
    trend: TrendAnalysis,
    history: Sequence[TrendAnalysis],
    contexts: Sequence[AnalysisContext],
    *,
    chart: ChartConfig | None = None,
    top_subcategories: int = 5,
    fix_plan_name: str | None = None,
) -> str:
    """Render the Markdown analysis report.

    Args:
        stats: Aggregate statistics of the current run.
        trend: Trend snapshot of the current run.
        history: Earlier snapshots, oldest first.
        contexts: Decoded contexts, used for the build configuration section.
        chart: Chart options; defaults to 60-cell block charts.
        top_subcategories: Number of subcategories listed in the summary.
        fix_plan_name: File name of the companion fix plan, when one is written.

    Returns:
        The Markdown document.
    """
    chart_config = chart or ChartConfig(style=ChartStyle.BLOCKS, width=60)
    lines = [f"# {REPORT_TITLE}", ""]
    lines.extend(
        _md_summary(
            stats,
            chart=chart_config,
            top_subcategories=top_subcategories,
            fix_plan_name=fix_plan_name,
        )
    )
    lines.append("")
    lines.extend(_md_build_info(contexts))
    lines.append("")
    lines.extend(render_trend_markdown(trend, history, chart_config))
    return "\n".join(lines) + "\n"


__all__ = ["render_markdown_report", "render_trend_markdown", "severity_distribution"]
