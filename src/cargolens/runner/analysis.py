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

"""Analysis orchestration: decode, aggregate, report and record history."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Final

from cargolens.analysis.charts import ChartConfig
from cargolens.analysis.statistics import WarningStatistics
from cargolens.analysis.trends import TrendAnalysis, analyze_trends
from cargolens.core.model_types import LogComponent, ReportFormat
from cargolens.history import append_history, history_totals, load_history
from cargolens.logging import structured_extra
from cargolens.output import (
    render_csv,
    render_detailed_report,
    render_fix_plan,
    render_json,
    render_markdown_report,
    render_summary,
)
from cargolens.parser import decode_file

if TYPE_CHECKING:
    from pathlib import Path

    from cargolens.config import Config
    from cargolens.parser import DecodedStream

logger: logging.Logger = logging.getLogger("cargolens.runner")

TIMESTAMP_FORMAT: Final[str] = "%Y%m%d_%H%M%S"

REPORT_FILES: Final[dict[ReportFormat, tuple[str, str]]] = {
    ReportFormat.MARKDOWN: ("analysis", "md"),
    ReportFormat.FIX_PLAN: ("fix_plan", "md"),
    ReportFormat.REPORT: ("report", "txt"),
    ReportFormat.SUMMARY: ("summary", "txt"),
    ReportFormat.JSON: ("warnings_json", "json"),
    ReportFormat.CSV: ("warnings_csv", "csv"),
}


def current_timestamp() -> str:
    """Return the local time formatted for report file names."""
    return datetime.now().astimezone().strftime(TIMESTAMP_FORMAT)


def report_filename(name: str, timestamp: str, extension: str) -> str:
    return f"clippy_{name}_{timestamp}.{extension}"


def _default_reports() -> dict[ReportFormat, Path]:
    return {}


def _default_insights() -> list[str]:
    return []


@dataclass(slots=True)
class AnalysisOutcome:
    """Structured result returned by ``AnalysisRunner.run``.

    Attributes:
        stream: Decoded diagnostic stream.
        stats: Aggregate statistics of the run.
        trend: Trend snapshot of the run, including its improvement rate.
        history: Snapshots that preceded this run, oldest first.
        insights: Trend insights for the run.
        reports: Written report files keyed by format.
    """

    stream: DecodedStream
    stats: WarningStatistics
    trend: TrendAnalysis
    history: list[TrendAnalysis]
    insights: list[str] = field(default_factory=_default_insights)
    reports: dict[ReportFormat, Path] = field(default_factory=_default_reports)

    @property
    def total_warnings(self) -> int:
        return self.stats.total_warnings


class AnalysisRunner:
    """Run the analysis pipeline over a JSON-lines diagnostic file.

    The history is loaded once before the run and only appended to after
    every report has been written.
    """

    def __init__(self, config: Config, *, timestamp: str | None = None) -> None:
        self.config = config
        self.timestamp = timestamp or current_timestamp()

    @property
    def chart_config(self) -> ChartConfig:
        charts = self.config.charts
        return ChartConfig(style=charts.style, width=charts.width, show_percentage=charts.show_percentage)

    def report_path(self, report_format: ReportFormat) -> Path:
        name, extension = REPORT_FILES[report_format]
        return self.config.analysis.reports_dir / report_filename(name, self.timestamp, extension)

    def run(self, input_path: Path) -> AnalysisOutcome:
        """Analyse ``input_path`` and write the configured reports.

        Args:
            input_path: JSON-lines file produced by ``cargo clippy --message-format=json``.

        Returns:
            ``AnalysisOutcome`` describing the run and the files written.

        Raises:
            InputFileError: If the input file cannot be read.
            StatisticsMismatchError: If the aggregate counts are inconsistent.
            OSError: If a report cannot be written.
            HistoryStoreError: If the history file is damaged or cannot be updated.
        """
        start = time.perf_counter()
        analysis = self.config.analysis
        stream = decode_file(input_path)
        if not stream.warnings:
            logger.warning(
                "No warnings were parsed from %s",
                input_path,
                extra=structured_extra(LogComponent.RUNNER, path=input_path),
            )
        stats = WarningStatistics.from_warnings(stream.warnings, len(stream.files))
        stats.verify_totals()

        history = load_history(analysis.history_path)
        trend = TrendAnalysis.from_statistics(stats)
        _ = trend.calculate_improvement_rate(history_totals(history))
        outcome = AnalysisOutcome(
            stream=stream,
            stats=stats,
            trend=trend,
            history=history,
            insights=analyze_trends(trend, history),
        )
        self._write_reports(outcome)
        if analysis.record_history:
            _ = append_history(analysis.history_path, trend, history)

        logger.info(
            "Analysed %s warnings across %s files",
            stats.total_warnings,
            stats.files_affected,
            extra=structured_extra(
                LogComponent.RUNNER,
                path=input_path,
                duration_ms=(time.perf_counter() - start) * 1000,
                counts={"warnings": stats.total_warnings, "files": stats.files_affected},
                details={"reports": len(outcome.reports)},
            ),
        )
        return outcome

    def render(self, report_format: ReportFormat, outcome: AnalysisOutcome) -> str:
        """Render one report format for ``outcome``."""
        stream = outcome.stream
        match report_format:
            case ReportFormat.MARKDOWN:
                fix_plan_name = None
                if ReportFormat.FIX_PLAN in self.config.analysis.formats:
                    fix_plan_name = self.report_path(ReportFormat.FIX_PLAN).name
                return render_markdown_report(
                    outcome.stats,
                    outcome.trend,
                    outcome.history,
                    stream.contexts,
                    chart=self.chart_config,
                    top_subcategories=self.config.analysis.top_subcategories,
                    fix_plan_name=fix_plan_name,
                )
            case ReportFormat.FIX_PLAN:
                return render_fix_plan(stream.warnings, chart=self.chart_config)
            case ReportFormat.REPORT:
                return render_detailed_report(stream.warnings, stream.files, outcome.stats, outcome.trend)
            case ReportFormat.SUMMARY:
                return render_summary(outcome.stats)
            case ReportFormat.JSON:
                return render_json(stream.warnings)
            case ReportFormat.CSV:
                return render_csv(stream.warnings)

    def _write_reports(self, outcome: AnalysisOutcome) -> None:
        reports_dir = self.config.analysis.reports_dir
        reports_dir.mkdir(parents=True, exist_ok=True)
        for report_format in self.config.analysis.formats:
            path = self.report_path(report_format)
            _ = path.write_text(self.render(report_format, outcome), encoding="utf-8")
            outcome.reports[report_format] = path
            logger.debug(
                "Wrote %s report",
                report_format,
                extra=structured_extra(LogComponent.OUTPUT, path=path),
            )


__all__ = [
    "REPORT_FILES",
    "TIMESTAMP_FORMAT",
    "AnalysisOutcome",
    "AnalysisRunner",
    "current_timestamp",
    "report_filename",
]
