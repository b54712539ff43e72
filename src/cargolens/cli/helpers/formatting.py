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

"""Terminal summaries printed after an analysis run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cargolens.output import format_summary

from .io import echo

if TYPE_CHECKING:
    from cargolens.runner import AnalysisOutcome


def print_outcome(outcome: AnalysisOutcome) -> None:
    """Print the warning summary, trend insights and written reports."""
    stats = outcome.stats
    by_category = sorted(stats.by_category.items(), key=lambda item: item[1], reverse=True)
    echo(format_summary(stats.total_warnings, by_category, stats.total_input_warnings), newline=False)
    echo(f"Files affected: {stats.files_affected}")
    echo(f"Improvement rate: {outcome.trend.improvement_rate * 100:.1f}%")
    if outcome.insights:
        echo("\nInsights:")
        for insight in outcome.insights:
            echo(f"  - {insight}")
    if outcome.reports:
        echo("\nGenerated reports:")
        for report_format, path in outcome.reports.items():
            echo(f"  {report_format:<10} {path}")


__all__ = ["print_outcome"]
