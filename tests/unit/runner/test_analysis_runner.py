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

"""Unit tests for the analysis runner."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from cargolens.core.model_types import ReportFormat
from cargolens.history import HistoryStoreError, load_history
from cargolens.runner import AnalysisRunner
from cargolens.runner.analysis import REPORT_FILES, report_filename

if TYPE_CHECKING:
    from pathlib import Path

    from cargolens.config import Config

pytestmark = pytest.mark.unit

TIMESTAMP = "20250102_030405"


def test_report_filename() -> None:
    assert report_filename("analysis", TIMESTAMP, "md") == "clippy_analysis_20250102_030405.md"


def test_every_format_has_a_file_name() -> None:
    assert set(REPORT_FILES) == set(ReportFormat)


def test_run_writes_every_report(analysis_config: Config, diagnostic_file: Path) -> None:
    outcome = AnalysisRunner(analysis_config, timestamp=TIMESTAMP).run(diagnostic_file)
    assert outcome.total_warnings == 3
    assert outcome.stats.files_affected == 2
    assert outcome.history == []
    assert set(outcome.reports) == set(ReportFormat)
    reports_dir = analysis_config.analysis.reports_dir
    for report_format, path in outcome.reports.items():
        name, extension = REPORT_FILES[report_format]
        assert path == reports_dir / f"clippy_{name}_{TIMESTAMP}.{extension}"
        assert path.read_text(encoding="utf-8")
    markdown = outcome.reports[ReportFormat.MARKDOWN].read_text(encoding="utf-8")
    assert f"see clippy_fix_plan_{TIMESTAMP}.md" in markdown
    payload = json.loads(outcome.reports[ReportFormat.JSON].read_text(encoding="utf-8"))
    assert len(payload) == 3


def test_run_appends_history(analysis_config: Config, diagnostic_file: Path) -> None:
    history_path = analysis_config.analysis.history_path
    first = AnalysisRunner(analysis_config, timestamp=TIMESTAMP).run(diagnostic_file)
    assert first.trend.improvement_rate == 0.0
    second = AnalysisRunner(analysis_config, timestamp=TIMESTAMP).run(diagnostic_file)
    assert [record.total_warnings for record in second.history] == [3]
    assert second.trend.improvement_rate == 0.0
    assert len(load_history(history_path)) == 2


def test_run_leaves_damaged_history_untouched(analysis_config: Config, diagnostic_file: Path) -> None:
    history_path = analysis_config.analysis.history_path
    history_path.parent.mkdir(parents=True, exist_ok=True)
    original = '[{"total_warnings": 7}, {"total_warnings": -1}]'
    _ = history_path.write_text(original, encoding="utf-8")
    with pytest.raises(HistoryStoreError):
        _ = AnalysisRunner(analysis_config, timestamp=TIMESTAMP).run(diagnostic_file)
    assert history_path.read_text(encoding="utf-8") == original


def test_run_without_recording_history(analysis_config: Config, diagnostic_file: Path) -> None:
    config = replace(analysis_config, analysis=replace(analysis_config.analysis, record_history=False))
    _ = AnalysisRunner(config, timestamp=TIMESTAMP).run(diagnostic_file)
    assert not config.analysis.history_path.exists()


def test_run_only_configured_formats(analysis_config: Config, diagnostic_file: Path) -> None:
    config = replace(analysis_config, analysis=replace(analysis_config.analysis, formats=[ReportFormat.MARKDOWN]))
    outcome = AnalysisRunner(config, timestamp=TIMESTAMP).run(diagnostic_file)
    assert list(outcome.reports) == [ReportFormat.MARKDOWN]
    assert "For detailed fix instructions" not in outcome.reports[ReportFormat.MARKDOWN].read_text(encoding="utf-8")


def test_run_on_empty_input_warns(
    analysis_config: Config,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    empty = tmp_path / "empty.json"
    _ = empty.write_text("", encoding="utf-8")
    with caplog.at_level("WARNING", logger="cargolens.runner"):
        outcome = AnalysisRunner(analysis_config, timestamp=TIMESTAMP).run(empty)
    assert outcome.total_warnings == 0
    assert "No warnings were parsed" in caplog.text
    assert outcome.reports[ReportFormat.CSV].read_text(encoding="utf-8").count("\n") == 1
