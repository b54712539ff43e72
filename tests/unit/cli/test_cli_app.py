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

"""Unit tests for the cargolens command-line interface."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

import pytest

from cargolens import __version__
from cargolens.cli import app
from cargolens.cli.helpers import parse_chart_entry, positive_int
from cargolens.config import load_config

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = [pytest.mark.unit, pytest.mark.cli]


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == f"cargolens {__version__}"


def test_cargo_subcommand_token_is_stripped(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["lens", "--version"]) == 0
    assert "cargolens" in capsys.readouterr().out


def test_strip_cargo_token() -> None:
    assert app.strip_cargo_token(["lens", "analyze", "x"]) == ["analyze", "x"]
    assert app.strip_cargo_token(["analyze", "lens"]) == ["analyze", "lens"]
    assert app.strip_cargo_token([]) == []


def test_main_requires_command() -> None:
    with pytest.raises(SystemExit):
        _ = app.main([])


def test_main_unknown_command() -> None:
    with pytest.raises(SystemExit):
        _ = app.main(["unknown"])


def test_init_writes_loadable_template(tmp_path: Path) -> None:
    target = tmp_path / "cargolens.toml"
    assert app.main(["init", "--output", str(target)]) == 0
    config = load_config(target, root=tmp_path)
    assert config.analysis.reports_dir == tmp_path.resolve() / "analysis_reports"
    assert app.main(["init", "--output", str(target)]) == 1
    assert app.main(["init", "--output", str(target), "--force"]) == 0


def test_chart_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["chart", "A=1", "B=3", "--width", "40"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith("█" * 10)
    assert lines[1].endswith("█" * 30)


def test_chart_command_rejects_zero_sum(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["chart", "A=0", "--no-percentage"]) == 1
    assert "sum to more than zero" in capsys.readouterr().err


def test_chart_entry_parsing() -> None:
    assert parse_chart_entry("key=value=3") == ("key=value", 3)
    for raw in ("novalue", "=3", "a=x", "a=-1"):
        with pytest.raises(argparse.ArgumentTypeError):
            _ = parse_chart_entry(raw)
    assert positive_int("4") == 4
    with pytest.raises(argparse.ArgumentTypeError):
        _ = positive_int("0")


def test_analyze_command(
    tmp_path: Path,
    diagnostic_file: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    exit_code = app.main(["analyze", str(diagnostic_file), "--reports-dir", "out", "--no-history"])
    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Total Warnings: 3 (from 3 input warnings)" in out
    assert "Generated reports:" in out
    assert len(list((tmp_path / "out").iterdir())) == 6
    assert not (tmp_path / "clippy_historical.json").exists()


def test_analyze_missing_input_reports_error_code(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    assert app.main(["analyze", "absent.json"]) == 1
    assert "[cargolens] error CL200:" in capsys.readouterr().err


def test_invalid_config_reports_error_code(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    _ = (tmp_path / "cargolens.toml").write_text("config_version = 9\n", encoding="utf-8")
    assert app.main(["analyze", "input.json"]) == 1
    assert "error CL115:" in capsys.readouterr().err
