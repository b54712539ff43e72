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

"""Unit tests for the clippy workflow."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from cargolens._internal.utils import CommandOutput
from cargolens.config import CargoConfig
from cargolens.runner import ClippyExecutionError, ClippyWorkflow, clippy_command
from cargolens.runner import workflow as workflow_module

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from cargolens.config import Config

pytestmark = pytest.mark.unit


def test_clippy_command_defaults() -> None:
    assert clippy_command(CargoConfig()) == ["cargo", "clippy", "--message-format=json"]


def test_clippy_command_flags() -> None:
    cargo = CargoConfig(workspace=True, all_features=True, all_targets=True, extra_args=["--locked"])
    assert clippy_command(cargo) == [
        "cargo",
        "clippy",
        "--workspace",
        "--all-features",
        "--all-targets",
        "--locked",
        "--message-format=json",
    ]


def _fake_runner(output: CommandOutput, calls: list[list[str]]) -> Callable[..., CommandOutput]:
    def _run(args: Iterable[str], cwd: Path | None = None, *, allowed: set[str] | None = None) -> CommandOutput:
        assert allowed == {"cargo"}
        calls.append(list(args))
        return output

    return _run


def test_workflow_saves_output_and_analyses(
    monkeypatch: pytest.MonkeyPatch,
    analysis_config: Config,
    sample_lines: list[str],
) -> None:
    calls: list[list[str]] = []
    output = CommandOutput(["cargo"], "\n".join(sample_lines), "", 101, 5.0)
    monkeypatch.setattr(workflow_module, "run_command", _fake_runner(output, calls))
    workflow = ClippyWorkflow(analysis_config, timestamp="20250102_030405")
    outcome = workflow.run()
    assert calls == [["cargo", "clippy", "--message-format=json"]]
    assert workflow.output_path.name == "clippy_output_20250102_030405.json"
    assert workflow.output_path.read_text(encoding="utf-8").startswith(sample_lines[0])
    assert outcome.total_warnings == 3


def test_workflow_failure_without_output(monkeypatch: pytest.MonkeyPatch, analysis_config: Config) -> None:
    output = CommandOutput(["cargo"], "", "error: could not find `Cargo.toml`\n", 101, 1.0)
    monkeypatch.setattr(workflow_module, "run_command", _fake_runner(output, []))
    with pytest.raises(ClippyExecutionError) as excinfo:
        _ = ClippyWorkflow(analysis_config).run()
    assert excinfo.value.exit_code == 101
    assert excinfo.value.detail == "error: could not find `Cargo.toml`"


def test_workflow_missing_cargo(monkeypatch: pytest.MonkeyPatch, analysis_config: Config) -> None:
    def _missing(args: Iterable[str], cwd: Path | None = None, *, allowed: set[str] | None = None) -> CommandOutput:
        raise FileNotFoundError("cargo")

    monkeypatch.setattr(workflow_module, "run_command", _missing)
    config = replace(analysis_config, cargo=CargoConfig(workspace=True))
    with pytest.raises(ClippyExecutionError, match="could not be started"):
        _ = ClippyWorkflow(config).run()
