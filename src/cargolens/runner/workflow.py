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

"""End-to-end workflow that runs ``cargo clippy`` and analyses its output."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from cargolens._internal.exceptions import CargolensError
from cargolens._internal.utils import run_command
from cargolens.core.model_types import LogComponent
from cargolens.logging import structured_extra

from .analysis import AnalysisRunner, current_timestamp, report_filename

if TYPE_CHECKING:
    from pathlib import Path

    from cargolens.config import CargoConfig, Config
    from cargolens.core.type_aliases import Command

    from .analysis import AnalysisOutcome

logger: logging.Logger = logging.getLogger("cargolens.runner.workflow")

CARGO_EXECUTABLE: Final[str] = "cargo"
MESSAGE_FORMAT_FLAG: Final[str] = "--message-format=json"


class ClippyExecutionError(CargolensError):
    """Raised when ``cargo clippy`` fails without producing diagnostics."""

    def __init__(self, command: Command, exit_code: int | None, detail: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.detail = detail
        status = "could not be started" if exit_code is None else f"exited with {exit_code}"
        super().__init__(f"{' '.join(command)} {status}: {detail}")


def clippy_command(cargo: CargoConfig) -> Command:
    """Build the ``cargo clippy`` command line for ``cargo`` settings."""
    args = [CARGO_EXECUTABLE, "clippy"]
    if cargo.workspace:
        args.append("--workspace")
    if cargo.all_features:
        args.append("--all-features")
    if cargo.all_targets:
        args.append("--all-targets")
    args.extend(cargo.extra_args)
    args.append(MESSAGE_FORMAT_FLAG)
    return args


class ClippyWorkflow:
    """Run clippy in a crate directory, save its output and analyse it."""

    def __init__(self, config: Config, *, working_dir: Path | None = None, timestamp: str | None = None) -> None:
        self.config = config
        self.working_dir = working_dir
        self.timestamp = timestamp or current_timestamp()

    @property
    def output_path(self) -> Path:
        return self.config.analysis.reports_dir / report_filename("output", self.timestamp, "json")

    def run(self) -> AnalysisOutcome:
        """Run clippy and analyse the diagnostics it printed.

        Returns:
            The ``AnalysisOutcome`` of the analysis stage.

        Raises:
            ClippyExecutionError: If clippy cannot be started, or exits with a
                failure status without printing any diagnostics.
        """
        command = clippy_command(self.config.cargo)
        logger.info(
            "Running %s",
            " ".join(command),
            extra=structured_extra(LogComponent.RUNNER, details={"cwd": str(self.working_dir or ".")}),
        )
        try:
            result = run_command(command, cwd=self.working_dir, allowed={CARGO_EXECUTABLE})
        except OSError as exc:
            raise ClippyExecutionError(command, None, str(exc)) from exc
        if result.exit_code != 0 and not result.stdout.strip():
            detail = result.stderr.strip().splitlines()[-1] if result.stderr.strip() else "no output"
            raise ClippyExecutionError(command, result.exit_code, detail)

        output_path = self.output_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        _ = output_path.write_text(result.stdout, encoding="utf-8")
        logger.debug(
            "Saved clippy output",
            extra=structured_extra(
                LogComponent.RUNNER,
                path=output_path,
                duration_ms=result.duration_ms,
                exit_code=result.exit_code,
            ),
        )
        return AnalysisRunner(self.config, timestamp=self.timestamp).run(output_path)


__all__ = ["CARGO_EXECUTABLE", "ClippyExecutionError", "ClippyWorkflow", "clippy_command"]
