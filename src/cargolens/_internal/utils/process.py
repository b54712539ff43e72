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

"""Subprocess helper used to invoke the lint toolchain."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cargolens.core.model_types import LogComponent
from cargolens.logging import structured_extra

logger: logging.Logger = logging.getLogger("cargolens.runner.process")

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from cargolens.core.type_aliases import Command

__all__ = ["CommandOutput", "run_command"]


@dataclass(slots=True)
class CommandOutput:
    args: Command
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float


def run_command(
    args: Iterable[str],
    cwd: Path | None = None,
    *,
    allowed: set[str] | None = None,
) -> CommandOutput:
    """Run a subprocess and return its captured output.

    The command never goes through a shell. When allowed is given the
    executable (first argument) must be one of its entries.

    Args:
        args: Command line to execute. The first element is the executable.
        cwd: Optional working directory for the child process.
        allowed: Optional allowlist of valid executables.

    Returns:
        ``CommandOutput`` with the argument vector, captured stdout/stderr,
        exit code, and duration in milliseconds.

    Raises:
        ValueError: If ``args`` is empty or the executable is not allowlisted.
        TypeError: If any argument is an empty string.
    """
    argv: Command = list(args)
    if not argv:
        message = "run_command requires at least one argument"
        raise ValueError(message)
    if not all(argv):
        message = "run_command arguments must be non-empty strings"
        raise TypeError(message)
    executable = argv[0]
    if allowed is not None and executable not in allowed:
        message = f"Executable '{executable}' is not allowed"
        raise ValueError(message)
    start = time.perf_counter()
    debug_details: dict[str, object] = {}
    if cwd:
        debug_details["cwd"] = str(cwd)
    logger.debug(
        "Executing command: %s",
        " ".join(argv),
        extra=structured_extra(LogComponent.RUNNER, details=debug_details),
    )
    completed = subprocess.run(  # noqa: S603 - command arguments provided by caller
        argv,
        check=False,
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    duration_ms = (time.perf_counter() - start) * 1000
    if completed.returncode != 0:
        logger.warning(
            "Command failed (exit=%s): %s",
            completed.returncode,
            " ".join(argv),
            extra=structured_extra(
                LogComponent.RUNNER,
                exit_code=completed.returncode,
                duration_ms=duration_ms,
            ),
        )
    return CommandOutput(
        args=argv,
        stdout=completed.stdout,
        stderr=completed.stderr,
        exit_code=completed.returncode,
        duration_ms=duration_ms,
    )
