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

"""``cargolens analyze``: analyse an existing clippy JSON-lines file."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from cargolens.cli.helpers import build_cli_context, print_outcome, register_argument, resolve_cli_path
from cargolens.runner import AnalysisRunner

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.cli.types import SubparserCollection
    from cargolens.config import Config


def register_analyze_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the ``analyze`` subcommand.

    Args:
        subparsers: Subparser registry where the command will be added.
        parents: Shared parent parsers carrying global flags.
    """
    analyze = subparsers.add_parser(
        "analyze",
        help="Analyse a saved `cargo clippy --message-format=json` output file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(analyze, "input", type=Path, help="JSON-lines diagnostic file to analyse.")
    register_argument(analyze, "--reports-dir", type=Path, default=None, help="Directory for generated reports.")
    register_argument(analyze, "--history", type=Path, default=None, help="History file used for trend analysis.")
    register_argument(
        analyze,
        "--no-history",
        action="store_true",
        help="Do not append this run to the history file.",
    )


def apply_analyze_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return ``config`` with the analysis flags given on the command line applied."""
    analysis = config.analysis
    if args.reports_dir is not None:
        analysis = replace(analysis, reports_dir=resolve_cli_path(args.reports_dir))
    if args.history is not None:
        analysis = replace(analysis, history_path=resolve_cli_path(args.history))
    if args.no_history:
        analysis = replace(analysis, record_history=False)
    return replace(config, analysis=analysis)


def execute_analyze(args: argparse.Namespace) -> int:
    """Execute the ``analyze`` command.

    Returns:
        Exit code (0 for success).
    """
    context = build_cli_context(args.config)
    config = apply_analyze_overrides(context.config, args)
    outcome = AnalysisRunner(config).run(resolve_cli_path(args.input))
    print_outcome(outcome)
    return 0


__all__ = ["apply_analyze_overrides", "execute_analyze", "register_analyze_command"]
