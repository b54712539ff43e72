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

"""``cargolens run``: lint the crate with clippy and analyse the result."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from cargolens.cli.helpers import build_cli_context, print_outcome, register_argument, resolve_cli_path
from cargolens.runner import ClippyWorkflow

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.cli.types import SubparserCollection
    from cargolens.config import Config


def register_run_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the ``run`` subcommand.

    Args:
        subparsers: Subparser registry where the command will be added.
        parents: Shared parent parsers carrying global flags.
    """
    run = subparsers.add_parser(
        "run",
        help="Run cargo clippy and analyse its diagnostics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(run, "--workspace", action="store_true", help="Lint every workspace member.")
    register_argument(run, "--all-features", action="store_true", help="Enable all crate features.")
    register_argument(run, "--all-targets", action="store_true", help="Lint tests, benches and examples too.")
    register_argument(
        run,
        "--working-dir",
        type=Path,
        default=None,
        help="Crate directory clippy runs in (also used to discover configuration).",
    )
    register_argument(
        run,
        "--reports-dir",
        type=Path,
        default=None,
        help="Directory that receives the clippy output and generated reports.",
    )


def apply_run_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return ``config`` with the run flags given on the command line applied."""
    cargo = replace(
        config.cargo,
        workspace=config.cargo.workspace or args.workspace,
        all_features=config.cargo.all_features or args.all_features,
        all_targets=config.cargo.all_targets or args.all_targets,
    )
    analysis = config.analysis
    if args.reports_dir is not None:
        analysis = replace(analysis, reports_dir=resolve_cli_path(args.reports_dir))
    return replace(config, cargo=cargo, analysis=analysis)


def execute_run(args: argparse.Namespace) -> int:
    """Execute the ``run`` command.

    Returns:
        Exit code (0 for success).
    """
    working_dir = resolve_cli_path(args.working_dir) if args.working_dir is not None else None
    context = build_cli_context(args.config, root=working_dir)
    config = apply_run_overrides(context.config, args)
    outcome = ClippyWorkflow(config, working_dir=working_dir).run()
    print_outcome(outcome)
    return 0


__all__ = ["apply_run_overrides", "execute_run", "register_run_command"]
