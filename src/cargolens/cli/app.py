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

"""CLI entry point and orchestration for cargolens commands."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Callable, Sequence
from contextlib import suppress
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from cargolens import __version__
from cargolens._internal.exceptions import CargolensError
from cargolens._internal.utils import consume
from cargolens.cli.commands import analyze as analyze_command
from cargolens.cli.commands import chart as chart_command
from cargolens.cli.commands import run as run_command
from cargolens.cli.helpers import echo, register_argument
from cargolens.core.model_types import LogComponent, LogFormat
from cargolens.error_codes import error_code_for
from cargolens.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra

if TYPE_CHECKING:
    from cargolens.cli.types import SubparserCollection

logger: logging.Logger = logging.getLogger("cargolens.cli")

CARGOLENS_VERSION: Final[str] = __version__
CARGO_SUBCOMMAND_TOKEN: Final[str] = "lens"

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # cargolens configuration template
    # Save this file as cargolens.toml next to Cargo.toml, or move the tables
    # below under [package.metadata.cargolens] in Cargo.toml.
    config_version = 0

    [analysis]
    # Relative paths resolve against the directory holding this file.
    reports_dir = "analysis_reports"
    history_path = "clippy_historical.json"
    # Append every successful run to the history file.
    record_history = true
    # Reports written on every run.
    # choices: markdown, fix-plan, report, summary, json, csv
    formats = ["markdown", "fix-plan", "report", "summary", "json", "csv"]
    top_subcategories = 5

    [charts]
    style = "blocks"            # choices: basic, blocks, dots, lines
    width = 60
    show_percentage = true

    [cargo]
    # Flags forwarded to `cargo clippy` by `cargolens run`.
    workspace = false
    all_features = false
    all_targets = false
    # extra_args = ["--locked"]
    """,
)

CommandHandler = Callable[[argparse.Namespace], int]


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write the cargolens configuration template to a file.

    Args:
        path: Target path where the configuration file will be written.
        force: Overwrite the file if it already exists.

    Returns:
        Exit code (0 for success, 1 when the file exists and ``force`` is off).
    """
    if path.exists() and not force:
        echo(f"[cargolens] Refusing to overwrite existing file: {path}")
        echo("Use --force if you want to replace it.")
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    consume(path.write_text(CONFIG_TEMPLATE, encoding="utf-8"))
    echo(f"[cargolens] Wrote starter config to {path}")
    return 0


def strip_cargo_token(argv: Sequence[str]) -> list[str]:
    """Drop the subcommand token cargo passes to ``cargo-lens``."""
    arguments = list(argv)
    if arguments and arguments[0] == CARGO_SUBCOMMAND_TOKEN:
        return arguments[1:]
    return arguments


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the cargolens command-line interface.

    Parses command-line arguments, configures logging and dispatches to the
    selected command. Structured cargolens errors are reported with their
    error code and turn into exit code 1.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        Exit code of the executed command.
    """
    parser = _build_parser()
    args = parser.parse_args(strip_cargo_token(sys.argv[1:] if argv is None else argv))
    if args.version:
        echo(f"cargolens {CARGOLENS_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(args.log_format, args.log_level)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    try:
        return handler(args)
    except CargolensError as exc:
        code = error_code_for(exc)
        logger.debug(
            "Command failed",
            exc_info=True,
            extra=structured_extra(LogComponent.CLI, exit_code=1, details={"code": code}),
        )
        echo(f"[cargolens] error {code}: {exc}", err=True)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    register_argument(
        common,
        "--config",
        type=pathlib.Path,
        default=None,
        help="Configuration file to use instead of searching the working directory.",
    )
    register_argument(
        common,
        "--log-format",
        choices=LOG_FORMATS,
        default="text",
        help="Select logging output format (human-readable text or structured JSON).",
    )
    register_argument(
        common,
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Set verbosity of logged events.",
    )
    parser = argparse.ArgumentParser(
        prog="cargolens",
        parents=[common],
        description="Classify and analyse Clippy diagnostics. Also runs as `cargo lens`.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(parser, "--version", action="store_true", help="Print the cargolens version and exit.")
    subparsers = parser.add_subparsers(dest="command")

    parents = [common]
    run_command.register_run_command(subparsers, parents=parents)
    analyze_command.register_analyze_command(subparsers, parents=parents)
    chart_command.register_chart_command(subparsers, parents=parents)
    _register_init_command(subparsers, parents=parents)
    return parser


def _register_init_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None,
) -> None:
    init = subparsers.add_parser(
        "init",
        help="Generate a starter configuration file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(
        init,
        "-o",
        "--output",
        type=pathlib.Path,
        default=pathlib.Path("cargolens.toml"),
        help="Destination for the generated configuration file.",
    )
    register_argument(init, "--force", action="store_true", help="Overwrite the output file if it already exists.")


def _initialize_logging(log_format: str, log_level: str) -> None:
    with suppress(ValueError):
        _ = configure_logging(LogFormat.from_str(log_format), log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    return {
        "analyze": analyze_command.execute_analyze,
        "chart": chart_command.execute_chart,
        "init": _execute_init,
        "run": run_command.execute_run,
    }


def _execute_init(args: argparse.Namespace) -> int:
    return write_config_template(args.output, force=args.force)


__all__ = ["CONFIG_TEMPLATE", "main", "strip_cargo_token", "write_config_template"]
