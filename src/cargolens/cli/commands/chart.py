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

"""``cargolens chart``: render a text bar chart from command-line values."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from cargolens.analysis.charts import ChartConfig, render_chart
from cargolens.cli.helpers import echo, parse_chart_entry, positive_int, register_argument
from cargolens.core.model_types import ChartStyle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.cli.types import SubparserCollection


def register_chart_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the ``chart`` subcommand.

    Args:
        subparsers: Subparser registry where the command will be added.
        parents: Shared parent parsers carrying global flags.
    """
    chart = subparsers.add_parser(
        "chart",
        help="Render LABEL=VALUE pairs as a text bar chart",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(chart, "entries", nargs="+", type=parse_chart_entry, metavar="LABEL=VALUE")
    register_argument(
        chart,
        "--style",
        choices=[style.value for style in ChartStyle],
        default=ChartStyle.BASIC.value,
        help="Bar glyph style.",
    )
    register_argument(chart, "--width", type=positive_int, default=50, help="Bar width representing 100%%.")
    register_argument(chart, "--no-percentage", action="store_true", help="Hide the percentage column.")


def execute_chart(args: argparse.Namespace) -> int:
    """Execute the ``chart`` command.

    Returns:
        Exit code (0 for success, 1 when the values sum to zero).
    """
    entries: list[tuple[str, int]] = args.entries
    if sum(value for _, value in entries) == 0:
        echo("[cargolens] chart values must sum to more than zero", err=True)
        return 1
    config = ChartConfig(
        style=ChartStyle.from_str(args.style),
        width=args.width,
        show_percentage=not args.no_percentage,
    )
    echo(render_chart(entries, config), newline=False)
    return 0


__all__ = ["execute_chart", "register_chart_command"]
