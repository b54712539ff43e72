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

# ruff: noqa: ANN401

"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, Any, Protocol

from cargolens._internal.utils import consume

if TYPE_CHECKING:
    from cargolens.core.type_aliases import ChartDatum


class ArgumentRegistrar(Protocol):
    """Interface shared by ``argparse.ArgumentParser`` and argument groups."""

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action: ...


def register_argument(registrar: ArgumentRegistrar, *args: Any, **kwargs: Any) -> None:
    """Register an argument on a parser or argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    consume(registrar.add_argument(*args, **kwargs))


def parse_chart_entry(raw: str) -> ChartDatum:
    """Parse a ``LABEL=VALUE`` command-line entry into a chart datum.

    Raises:
        argparse.ArgumentTypeError: If the entry has no label or its value is
            not a non-negative integer.
    """
    label, sep, value = raw.rpartition("=")
    label = label.strip()
    if not sep or not label:
        message = f"expected LABEL=VALUE, got '{raw}'"
        raise argparse.ArgumentTypeError(message)
    try:
        count = int(value.strip())
    except ValueError as exc:
        message = f"value for '{label}' must be an integer, got '{value}'"
        raise argparse.ArgumentTypeError(message) from exc
    if count < 0:
        message = f"value for '{label}' must not be negative"
        raise argparse.ArgumentTypeError(message)
    return label, count


def positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        message = f"expected a positive integer, got '{raw}'"
        raise argparse.ArgumentTypeError(message) from exc
    if value <= 0:
        message = f"expected a positive integer, got '{raw}'"
        raise argparse.ArgumentTypeError(message)
    return value


__all__ = ["ArgumentRegistrar", "parse_chart_entry", "positive_int", "register_argument"]
