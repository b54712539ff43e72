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

"""Proportional text bar charts.

Datasets are rendered in the order given. The values must sum to more than
zero; a zero-sum dataset raises ``ZeroDivisionError``, so callers guard
against empty distributions before rendering.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from cargolens.core.model_types import ChartStyle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.core.type_aliases import ChartDatum

BASIC_GLYPH: Final[str] = "█"
BLOCK_GLYPHS: Final[tuple[str, ...]] = ("▏", "▎", "▍", "▌", "▋", "▊", "▉", "█")
DOT_GLYPHS: Final[tuple[str, ...]] = ("⠄", "⠆", "⠖", "⠶", "⢶", "⣶", "⣾", "⣿")
HEAVY_LINE: Final[str] = "━"
LIGHT_LINE: Final[str] = "─"
GLYPH_LEVELS: Final[int] = 8


@dataclass(slots=True, frozen=True)
class ChartConfig:
    """Rendering options for ``render_chart``.

    Attributes:
        style: Glyph style of the bars.
        width: Bar width, in glyph cells, that represents 100%.
        show_percentage: Whether to print the bracketed percentage column.
        label_width: Column width labels are left-aligned to.
    """

    style: ChartStyle = ChartStyle.BASIC
    width: int = 50
    show_percentage: bool = True
    label_width: int = 20


def bar_width_for(value: int, total: int, width: int) -> tuple[float, int]:
    """Return the percentage of ``value`` and its bar width in cells."""
    percentage = value / total * 100.0
    return percentage, math.floor(width * percentage / 100.0)


def _fractional_bar(bar_width: int, glyphs: tuple[str, ...]) -> str:
    full, remainder = divmod(bar_width, GLYPH_LEVELS)
    bar = glyphs[-1] * full
    if remainder:
        bar += glyphs[remainder - 1]
    return bar


def render_bar(style: ChartStyle, bar_width: int, percentage: float) -> str:
    """Render one bar of ``bar_width`` cells in the given style."""
    match style:
        case ChartStyle.BASIC:
            return BASIC_GLYPH * bar_width
        case ChartStyle.BLOCKS:
            return _fractional_bar(bar_width, BLOCK_GLYPHS)
        case ChartStyle.DOTS:
            return _fractional_bar(bar_width, DOT_GLYPHS)
        case ChartStyle.LINES:
            bar = HEAVY_LINE * bar_width
            return bar + LIGHT_LINE if percentage < 100.0 else bar


def render_chart(dataset: Sequence[ChartDatum], config: ChartConfig | None = None) -> str:
    """Render a labelled distribution as a text bar chart.

    Args:
        dataset: Ordered ``(label, value)`` pairs. Values must sum to more
            than zero unless the dataset is empty.
        config: Rendering options; defaults to ``ChartConfig()``.

    Returns:
        One newline-terminated line per datum.

    Raises:
        ZeroDivisionError: If the dataset is non-empty and sums to zero.
    """
    options = config or ChartConfig()
    total = sum(value for _, value in dataset)
    lines: list[str] = []
    for label, value in dataset:
        percentage, bar_width = bar_width_for(value, total, options.width)
        bar = render_bar(options.style, bar_width, percentage)
        padded = f"{label:<{options.label_width}}"
        if options.show_percentage:
            lines.append(f"{padded} [{percentage:>3.0f}%] {bar}\n")
        else:
            lines.append(f"{padded} {bar}\n")
    return "".join(lines)


__all__ = [
    "BASIC_GLYPH",
    "BLOCK_GLYPHS",
    "DOT_GLYPHS",
    "HEAVY_LINE",
    "LIGHT_LINE",
    "ChartConfig",
    "bar_width_for",
    "render_bar",
    "render_chart",
]
