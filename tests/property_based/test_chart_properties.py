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

"""Property-based tests for text charts."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cargolens.analysis.charts import HEAVY_LINE, LIGHT_LINE, ChartConfig, bar_width_for, render_bar, render_chart
from cargolens.core.model_types import ChartStyle
from tests.property_based.strategies import chart_datasets, chart_styles

pytestmark = pytest.mark.property


@given(chart_datasets(), chart_styles(), st.integers(min_value=1, max_value=120))
def test_one_line_per_datum(data: list[tuple[str, int]], style: ChartStyle, width: int) -> None:
    output = render_chart(data, ChartConfig(style=style, width=width))
    assert output.count("\n") == len(data)


@given(chart_datasets(), st.integers(min_value=1, max_value=120))
def test_basic_bars_never_exceed_width(data: list[tuple[str, int]], width: int) -> None:
    total = sum(value for _, value in data)
    for _, value in data:
        _, bar_width = bar_width_for(value, total, width)
        assert 0 <= bar_width <= width
        assert len(render_bar(ChartStyle.BASIC, bar_width, 0.0)) == bar_width


@given(st.integers(min_value=0, max_value=400))
def test_fractional_bars_use_eighths(bar_width: int) -> None:
    for style in (ChartStyle.BLOCKS, ChartStyle.DOTS):
        bar = render_bar(style, bar_width, 50.0)
        assert len(bar) == bar_width // 8 + (1 if bar_width % 8 else 0)


@given(st.integers(min_value=0, max_value=200), st.floats(min_value=0.0, max_value=99.9))
def test_partial_lines_end_with_light_segment(bar_width: int, percentage: float) -> None:
    bar = render_bar(ChartStyle.LINES, bar_width, percentage)
    assert bar == HEAVY_LINE * bar_width + LIGHT_LINE
