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

"""Chart blocks embedded in Markdown reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cargolens.analysis.charts import render_chart

from .formatter import percentage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.analysis.charts import ChartConfig
    from cargolens.core.type_aliases import ChartDatum


def md_chart(
    title: str | None,
    data: Sequence[ChartDatum],
    config: ChartConfig,
    *,
    with_breakdown: bool = True,
) -> list[str]:
    """Render ``data`` as a fenced chart, optionally followed by a percentage list.

    Datasets that sum to zero are reported as empty instead of rendered.
    """
    lines: list[str] = []
    if title:
        lines.extend([f"#### {title}", ""])
    total = sum(value for _, value in data)
    if total == 0:
        lines.extend(["_No data available._", ""])
        return lines
    lines.extend(["```", render_chart(data, config), "```", ""])
    if not with_breakdown:
        return lines
    lines.extend(f"- {label}: {value} ({percentage(value, total):.1f}%)" for label, value in data)
    lines.append("")
    return lines


__all__ = ["md_chart"]
