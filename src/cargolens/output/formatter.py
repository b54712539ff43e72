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

"""Plain-text formatting helpers shared by the report assemblers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cargolens.core.categories import CATEGORY_MARKERS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cargolens.core.model_types import CategoryType
    from cargolens.core.types import Warning  # noqa: A004


def format_warning(warning: Warning) -> str:
    """Render a warning as a marker line followed by its indented message."""
    marker = CATEGORY_MARKERS[warning.category_type]
    return f"{marker} {warning.category_type} in {warning.file} (line {warning.line})\n    {warning.message}\n"


def format_summary(total: int, by_category: Sequence[tuple[CategoryType, int]], input_warnings: int) -> str:
    lines = [f"\nTotal Warnings: {total} (from {input_warnings} input warnings)\n", "By Category:"]
    lines.extend(f"  {category}: {count}" for category, count in by_category)
    return "\n".join(lines) + "\n"


def format_file_path(path: str, warning_count: int) -> str:
    return f"\n📁 {path} ({warning_count} warnings)\n"


def format_code_snippet(code: str, line_number: int) -> str:
    """Prefix each line of ``code`` with its right-aligned line number."""
    return "".join(f"{line_number + offset:>4} | {line}\n" for offset, line in enumerate(code.splitlines()))


def percentage(count: int, total: int) -> float:
    return count / total * 100.0 if total else 0.0


__all__ = ["format_code_snippet", "format_file_path", "format_summary", "format_warning", "percentage"]
