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

"""Reusable Hypothesis strategies for cargolens property tests."""

from __future__ import annotations

from hypothesis import strategies as st

from cargolens.core.model_types import CategoryType, ChartStyle, Priority
from cargolens.core.types import Warning, WarningCategory  # noqa: A004

LINT_FRAGMENTS: tuple[str, ...] = (
    "use_self",
    "redundant",
    "unsafe",
    "mut",
    "perf",
    "box",
    "doc",
    "missing",
    "needless",
    "clippy::",
)


def lint_codes() -> st.SearchStrategy[str]:
    """Return lint-like codes built from rule keywords and free text."""
    fragment = st.one_of(st.sampled_from(LINT_FRAGMENTS), st.text(alphabet="abcdefghijklmnopqrstuvwxyz_:", max_size=8))
    return st.lists(fragment, min_size=1, max_size=4).map("".join)


def diagnostic_levels() -> st.SearchStrategy[str]:
    return st.sampled_from(("error", "warning", "note", "help", "failure-note", ""))


def warnings(max_line: int = 500) -> st.SearchStrategy[Warning]:
    """Return classified warnings with arbitrary categories and locations.

    Args:
        max_line: Largest line number emitted.

    Returns:
        Hypothesis strategy producing ``Warning`` instances.
    """
    return st.builds(
        Warning,
        category=st.builds(WarningCategory, st.sampled_from(list(CategoryType)), lint_codes()),
        priority=st.sampled_from(list(Priority)),
        message=st.text(max_size=40),
        file=st.sampled_from(("src/lib.rs", "src/main.rs", "src/a/mod.rs", "build.rs")),
        line=st.integers(min_value=1, max_value=max_line),
        suggested_fix=st.none() | st.text(max_size=20),
    )


def chart_datasets(max_size: int = 8) -> st.SearchStrategy[list[tuple[str, int]]]:
    """Return chart datasets whose values sum to more than zero."""
    datum = st.tuples(st.text(alphabet="abcXYZ ", min_size=1, max_size=10), st.integers(min_value=0, max_value=1000))
    return st.lists(datum, min_size=1, max_size=max_size).filter(lambda data: sum(value for _, value in data) > 0)


def chart_styles() -> st.SearchStrategy[ChartStyle]:
    return st.sampled_from(list(ChartStyle))


__all__ = ["chart_datasets", "chart_styles", "diagnostic_levels", "lint_codes", "warnings"]
