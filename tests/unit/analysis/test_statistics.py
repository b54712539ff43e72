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

"""Unit tests for warning statistics aggregation."""

from __future__ import annotations

import pytest

from cargolens.analysis.statistics import StatisticsMismatchError, WarningStatistics
from cargolens.core.model_types import CategoryType, Priority
from cargolens.core.types import Warning  # noqa: A004
from tests.fixtures.builders import make_warning

pytestmark = pytest.mark.unit


def _warnings() -> list[Warning]:
    return [
        make_warning(CategoryType.SAFETY, "unsafe_code", priority=Priority.HIGH, message="Unsafe raw pointer use"),
        make_warning(CategoryType.SAFETY, "unsafe_code", priority=Priority.CRITICAL, message="Unsafe FFI call"),
        make_warning(CategoryType.PERFORMANCE, "clippy::box_vec", message="needless allocation and clone"),
        make_warning(CategoryType.STYLE, "clippy::use_self", priority=Priority.LOW, message="unused naming"),
        make_warning(CategoryType.DOCUMENTATION, "missing_docs", message="missing docs, see link"),
    ]


def test_from_warnings_counts_every_dimension_once() -> None:
    stats = WarningStatistics.from_warnings(_warnings(), 3)
    assert stats.total_warnings == 5
    assert stats.total_input_warnings == 5
    assert stats.files_affected == 3
    assert stats.by_category == {
        CategoryType.SAFETY: 2,
        CategoryType.PERFORMANCE: 1,
        CategoryType.STYLE: 1,
        CategoryType.DOCUMENTATION: 1,
    }
    assert stats.by_priority == {Priority.HIGH: 1, Priority.CRITICAL: 1, Priority.MEDIUM: 2, Priority.LOW: 1}
    assert stats.by_subcategory["unsafe_code"] == 2
    assert sum(stats.by_category.values()) == stats.total_warnings
    assert sum(stats.by_priority.values()) == stats.total_warnings


def test_from_warnings_records_input_count_separately() -> None:
    stats = WarningStatistics.from_warnings(_warnings(), 3, input_count=9)
    assert stats.total_input_warnings == 9
    assert stats.total_warnings == 5


def test_detail_visitors_run_for_every_warning_regardless_of_category() -> None:
    stats = WarningStatistics.from_warnings(_warnings(), 3)
    safety, performance, style, docs = stats.detailed_stats()
    assert safety.total_issues == 5
    assert safety.unsafe_details.total_unsafe == 2
    assert safety.unsafe_details.raw_pointers == 1
    assert safety.unsafe_details.ffi_calls == 1
    assert performance.total_issues == 5
    assert performance.allocation_patterns == {"needless allocation and clone": 1}
    assert performance.clone_patterns == {"needless allocation and clone": 1}
    assert style.unused_patterns == {"unused naming": 1}
    assert style.naming_issues == {"unused naming": 1}
    assert docs.missing_docs == {"missing docs, see link": 1}
    assert docs.link_issues == 1


def test_empty_collection_produces_zero_counts() -> None:
    stats = WarningStatistics.from_warnings([], 0)
    assert stats.total_warnings == 0
    assert stats.by_category == {}
    stats.verify_totals()


def test_verify_totals_detects_mismatch() -> None:
    stats = WarningStatistics.from_warnings(_warnings(), 3)
    stats.by_priority[Priority.TRIVIAL] = 1
    with pytest.raises(StatisticsMismatchError) as excinfo:
        stats.verify_totals()
    assert excinfo.value.dimension == "priority"


def test_verify_totals_checks_categories_first() -> None:
    stats = WarningStatistics.from_warnings(_warnings(), 3)
    stats.total_warnings = 4
    with pytest.raises(StatisticsMismatchError) as excinfo:
        stats.verify_totals()
    assert excinfo.value.dimension == "category"


def test_merge_sums_partial_aggregates() -> None:
    warnings = _warnings()
    left = WarningStatistics.from_warnings(warnings[:2], 1)
    right = WarningStatistics.from_warnings(warnings[2:], 2)
    merged = left.merge(right)
    whole = WarningStatistics.from_warnings(warnings, 3)
    assert merged.total_warnings == whole.total_warnings
    assert merged.by_category == whole.by_category
    assert merged.by_priority == whole.by_priority
    assert merged.by_subcategory == whole.by_subcategory
    assert merged.safety_details == whole.safety_details
    assert merged.doc_details == whole.doc_details
    merged.verify_totals()


def test_top_subcategories_sorted_by_count() -> None:
    stats = WarningStatistics.from_warnings(_warnings(), 3)
    top = stats.top_subcategories(2)
    assert top[0] == ("unsafe_code", 2)
    assert len(top) == 2


def test_count_helpers_default_to_zero() -> None:
    stats = WarningStatistics.from_warnings(_warnings()[:1], 1)
    assert stats.category_count(CategoryType.SAFETY) == 1
    assert stats.category_count(CategoryType.STYLE) == 0
    assert stats.priority_count(Priority.TRIVIAL) == 0
