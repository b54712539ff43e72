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

"""Property-based tests for warning aggregation."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cargolens.analysis.statistics import WarningStatistics
from cargolens.core.types import Warning  # noqa: A004
from tests.property_based.strategies import warnings

pytestmark = pytest.mark.property


@given(st.lists(warnings(), max_size=40))
def test_dimensions_sum_to_total(items: list[Warning]) -> None:
    stats = WarningStatistics.from_warnings(items, len({item.file for item in items}))
    stats.verify_totals()
    assert stats.total_warnings == len(items)
    assert sum(stats.by_subcategory.values()) == len(items)


@given(st.lists(warnings(), max_size=20), st.lists(warnings(), max_size=20))
def test_merge_matches_single_pass(left: list[Warning], right: list[Warning]) -> None:
    merged = WarningStatistics.from_warnings(left, 0).merge(WarningStatistics.from_warnings(right, 0))
    combined = WarningStatistics.from_warnings([*left, *right], 0)
    assert merged.total_warnings == combined.total_warnings
    assert merged.by_category == combined.by_category
    assert merged.by_priority == combined.by_priority
    assert merged.by_subcategory == combined.by_subcategory


@given(st.lists(warnings(), max_size=20), st.lists(warnings(), max_size=20))
def test_merge_is_commutative(left: list[Warning], right: list[Warning]) -> None:
    a = WarningStatistics.from_warnings(left, 1)
    b = WarningStatistics.from_warnings(right, 2)
    assert a.merge(b).by_category == b.merge(a).by_category
    assert a.merge(b).files_affected == 3
