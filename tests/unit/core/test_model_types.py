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

"""Unit tests for shared enumerations and warning helpers."""

from __future__ import annotations

import pytest

from cargolens.core.categories import SUBCATEGORY_FAMILIES
from cargolens.core.model_types import CategoryType, ChartStyle, Priority, ReportFormat
from cargolens.core.types import FileWarnings, WarningCategory
from tests.fixtures.builders import make_warning

pytestmark = pytest.mark.unit


def test_category_ranks_are_fixed() -> None:
    assert [category.rank for category in CategoryType.by_severity()] == [4, 3, 2, 1]
    assert CategoryType.by_severity()[0] is CategoryType.SAFETY


def test_priority_scores_are_fixed() -> None:
    assert [priority.severity_score for priority in Priority] == [5, 4, 3, 2, 1]
    assert Priority.CRITICAL.description.startswith("Critical")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("fix_plan", ReportFormat.FIX_PLAN), ("FIX-PLAN", ReportFormat.FIX_PLAN), ("csv", ReportFormat.CSV)],
)
def test_report_format_from_str(raw: str, expected: ReportFormat) -> None:
    assert ReportFormat.from_str(raw) is expected


def test_unknown_enum_value_raises() -> None:
    with pytest.raises(ValueError, match="Unknown chart style"):
        _ = ChartStyle.from_str("sparkline")


def test_subcategory_families_describe_every_member() -> None:
    for family in SUBCATEGORY_FAMILIES.values():
        for member in family:
            assert member.description  # type: ignore[attr-defined]


def test_warning_category_full_description() -> None:
    assert WarningCategory(CategoryType.SAFETY, "unsafe_code").full_description() == "Safety: unsafe_code"


def test_warning_key_and_analyze() -> None:
    warning = make_warning(CategoryType.PERFORMANCE, "clippy::box_vec", file="src/x.rs", line=4)
    assert warning.key == ("src/x.rs", 4, "unneeded return statement")
    assert warning.analyze() == (3, "Performance bottleneck in src/x.rs (line 4)")


def test_warning_is_immutable() -> None:
    warning = make_warning()
    with pytest.raises(AttributeError):
        warning.line = 3  # type: ignore[misc]


def test_file_warnings_helpers() -> None:
    group = FileWarnings("src/x.rs")
    group.add_warning(make_warning(line=9, file="src/x.rs"))
    group.add_warning(make_warning(CategoryType.SAFETY, "unsafe_code", line=2, file="src/x.rs"))
    assert [warning.line for warning in group.sorted_by_line()] == [2, 9]
    assert [severity for severity, _ in group.analyze_file()] == [3, 3]


def test_warning_payload_uses_enum_values() -> None:
    payload = make_warning(suggested_fix="remove it").to_payload()
    assert payload["category"] == {"category_type": "Style", "subcategory": "clippy::needless_return"}
    assert payload["priority"] == "Medium"
    assert payload["suggested_fix"] == "remove it"
