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

"""Unit tests for the lint classifier."""

from __future__ import annotations

import pytest

from cargolens.core.model_types import CategoryType, Priority
from cargolens.parser.classifier import categorise_lint_code, classify, determine_priority

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("clippy::unsafe_removed_from_name", CategoryType.SAFETY),
        ("redundant_clone", CategoryType.STYLE),
        ("clippy::use_self", CategoryType.STYLE),
        ("clippy::mut_from_ref", CategoryType.SAFETY),
        ("clippy::box_collection", CategoryType.PERFORMANCE),
        ("clippy::perf_lint", CategoryType.PERFORMANCE),
        ("clippy::doc_markdown", CategoryType.DOCUMENTATION),
        ("missing_docs", CategoryType.DOCUMENTATION),
        ("clippy::needless_return", CategoryType.STYLE),
        ("unknown", CategoryType.STYLE),
    ],
)
def test_categorise_lint_code_uses_first_matching_rule(code: str, expected: CategoryType) -> None:
    assert categorise_lint_code(code) is expected


def test_categorise_lint_code_is_case_sensitive() -> None:
    assert categorise_lint_code("clippy::UNSAFE_THING") is CategoryType.STYLE


def test_redundant_wins_over_unsafe_because_style_is_checked_first() -> None:
    assert categorise_lint_code("redundant_unsafe") is CategoryType.STYLE


@pytest.mark.parametrize(
    ("level", "message", "expected"),
    [
        ("error", "unsafe pointer dereference", Priority.CRITICAL),
        ("error", "mismatched types", Priority.CRITICAL),
        ("warning", "unsafe block detected", Priority.HIGH),
        ("warning", "possible security issue", Priority.HIGH),
        ("warning", "unused variable", Priority.MEDIUM),
        ("note", "unsafe block detected", Priority.LOW),
        ("help", "consider this", Priority.LOW),
        ("failure-note", "", Priority.LOW),
    ],
)
def test_determine_priority_checks_level_before_keywords(level: str, message: str, expected: Priority) -> None:
    assert determine_priority(level, message) is expected


def test_priority_keyword_match_is_case_sensitive() -> None:
    assert determine_priority("warning", "Unsafe block") is Priority.MEDIUM


def test_classify_uses_lint_code_as_subcategory() -> None:
    result = classify("clippy::box_collection", "warning", "you seem to be using Box<Vec<..>>")
    assert result.category.category_type is CategoryType.PERFORMANCE
    assert result.category.subcategory == "clippy::box_collection"
    assert result.priority is Priority.MEDIUM


def test_classify_without_code_falls_back_to_unknown_label() -> None:
    result = classify(None, "error", "cannot find value")
    assert result.category.subcategory == "unknown"
    assert result.category.category_type is CategoryType.STYLE
    assert result.priority is Priority.CRITICAL
