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

"""Unit tests for building warnings from diagnostics."""

from __future__ import annotations

import json

import pytest

from cargolens.core.model_types import CategoryType, Priority
from cargolens.parser.builder import build_warning, child_messages, format_location, parse_rendered
from cargolens.parser.protocol import DiagnosticModel, SpanModel
from tests.fixtures.builders import diagnostic_payload, span_payload

pytestmark = pytest.mark.unit


def _diagnostic(message: str, **kwargs: object) -> DiagnosticModel:
    return DiagnosticModel.model_validate(diagnostic_payload(message, **kwargs))  # type: ignore[arg-type]


def test_parse_rendered_takes_first_plain_help_line_as_suggestion() -> None:
    rendered = (
        "warning: unneeded return statement\n"
        "  --> src/lib.rs:3:5\n"
        "   = help: for further information visit https://rust-lang.github.io\n"
        "help: remove `return`\n"
        "help: or rewrite the block\n"
    )
    suggestion, explanations = parse_rendered(rendered)
    assert suggestion == "remove `return`"
    assert explanations == ["for further information visit https://rust-lang.github.io"]


def test_parse_rendered_never_uses_explanation_line_as_suggestion() -> None:
    suggestion, explanations = parse_rendered("  = help: consider `Self`\n  = help: second hint\n")
    assert suggestion is None
    assert explanations == ["consider `Self`", "second hint"]


def test_parse_rendered_without_help_lines() -> None:
    assert parse_rendered("warning: something\n") == (None, [])


def test_format_location_orders_lines_columns_then_file() -> None:
    span = SpanModel.model_validate(span_payload("src/a.rs", 5, line_end=6, column_start=2, column_end=9))
    assert format_location(span) == "5:2-6:9-src/a.rs"


def test_child_messages_skip_further_information_notes() -> None:
    diagnostic = _diagnostic(
        "unused variable",
        children=[
            diagnostic_payload("`#[warn(unused_variables)]` on by default", level="note", spans=[]),
            diagnostic_payload("for further information visit https://example.invalid", level="help", spans=[]),
        ],
    )
    assert child_messages(diagnostic) == ["`#[warn(unused_variables)]` on by default"]


def test_build_warning_uses_first_span_and_synthesises_message() -> None:
    diagnostic = _diagnostic(
        "unsafe block detected",
        code="unsafe_code",
        spans=[span_payload("src/a.rs", 5, column_start=1, column_end=7), span_payload("src/b.rs", 9)],
        children=[diagnostic_payload("the lint level is defined here", level="note", spans=[])],
        rendered="warning: unsafe block detected\nhelp: wrap it in a safe function\n   = help: see the nomicon\n",
    )
    warning = build_warning(diagnostic)
    assert warning.category_type is CategoryType.SAFETY
    assert warning.subcategory == "unsafe_code"
    assert warning.priority is Priority.HIGH
    assert warning.file == "src/a.rs"
    assert warning.line == 5
    assert warning.suggested_fix == "wrap it in a safe function"
    lines = warning.message.split("\n")
    assert lines[0] == "unsafe block detected"
    assert lines[1] == "Location: 5:1-5:7-src/a.rs"
    assert lines[2] == "Explanation: see the nomicon"
    assert lines[3].startswith("Child messages: ")
    assert json.loads(lines[3].removeprefix("Child messages: ")) == ["the lint level is defined here"]


def test_build_warning_without_rendered_text_or_code() -> None:
    warning = build_warning(_diagnostic("mismatched types", code=None, level="error"))
    assert warning.subcategory == "unknown"
    assert warning.priority is Priority.CRITICAL
    assert warning.suggested_fix is None
    assert "Explanation: \n" in warning.message
    assert warning.message.endswith("Child messages: []")
