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

"""Assemble immutable ``Warning`` values from decoded diagnostics."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Final

from cargolens.core.types import Warning  # noqa: A004

from .classifier import classify

if TYPE_CHECKING:
    from .protocol import DiagnosticModel, SpanModel

HELP_MARKER: Final[str] = "help: "
EXPLANATION_MARKER: Final[str] = "= help:"
IGNORED_CHILD_PREFIX: Final[str] = "for further information"


def parse_rendered(rendered: str) -> tuple[str | None, list[str]]:
    """Split rendered diagnostic text into a fix suggestion and explanations.

    Lines starting with ``= help:`` (after leading whitespace) are
    explanations. The first other line containing ``help: `` becomes the
    suggestion; later help lines are ignored.

    Args:
        rendered: Human-readable diagnostic text produced by the toolchain.

    Returns:
        Tuple of the optional suggestion and the list of explanation lines.
    """
    suggestion: str | None = None
    explanations: list[str] = []
    for line in rendered.splitlines():
        if line.strip().startswith(EXPLANATION_MARKER):
            explanations.append(line.replace(EXPLANATION_MARKER, "", 1).strip())
        elif suggestion is None and HELP_MARKER in line:
            suggestion = line.replace(HELP_MARKER, "").strip()
    return suggestion, explanations


def format_location(span: SpanModel) -> str:
    return f"{span.line_start}:{span.column_start}-{span.line_end}:{span.column_end}-{span.file_name}"


def child_messages(diagnostic: DiagnosticModel) -> list[str]:
    return [
        child.message for child in diagnostic.children if not child.message.startswith(IGNORED_CHILD_PREFIX)
    ]


def build_warning(diagnostic: DiagnosticModel) -> Warning:
    """Build a ``Warning`` from a diagnostic that carries at least one span.

    Args:
        diagnostic: Validated diagnostic payload. The caller guarantees that
            ``diagnostic.spans`` is non-empty.

    Returns:
        The classified, immutable warning located at the first span.
    """
    span = diagnostic.spans[0]
    code = diagnostic.code.code if diagnostic.code is not None else None
    classification = classify(code, diagnostic.level, diagnostic.message)
    if diagnostic.rendered is not None:
        suggestion, explanations = parse_rendered(diagnostic.rendered)
    else:
        suggestion, explanations = None, []
    explanation_text = "\n".join(explanations)
    children = json.dumps(child_messages(diagnostic), ensure_ascii=False)
    message = (
        f"{diagnostic.message}\n"
        f"Location: {format_location(span)}\n"
        f"Explanation: {explanation_text}\n"
        f"Child messages: {children}"
    )
    return Warning(
        category=classification.category,
        priority=classification.priority,
        message=message,
        file=span.file_name,
        line=span.line_start,
        suggested_fix=suggestion,
    )


__all__ = ["build_warning", "child_messages", "format_location", "parse_rendered"]
