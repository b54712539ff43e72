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

"""Rule-based classification of lint diagnostics.

Two independent decisions are made for each diagnostic: the category comes
from the lint code alone, the priority from the diagnostic level and the
message text. Both use case-sensitive substring checks evaluated in a fixed
order where the first matching rule wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from cargolens.core.model_types import CategoryType, Priority
from cargolens.core.type_aliases import UNKNOWN_LINT_CODE
from cargolens.core.types import WarningCategory

CATEGORY_RULES: Final[tuple[tuple[tuple[str, ...], CategoryType], ...]] = (
    (("use_self", "redundant"), CategoryType.STYLE),
    (("unsafe", "mut"), CategoryType.SAFETY),
    (("perf", "box"), CategoryType.PERFORMANCE),
    (("doc", "missing"), CategoryType.DOCUMENTATION),
)
DEFAULT_CATEGORY: Final[CategoryType] = CategoryType.STYLE
HIGH_PRIORITY_KEYWORDS: Final[tuple[str, ...]] = ("unsafe", "security")


@dataclass(slots=True, frozen=True)
class Classification:
    """Category and priority assigned to one diagnostic."""

    category: WarningCategory
    priority: Priority


def categorise_lint_code(code: str) -> CategoryType:
    """Map a lint code onto its category.

    The rules are checked in order, so ``redundant_clone`` is Style even
    though it would also look like a performance lint. Codes that match no
    rule fall back to Style.

    Args:
        code: Lint code as reported by the toolchain (e.g. ``clippy::box_vec``).

    Returns:
        The first matching ``CategoryType``.
    """
    for needles, category in CATEGORY_RULES:
        if any(needle in code for needle in needles):
            return category
    return DEFAULT_CATEGORY


def determine_priority(level: str, message: str) -> Priority:
    """Derive the priority from the diagnostic level, then the message text.

    Args:
        level: Diagnostic level (``error``, ``warning``, ``note``, ...).
        message: Primary diagnostic message.

    Returns:
        ``Critical`` for errors, ``High`` for warnings mentioning unsafe code
        or security, ``Medium`` for other warnings and ``Low`` otherwise.
    """
    match level:
        case "error":
            return Priority.CRITICAL
        case "warning":
            if any(keyword in message for keyword in HIGH_PRIORITY_KEYWORDS):
                return Priority.HIGH
            return Priority.MEDIUM
        case _:
            return Priority.LOW


def classify(code: str | None, level: str, message: str) -> Classification:
    """Classify a diagnostic into a category, subcategory label and priority.

    Args:
        code: Lint code, or None when the diagnostic carries none.
        level: Diagnostic level.
        message: Primary diagnostic message.

    Returns:
        ``Classification`` whose subcategory is the literal lint code, or
        ``"unknown"`` when no code is present.
    """
    label = code if code is not None else UNKNOWN_LINT_CODE
    return Classification(
        category=WarningCategory(categorise_lint_code(label), label),
        priority=determine_priority(level, message),
    )


__all__ = [
    "CATEGORY_RULES",
    "Classification",
    "categorise_lint_code",
    "classify",
    "determine_priority",
]
