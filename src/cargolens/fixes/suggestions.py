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

"""Advisory fix suggestions for classified warnings.

Suggestions are text only; nothing here edits source files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from cargolens.core.categories import DocSubcategory, PerfSubcategory, SafetySubcategory, StyleSubcategory
from cargolens.core.model_types import CategoryType

if TYPE_CHECKING:
    from cargolens.core.types import Warning  # noqa: A004

CLIPPY_PREFIX: Final[str] = "clippy::"


@dataclass(slots=True, frozen=True)
class FixSuggestion:
    """Suggested replacement code with an explanation and a confidence score."""

    code: str
    explanation: str
    confidence: float


LINT_SUGGESTIONS: Final[dict[str, FixSuggestion]] = {
    "use_self": FixSuggestion(
        code="Replace type name with `Self`",
        explanation="Using `Self` instead of the type name makes the code more maintainable",
        confidence=0.95,
    ),
    "missing_errors_doc": FixSuggestion(
        code=(
            "/// # Errors\n"
            "/// This function will return an error if:\n"
            "/// - The input is invalid\n"
            "/// - The operation fails"
        ),
        explanation="Document possible error conditions for Result-returning functions",
        confidence=0.9,
    ),
}

CATEGORY_SUGGESTIONS: Final[dict[CategoryType, dict[str, FixSuggestion]]] = {
    CategoryType.PERFORMANCE: {
        PerfSubcategory.ALLOCATION: FixSuggestion(
            code="// Consider using a pre-allocated buffer\nlet mut buffer = Vec::with_capacity(size);",
            explanation="Pre-allocating memory can reduce reallocations",
            confidence=0.8,
        ),
        PerfSubcategory.LOCKING: FixSuggestion(
            code="// Consider using a more granular lock\nlet data = { let guard = lock.read(); guard.clone() };",
            explanation="Reducing lock scope can improve concurrency",
            confidence=0.7,
        ),
    },
    CategoryType.SAFETY: {
        SafetySubcategory.UNSAFE_CODE: FixSuggestion(
            code="// Consider using safe alternatives\nslice.get(index).copied()",
            explanation="Using safe alternatives reduces the risk of undefined behavior",
            confidence=0.9,
        ),
        SafetySubcategory.RESOURCE_LEAK: FixSuggestion(
            code="// Use RAII patterns\nlet _guard = resource.lock();",
            explanation="RAII ensures resources are properly managed",
            confidence=0.85,
        ),
    },
    CategoryType.STYLE: {
        StyleSubcategory.NAMING_CONVENTION: FixSuggestion(
            code="// Follow Rust naming conventions\npub struct MyType {}",
            explanation="Using standard naming conventions improves code readability",
            confidence=0.95,
        ),
        StyleSubcategory.UNUSED_CODE: FixSuggestion(
            code="// Remove or use the unused item\n#[allow(dead_code)]",
            explanation="Removing unused code improves maintainability",
            confidence=0.9,
        ),
    },
    CategoryType.DOCUMENTATION: {
        DocSubcategory.MISSING_DOCS: FixSuggestion(
            code="/// Brief description of the item\n/// \n/// # Examples\n/// ```\n/// // Add example here\n/// ```",
            explanation="Adding documentation helps users understand the code",
            confidence=0.95,
        ),
        DocSubcategory.ERROR_DOCS: FixSuggestion(
            code="/// # Errors\n/// Returns an error if:",
            explanation="Documenting error conditions helps users handle errors",
            confidence=0.9,
        ),
    },
}


def first_token(message: str) -> str:
    words = message.split(maxsplit=1)
    return words[0] if words else ""


def _lint_name(code: str) -> str:
    return code.removeprefix(CLIPPY_PREFIX)


def generate_fix_suggestion(warning: Warning) -> FixSuggestion | None:
    """Return the most specific fix suggestion available for ``warning``.

    Lint-specific suggestions are tried first, keyed on the lint code without
    its ``clippy::`` prefix and then on the first word of the message. The
    category table, keyed on the first word of the message, is the fallback.

    Args:
        warning: Classified warning.

    Returns:
        The matching suggestion, or None when no table has an entry.
    """
    token = first_token(warning.message)
    specific = LINT_SUGGESTIONS.get(_lint_name(warning.subcategory)) or LINT_SUGGESTIONS.get(token)
    if specific is not None:
        return specific
    return CATEGORY_SUGGESTIONS[warning.category_type].get(token)


__all__ = [
    "CATEGORY_SUGGESTIONS",
    "LINT_SUGGESTIONS",
    "FixSuggestion",
    "first_token",
    "generate_fix_suggestion",
]
