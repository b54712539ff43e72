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

"""Text templates rendered into fix plans and reports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from cargolens.core.model_types import CategoryType

from .examples import get_fix_example

if TYPE_CHECKING:
    from cargolens.core.types import Warning  # noqa: A004

CATEGORY_TEMPLATE_HEADERS: Final[dict[CategoryType, str]] = {
    CategoryType.SAFETY: "Safety Fixes",
    CategoryType.PERFORMANCE: "Performance Improvements",
    CategoryType.STYLE: "Style Guidelines",
    CategoryType.DOCUMENTATION: "Documentation Guidelines",
}

CATEGORY_TEMPLATE_STEPS: Final[dict[CategoryType, tuple[str, ...]]] = {
    CategoryType.SAFETY: (
        "Template for fixing unsafe code:",
        "1. Identify the unsafe operation",
        "2. Consider safe alternatives",
        "3. Add safety documentation if unsafe is necessary",
    ),
    CategoryType.PERFORMANCE: (
        "Template for performance improvements:",
        "1. Profile the code",
        "2. Identify bottlenecks",
        "3. Consider algorithmic improvements",
    ),
    CategoryType.STYLE: (
        "Template for style fixes:",
        "1. Follow Rust naming conventions",
        "2. Use consistent formatting",
        "3. Remove redundant code",
    ),
    CategoryType.DOCUMENTATION: (
        "Template for documentation:",
        "1. Add module-level documentation",
        "2. Document public items",
        "3. Include usage examples",
    ),
}


def render_fix_template(warning: Warning) -> str:
    """Render the worked example for ``warning`` as commented text.

    Returns:
        The rendered template, or an empty string when no example exists.
    """
    example = get_fix_example(warning)
    if example is None:
        return ""
    lines = [
        f"// {example.description}",
        f"\n// Before:\n{example.before}",
        f"\n// After:\n{example.after}",
        f"\n// Explanation: {example.explanation}",
        "\n// Additional notes:",
    ]
    lines.extend(f"// - {note}" for note in example.additional_notes)
    return "\n".join(lines) + "\n"


def render_category_template(category: CategoryType) -> str:
    lines = [f"\n=== {CATEGORY_TEMPLATE_HEADERS[category]} ===\n"]
    lines.extend(f"// {step}" for step in CATEGORY_TEMPLATE_STEPS[category])
    return "\n".join(lines) + "\n"


__all__ = [
    "CATEGORY_TEMPLATE_HEADERS",
    "CATEGORY_TEMPLATE_STEPS",
    "render_category_template",
    "render_fix_template",
]
