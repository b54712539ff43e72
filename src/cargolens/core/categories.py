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

"""Category metadata used throughout cargolens.

The aggregator keys subcategories by the free-text lint code; the closed
per-domain enumerations below only describe the families a reader will
typically find in each domain.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

from cargolens.core.model_types import CategoryType, Priority


class SafetySubcategory(StrEnum):
    TYPE_CASTING = "TypeCasting"
    UNSAFE_CODE = "UnsafeCode"
    RESOURCE_LEAK = "ResourceLeak"
    CONCURRENCY_ISSUE = "ConcurrencyIssue"
    OTHER = "Other"

    @property
    def description(self) -> str:
        return _SAFETY_DESCRIPTIONS[self]


class PerfSubcategory(StrEnum):
    ALLOCATION = "Allocation"
    LOCKING = "Locking"
    CLONING = "Cloning"
    ITERATION = "Iteration"
    OTHER = "Other"

    @property
    def description(self) -> str:
        return _PERF_DESCRIPTIONS[self]


class StyleSubcategory(StrEnum):
    NAMING_CONVENTION = "NamingConvention"
    CODE_STRUCTURE = "CodeStructure"
    UNUSED_CODE = "UnusedCode"
    FORMATTING = "Formatting"
    OTHER = "Other"

    @property
    def description(self) -> str:
        return _STYLE_DESCRIPTIONS[self]


class DocSubcategory(StrEnum):
    MISSING_DOCS = "MissingDocs"
    ERROR_DOCS = "ErrorDocs"
    EXAMPLE_DOCS = "ExampleDocs"
    DEPRECATION_NOTICE = "DeprecationNotice"
    OTHER = "Other"

    @property
    def description(self) -> str:
        return _DOC_DESCRIPTIONS[self]


_SAFETY_DESCRIPTIONS: Final[dict[SafetySubcategory, str]] = {
    SafetySubcategory.TYPE_CASTING: "Unsafe type casting operations",
    SafetySubcategory.UNSAFE_CODE: "Usage of unsafe blocks",
    SafetySubcategory.RESOURCE_LEAK: "Potential resource leaks",
    SafetySubcategory.CONCURRENCY_ISSUE: "Thread safety concerns",
    SafetySubcategory.OTHER: "Other safety issues",
}

_PERF_DESCRIPTIONS: Final[dict[PerfSubcategory, str]] = {
    PerfSubcategory.ALLOCATION: "Memory allocation patterns",
    PerfSubcategory.LOCKING: "Lock contention issues",
    PerfSubcategory.CLONING: "Unnecessary cloning",
    PerfSubcategory.ITERATION: "Inefficient iteration",
    PerfSubcategory.OTHER: "Other performance issues",
}

_STYLE_DESCRIPTIONS: Final[dict[StyleSubcategory, str]] = {
    StyleSubcategory.NAMING_CONVENTION: "Naming convention violations",
    StyleSubcategory.CODE_STRUCTURE: "Code structure improvements",
    StyleSubcategory.UNUSED_CODE: "Unused code elements",
    StyleSubcategory.FORMATTING: "Code formatting issues",
    StyleSubcategory.OTHER: "Other style issues",
}

_DOC_DESCRIPTIONS: Final[dict[DocSubcategory, str]] = {
    DocSubcategory.MISSING_DOCS: "Missing documentation",
    DocSubcategory.ERROR_DOCS: "Error documentation",
    DocSubcategory.EXAMPLE_DOCS: "Example documentation",
    DocSubcategory.DEPRECATION_NOTICE: "Deprecation notices",
    DocSubcategory.OTHER: "Other documentation issues",
}

SUBCATEGORY_FAMILIES: Final[dict[CategoryType, type[StrEnum]]] = {
    CategoryType.SAFETY: SafetySubcategory,
    CategoryType.PERFORMANCE: PerfSubcategory,
    CategoryType.STYLE: StyleSubcategory,
    CategoryType.DOCUMENTATION: DocSubcategory,
}

# Risk level a category is planned under in the fix plan.
CATEGORY_RISK_PRIORITY: Final[dict[CategoryType, Priority]] = {
    CategoryType.SAFETY: Priority.CRITICAL,
    CategoryType.PERFORMANCE: Priority.HIGH,
    CategoryType.DOCUMENTATION: Priority.MEDIUM,
    CategoryType.STYLE: Priority.LOW,
}

CATEGORY_DISPLAY_ORDER: Final[tuple[CategoryType, ...]] = (
    CategoryType.SAFETY,
    CategoryType.PERFORMANCE,
    CategoryType.DOCUMENTATION,
    CategoryType.STYLE,
)

CATEGORY_MARKERS: Final[dict[CategoryType, str]] = {
    CategoryType.SAFETY: "🔴",
    CategoryType.PERFORMANCE: "🟡",
    CategoryType.DOCUMENTATION: "🟢",
    CategoryType.STYLE: "⚪",
}


__all__ = [
    "CATEGORY_DISPLAY_ORDER",
    "CATEGORY_MARKERS",
    "CATEGORY_RISK_PRIORITY",
    "SUBCATEGORY_FAMILIES",
    "DocSubcategory",
    "PerfSubcategory",
    "SafetySubcategory",
    "StyleSubcategory",
]
