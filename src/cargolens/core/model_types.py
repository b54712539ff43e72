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

"""Enumerations shared by the parser, analysis, and output layers."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


def _lookup[E: StrEnum](cls: type[E], raw: str, kind: str) -> E:
    token = raw.strip().lower()
    for member in cls:
        if member.value.lower() == token or member.name.lower() == token:
            return member
    message = f"Unknown {kind} '{raw}'"
    raise ValueError(message)


class CategoryType(StrEnum):
    """Top-level quality domain of a warning.

    The severity rank is fixed (Safety=4 down to Documentation=1) and is used
    for ordering and default priority inference.
    """

    SAFETY = "Safety"
    PERFORMANCE = "Performance"
    STYLE = "Style"
    DOCUMENTATION = "Documentation"

    @classmethod
    def from_str(cls, raw: str) -> CategoryType:
        return _lookup(cls, raw, "category")

    @property
    def rank(self) -> int:
        return _CATEGORY_RANKS[self]

    @property
    def description(self) -> str:
        return _CATEGORY_DESCRIPTIONS[self]

    @classmethod
    def by_severity(cls) -> tuple[CategoryType, ...]:
        """Return all categories ordered from the most to the least severe."""
        return tuple(sorted(cls, key=lambda category: category.rank, reverse=True))


_CATEGORY_RANKS: Final[dict[CategoryType, int]] = {
    CategoryType.SAFETY: 4,
    CategoryType.PERFORMANCE: 3,
    CategoryType.STYLE: 2,
    CategoryType.DOCUMENTATION: 1,
}

_CATEGORY_DESCRIPTIONS: Final[dict[CategoryType, str]] = {
    CategoryType.SAFETY: "Safety and correctness issues",
    CategoryType.PERFORMANCE: "Performance optimizations",
    CategoryType.STYLE: "Code style and maintainability",
    CategoryType.DOCUMENTATION: "Documentation completeness",
}


class Priority(StrEnum):
    """Urgency of a warning, independent of its category."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    TRIVIAL = "Trivial"

    @classmethod
    def from_str(cls, raw: str) -> Priority:
        return _lookup(cls, raw, "priority")

    @property
    def severity_score(self) -> int:
        return _PRIORITY_SCORES[self]

    @property
    def description(self) -> str:
        return _PRIORITY_DESCRIPTIONS[self]


_PRIORITY_SCORES: Final[dict[Priority, int]] = {
    Priority.CRITICAL: 5,
    Priority.HIGH: 4,
    Priority.MEDIUM: 3,
    Priority.LOW: 2,
    Priority.TRIVIAL: 1,
}

_PRIORITY_DESCRIPTIONS: Final[dict[Priority, str]] = {
    Priority.CRITICAL: "Critical: Must be fixed immediately",
    Priority.HIGH: "High: Should be fixed soon",
    Priority.MEDIUM: "Medium: Should be fixed when possible",
    Priority.LOW: "Low: Consider fixing when convenient",
    Priority.TRIVIAL: "Trivial: Optional fixes",
}


class RecordReason(StrEnum):
    """Discriminator of a cargo JSON message record."""

    COMPILER_ARTIFACT = "compiler-artifact"
    COMPILER_MESSAGE = "compiler-message"
    BUILD_SCRIPT_EXECUTED = "build-script-executed"

    @classmethod
    def from_str(cls, raw: str) -> RecordReason:
        return _lookup(cls, raw, "record reason")


class ChartStyle(StrEnum):
    BASIC = "basic"
    BLOCKS = "blocks"
    DOTS = "dots"
    LINES = "lines"

    @classmethod
    def from_str(cls, raw: str) -> ChartStyle:
        return _lookup(cls, raw, "chart style")


class ReportFormat(StrEnum):
    MARKDOWN = "markdown"
    FIX_PLAN = "fix-plan"
    REPORT = "report"
    SUMMARY = "summary"
    JSON = "json"
    CSV = "csv"

    @classmethod
    def from_str(cls, raw: str) -> ReportFormat:
        return _lookup(cls, raw.replace("_", "-"), "report format")


class LogFormat(StrEnum):
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        return _lookup(cls, raw, "log format")


class LogComponent(StrEnum):
    PARSER = "parser"
    ANALYSIS = "analysis"
    HISTORY = "history"
    RUNNER = "runner"
    OUTPUT = "output"
    CLI = "cli"

    @classmethod
    def from_str(cls, raw: str) -> LogComponent:
        return _lookup(cls, raw, "log component")


__all__ = [
    "CategoryType",
    "ChartStyle",
    "LogComponent",
    "LogFormat",
    "Priority",
    "RecordReason",
    "ReportFormat",
]
