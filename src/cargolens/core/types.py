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

"""Core data classes for classified warnings and build context.

These are the values produced by the parser and consumed by the analysis and
output layers. Warnings are immutable once built; a run owns its collection
of warnings for the duration of one analysis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .model_types import CategoryType, Priority

if TYPE_CHECKING:
    from cargolens.json import JSONMapping

    from .type_aliases import CrateName


@dataclass(slots=True, frozen=True)
class WarningCategory:
    """Category assigned by the classifier.

    Attributes:
        category_type: Top-level quality domain.
        subcategory: Free-text label, normally the literal lint code.
    """

    category_type: CategoryType
    subcategory: str

    def full_description(self) -> str:
        return f"{self.category_type}: {self.subcategory}"


@dataclass(slots=True, frozen=True)
class Warning:  # noqa: A001
    """Immutable dataclass representing one classified diagnostic.

    Attributes:
        category: Category and subcategory label assigned by the classifier.
        priority: Urgency derived from the diagnostic level and message text.
        message: Synthesised message (text, location, explanations, children).
        file: Source file of the first span.
        line: First line of the first span.
        suggested_fix: Optional single-line fix extracted from the rendered text.
    """

    category: WarningCategory
    priority: Priority
    message: str
    file: str
    line: int
    suggested_fix: str | None = None

    @property
    def category_type(self) -> CategoryType:
        return self.category.category_type

    @property
    def subcategory(self) -> str:
        return self.category.subcategory

    @property
    def key(self) -> tuple[str, int, str]:
        """Reporting identity of the warning."""
        return (self.file, self.line, self.message)

    def analyze(self) -> tuple[int, str]:
        """Return the severity score and a short impact description."""
        location = f"{self.file} (line {self.line})"
        match self.category_type:
            case CategoryType.SAFETY:
                impact = f"Safety issue in {location}"
            case CategoryType.PERFORMANCE:
                impact = f"Performance bottleneck in {location}"
            case CategoryType.STYLE:
                impact = f"Style improvement needed in {location}"
            case CategoryType.DOCUMENTATION:
                impact = f"Documentation needed in {location}"
        return self.priority.severity_score, impact

    def to_payload(self) -> JSONMapping:
        return {
            "category": {
                "category_type": self.category_type.value,
                "subcategory": self.subcategory,
            },
            "priority": self.priority.value,
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "suggested_fix": self.suggested_fix,
        }


def _default_warning_list() -> list[Warning]:
    return []


@dataclass(slots=True)
class FileWarnings:
    """Warnings grouped under one source file, in parse order."""

    path: str
    warnings: list[Warning] = field(default_factory=_default_warning_list)

    def add_warning(self, warning: Warning) -> None:
        self.warnings.append(warning)

    def sorted_by_line(self) -> list[Warning]:
        return sorted(self.warnings, key=lambda warning: warning.line)

    def analyze_file(self) -> list[tuple[int, str]]:
        return [warning.analyze() for warning in self.warnings]


@dataclass(slots=True, frozen=True)
class BuildProfile:
    opt_level: str
    debuginfo: int | str
    debug_assertions: bool
    overflow_checks: bool
    test: bool


@dataclass(slots=True, frozen=True)
class BuildConfig:
    """Compilation settings reported for one artifact."""

    edition: str
    opt_level: str
    debug: bool
    test_mode: bool
    crate_types: tuple[str, ...]
    is_doc: bool
    is_doctest: bool
    profile: BuildProfile | None
    kind: tuple[str, ...]
    name: str
    src_path: str


@dataclass(slots=True, frozen=True)
class BuildInfo:
    """Decoded ``compiler-artifact`` record."""

    crate_name: CrateName
    features: tuple[str, ...]
    build_config: BuildConfig
    artifacts: tuple[str, ...]
    manifest_path: str


@dataclass(slots=True, frozen=True)
class BuildScript:
    """Decoded ``build-script-executed`` record."""

    package: str
    success: bool
    output: str | None
    linked_libs: tuple[str, ...] = ()
    linked_paths: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class WarningContext:
    """Decoded ``compiler-message`` record."""

    warning: Warning


type AnalysisContext = WarningContext | BuildInfo | BuildScript


__all__ = [
    "AnalysisContext",
    "BuildConfig",
    "BuildInfo",
    "BuildProfile",
    "BuildScript",
    "FileWarnings",
    "Warning",
    "WarningCategory",
    "WarningContext",
]
