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

"""Domain-specific drill-down counters.

Each structure inspects the message text of every warning, whatever the
warning's own category, so one message may contribute to several buckets.
Substring checks are plain and case-sensitive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cargolens.core.types import Warning  # noqa: A004


def _default_counts() -> dict[str, int]:
    return {}


def _bump(counter: dict[str, int], key: str) -> None:
    counter[key] = counter.get(key, 0) + 1


def _record_matches(message: str, rules: Iterable[tuple[str, dict[str, int]]]) -> None:
    for needle, counter in rules:
        if needle in message:
            _bump(counter, message)


def merge_counts[K](left: Mapping[K, int], right: Mapping[K, int]) -> dict[K, int]:
    """Return the key-wise sum of two count mappings."""
    merged = dict(left)
    for key, value in right.items():
        merged[key] = merged.get(key, 0) + value
    return merged


@dataclass(slots=True)
class CastingStatistics:
    total_casts: int = 0
    by_type: dict[str, int] = field(default_factory=_default_counts)


@dataclass(slots=True)
class UnsafeStatistics:
    total_unsafe: int = 0
    raw_pointers: int = 0
    ffi_calls: int = 0
    mutable_statics: int = 0


@dataclass(slots=True)
class ThreadSafetyStatistics:
    total_issues: int = 0
    send_sync_violations: int = 0
    data_races: int = 0
    lock_issues: int = 0


@dataclass(slots=True)
class SafetyStatistics:
    """Safety drill-down keyed on the first word of the message.

    ``Type`` messages count as casts, ``Unsafe`` messages as unsafe code and
    ``Thread`` messages as thread-safety issues. Within a branch every
    sub-pattern is checked.
    """

    total_issues: int = 0
    casting_details: CastingStatistics = field(default_factory=CastingStatistics)
    unsafe_details: UnsafeStatistics = field(default_factory=UnsafeStatistics)
    thread_safety_details: ThreadSafetyStatistics = field(default_factory=ThreadSafetyStatistics)

    def update(self, warning: Warning) -> None:
        message = warning.message
        self.total_issues += 1
        words = message.split(maxsplit=1)
        first_word = words[0] if words else ""
        match first_word:
            case "Type":
                self.casting_details.total_casts += 1
                _bump(self.casting_details.by_type, message)
            case "Unsafe":
                unsafe = self.unsafe_details
                unsafe.total_unsafe += 1
                if "raw pointer" in message:
                    unsafe.raw_pointers += 1
                if "FFI" in message:
                    unsafe.ffi_calls += 1
                if "static mut" in message:
                    unsafe.mutable_statics += 1
            case "Thread":
                thread = self.thread_safety_details
                thread.total_issues += 1
                if "Send" in message or "Sync" in message:
                    thread.send_sync_violations += 1
                if "data race" in message:
                    thread.data_races += 1
                if "lock" in message:
                    thread.lock_issues += 1
            case _:
                pass

    def merged(self, other: SafetyStatistics) -> SafetyStatistics:
        casting = self.casting_details
        unsafe = self.unsafe_details
        thread = self.thread_safety_details
        return SafetyStatistics(
            total_issues=self.total_issues + other.total_issues,
            casting_details=CastingStatistics(
                total_casts=casting.total_casts + other.casting_details.total_casts,
                by_type=merge_counts(casting.by_type, other.casting_details.by_type),
            ),
            unsafe_details=UnsafeStatistics(
                total_unsafe=unsafe.total_unsafe + other.unsafe_details.total_unsafe,
                raw_pointers=unsafe.raw_pointers + other.unsafe_details.raw_pointers,
                ffi_calls=unsafe.ffi_calls + other.unsafe_details.ffi_calls,
                mutable_statics=unsafe.mutable_statics + other.unsafe_details.mutable_statics,
            ),
            thread_safety_details=ThreadSafetyStatistics(
                total_issues=thread.total_issues + other.thread_safety_details.total_issues,
                send_sync_violations=thread.send_sync_violations
                + other.thread_safety_details.send_sync_violations,
                data_races=thread.data_races + other.thread_safety_details.data_races,
                lock_issues=thread.lock_issues + other.thread_safety_details.lock_issues,
            ),
        )


@dataclass(slots=True)
class PerformanceStatistics:
    """Per-message counters for allocation, clone and lock patterns."""

    total_issues: int = 0
    allocation_patterns: dict[str, int] = field(default_factory=_default_counts)
    clone_patterns: dict[str, int] = field(default_factory=_default_counts)
    lock_patterns: dict[str, int] = field(default_factory=_default_counts)

    def update(self, warning: Warning) -> None:
        self.total_issues += 1
        _record_matches(
            warning.message,
            (
                ("allocation", self.allocation_patterns),
                ("clone", self.clone_patterns),
                ("lock", self.lock_patterns),
            ),
        )

    def merged(self, other: PerformanceStatistics) -> PerformanceStatistics:
        return PerformanceStatistics(
            total_issues=self.total_issues + other.total_issues,
            allocation_patterns=merge_counts(self.allocation_patterns, other.allocation_patterns),
            clone_patterns=merge_counts(self.clone_patterns, other.clone_patterns),
            lock_patterns=merge_counts(self.lock_patterns, other.lock_patterns),
        )


@dataclass(slots=True)
class StyleStatistics:
    """Per-message counters for naming, unused and complexity patterns."""

    total_issues: int = 0
    naming_issues: dict[str, int] = field(default_factory=_default_counts)
    unused_patterns: dict[str, int] = field(default_factory=_default_counts)
    complexity_issues: dict[str, int] = field(default_factory=_default_counts)

    def update(self, warning: Warning) -> None:
        self.total_issues += 1
        _record_matches(
            warning.message,
            (
                ("naming", self.naming_issues),
                ("unused", self.unused_patterns),
                ("complex", self.complexity_issues),
            ),
        )

    def merged(self, other: StyleStatistics) -> StyleStatistics:
        return StyleStatistics(
            total_issues=self.total_issues + other.total_issues,
            naming_issues=merge_counts(self.naming_issues, other.naming_issues),
            unused_patterns=merge_counts(self.unused_patterns, other.unused_patterns),
            complexity_issues=merge_counts(self.complexity_issues, other.complexity_issues),
        )


@dataclass(slots=True)
class DocStatistics:
    """Documentation counters; link problems are a plain tally."""

    total_issues: int = 0
    missing_docs: dict[str, int] = field(default_factory=_default_counts)
    quality_issues: dict[str, int] = field(default_factory=_default_counts)
    link_issues: int = 0

    def update(self, warning: Warning) -> None:
        self.total_issues += 1
        _record_matches(
            warning.message,
            (
                ("missing", self.missing_docs),
                ("quality", self.quality_issues),
            ),
        )
        if "link" in warning.message:
            self.link_issues += 1

    def merged(self, other: DocStatistics) -> DocStatistics:
        return DocStatistics(
            total_issues=self.total_issues + other.total_issues,
            missing_docs=merge_counts(self.missing_docs, other.missing_docs),
            quality_issues=merge_counts(self.quality_issues, other.quality_issues),
            link_issues=self.link_issues + other.link_issues,
        )


__all__ = [
    "CastingStatistics",
    "DocStatistics",
    "PerformanceStatistics",
    "SafetyStatistics",
    "StyleStatistics",
    "ThreadSafetyStatistics",
    "UnsafeStatistics",
    "merge_counts",
]
