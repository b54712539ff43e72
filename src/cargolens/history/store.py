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

"""Append-only JSON store of historical trend snapshots."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from cargolens._internal.exceptions import CargolensError
from cargolens.analysis.trends import TrendAnalysis
from cargolens.core.model_types import CategoryType, LogComponent, Priority
from cargolens.json import dump_json
from cargolens.logging import structured_extra

if TYPE_CHECKING:
    from pathlib import Path

logger: logging.Logger = logging.getLogger("cargolens.history")


class HistoryStoreError(CargolensError):
    """Raised when the history file is damaged or cannot be written."""

    def __init__(self, path: Path, error: Exception) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Unable to use history at {path}: {error}")


class TrendRecordModel(BaseModel):
    """Serialised form of one ``TrendAnalysis`` snapshot."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    dates: list[str] = Field(default_factory=list)
    total_warnings: int = Field(default=0, ge=0)
    by_category: dict[CategoryType, int] = Field(default_factory=dict)
    by_priority: dict[Priority, int] = Field(default_factory=dict)
    improvement_rate: float = 0.0
    recurring_issues: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_trend(cls, trend: TrendAnalysis) -> TrendRecordModel:
        return cls(
            dates=list(trend.dates),
            total_warnings=trend.total_warnings,
            by_category=dict(trend.by_category),
            by_priority=dict(trend.by_priority),
            improvement_rate=trend.improvement_rate,
            recurring_issues=dict(trend.recurring_issues),
        )

    def to_trend(self) -> TrendAnalysis:
        return TrendAnalysis(
            dates=list(self.dates),
            total_warnings=self.total_warnings,
            by_category=dict(self.by_category),
            by_priority=dict(self.by_priority),
            improvement_rate=self.improvement_rate,
            recurring_issues=dict(self.recurring_issues),
        )


_HISTORY_ADAPTER: TypeAdapter[list[TrendRecordModel]] = TypeAdapter(list[TrendRecordModel])


def read_history(path: Path) -> list[TrendAnalysis]:
    """Load the snapshots stored at ``path``, failing on a damaged file.

    Args:
        path: Location of the JSON history file.

    Returns:
        The stored snapshots in file order, or an empty list when the file
        does not exist.

    Raises:
        HistoryStoreError: If the file cannot be read or does not hold a valid
            JSON array of snapshots.
    """
    if not path.exists():
        return []
    try:
        raw = path.read_text(encoding="utf-8")
        records = _HISTORY_ADAPTER.validate_json(raw)
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        raise HistoryStoreError(path, exc) from exc
    history = [record.to_trend() for record in records]
    logger.debug(
        "Loaded %s historical snapshot(s)",
        len(history),
        extra=structured_extra(LogComponent.HISTORY, path=path, counts={"records": len(history)}),
    )
    return history


def load_history(path: Path) -> list[TrendAnalysis]:
    """Load the historical snapshots stored at ``path``, oldest first.

    A missing file is an empty history. A damaged file is also treated as
    empty, with a warning, so it never blocks an analysis run.

    Args:
        path: Location of the JSON history file.

    Returns:
        The stored snapshots in file order.
    """
    try:
        return read_history(path)
    except HistoryStoreError as exc:
        logger.warning(
            "Ignoring unreadable history file %s: %s",
            path,
            exc.error,
            extra=structured_extra(LogComponent.HISTORY, path=path),
        )
        return []


def save_history(path: Path, history: list[TrendAnalysis]) -> None:
    """Rewrite the history file with ``history``.

    Raises:
        HistoryStoreError: If the file or its parent directory cannot be written.
    """
    payload = [TrendRecordModel.from_trend(trend).model_dump(mode="json") for trend in history]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(dump_json(payload) + "\n", encoding="utf-8")
    except OSError as exc:
        raise HistoryStoreError(path, exc) from exc


def append_history(
    path: Path,
    trend: TrendAnalysis,
    history: list[TrendAnalysis] | None = None,
) -> list[TrendAnalysis]:
    """Append ``trend`` to the store at ``path``.

    An existing file that does not hold a valid history is never overwritten.

    Args:
        path: Location of the JSON history file.
        trend: Snapshot of the run that just completed.
        history: Snapshots already loaded from ``path``. The file is read
            when omitted, and validated again when the loaded history is empty
            so a damaged file is not mistaken for an empty one.

    Returns:
        The full history including the new snapshot.

    Raises:
        HistoryStoreError: If the existing file is damaged or the updated
            history cannot be written.
    """
    if not history:
        history = read_history(path)
    updated = [*history, trend]
    save_history(path, updated)
    logger.info(
        "Recorded run in history (%s snapshot(s))",
        len(updated),
        extra=structured_extra(LogComponent.HISTORY, path=path, counts={"records": len(updated)}),
    )
    return updated


def history_totals(history: list[TrendAnalysis]) -> list[int]:
    return [trend.total_warnings for trend in history]


__all__ = [
    "HistoryStoreError",
    "TrendRecordModel",
    "append_history",
    "history_totals",
    "load_history",
    "read_history",
    "save_history",
]
