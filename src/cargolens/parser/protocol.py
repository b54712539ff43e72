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

"""Pydantic models describing cargo's ``--message-format=json`` records.

Every field that varies between record kinds is optional here; the decoder
decides which combinations are complete enough to produce a context value.
Unknown keys are ignored because cargo adds fields between releases.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class _ProtocolModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore", frozen=True)


class TargetModel(_ProtocolModel):
    """Compilation target of a ``compiler-artifact`` record."""

    kind: list[str]
    crate_types: list[str]
    name: str
    src_path: str
    edition: str
    doc: bool | None = None
    doctest: bool | None = None
    test: bool | None = None


class ProfileModel(_ProtocolModel):
    """Build profile of a ``compiler-artifact`` record.

    ``debuginfo`` is an integer level on older toolchains and a symbolic
    string (``"none"``, ``"line-tables-only"``, ...) on newer ones.
    """

    opt_level: str
    debuginfo: int | str
    debug_assertions: bool
    overflow_checks: bool
    test: bool


class DiagnosticCodeModel(_ProtocolModel):
    code: str


class SpanModel(_ProtocolModel):
    """Source span attached to a diagnostic."""

    file_name: str
    line_start: int = Field(ge=0)
    line_end: int = Field(ge=0)
    column_start: int = Field(ge=0)
    column_end: int = Field(ge=0)


class DiagnosticModel(_ProtocolModel):
    """Diagnostic payload nested in a ``compiler-message`` record."""

    code: DiagnosticCodeModel | None = None
    level: str
    message: str
    spans: list[SpanModel] = Field(default_factory=list)
    children: list[DiagnosticModel] = Field(default_factory=list)
    rendered: str | None = None


class CompilerRecordModel(_ProtocolModel):
    """One JSON line emitted by cargo."""

    reason: str
    package_id: str | None = None
    manifest_path: str | None = None
    target: TargetModel | None = None
    message: DiagnosticModel | None = None
    features: list[str] | None = None
    filenames: list[str] | None = None
    executable: str | None = None
    fresh: bool | None = None
    profile: ProfileModel | None = None
    linked_libs: list[str] | None = None
    linked_paths: list[str] | None = None


__all__ = [
    "CompilerRecordModel",
    "DiagnosticCodeModel",
    "DiagnosticModel",
    "ProfileModel",
    "SpanModel",
    "TargetModel",
]
