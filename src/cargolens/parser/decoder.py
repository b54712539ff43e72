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

"""Streaming decoder for cargo's JSON message protocol.

Each input line is decoded independently. Lines that are not valid JSON, do
not match the record shape, carry an unknown ``reason`` or lack the fields a
record kind needs are dropped without raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from cargolens.core.model_types import LogComponent, RecordReason
from cargolens.core.type_aliases import CrateName
from cargolens.core.types import (
    AnalysisContext,
    BuildConfig,
    BuildInfo,
    BuildProfile,
    BuildScript,
    FileWarnings,
    Warning,  # noqa: A004
    WarningContext,
)
from cargolens.exceptions import CargolensError
from cargolens.logging import structured_extra

from .builder import build_warning
from .protocol import CompilerRecordModel, ProfileModel

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger: logging.Logger = logging.getLogger("cargolens.parser")

_DISABLED_DEBUGINFO: Final[frozenset[str]] = frozenset({"0", "none"})


class InputFileError(CargolensError):
    """Raised when a diagnostic stream cannot be opened or read."""

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Unable to read diagnostics from {path}: {error}")


def _default_warnings() -> list[Warning]:
    return []


def _default_files() -> dict[str, FileWarnings]:
    return {}


def _default_contexts() -> list[AnalysisContext]:
    return []


@dataclass(slots=True)
class DecodedStream:
    """Result of decoding a whole diagnostic stream.

    Attributes:
        warnings: Warnings in input order.
        files: Warnings grouped by source file, in first-seen order.
        contexts: Every decoded context (warnings and build records).
        input_lines: Number of lines read.
        skipped_lines: Number of lines that produced no context.
    """

    warnings: list[Warning] = field(default_factory=_default_warnings)
    files: dict[str, FileWarnings] = field(default_factory=_default_files)
    contexts: list[AnalysisContext] = field(default_factory=_default_contexts)
    input_lines: int = 0
    skipped_lines: int = 0

    def add(self, context: AnalysisContext) -> None:
        if isinstance(context, WarningContext):
            warning = context.warning
            self.files.setdefault(warning.file, FileWarnings(warning.file)).add_warning(warning)
            self.warnings.append(warning)
        self.contexts.append(context)

    @property
    def build_infos(self) -> list[BuildInfo]:
        return [context for context in self.contexts if isinstance(context, BuildInfo)]

    @property
    def build_scripts(self) -> list[BuildScript]:
        return [context for context in self.contexts if isinstance(context, BuildScript)]


def crate_name_from_package_id(package_id: str) -> CrateName:
    """Return the last path component of a package id, ignoring any ``#`` fragment.

    ``path+file:///work/demo#0.1.0`` yields ``demo``. Ids without a path keep
    their full text.
    """
    return CrateName(package_id.split("#", 1)[0].split("/")[-1])


def _debug_enabled(profile: ProfileModel) -> bool:
    debuginfo = profile.debuginfo
    if isinstance(debuginfo, int):
        return debuginfo > 0
    return debuginfo.strip().lower() not in _DISABLED_DEBUGINFO


def _decode_artifact(record: CompilerRecordModel) -> BuildInfo | None:
    target = record.target
    profile = record.profile
    if target is None or record.package_id is None or profile is None or record.manifest_path is None:
        return None
    build_profile = BuildProfile(
        opt_level=profile.opt_level,
        debuginfo=profile.debuginfo,
        debug_assertions=profile.debug_assertions,
        overflow_checks=profile.overflow_checks,
        test=profile.test,
    )
    return BuildInfo(
        crate_name=crate_name_from_package_id(record.package_id),
        features=tuple(record.features or ()),
        build_config=BuildConfig(
            edition=target.edition,
            opt_level=profile.opt_level,
            debug=_debug_enabled(profile),
            test_mode=bool(target.test),
            crate_types=tuple(target.crate_types),
            is_doc=bool(target.doc),
            is_doctest=bool(target.doctest),
            profile=build_profile,
            kind=tuple(target.kind),
            name=target.name,
            src_path=target.src_path,
        ),
        artifacts=tuple(record.filenames or ()),
        manifest_path=record.manifest_path,
    )


def _decode_message(record: CompilerRecordModel) -> WarningContext | None:
    diagnostic = record.message
    if diagnostic is None or not diagnostic.spans:
        return None
    return WarningContext(build_warning(diagnostic))


def _decode_build_script(record: CompilerRecordModel) -> BuildScript | None:
    if record.package_id is None:
        return None
    return BuildScript(
        package=record.package_id,
        success=bool(record.fresh),
        output=record.executable,
        linked_libs=tuple(record.linked_libs or ()),
        linked_paths=tuple(record.linked_paths or ()),
    )


def decode_record(record: CompilerRecordModel) -> AnalysisContext | None:
    """Convert a validated protocol record into an analysis context.

    Args:
        record: Record validated against the protocol models.

    Returns:
        The decoded context, or None when the record is incomplete or its
        reason is not recognised.
    """
    try:
        reason = RecordReason.from_str(record.reason)
    except ValueError:
        return None
    match reason:
        case RecordReason.COMPILER_ARTIFACT:
            return _decode_artifact(record)
        case RecordReason.COMPILER_MESSAGE:
            return _decode_message(record)
        case RecordReason.BUILD_SCRIPT_EXECUTED:
            return _decode_build_script(record)


def decode_line(line: str) -> AnalysisContext | None:
    """Decode one raw protocol line.

    Args:
        line: A single line of text, expected to hold one JSON object.

    Returns:
        The decoded context, or None when the line is dropped.
    """
    text = line.strip()
    if not text:
        return None
    try:
        record = CompilerRecordModel.model_validate_json(text)
    except ValidationError as exc:
        logger.debug(
            "Dropping malformed diagnostic line (%d validation errors)",
            exc.error_count(),
            extra=structured_extra(LogComponent.PARSER),
        )
        return None
    return decode_record(record)


def decode_stream(lines: Iterable[str]) -> DecodedStream:
    """Decode an iterable of protocol lines into warnings and build records.

    Args:
        lines: Raw lines, for example an open text file or captured stdout.

    Returns:
        ``DecodedStream`` holding everything that decoded successfully.
    """
    stream = DecodedStream()
    for line in lines:
        stream.input_lines += 1
        context = decode_line(line)
        if context is None:
            stream.skipped_lines += 1
            continue
        stream.add(context)
    logger.debug(
        "Decoded %d warnings from %d lines",
        len(stream.warnings),
        stream.input_lines,
        extra=structured_extra(
            LogComponent.PARSER,
            counts={
                "lines": stream.input_lines,
                "skipped": stream.skipped_lines,
                "warnings": len(stream.warnings),
                "files": len(stream.files),
            },
        ),
    )
    return stream


def decode_file(path: Path) -> DecodedStream:
    """Decode a JSON-lines diagnostic file.

    Args:
        path: File holding cargo's JSON output.

    Returns:
        The decoded stream.

    Raises:
        InputFileError: If the file cannot be opened or read.
    """
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            return decode_stream(handle)
    except OSError as exc:
        raise InputFileError(path, exc) from exc


__all__ = [
    "DecodedStream",
    "InputFileError",
    "crate_name_from_package_id",
    "decode_file",
    "decode_line",
    "decode_record",
    "decode_stream",
]
