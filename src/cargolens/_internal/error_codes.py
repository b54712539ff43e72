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

"""Stable error code registry used across cargolens."""

from __future__ import annotations

from typing import TYPE_CHECKING, NewType

from cargolens.analysis.statistics import StatisticsMismatchError
from cargolens.config import (
    ConfigFieldChoiceError,
    ConfigFieldTypeError,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
)
from cargolens.history import HistoryStoreError
from cargolens.parser import InputFileError
from cargolens.runner import ClippyExecutionError

from .exceptions import CargolensError, CargolensTypeError, CargolensValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ErrorCode = NewType("ErrorCode", str)

_ERROR_CODES: dict[type[BaseException], ErrorCode] = {
    CargolensError: ErrorCode("CL000"),
    CargolensValidationError: ErrorCode("CL100"),
    CargolensTypeError: ErrorCode("CL101"),
    ConfigValidationError: ErrorCode("CL110"),
    ConfigFieldTypeError: ErrorCode("CL111"),
    ConfigFieldChoiceError: ErrorCode("CL112"),
    UnsupportedConfigVersionError: ErrorCode("CL113"),
    ConfigReadError: ErrorCode("CL114"),
    InvalidConfigFileError: ErrorCode("CL115"),
    InputFileError: ErrorCode("CL200"),
    StatisticsMismatchError: ErrorCode("CL300"),
    HistoryStoreError: ErrorCode("CL400"),
    ClippyExecutionError: ErrorCode("CL500"),
}


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return a stable error code for a structured cargolens exception.

    Args:
        exc: Exception instance raised by cargolens code paths.

    Returns:
        Error code mapped from the exception's class hierarchy.
    """
    for cls in type(exc).__mro__:
        code = _ERROR_CODES.get(cls)
        if code:
            return code
    return ErrorCode("CL000")


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return fully-qualified exception names mapped to their error codes."""
    return {f"{exc_type.__module__}.{exc_type.__name__}": code for exc_type, code in _ERROR_CODES.items()}


__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]
