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

"""Decoding and classification of cargo diagnostics."""

from __future__ import annotations

from .builder import build_warning, parse_rendered
from .classifier import Classification, categorise_lint_code, classify, determine_priority
from .decoder import DecodedStream, InputFileError, decode_file, decode_line, decode_stream

__all__ = [
    "Classification",
    "DecodedStream",
    "InputFileError",
    "build_warning",
    "categorise_lint_code",
    "classify",
    "decode_file",
    "decode_line",
    "decode_stream",
    "determine_priority",
    "parse_rendered",
]
