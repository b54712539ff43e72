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

"""Orchestration of analysis runs and the clippy workflow."""

from __future__ import annotations

from .analysis import AnalysisOutcome, AnalysisRunner, current_timestamp
from .workflow import ClippyExecutionError, ClippyWorkflow, clippy_command

__all__ = [
    "AnalysisOutcome",
    "AnalysisRunner",
    "ClippyExecutionError",
    "ClippyWorkflow",
    "clippy_command",
    "current_timestamp",
]
