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

"""Report assemblers that turn analysis results into text documents."""

from __future__ import annotations

from .fix_plan import render_fix_plan
from .formatter import format_code_snippet, format_file_path, format_summary, format_warning
from .markdown import render_markdown_report
from .report import (
    render_csv,
    render_detailed_report,
    render_json,
    render_summary,
    render_trend_section,
    render_warning_list,
)

__all__ = [
    "format_code_snippet",
    "format_file_path",
    "format_summary",
    "format_warning",
    "render_csv",
    "render_detailed_report",
    "render_fix_plan",
    "render_json",
    "render_markdown_report",
    "render_summary",
    "render_trend_section",
    "render_warning_list",
]
