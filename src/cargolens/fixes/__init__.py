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

"""Advisory fix suggestions, examples and templates."""

from __future__ import annotations

from .examples import FixExample, get_fix_example
from .suggestions import FixSuggestion, generate_fix_suggestion
from .templates import render_category_template, render_fix_template

__all__ = [
    "FixExample",
    "FixSuggestion",
    "generate_fix_suggestion",
    "get_fix_example",
    "render_category_template",
    "render_fix_template",
]
