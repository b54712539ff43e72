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

"""Shared fixtures providing realistic clippy diagnostic streams."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cargolens.config import Config
from cargolens.config.loader import resolve_path_fields
from tests.fixtures.builders import artifact_line, build_script_line, message_line, span_payload

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["analysis_config", "diagnostic_file", "sample_lines"]


@pytest.fixture
def sample_lines() -> list[str]:
    """Return a mixed stream: artifacts, warnings, a build script and noise."""
    return [
        artifact_line(features=["default", "serde"]),
        message_line(
            "unsafe block detected",
            code="unsafe_code",
            spans=[span_payload("src/a.rs", 5)],
        ),
        message_line(
            "redundant clone",
            code="clippy::redundant_clone",
            spans=[span_payload("src/a.rs", 12)],
            rendered="warning: redundant clone\n  help: remove this\n  = help: for further information visit https://rust-lang.github.io\n",
        ),
        message_line(
            "missing documentation for a function",
            code="missing_docs",
            level="warning",
            spans=[span_payload("src/b.rs", 3)],
        ),
        build_script_line(),
        "this is not json",
        "",
        '{"reason": "build-finished", "success": true}',
    ]


@pytest.fixture
def diagnostic_file(tmp_path: Path, sample_lines: list[str]) -> Path:
    """Write ``sample_lines`` to a JSON-lines file and return its path."""
    path = tmp_path / "clippy_output.json"
    _ = path.write_text("\n".join(sample_lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def analysis_config(tmp_path: Path) -> Config:
    """Return a default ``Config`` whose paths live under ``tmp_path``."""
    config = Config()
    resolve_path_fields(tmp_path, config.analysis)
    return config
