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

"""Fixtures for multi-component integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.fixtures.builders import artifact_line, message_line, span_payload

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def crate_dir(tmp_path: Path) -> Path:
    """Return a crate directory holding a ``Cargo.toml`` with cargolens metadata."""
    crate = tmp_path / "demo"
    crate.mkdir()
    manifest = (
        '[package]\nname = "demo"\nversion = "0.1.0"\n\n'
        "[package.metadata.cargolens.analysis]\n"
        'reports_dir = "reports"\n'
        'history_path = "reports/history.json"\n'
        'formats = ["markdown", "fix-plan", "csv"]\n'
    )
    _ = (crate / "Cargo.toml").write_text(manifest, encoding="utf-8")
    return crate


@pytest.fixture
def unsafe_stream() -> list[str]:
    """Return one artifact record followed by one unsafe-code warning."""
    return [
        artifact_line(),
        message_line(
            "unsafe block detected",
            code="unsafe_code",
            level="warning",
            spans=[span_payload("src/a.rs", 5)],
        ),
    ]
