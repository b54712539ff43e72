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

"""CLI context construction shared by commands that need configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from cargolens.config import load_config_with_metadata

if TYPE_CHECKING:
    from cargolens.config import Config


@dataclass(slots=True, frozen=True)
class CLIContext:
    """Resolved configuration shared by CLI commands.

    Attributes:
        config: Runtime configuration with resolved paths.
        config_path: File the configuration came from, if any.
        root: Directory used for configuration discovery.
    """

    config: Config
    config_path: Path | None
    root: Path


def build_cli_context(config_path: Path | None, *, root: Path | None = None) -> CLIContext:
    """Load configuration for a CLI invocation.

    Args:
        config_path: Explicit ``--config`` value, if given.
        root: Directory searched for configuration files. Defaults to the
            current working directory.

    Returns:
        The resolved ``CLIContext``.

    Raises:
        ConfigReadError: If a configuration file cannot be read or parsed.
        InvalidConfigFileError: If a configuration file fails validation.
    """
    loaded = load_config_with_metadata(config_path, root=root)
    return CLIContext(config=loaded.config, config_path=loaded.path, root=loaded.root)


def resolve_cli_path(value: Path) -> Path:
    """Resolve a path given on the command line against the working directory."""
    return value if value.is_absolute() else (Path.cwd() / value).resolve()


__all__ = ["CLIContext", "build_cli_context", "resolve_cli_path"]
