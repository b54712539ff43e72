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

"""Configuration file discovery and loading.

Project settings live in ``cargolens.toml`` or ``.cargolens.toml`` (top-level
tables) or inside ``Cargo.toml`` under ``[package.metadata.cargolens]`` or
``[workspace.metadata.cargolens]``.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError

from cargolens.core.model_types import LogComponent
from cargolens.logging import structured_extra

from .models import (
    AnalysisConfig,
    Config,
    ConfigModel,
    ConfigReadError,
    InvalidConfigFileError,
    model_to_dataclass,
)

logger: logging.Logger = logging.getLogger("cargolens.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("cargolens.toml", ".cargolens.toml")
CARGO_MANIFEST: Final[str] = "Cargo.toml"
_METADATA_PARENTS: Final[tuple[str, ...]] = ("package", "workspace")


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Configuration together with the file it was read from.

    Attributes:
        config: Runtime configuration with resolved paths.
        path: Source file, or None when defaults were used.
        root: Directory that relative paths were resolved against.
    """

    config: Config
    path: Path | None
    root: Path


def resolve_path_fields(base_dir: Path, analysis: AnalysisConfig) -> None:
    """Resolve relative analysis paths against ``base_dir`` in place."""
    analysis.reports_dir = _resolved_path(base_dir, analysis.reports_dir)
    analysis.history_path = _resolved_path(base_dir, analysis.history_path)


def _resolved_path(base_dir: Path, value: Path) -> Path:
    return value if value.is_absolute() else (base_dir / value).resolve()


def load_config(explicit_path: Path | None = None, *, root: Path | None = None) -> Config:
    """Load cargolens configuration from a TOML file or fall back to defaults.

    Args:
        explicit_path: Optional explicit configuration file. When provided,
            only this file is considered.
        root: Directory searched for configuration files. Defaults to the
            current working directory.

    Returns:
        A ``Config`` with all relative paths resolved.

    Raises:
        ConfigReadError: If a configuration file cannot be read or parsed.
        InvalidConfigFileError: If a configuration file fails validation.
    """
    return load_config_with_metadata(explicit_path, root=root).config


def load_config_with_metadata(explicit_path: Path | None = None, *, root: Path | None = None) -> LoadedConfig:
    """Load configuration and report which file supplied it.

    The search order is the explicit path (if any), then ``cargolens.toml``,
    ``.cargolens.toml`` and finally the metadata table of ``Cargo.toml``.

    Args:
        explicit_path: Optional explicit configuration file.
        root: Directory searched for configuration files.

    Returns:
        ``LoadedConfig`` describing the configuration and its source.

    Raises:
        ConfigReadError: If a configuration file cannot be read or parsed.
        InvalidConfigFileError: If a configuration file fails validation.
    """
    base_dir = (root or Path.cwd()).resolve()
    for candidate in _config_search_order(base_dir, explicit_path):
        if not candidate.exists():
            if candidate == explicit_path:
                raise ConfigReadError(candidate, FileNotFoundError(str(candidate)))
            continue
        loaded = _load_candidate_config(candidate)
        if loaded is not None:
            logger.debug(
                "Loaded configuration from %s",
                candidate,
                extra=structured_extra(LogComponent.CLI, path=candidate),
            )
            return loaded
    config = Config()
    resolve_path_fields(base_dir, config.analysis)
    return LoadedConfig(config=config, path=None, root=base_dir)


def _config_search_order(base_dir: Path, explicit_path: Path | None) -> list[Path]:
    if explicit_path is not None:
        return [explicit_path]
    return [*(base_dir / name for name in CONFIG_FILENAMES), base_dir / CARGO_MANIFEST]


def _load_candidate_config(candidate: Path) -> LoadedConfig | None:
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc
    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        return None
    try:
        model = ConfigModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    config = model_to_dataclass(model)
    config_root = candidate.parent.resolve()
    resolve_path_fields(config_root, config.analysis)
    return LoadedConfig(config=config, path=candidate, root=config_root)


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Return the cargolens table from ``raw_map``.

    Standalone files hold the configuration at the top level. ``Cargo.toml``
    only contributes when it declares a ``metadata.cargolens`` table; otherwise
    None is returned and the search continues.

    Raises:
        InvalidConfigFileError: If the metadata entry exists but is not a table.
    """
    if candidate.name != CARGO_MANIFEST:
        return raw_map
    for parent in _METADATA_PARENTS:
        section = raw_map.get(parent)
        if not isinstance(section, dict):
            continue
        metadata = cast("dict[str, object]", section).get("metadata")
        if not isinstance(metadata, dict):
            continue
        table = cast("dict[str, object]", metadata).get("cargolens")
        if table is None:
            continue
        if not isinstance(table, dict):
            message = f"[{parent}.metadata.cargolens] in Cargo.toml must be a TOML table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return cast("dict[str, object]", table)
    return None


__all__ = ["LoadedConfig", "load_config", "load_config_with_metadata", "resolve_path_fields"]
