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

"""Configuration management for cargolens.

This package loads TOML configuration, validates it with pydantic models and
exposes the runtime dataclasses used by the runner and CLI.
"""

from __future__ import annotations

from .loader import LoadedConfig, load_config, load_config_with_metadata, resolve_path_fields
from .models import (
    CONFIG_VERSION,
    AnalysisConfig,
    AnalysisConfigModel,
    CargoConfig,
    CargoConfigModel,
    ChartConfigModel,
    ChartSettings,
    Config,
    ConfigFieldChoiceError,
    ConfigFieldTypeError,
    ConfigModel,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
    ensure_list,
)

__all__ = [
    "CONFIG_VERSION",
    "AnalysisConfig",
    "AnalysisConfigModel",
    "CargoConfig",
    "CargoConfigModel",
    "ChartConfigModel",
    "ChartSettings",
    "Config",
    "ConfigFieldChoiceError",
    "ConfigFieldTypeError",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "LoadedConfig",
    "UnsupportedConfigVersionError",
    "ensure_list",
    "load_config",
    "load_config_with_metadata",
    "resolve_path_fields",
]
