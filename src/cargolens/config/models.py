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

"""Configuration models for cargolens.

TOML payloads are validated with pydantic models and then converted into
slotted dataclasses that the runner and CLI consume.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Final, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from cargolens.core.model_types import ChartStyle, ReportFormat
from cargolens.exceptions import CargolensValidationError

CONFIG_VERSION: Final[int] = 0
DEFAULT_REPORTS_DIR: Final[str] = "analysis_reports"
DEFAULT_HISTORY_PATH: Final[str] = "clippy_historical.json"
DEFAULT_TOP_SUBCATEGORIES: Final[int] = 5
DEFAULT_CHART_WIDTH: Final[int] = 60
REPORT_FORMAT_VALUES: Final[tuple[str, ...]] = tuple(fmt.value for fmt in ReportFormat)
CHART_STYLE_VALUES: Final[tuple[str, ...]] = tuple(style.value for style in ChartStyle)


class ConfigValidationError(CargolensValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigFieldTypeError(ConfigValidationError):
    """Raised when a configuration field has an invalid type."""

    def __init__(self, field: str, expected: str = "a string") -> None:
        """Initialize the exception with the offending field name.

        Args:
            field: The name of the configuration field with an invalid type.
            expected: Human-readable description of the expected type.
        """
        self.field = field
        self.expected = expected
        super().__init__(f"{field} must be {expected}")


class ConfigFieldChoiceError(ConfigValidationError):
    """Raised when a configuration field is provided with an unsupported value."""

    def __init__(self, field: str, allowed: tuple[str, ...]) -> None:
        """Initialize the exception with the field name and allowed values.

        Args:
            field: The name of the configuration field with an invalid value.
            allowed: Tuple of allowed values for this field.
        """
        self.field = field
        self.allowed = allowed
        allowed_text = ", ".join(sorted(allowed))
        super().__init__(f"{field} must be one of: {allowed_text}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when the configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid cargolens configuration in {path}: {error}")


def _default_report_formats() -> list[ReportFormat]:
    return list(ReportFormat)


def _default_list_str() -> list[str]:
    return []


@dataclass(slots=True)
class AnalysisConfig:
    """Settings for the analysis stage and the reports it writes.

    Attributes:
        reports_dir: Directory that receives generated reports.
        history_path: JSON file holding the historical trend records.
        record_history: Whether a successful run is appended to the history.
        formats: Report formats written on every run.
        top_subcategories: Number of subcategories listed in reports.
    """

    reports_dir: Path = field(default_factory=lambda: Path(DEFAULT_REPORTS_DIR))
    history_path: Path = field(default_factory=lambda: Path(DEFAULT_HISTORY_PATH))
    record_history: bool = True
    formats: list[ReportFormat] = field(default_factory=_default_report_formats)
    top_subcategories: int = DEFAULT_TOP_SUBCATEGORIES


@dataclass(slots=True)
class ChartSettings:
    """Defaults applied when rendering charts inside reports."""

    style: ChartStyle = ChartStyle.BLOCKS
    width: int = DEFAULT_CHART_WIDTH
    show_percentage: bool = True


@dataclass(slots=True)
class CargoConfig:
    """Flags forwarded to ``cargo clippy``.

    Attributes:
        workspace: Lint every workspace member.
        all_features: Enable all crate features.
        all_targets: Lint tests, benches and examples as well.
        extra_args: Additional arguments appended verbatim.
    """

    workspace: bool = False
    all_features: bool = False
    all_targets: bool = False
    extra_args: list[str] = field(default_factory=_default_list_str)


@dataclass(slots=True)
class Config:
    """Top-level runtime configuration."""

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    charts: ChartSettings = field(default_factory=ChartSettings)
    cargo: CargoConfig = field(default_factory=CargoConfig)


def ensure_list(value: object | None) -> list[str] | None:
    """Convert a string or iterable of strings into a clean list.

    Args:
        value: The input value to convert. Can be None, a string, or a list.

    Returns:
        A list of non-empty, stripped strings, or None if the input was None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return [stripped] if stripped else []
    if not isinstance(value, list | tuple):
        return []
    result: list[str] = []
    for item in cast("list[object] | tuple[object, ...]", value):
        if isinstance(item, str):
            stripped = item.strip()
            if stripped:
                result.append(stripped)
    return result


class AnalysisConfigModel(BaseModel):
    """Pydantic model for the ``[analysis]`` table."""

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True, extra="forbid")

    reports_dir: Path = Field(default=Path(DEFAULT_REPORTS_DIR))
    history_path: Path = Field(default=Path(DEFAULT_HISTORY_PATH))
    record_history: bool = True
    formats: list[ReportFormat] = Field(default_factory=_default_report_formats)
    top_subcategories: int = DEFAULT_TOP_SUBCATEGORIES

    @field_validator("formats", mode="before")
    @classmethod
    def _normalise_formats(cls, value: object) -> list[ReportFormat]:
        items = ensure_list(value)
        if items is None:
            return _default_report_formats()
        formats: list[ReportFormat] = []
        for item in items:
            try:
                fmt = ReportFormat.from_str(item)
            except ValueError as exc:
                raise ConfigFieldChoiceError("analysis.formats", REPORT_FORMAT_VALUES) from exc
            if fmt not in formats:
                formats.append(fmt)
        return formats

    @field_validator("top_subcategories", mode="before")
    @classmethod
    def _validate_limit(cls, value: object, info: ValidationInfo) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigFieldTypeError(f"analysis.{info.field_name}", "an integer")
        if value < 1:
            message = f"analysis.{info.field_name} must be positive (got {value})"
            raise ConfigValidationError(message)
        return value


class ChartConfigModel(BaseModel):
    """Pydantic model for the ``[charts]`` table."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    style: ChartStyle = ChartStyle.BLOCKS
    width: int = DEFAULT_CHART_WIDTH
    show_percentage: bool = True

    @field_validator("style", mode="before")
    @classmethod
    def _normalise_style(cls, value: object) -> ChartStyle:
        if isinstance(value, ChartStyle):
            return value
        if not isinstance(value, str):
            raise ConfigFieldTypeError("charts.style")
        try:
            return ChartStyle.from_str(value)
        except ValueError as exc:
            raise ConfigFieldChoiceError("charts.style", CHART_STYLE_VALUES) from exc

    @field_validator("width", mode="before")
    @classmethod
    def _validate_width(cls, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigFieldTypeError("charts.width", "an integer")
        if value < 1:
            message = f"charts.width must be positive (got {value})"
            raise ConfigValidationError(message)
        return value


class CargoConfigModel(BaseModel):
    """Pydantic model for the ``[cargo]`` table."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    workspace: bool = False
    all_features: bool = False
    all_targets: bool = False
    extra_args: list[str] = Field(default_factory=list)

    @field_validator("extra_args", mode="before")
    @classmethod
    def _coerce_list(cls, value: object) -> list[str]:
        return ensure_list(value) or []


class ConfigModel(BaseModel):
    """Pydantic model for the top-level cargolens configuration.

    Attributes:
        config_version: Schema version number for the configuration file.
        analysis: Analysis and report settings.
        charts: Chart rendering defaults.
        cargo: Flags forwarded to the lint toolchain.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    config_version: int = Field(default=CONFIG_VERSION)
    analysis: AnalysisConfigModel = Field(default_factory=AnalysisConfigModel)
    charts: ChartConfigModel = Field(default_factory=ChartConfigModel)
    cargo: CargoConfigModel = Field(default_factory=CargoConfigModel)

    @model_validator(mode="after")
    def _check_version(self) -> ConfigModel:
        if self.config_version != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(self.config_version, CONFIG_VERSION)
        return self


def model_to_dataclass(model: ConfigModel) -> Config:
    """Convert a validated ``ConfigModel`` into the runtime ``Config`` dataclass.

    Args:
        model: The validated model produced from a TOML payload.

    Returns:
        A ``Config`` instance with copies of every configured value.
    """
    analysis = model.analysis
    charts = model.charts
    cargo = model.cargo
    return Config(
        analysis=AnalysisConfig(
            reports_dir=analysis.reports_dir,
            history_path=analysis.history_path,
            record_history=analysis.record_history,
            formats=list(analysis.formats),
            top_subcategories=analysis.top_subcategories,
        ),
        charts=ChartSettings(
            style=charts.style,
            width=charts.width,
            show_percentage=charts.show_percentage,
        ),
        cargo=CargoConfig(
            workspace=cargo.workspace,
            all_features=cargo.all_features,
            all_targets=cargo.all_targets,
            extra_args=list(cargo.extra_args),
        ),
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
    "UnsupportedConfigVersionError",
    "ensure_list",
    "model_to_dataclass",
]
