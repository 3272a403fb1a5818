from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from chartseries.logging import normalize_level

SeriesKindName = Literal["bar", "line", "scatter", "time"]
LineTypeName = Literal["linear", "curved", "stepped"]
PointShapeName = Literal["circle", "square", "triangle", "cross", "x"]

# Opaque black as a signed 32-bit ARGB value.
DEFAULT_COLOR = -16777216


class SeriesStyle(BaseModel):
    """Styling defaults handed to a store at construction time.

    Instances are frozen; policies derive adjusted copies through
    ``model_copy(update=...)`` instead of mutating shared defaults.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    color: int = DEFAULT_COLOR
    label: str = ""
    line_type: LineTypeName = "linear"
    point_shape: PointShapeName = "circle"
    draw_values: bool = False
    draw_circle_hole: bool = False


class SeriesConfig(BaseModel):
    kind: SeriesKindName = "line"
    malformed_policy: Literal["silent", "warn"] = "silent"
    maximum_time_entries: int = Field(default=200, ge=1)
    window_mode: Literal["sliding", "grow"] = "sliding"
    maximum_bar_slots: int = Field(default=100_000, ge=1)


class StatisticsConfig(BaseModel):
    anomaly_threshold: float = Field(default=2.0, gt=0.0)


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        return normalize_level(value)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    series: SeriesConfig = Field(default_factory=SeriesConfig)
    style: SeriesStyle = Field(default_factory=SeriesStyle)
    statistics: StatisticsConfig = Field(default_factory=StatisticsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path | None = None) -> AppConfig:
    """Load a YAML config; ``None`` validates the built-in defaults."""
    data: dict = {}
    if path is not None:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}

    env_level = os.getenv("CHARTSERIES_LOG_LEVEL")
    if env_level:
        data = {**data, "logging": {**(data.get("logging") or {}), "level": env_level}}
    return AppConfig.model_validate(data)
