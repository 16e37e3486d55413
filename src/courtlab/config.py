"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from courtlab.models.rules import PRESETS, RuleSet, get_preset


class Settings(BaseSettings):
    """courtlab configuration.

    All values can be overridden via ``COURTLAB_*`` environment variables
    or a .env file. Rules themselves come from a preset or a rules file;
    these settings only cover how the engine runs.
    """

    env: str = "development"
    log_level: str = "INFO"

    # Simulation
    seed: int | None = None
    default_preset: str = "NBA Rules"
    foul_model: Literal["none", "standard"] = "none"
    fatigue_per_minute: float = Field(default=1.0, ge=0.0, le=100.0)

    # Playback pacing: wall-clock only, never affects outcomes
    tick_interval_ms: int = Field(default=50, gt=0)
    speed: float = Field(default=1.0, gt=0.0)

    model_config = SettingsConfigDict(env_prefix="COURTLAB_", env_file=".env", extra="ignore")

    @field_validator("default_preset")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        if value not in PRESETS:
            msg = f"Unknown preset {value!r}. Available: {', '.join(PRESETS)}"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def tick_interval_seconds(self) -> float:
        return self.tick_interval_ms / 1000.0

    def default_rules(self) -> RuleSet:
        return get_preset(self.default_preset)
