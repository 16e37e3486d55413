"""RuleSet — the complete set of configurable game parameters.

The central model. Consumed by roster creation, the possession resolver,
the step loop, and the rule-impact analyzer. Immutable for the lifetime of
a simulation run; changing rules means resetting the game.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class ConfigurationError(ValueError):
    """Raised at the configuration boundary when rule input is unusable."""


class _RuleGroup(BaseModel):
    # Accept both the snake_case field names and the camelCase keys the UI sends.
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class ScoringRules(_RuleGroup):
    three_point_value: float = Field(default=3, gt=0)
    two_point_value: float = Field(default=2, gt=0)
    free_throw_value: float = Field(default=1, gt=0)


class TimeRules(_RuleGroup):
    quarter_length: int = Field(default=12, gt=0)  # minutes
    shot_clock: int = Field(default=24, gt=0)  # seconds

    @property
    def quarter_seconds(self) -> int:
        return self.quarter_length * 60


class TeamRules(_RuleGroup):
    players_per_team: int = Field(default=5, gt=0)
    foul_out_limit: int = Field(default=6, gt=0)


class AdvancedRules(_RuleGroup):
    bonus_rule: bool = True
    three_second_rule: bool = True
    bonus_possession: bool = False


class RuleSet(_RuleGroup):
    """The complete set of configurable parameters for one simulation run.

    Organized in four groups:
    - scoring: point values per shot type
    - time: quarter length (minutes) and shot clock (seconds)
    - team: roster size and personal foul limit
    - advanced: rule toggles (bonus, three-second, bonus possession)
    """

    scoring: ScoringRules = Field(default_factory=ScoringRules)
    time: TimeRules = Field(default_factory=TimeRules)
    team: TeamRules = Field(default_factory=TeamRules)
    advanced: AdvancedRules = Field(default_factory=AdvancedRules)

    @property
    def offensive_rebound_shot_clock(self) -> int:
        """Shot clock after an offensive rebound when bonus possession is off."""
        return min(14, self.time.shot_clock)

    def with_changes(self, **groups: Mapping[str, Any]) -> RuleSet:
        """Return a copy with the given groups partially overridden.

        ``rules.with_changes(time={"shot_clock": 30})`` keeps every other
        field. Raises ConfigurationError if the merged rules are invalid.
        """
        unknown = set(groups) - set(type(self).model_fields)
        if unknown:
            msg = f"Unknown rule group(s): {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)
        merged = self.model_dump()
        for name, overrides in groups.items():
            merged[name] = {**merged[name], **dict(overrides)}
        return load_ruleset(merged)


def load_ruleset(data: Mapping[str, Any] | RuleSet | None) -> RuleSet:
    """Validate raw rule input at the configuration boundary.

    Accepts an existing RuleSet (returned unchanged), a mapping in either
    snake_case or camelCase, or None for the defaults.
    """
    if data is None:
        return DEFAULT_RULESET
    if isinstance(data, RuleSet):
        return data
    if not isinstance(data, Mapping):
        msg = f"Rules must be a mapping, got {type(data).__name__}"
        raise ConfigurationError(msg)
    try:
        return RuleSet.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid rule set: {exc}") from exc


def load_ruleset_yaml(path: Path | str) -> RuleSet:
    """Load and validate a RuleSet from a YAML file."""
    path = Path(path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Could not read rules from {path}: {exc}") from exc
    return load_ruleset(data or {})


DEFAULT_RULESET = RuleSet()

PRESETS: Mapping[str, RuleSet] = MappingProxyType(
    {
        "NBA Rules": DEFAULT_RULESET,
        "FIBA Rules": RuleSet(
            time=TimeRules(quarter_length=10, shot_clock=24),
            team=TeamRules(players_per_team=5, foul_out_limit=5),
        ),
        # Two 20-minute halves, modelled as four 20-minute periods.
        "NCAA Rules": RuleSet(
            time=TimeRules(quarter_length=20, shot_clock=30),
            team=TeamRules(players_per_team=5, foul_out_limit=5),
        ),
        "Experimental Rules": RuleSet(
            scoring=ScoringRules(three_point_value=4),
            time=TimeRules(quarter_length=8, shot_clock=18),
            team=TeamRules(players_per_team=4, foul_out_limit=4),
            advanced=AdvancedRules(
                bonus_rule=False,
                three_second_rule=False,
                bonus_possession=True,
            ),
        ),
    }
)


def get_preset(name: str) -> RuleSet:
    """Look up a built-in preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        available = ", ".join(PRESETS)
        raise ConfigurationError(f"Unknown preset {name!r}. Available: {available}") from None
