"""Skill and position vocabulary for players.

See core/state.py for the mutable Player and Team used during a game.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

SkillLevel = Literal["low", "medium", "high"]
Position = Literal["PG", "SG", "SF", "PF", "C"]
TeamId = Literal["A", "B"]

SKILL_LEVELS: tuple[SkillLevel, ...] = ("low", "medium", "high")
POSITIONS: tuple[Position, ...] = ("PG", "SG", "SF", "PF", "C")
TEAM_IDS: tuple[TeamId, ...] = ("A", "B")


def other_team(team_id: TeamId) -> TeamId:
    """The opponent of ``team_id``."""
    return "B" if team_id == "A" else "A"


class PlayerSkills(BaseModel):
    """Five independent skill ratings, assigned once at roster creation."""

    model_config = ConfigDict(frozen=True)

    shooting: SkillLevel = "medium"
    defense: SkillLevel = "medium"
    ball_handling: SkillLevel = "medium"
    rebounding: SkillLevel = "medium"
    speed: SkillLevel = "medium"
