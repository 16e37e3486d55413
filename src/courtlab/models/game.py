"""Game summary models — output types from the analyzer.

The summary is an immutable snapshot; the engine's live counters stay in
core/state.py.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from courtlab.models.team import TeamId

PaceImpact = Literal["faster", "slower", "typical"]
ScoringImpact = Literal["higher", "lower", "typical"]
LengthImpact = Literal["longer", "shorter", "typical"]
FatigueImpact = Literal["higher", "lower", "typical"]
ComebackImpact = Literal["easier", "harder", "typical"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class TeamStatLine(_Frozen):
    """Snapshot of a team's aggregate counters."""

    fg_attempts: int = 0
    fg_made: int = 0
    three_attempts: int = 0
    three_made: int = 0
    ft_attempts: int = 0
    ft_made: int = 0
    rebounds: int = 0
    off_rebounds: int = 0
    def_rebounds: int = 0
    assists: int = 0
    steals: int = 0
    blocks: int = 0
    turnovers: int = 0
    fouls: int = 0
    fast_breaks: int = 0


class ShootingPercentages(_Frozen):
    fg: float = Field(default=0.0, ge=0.0, le=1.0)
    three: float = Field(default=0.0, ge=0.0, le=1.0)
    ft: float = Field(default=0.0, ge=0.0, le=1.0)


class RuleImpact(_Frozen):
    """Heuristic read on how the active rules shaped the game.

    ``length`` and ``comeback`` are fixed at "typical": there is no
    overtime and no game-flow analysis.
    """

    pace: PaceImpact = "typical"
    scoring: ScoringImpact = "typical"
    length: LengthImpact = "typical"
    fatigue: FatigueImpact = "typical"
    comeback: ComebackImpact = "typical"


class GameSummary(_Frozen):
    """Complete output of the analyzer for one game."""

    final_score: dict[TeamId, float]
    stats: dict[TeamId, TeamStatLine]
    shooting_percentages: dict[TeamId, ShootingPercentages]
    rule_impact: RuleImpact
    game_over: bool = False
    total_events: int = 0
    winner: TeamId | None = None
