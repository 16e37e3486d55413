"""Mutable game state for the simulation engine.

GameState, Team, Player — the working memory of a game in progress.
These are internal to the simulation; GameSummary is the immutable output.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from courtlab.core.event_log import EventLog
from courtlab.models.events import EventPayload, GameEvent
from courtlab.models.rules import RuleSet
from courtlab.models.team import PlayerSkills, Position, TeamId, other_team

if TYPE_CHECKING:
    from courtlab.core.hooks import GameEffect


@dataclass
class Player:
    """Mutable state of a player during a game."""

    id: int
    position: Position
    skills: PlayerSkills
    fatigue: float = 0.0
    fouls: int = 0
    fouled_out: bool = False
    points: float = 0
    rebounds: int = 0
    assists: int = 0
    steals: int = 0
    blocks: int = 0
    turnovers: int = 0
    free_throws_made: int = 0
    free_throws_attempted: int = 0

    def add_fatigue(self, amount: float) -> None:
        """Fatigue only ever climbs, capped at 100."""
        if amount > 0:
            self.fatigue = min(100.0, self.fatigue + amount)


@dataclass
class TeamStats:
    """Aggregate team counters, updated incrementally as events occur."""

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


@dataclass
class Team:
    """One side of the game. Owns its players for the whole run."""

    id: TeamId
    name: str
    players: list[Player]
    stats: TeamStats = field(default_factory=TeamStats)

    @property
    def eligible(self) -> list[Player]:
        """Players who have not fouled out, or the full roster if none remain."""
        active = [p for p in self.players if not p.fouled_out]
        return active or self.players

    @property
    def average_fatigue(self) -> float:
        if not self.players:
            return 0.0
        return sum(p.fatigue for p in self.players) / len(self.players)


@dataclass
class GameState:
    """Mutable state of a game in progress."""

    shot_clock: int
    possession: TeamId | None = None
    time: int = 0
    quarter: int = 1
    score: dict[TeamId, float] = field(default_factory=lambda: {"A": 0, "B": 0})
    team_fouls: dict[TeamId, int] = field(default_factory=lambda: {"A": 0, "B": 0})
    events: EventLog = field(default_factory=EventLog)
    ticks: int = 0

    # Most recent passer in the current possession, for assist credit.
    last_passer: int | None = None

    @property
    def game_over(self) -> bool:
        return self.quarter > 4

    @property
    def score_diff(self) -> float:
        """Positive = team A leading."""
        return self.score["A"] - self.score["B"]


@dataclass
class MatchContext:
    """Everything a resolver needs to act on one game.

    Owned by a SimulationInstance; resolvers hold a reference and never
    keep state of their own between ticks.
    """

    rules: RuleSet
    rng: random.Random
    state: GameState
    teams: dict[TeamId, Team]
    effects: list[GameEffect] = field(default_factory=list)

    def log(self, payload: EventPayload) -> GameEvent:
        """Append an event stamped with the current clock."""
        s = self.state
        return s.events.append(payload, time=s.time, quarter=s.quarter, shot_clock=s.shot_clock)

    def chance(self, probability: float) -> bool:
        """Fresh uniform draw in [0, 1) against ``probability``."""
        return self.rng.random() < probability

    def random_player(self, team_id: TeamId, exclude: int | None = None) -> Player:
        """Uniform draw over the team's eligible players, optionally excluding one."""
        pool = self.teams[team_id].eligible
        if exclude is not None:
            others = [p for p in pool if p.id != exclude]
            # A one-player roster passes to itself.
            pool = others or pool
        return self.rng.choice(pool)

    def reset_shot_clock(self, seconds: int | None = None) -> None:
        self.state.shot_clock = self.rules.time.shot_clock if seconds is None else seconds

    def give_possession(self, team_id: TeamId) -> None:
        """Hand the ball to ``team_id`` with a full shot clock."""
        self.state.possession = team_id
        self.state.last_passer = None
        self.reset_shot_clock()

    def change_possession(self) -> None:
        current = self.state.possession
        self.give_possession(other_team(current) if current is not None else "A")
