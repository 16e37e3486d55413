"""Play-by-play event types — the engine's output stream.

Each event type carries its own payload model. Payloads form a tagged union
discriminated on ``event_type`` so consumers can match exhaustively.
The event type strings are the ones the court visualizer listens for.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from courtlab.models.team import TeamId

ShotType = Literal["two", "three"]
ReboundKind = Literal["offensive", "defensive"]

EventType = Literal[
    "madeShot",
    "missedShot",
    "rebound",
    "pass",
    "steal",
    "turnover",
    "fastBreak",
    "fastBreakScore",
    "fastBreakMiss",
    "shotClockViolation",
    "quarterEnd",
    "foul",
    "freeThrow",
    "foulOut",
]


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True)


class MadeShot(_Payload):
    event_type: Literal["madeShot"] = "madeShot"
    team: TeamId
    player: int
    shot_type: ShotType
    points: float
    assist: int | None = None


class MissedShot(_Payload):
    event_type: Literal["missedShot"] = "missedShot"
    team: TeamId
    player: int
    shot_type: ShotType


class Rebound(_Payload):
    event_type: Literal["rebound"] = "rebound"
    team: TeamId
    player: int
    kind: ReboundKind


class Pass(_Payload):
    event_type: Literal["pass"] = "pass"
    team: TeamId
    from_player: int
    to_player: int


class Steal(_Payload):
    event_type: Literal["steal"] = "steal"
    offensive_team: TeamId
    defensive_team: TeamId
    offensive_player: int
    defensive_player: int


class Turnover(_Payload):
    event_type: Literal["turnover"] = "turnover"
    team: TeamId
    player: int
    turnover_type: str = "error"


class FastBreak(_Payload):
    event_type: Literal["fastBreak"] = "fastBreak"
    team: TeamId
    player: int


class FastBreakScore(_Payload):
    event_type: Literal["fastBreakScore"] = "fastBreakScore"
    team: TeamId
    player: int
    shot_type: ShotType
    points: float


class FastBreakMiss(_Payload):
    event_type: Literal["fastBreakMiss"] = "fastBreakMiss"
    team: TeamId
    player: int
    shot_type: ShotType


class ShotClockViolation(_Payload):
    event_type: Literal["shotClockViolation"] = "shotClockViolation"
    team: TeamId


class QuarterEnd(_Payload):
    event_type: Literal["quarterEnd"] = "quarterEnd"
    quarter: int
    score_a: float
    score_b: float


class Foul(_Payload):
    event_type: Literal["foul"] = "foul"
    team: TeamId
    player: int
    fouled_team: TeamId
    fouled_player: int
    shooting: bool = True
    in_bonus: bool = False


class FreeThrow(_Payload):
    event_type: Literal["freeThrow"] = "freeThrow"
    team: TeamId
    player: int
    made: bool
    points: float = 0


class FoulOut(_Payload):
    event_type: Literal["foulOut"] = "foulOut"
    team: TeamId
    player: int
    fouls: int


EventPayload = Annotated[
    MadeShot
    | MissedShot
    | Rebound
    | Pass
    | Steal
    | Turnover
    | FastBreak
    | FastBreakScore
    | FastBreakMiss
    | ShotClockViolation
    | QuarterEnd
    | Foul
    | FreeThrow
    | FoulOut,
    Field(discriminator="event_type"),
]


class GameEvent(BaseModel):
    """One immutable entry in the play-by-play log."""

    model_config = ConfigDict(frozen=True)

    time: int
    quarter: int
    shot_clock: int
    payload: EventPayload

    @property
    def event_type(self) -> EventType:
        return self.payload.event_type

    def data(self) -> dict[str, Any]:
        """Payload fields without the type tag, as sent to visualizers."""
        return self.payload.model_dump(exclude={"event_type"})
