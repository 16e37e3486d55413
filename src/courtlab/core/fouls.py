"""Foul resolution — shooting fouls, free throws, and foul-outs.

The possession resolver consults a FoulResolver on every half-court shot.
The default NoFoulResolver never calls a foul, so the core engine's
shot/pass/turnover distribution is untouched. StandardFoulResolver adds
personal and team fouls, free throws worth ``free_throw_value``, the bonus
rule, and foul-out removal at ``foul_out_limit``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Protocol

from courtlab.core.scoring import compute_free_throw_probability
from courtlab.core.state import MatchContext, Player
from courtlab.models.events import Foul, FoulOut, FreeThrow, ShotType
from courtlab.models.team import TeamId

logger = logging.getLogger(__name__)

FoulModel = Literal["none", "standard"]


@dataclass(frozen=True)
class FoulCall:
    """A whistle on the defense during a shot attempt."""

    team: TeamId
    player: int
    fouled_team: TeamId
    fouled_player: int
    shot_type: ShotType
    in_bonus: bool = False


class FoulResolver(Protocol):
    """Capability consulted by the possession resolver around each shot."""

    def check_shooting_foul(
        self,
        ctx: MatchContext,
        shooter_team: TeamId,
        shooter: Player,
        defender_team: TeamId,
        defender: Player,
        shot_type: ShotType,
    ) -> FoulCall | None: ...

    def award_free_throws(self, ctx: MatchContext, call: FoulCall, shot_made: bool) -> float: ...


class NoFoulResolver:
    """Never calls a foul. Personal foul counters stay at zero."""

    def check_shooting_foul(
        self,
        ctx: MatchContext,
        shooter_team: TeamId,
        shooter: Player,
        defender_team: TeamId,
        defender: Player,
        shot_type: ShotType,
    ) -> FoulCall | None:
        return None

    def award_free_throws(self, ctx: MatchContext, call: FoulCall, shot_made: bool) -> float:
        return 0


class StandardFoulResolver:
    """Shooting fouls with free throws, the bonus rule, and foul-outs.

    A missed fouled shot earns two free throws (three on a three-pointer);
    a made one earns a single and-one. With the bonus rule on, a defense
    whose quarter foul count exceeds ``bonus_threshold`` concedes one more.
    """

    def __init__(self, shooting_foul_rate: float = 0.08, bonus_threshold: int = 5) -> None:
        if not 0.0 <= shooting_foul_rate <= 1.0:
            msg = f"shooting_foul_rate must be in [0, 1], got {shooting_foul_rate}"
            raise ValueError(msg)
        self.shooting_foul_rate = shooting_foul_rate
        self.bonus_threshold = bonus_threshold

    def check_shooting_foul(
        self,
        ctx: MatchContext,
        shooter_team: TeamId,
        shooter: Player,
        defender_team: TeamId,
        defender: Player,
        shot_type: ShotType,
    ) -> FoulCall | None:
        if not ctx.chance(self.shooting_foul_rate):
            return None

        defender.fouls += 1
        ctx.teams[defender_team].stats.fouls += 1
        ctx.state.team_fouls[defender_team] += 1
        in_bonus = (
            ctx.rules.advanced.bonus_rule
            and ctx.state.team_fouls[defender_team] > self.bonus_threshold
        )
        call = FoulCall(
            team=defender_team,
            player=defender.id,
            fouled_team=shooter_team,
            fouled_player=shooter.id,
            shot_type=shot_type,
            in_bonus=in_bonus,
        )
        ctx.log(
            Foul(
                team=defender_team,
                player=defender.id,
                fouled_team=shooter_team,
                fouled_player=shooter.id,
                shooting=True,
                in_bonus=in_bonus,
            )
        )
        self._check_foul_out(ctx, defender_team, defender)
        return call

    def _check_foul_out(self, ctx: MatchContext, team_id: TeamId, player: Player) -> None:
        if player.fouled_out or player.fouls < ctx.rules.team.foul_out_limit:
            return
        player.fouled_out = True
        ctx.log(FoulOut(team=team_id, player=player.id, fouls=player.fouls))
        logger.info(
            "foul_out team=%s player=%d fouls=%d quarter=%d",
            team_id,
            player.id,
            player.fouls,
            ctx.state.quarter,
        )

    def free_throws_for(self, call: FoulCall, shot_made: bool) -> int:
        if shot_made:
            attempts = 1
        else:
            attempts = 3 if call.shot_type == "three" else 2
        if call.in_bonus:
            attempts += 1
        return attempts

    def award_free_throws(self, ctx: MatchContext, call: FoulCall, shot_made: bool) -> float:
        """Shoot the free throws for ``call``. Returns points scored."""
        shooter = ctx.teams[call.fouled_team].players[call.fouled_player]
        stats = ctx.teams[call.fouled_team].stats
        value = ctx.rules.scoring.free_throw_value
        total: float = 0
        for _ in range(self.free_throws_for(call, shot_made)):
            made = ctx.chance(compute_free_throw_probability(shooter))
            shooter.free_throws_attempted += 1
            stats.ft_attempts += 1
            points = value if made else 0
            if made:
                shooter.free_throws_made += 1
                shooter.points += points
                stats.ft_made += 1
                ctx.state.score[call.fouled_team] += points
                total += points
            ctx.log(FreeThrow(team=call.fouled_team, player=shooter.id, made=made, points=points))
        return total


def build_foul_resolver(model: FoulModel) -> FoulResolver:
    """Map a configured foul model name to a resolver."""
    if model == "standard":
        return StandardFoulResolver()
    return NoFoulResolver()
