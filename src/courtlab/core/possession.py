"""Possession resolver — the decision tree run on each live-ball tick.

Action selection → shot / pass / turnover → rebound or fast break.
Every decision takes a fresh draw from the instance's RNG, and every player
selection is an independent uniform draw over the relevant roster.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from courtlab.core.fouls import FoulResolver, NoFoulResolver
from courtlab.core.hooks import HookPoint, fire_hooks
from courtlab.core.scoring import (
    FAST_BREAK_THREE_SHARE,
    THREE_POINT_SHARE,
    compute_defensive_rebound_probability,
    compute_fast_break_probability,
    compute_shot_probability,
    points_for_shot,
)
from courtlab.core.state import MatchContext, Player
from courtlab.models.events import (
    FastBreak,
    FastBreakMiss,
    FastBreakScore,
    MadeShot,
    MissedShot,
    Pass,
    Rebound,
    ReboundKind,
    ShotType,
    Steal,
    Turnover,
)
from courtlab.models.team import TeamId, other_team

logger = logging.getLogger(__name__)

Action = Literal["shoot", "pass", "turnover", "none"]
ClockBand = Literal["late", "mid", "early"]

# Cumulative thresholds per band: shoot < a, pass < b, turnover < c, else no action.
# Bands are keyed by seconds elapsed since the shot clock was last reset.
ACTION_TABLE: dict[ClockBand, tuple[float, float, float]] = {
    "late": (0.80, 0.95, 1.00),
    "mid": (0.40, 0.80, 0.90),
    "early": (0.20, 0.70, 0.80),
}

STEAL_SHARE = 0.60
FAST_BREAK_CHANCE = 0.30


@dataclass
class PossessionResult:
    """What one resolver tick did."""

    action: Action
    points_scored: float = 0
    possession_changed: bool = False


def clock_band(elapsed: int) -> ClockBand:
    """Band for ``elapsed`` seconds since the last shot clock reset."""
    if elapsed < 5:
        return "late"
    if elapsed < 15:
        return "mid"
    return "early"


def select_action(band: ClockBand, roll: float) -> Action:
    shoot, pass_, turnover = ACTION_TABLE[band]
    if roll < shoot:
        return "shoot"
    if roll < pass_:
        return "pass"
    if roll < turnover:
        return "turnover"
    return "none"


class PossessionResolver:
    """Resolves one tick's worth of action for the team in possession."""

    def __init__(self, ctx: MatchContext, fouls: FoulResolver | None = None) -> None:
        self.ctx = ctx
        self.fouls: FoulResolver = fouls or NoFoulResolver()

    def resolve(self, offense: TeamId) -> PossessionResult:
        ctx = self.ctx
        elapsed = ctx.rules.time.shot_clock - ctx.state.shot_clock
        action = select_action(clock_band(elapsed), ctx.rng.random())
        defense = other_team(offense)

        if action == "shoot":
            return self.attempt_shot(offense, defense)
        if action == "pass":
            self.simulate_pass(offense)
            return PossessionResult(action="pass")
        if action == "turnover":
            return self.simulate_turnover(offense, defense)
        # Dribbling / setting up
        return PossessionResult(action="none")

    # --- Shots ---

    def attempt_shot(self, offense: TeamId, defense: TeamId) -> PossessionResult:
        ctx = self.ctx
        shot_type: ShotType = "three" if ctx.chance(THREE_POINT_SHARE) else "two"
        shooter = ctx.random_player(offense)
        defender = ctx.random_player(defense)
        prob = compute_shot_probability(shooter, defender, shot_type)

        fire_hooks(HookPoint.FOUL_CHECK, ctx.state, ctx.effects, defender)
        foul = self.fouls.check_shooting_foul(ctx, offense, shooter, defense, defender, shot_type)

        stats = ctx.teams[offense].stats
        stats.fg_attempts += 1
        if shot_type == "three":
            stats.three_attempts += 1

        if ctx.chance(prob):
            points = points_for_shot(shot_type, ctx.rules)
            assist = self._credit_assist(offense, shooter)
            self._score_field_goal(offense, shooter, shot_type, points)
            ctx.log(
                MadeShot(
                    team=offense,
                    player=shooter.id,
                    shot_type=shot_type,
                    points=points,
                    assist=assist,
                )
            )
            if foul is not None:
                points += self.fouls.award_free_throws(ctx, foul, shot_made=True)
            ctx.change_possession()
            return PossessionResult(action="shoot", points_scored=points, possession_changed=True)

        ctx.log(MissedShot(team=offense, player=shooter.id, shot_type=shot_type))
        if foul is not None:
            points = self.fouls.award_free_throws(ctx, foul, shot_made=False)
            ctx.change_possession()
            return PossessionResult(action="shoot", points_scored=points, possession_changed=True)

        kind = self.resolve_rebound(offense, defense)
        return PossessionResult(action="shoot", possession_changed=kind == "defensive")

    def _score_field_goal(
        self, team_id: TeamId, shooter: Player, shot_type: ShotType, points: float
    ) -> None:
        stats = self.ctx.teams[team_id].stats
        self.ctx.state.score[team_id] += points
        shooter.points += points
        stats.fg_made += 1
        if shot_type == "three":
            stats.three_made += 1

    def _credit_assist(self, team_id: TeamId, shooter: Player) -> int | None:
        """Credit the last passer of this possession, if it wasn't the shooter."""
        passer_id = self.ctx.state.last_passer
        if passer_id is None or passer_id == shooter.id:
            return None
        self.ctx.teams[team_id].players[passer_id].assists += 1
        self.ctx.teams[team_id].stats.assists += 1
        return passer_id

    # --- Rebounds ---

    def resolve_rebound(self, offense: TeamId, defense: TeamId) -> ReboundKind:
        """Resolve a missed shot. Returns which side came down with it."""
        ctx = self.ctx
        off_player = ctx.random_player(offense)
        def_player = ctx.random_player(defense)
        def_prob = compute_defensive_rebound_probability(off_player, def_player)

        if ctx.chance(def_prob):
            stats = ctx.teams[defense].stats
            stats.rebounds += 1
            stats.def_rebounds += 1
            def_player.rebounds += 1
            ctx.log(Rebound(team=defense, player=def_player.id, kind="defensive"))
            ctx.give_possession(defense)
            return "defensive"

        stats = ctx.teams[offense].stats
        stats.rebounds += 1
        stats.off_rebounds += 1
        off_player.rebounds += 1
        ctx.log(Rebound(team=offense, player=off_player.id, kind="offensive"))
        if ctx.rules.advanced.bonus_possession:
            ctx.reset_shot_clock()
        else:
            ctx.reset_shot_clock(ctx.rules.offensive_rebound_shot_clock)
        return "offensive"

    # --- Passes ---

    def simulate_pass(self, offense: TeamId) -> None:
        """Move the ball between teammates. Ball handling is not consulted."""
        ctx = self.ctx
        passer = ctx.random_player(offense)
        receiver = ctx.random_player(offense, exclude=passer.id)
        ctx.log(Pass(team=offense, from_player=passer.id, to_player=receiver.id))
        ctx.state.last_passer = passer.id

    # --- Turnovers ---

    def simulate_turnover(self, offense: TeamId, defense: TeamId) -> PossessionResult:
        ctx = self.ctx
        off_player = ctx.random_player(offense)
        def_player = ctx.random_player(defense)
        fire_hooks(HookPoint.TURNOVER_CHECK, ctx.state, ctx.effects, off_player)

        if ctx.chance(STEAL_SHARE):
            ctx.teams[defense].stats.steals += 1
            def_player.steals += 1
            ctx.log(
                Steal(
                    offensive_team=offense,
                    defensive_team=defense,
                    offensive_player=off_player.id,
                    defensive_player=def_player.id,
                )
            )
        else:
            ctx.log(Turnover(team=offense, player=off_player.id, turnover_type="error"))

        ctx.teams[offense].stats.turnovers += 1
        off_player.turnovers += 1
        ctx.give_possession(defense)

        points: float = 0
        if ctx.chance(FAST_BREAK_CHANCE):
            points = self.simulate_fast_break(defense)
        return PossessionResult(action="turnover", points_scored=points, possession_changed=True)

    # --- Fast breaks ---

    def simulate_fast_break(self, team_id: TeamId) -> float:
        """Run a fast break for ``team_id``. Returns points scored."""
        ctx = self.ctx
        runner = ctx.random_player(team_id)
        stats = ctx.teams[team_id].stats
        stats.fast_breaks += 1
        ctx.log(FastBreak(team=team_id, player=runner.id))

        prob = compute_fast_break_probability(runner)
        shot_type: ShotType = "three" if ctx.chance(FAST_BREAK_THREE_SHARE) else "two"
        stats.fg_attempts += 1
        if shot_type == "three":
            stats.three_attempts += 1

        if ctx.chance(prob):
            points = points_for_shot(shot_type, ctx.rules)
            self._score_field_goal(team_id, runner, shot_type, points)
            ctx.log(
                FastBreakScore(team=team_id, player=runner.id, shot_type=shot_type, points=points)
            )
            ctx.change_possession()
            return points

        ctx.log(FastBreakMiss(team=team_id, player=runner.id, shot_type=shot_type))
        self.resolve_rebound(team_id, other_team(team_id))
        return 0
