"""Top-level simulation engine.

SimulationInstance owns one game: its RuleSet, both Teams, the GameState,
the event log, and a seedable RNG. step() is one simulated second.
Instances share nothing, so any number can run side by side.

simulate_game(rules, seed) → (GameSummary, events) runs a whole game headless.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from typing import Any

from courtlab.core.analysis import generate_game_summary
from courtlab.core.event_log import EventLog, EventSink
from courtlab.core.fouls import FoulModel, FoulResolver, build_foul_resolver
from courtlab.core.hooks import GameEffect, HookPoint, fire_hooks
from courtlab.core.possession import PossessionResolver, PossessionResult
from courtlab.core.roster import create_team
from courtlab.core.state import GameState, MatchContext, Team
from courtlab.models.events import GameEvent, QuarterEnd, ShotClockViolation
from courtlab.models.game import GameSummary
from courtlab.models.rules import RuleSet, load_ruleset
from courtlab.models.team import TEAM_IDS, TeamId

logger = logging.getLogger(__name__)

QUARTERS = 4
DEFAULT_FATIGUE_PER_MINUTE = 1.0


class SimulationInstance:
    """One basketball game, advanced a simulated second at a time.

    Deterministic given ``seed`` (or an injected ``rng``) and the RuleSet.
    """

    def __init__(
        self,
        rules: RuleSet | Mapping[str, Any] | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        sinks: list[EventSink] | None = None,
        effects: list[GameEffect] | None = None,
        foul_model: FoulModel = "none",
        foul_resolver: FoulResolver | None = None,
        fatigue_per_minute: float = DEFAULT_FATIGUE_PER_MINUTE,
        team_names: Mapping[TeamId, str] | None = None,
    ) -> None:
        if fatigue_per_minute < 0:
            msg = f"fatigue_per_minute must be >= 0, got {fatigue_per_minute}"
            raise ValueError(msg)
        self.rules = load_ruleset(rules)
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.sinks: list[EventSink] = list(sinks or [])
        self.effects: list[GameEffect] = list(effects or [])
        self.foul_resolver = foul_resolver or build_foul_resolver(foul_model)
        self.fatigue_per_minute = fatigue_per_minute
        self.team_names: dict[TeamId, str] = {"A": "Team A", "B": "Team B"}
        if team_names:
            self.team_names.update(team_names)
        self._game_end_fired = False
        self._build()

    def _build(self) -> None:
        """Create fresh Teams and GameState under the current rules."""
        self.teams: dict[TeamId, Team] = {
            tid: create_team(tid, self.team_names[tid], self.rules, self.rng) for tid in TEAM_IDS
        }
        self.state = GameState(
            shot_clock=self.rules.time.shot_clock,
            possession=self.rng.choice(TEAM_IDS),
            events=EventLog(sinks=self.sinks),
        )
        self.ctx = MatchContext(
            rules=self.rules,
            rng=self.rng,
            state=self.state,
            teams=self.teams,
            effects=self.effects,
        )
        self.resolver = PossessionResolver(self.ctx, fouls=self.foul_resolver)
        self._game_end_fired = False
        logger.info(
            "game_reset seed=%s quarter_minutes=%d shot_clock=%d players=%d possession=%s",
            self.seed,
            self.rules.time.quarter_length,
            self.rules.time.shot_clock,
            self.rules.team.players_per_team,
            self.state.possession,
        )

    # --- Lifecycle ---

    def reset(self, rules: RuleSet | Mapping[str, Any] | None = None) -> None:
        """Discard Teams and GameState and start over, optionally with new rules.

        The RNG is not reseeded, so a reset game differs from the first one.
        """
        if rules is not None:
            self.rules = load_ruleset(rules)
        self._build()

    def update_rules(self, **groups: Mapping[str, Any]) -> RuleSet:
        """Merge partial rule changes over the current rules and reset."""
        self.rules = self.rules.with_changes(**groups)
        self._build()
        return self.rules

    def add_sink(self, sink: EventSink) -> None:
        """Register a visualizer or bus sink; it sees events from now on."""
        self.sinks.append(sink)

    def is_game_over(self) -> bool:
        return self.state.game_over

    @property
    def events(self) -> EventLog:
        return self.state.events

    # --- Step loop ---

    def step(self) -> PossessionResult | None:
        """Advance one simulated second.

        Returns the possession result when the resolver ran, else None.
        A tick after game over is a no-op.
        """
        state = self.state
        if state.game_over:
            return None

        state.ticks += 1
        state.time += 1
        state.shot_clock -= 1

        result: PossessionResult | None = None
        if state.time >= self.rules.time.quarter_seconds:
            self._end_quarter()
        elif state.shot_clock <= 0:
            self._shot_clock_violation()
        else:
            fire_hooks(HookPoint.PRE_POSSESSION, state, self.effects)
            offense = state.possession if state.possession is not None else "A"
            result = self.resolver.resolve(offense)

        self._accrue_fatigue()

        if state.game_over and not self._game_end_fired:
            self._finish()
        return result

    def _end_quarter(self) -> None:
        state = self.state
        finished = state.quarter
        state.quarter += 1
        fire_hooks(HookPoint.QUARTER_END, state, self.effects)
        if state.quarter > QUARTERS:
            return
        state.time = 0
        self.ctx.reset_shot_clock()
        state.team_fouls = {"A": 0, "B": 0}
        self.ctx.log(QuarterEnd(quarter=finished, score_a=state.score["A"], score_b=state.score["B"]))
        logger.info(
            "quarter_end quarter=%d score=%g-%g",
            finished,
            state.score["A"],
            state.score["B"],
        )

    def _shot_clock_violation(self) -> None:
        offense = self.state.possession
        if offense is None:
            offense = "A"
        self.ctx.log(ShotClockViolation(team=offense))
        self.ctx.change_possession()

    def _accrue_fatigue(self) -> None:
        if not self.fatigue_per_minute:
            return
        per_second = self.fatigue_per_minute / 60.0
        for team in self.teams.values():
            for player in team.players:
                if not player.fouled_out:
                    player.add_fatigue(per_second)

    def _finish(self) -> None:
        self._game_end_fired = True
        fire_hooks(HookPoint.GAME_END, self.state, self.effects)
        logger.info(
            "game_complete seed=%s ticks=%d events=%d score=%g-%g",
            self.seed,
            self.state.ticks,
            len(self.state.events),
            self.state.score["A"],
            self.state.score["B"],
        )

    def run_to_completion(self, max_ticks: int | None = None) -> GameSummary:
        """Step until the game is over (or ``max_ticks`` ticks have run)."""
        ticks = 0
        while not self.is_game_over():
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.step()
            ticks += 1
        return self.generate_game_summary()

    # --- Output ---

    def generate_game_summary(self) -> GameSummary:
        """Summary of the game so far. Gate on is_game_over() for final numbers."""
        return generate_game_summary(self.state, self.teams, self.rules)


def simulate_game(
    rules: RuleSet | Mapping[str, Any] | None = None,
    seed: int | None = None,
    **kwargs: Any,
) -> tuple[GameSummary, list[GameEvent]]:
    """Simulate a complete game headless.

    Deterministic given rules + seed. Returns the summary and the event log.
    """
    sim = SimulationInstance(rules=rules, seed=seed, **kwargs)
    summary = sim.run_to_completion()
    return summary, list(sim.events)
