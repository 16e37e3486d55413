"""Shared test fixtures."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from courtlab.config import Settings
from courtlab.core.roster import create_team
from courtlab.core.state import GameState, MatchContext
from courtlab.models.rules import DEFAULT_RULESET, RuleSet, TimeRules
from courtlab.models.team import TeamId


class ScriptedRandom(random.Random):
    """random() returns scripted values first, then falls back to the seed."""

    def __init__(self, *, script: list[float] | None = None, seed: int = 0) -> None:
        super().__init__(seed)
        self.script = list(script or [])

    def random(self) -> float:
        if self.script:
            return self.script.pop(0)
        return super().random()

    # Defining getrandbits here keeps choice() on getrandbits. Without it,
    # Random.__init_subclass__ routes choice() through random() and player
    # selection would eat the script.
    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


MakeCtx = Callable[..., MatchContext]


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(env="test", seed=42)


@pytest.fixture
def short_rules() -> RuleSet:
    """One-minute quarters so full games run in a few hundred ticks."""
    return RuleSet(time=TimeRules(quarter_length=1, shot_clock=24))


@pytest.fixture
def make_ctx() -> MakeCtx:
    """Factory for a MatchContext driven by a ScriptedRandom."""

    def _make_ctx(
        rules: RuleSet = DEFAULT_RULESET,
        script: list[float] | None = None,
        possession: TeamId = "A",
    ) -> MatchContext:
        rng = ScriptedRandom(script=script)
        teams = {tid: create_team(tid, f"Team {tid}", rules, rng) for tid in ("A", "B")}
        state = GameState(shot_clock=rules.time.shot_clock, possession=possession)
        return MatchContext(rules=rules, rng=rng, state=state, teams=teams)

    return _make_ctx
