"""Hook points for game effects.

Extension seam for rules the engine tracks but does not yet act on:
ball-handling skill and the three-second rule would modulate the turnover
path, the bonus rule the foul path. No effects are registered by default,
so every hook is inert unless a caller supplies one.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from courtlab.core.state import GameState, Player

logger = logging.getLogger(__name__)


class HookPoint(Enum):
    """Points in the simulation where effects can fire."""

    PRE_POSSESSION = "pre_possession"
    TURNOVER_CHECK = "turnover_check"
    FOUL_CHECK = "foul_check"
    QUARTER_END = "quarter_end"
    GAME_END = "game_end"


class GameEffect(Protocol):
    """Protocol for game effects that observe or modify simulation state."""

    def should_fire(
        self, hook: HookPoint, game_state: GameState, player: Player | None
    ) -> bool: ...

    def apply(self, hook: HookPoint, game_state: GameState, player: Player | None) -> None: ...


def fire_hooks(
    hook: HookPoint,
    game_state: GameState,
    effects: list[GameEffect],
    player: Player | None = None,
) -> int:
    """Fire all effects registered for this hook point. Returns how many fired."""
    fired = 0
    for effect in effects:
        if effect.should_fire(hook, game_state, player):
            effect.apply(hook, game_state, player)
            fired += 1
    if fired:
        logger.debug("hook=%s fired=%d", hook.value, fired)
    return fired
