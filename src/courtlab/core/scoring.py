"""Shot and rebound probability.

League-average base rates adjusted additively by skill and fatigue, then
clamped. All functions are pure; the resolver does the random draws.
"""

from __future__ import annotations

from courtlab.core.state import Player
from courtlab.models.events import ShotType
from courtlab.models.rules import RuleSet
from courtlab.models.team import SkillLevel

THREE_POINT_SHARE = 0.35
FAST_BREAK_THREE_SHARE = 0.20

BASE_PROBABILITY: dict[ShotType, float] = {"three": 0.35, "two": 0.47}
FAST_BREAK_BASE = 0.65
FREE_THROW_BASE = 0.75

# (high, low) additive adjustments
SHOOTER_SKILL_DELTA: dict[ShotType, tuple[float, float]] = {
    "three": (0.08, -0.08),
    "two": (0.10, -0.10),
}
DEFENDER_SKILL_DELTA: dict[ShotType, tuple[float, float]] = {
    "three": (-0.07, 0.05),
    "two": (-0.10, 0.07),
}
FAST_BREAK_SKILL_DELTA = (0.10, -0.08)
FREE_THROW_SKILL_DELTA = (0.10, -0.10)

MAX_FATIGUE_PENALTY = 0.15
MIN_SHOT_PROBABILITY = 0.10
MAX_SHOT_PROBABILITY = 0.95

DEFENSIVE_REBOUND_BASE = 0.70
REBOUND_SKILL_DELTA = 0.10


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def skill_delta(level: SkillLevel, delta: tuple[float, float]) -> float:
    """Pick the high/low adjustment for a skill level; medium is neutral."""
    high, low = delta
    if level == "high":
        return high
    if level == "low":
        return low
    return 0.0


def fatigue_penalty(fatigue: float) -> float:
    """Linear shooting penalty, reaching MAX_FATIGUE_PENALTY at fatigue 100."""
    return (fatigue / 100.0) * MAX_FATIGUE_PENALTY


def compute_shot_probability(shooter: Player, defender: Player, shot_type: ShotType) -> float:
    """Probability of a half-court shot going in. Returns value in [0.10, 0.95]."""
    prob = BASE_PROBABILITY[shot_type]
    prob += skill_delta(shooter.skills.shooting, SHOOTER_SKILL_DELTA[shot_type])
    prob += skill_delta(defender.skills.defense, DEFENDER_SKILL_DELTA[shot_type])
    prob -= fatigue_penalty(shooter.fatigue)
    return clamp(prob, MIN_SHOT_PROBABILITY, MAX_SHOT_PROBABILITY)


def compute_fast_break_probability(shooter: Player) -> float:
    """Fast breaks are uncontested, so only the shooter's skill matters."""
    prob = FAST_BREAK_BASE + skill_delta(shooter.skills.shooting, FAST_BREAK_SKILL_DELTA)
    return clamp(prob, MIN_SHOT_PROBABILITY, MAX_SHOT_PROBABILITY)


def compute_free_throw_probability(shooter: Player) -> float:
    prob = FREE_THROW_BASE + skill_delta(shooter.skills.shooting, FREE_THROW_SKILL_DELTA)
    prob -= fatigue_penalty(shooter.fatigue)
    return clamp(prob, MIN_SHOT_PROBABILITY, MAX_SHOT_PROBABILITY)


def compute_defensive_rebound_probability(off_rebounder: Player, def_rebounder: Player) -> float:
    """Share of misses the defense collects. Returns value in [0, 1]."""
    prob = DEFENSIVE_REBOUND_BASE
    # Offensive skill moves the share away from the defense.
    prob -= skill_delta(off_rebounder.skills.rebounding, (REBOUND_SKILL_DELTA, -REBOUND_SKILL_DELTA))
    prob += skill_delta(def_rebounder.skills.rebounding, (REBOUND_SKILL_DELTA, -REBOUND_SKILL_DELTA))
    return clamp(prob, 0.0, 1.0)


def points_for_shot(shot_type: ShotType, rules: RuleSet) -> float:
    """How many points a made field goal is worth under current rules."""
    if shot_type == "three":
        return rules.scoring.three_point_value
    return rules.scoring.two_point_value
