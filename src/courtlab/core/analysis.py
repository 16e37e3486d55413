"""Post-game summary and rule-impact analysis.

Reads final team and game state; never touches the event log for stats.
Thresholds are per minute of regulation (quarter length × 4).
"""

from __future__ import annotations

from dataclasses import asdict

from courtlab.core.state import GameState, Team, TeamStats
from courtlab.models.game import (
    FatigueImpact,
    GameSummary,
    PaceImpact,
    RuleImpact,
    ScoringImpact,
    ShootingPercentages,
    TeamStatLine,
)
from courtlab.models.rules import RuleSet
from courtlab.models.team import TEAM_IDS, TeamId

FAST_PACE = 2.5  # field-goal attempts per minute
SLOW_PACE = 1.8
HIGH_SCORING = 5.0  # points per minute
LOW_SCORING = 3.0
HIGH_FATIGUE = 70.0
LOW_FATIGUE = 40.0


def percentage(made: int, attempts: int) -> float:
    """made / attempts in [0, 1], or 0.0 when nothing was attempted."""
    if attempts <= 0:
        return 0.0
    return max(0.0, min(1.0, made / attempts))


def shooting_percentages(stats: TeamStats) -> ShootingPercentages:
    return ShootingPercentages(
        fg=percentage(stats.fg_made, stats.fg_attempts),
        three=percentage(stats.three_made, stats.three_attempts),
        ft=percentage(stats.ft_made, stats.ft_attempts),
    )


def classify_pace(possessions_per_minute: float) -> PaceImpact:
    if possessions_per_minute > FAST_PACE:
        return "faster"
    if possessions_per_minute < SLOW_PACE:
        return "slower"
    return "typical"


def classify_scoring(points_per_minute: float) -> ScoringImpact:
    if points_per_minute > HIGH_SCORING:
        return "higher"
    if points_per_minute < LOW_SCORING:
        return "lower"
    return "typical"


def classify_fatigue(average_fatigue: float) -> FatigueImpact:
    if average_fatigue > HIGH_FATIGUE:
        return "higher"
    if average_fatigue < LOW_FATIGUE:
        return "lower"
    return "typical"


def league_average_fatigue(teams: dict[TeamId, Team]) -> float:
    """Average fatigue over every player on both rosters."""
    players = sum(len(t.players) for t in teams.values())
    if not players:
        return 0.0
    return sum(t.average_fatigue * len(t.players) for t in teams.values()) / players


def analyze_rule_impact(
    state: GameState, teams: dict[TeamId, Team], rules: RuleSet
) -> RuleImpact:
    """Classify pace, scoring, and fatigue; length and comeback stay "typical"."""
    minutes = rules.time.quarter_length * 4
    total_points = sum(state.score.values())
    # Field-goal attempts stand in for possessions.
    total_possessions = sum(t.stats.fg_attempts for t in teams.values())

    return RuleImpact(
        pace=classify_pace(total_possessions / minutes),
        scoring=classify_scoring(total_points / minutes),
        length="typical",
        fatigue=classify_fatigue(league_average_fatigue(teams)),
        comeback="typical",
    )


def generate_game_summary(
    state: GameState, teams: dict[TeamId, Team], rules: RuleSet
) -> GameSummary:
    """Build the summary from whatever is currently true of the game.

    Meaningful once the game is over; mid-game calls report partial numbers.
    """
    winner: TeamId | None = None
    if state.game_over and state.score_diff != 0:
        winner = "A" if state.score_diff > 0 else "B"

    return GameSummary(
        final_score={tid: state.score[tid] for tid in TEAM_IDS},
        stats={tid: TeamStatLine(**asdict(teams[tid].stats)) for tid in TEAM_IDS},
        shooting_percentages={tid: shooting_percentages(teams[tid].stats) for tid in TEAM_IDS},
        rule_impact=analyze_rule_impact(state, teams, rules),
        game_over=state.game_over,
        total_events=len(state.events),
        winner=winner,
    )
