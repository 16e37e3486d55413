"""Tests for the post-game analyzer."""

import random

import pytest

from courtlab.core.analysis import (
    analyze_rule_impact,
    classify_fatigue,
    classify_pace,
    classify_scoring,
    generate_game_summary,
    league_average_fatigue,
    percentage,
    shooting_percentages,
)
from courtlab.core.roster import create_team
from courtlab.core.simulation import SimulationInstance
from courtlab.core.state import GameState, Team, TeamStats
from courtlab.models.rules import DEFAULT_RULESET, RuleSet, TeamRules, TimeRules


def _make_game(
    rules: RuleSet = DEFAULT_RULESET,
) -> tuple[GameState, dict[str, Team]]:
    rng = random.Random(0)
    teams = {tid: create_team(tid, f"Team {tid}", rules, rng) for tid in ("A", "B")}
    state = GameState(shot_clock=rules.time.shot_clock, possession="A")
    return state, teams


class TestPercentages:
    def test_zero_attempts_is_zero(self):
        assert percentage(0, 0) == 0.0
        assert percentage(3, 0) == 0.0

    def test_ratio(self):
        assert percentage(1, 4) == pytest.approx(0.25)
        assert percentage(4, 4) == pytest.approx(1.0)

    def test_clamped_to_unit_interval(self):
        assert percentage(5, 4) == 1.0
        assert percentage(-1, 4) == 0.0

    def test_from_team_stats(self):
        stats = TeamStats(
            fg_attempts=10, fg_made=5, three_attempts=4, three_made=1, ft_attempts=0
        )
        pct = shooting_percentages(stats)
        assert pct.fg == pytest.approx(0.5)
        assert pct.three == pytest.approx(0.25)
        assert pct.ft == 0.0


class TestClassification:
    def test_pace(self):
        assert classify_pace(3.0) == "faster"
        assert classify_pace(1.0) == "slower"
        assert classify_pace(2.0) == "typical"
        assert classify_pace(2.5) == "typical"
        assert classify_pace(1.8) == "typical"

    def test_scoring(self):
        assert classify_scoring(6.0) == "higher"
        assert classify_scoring(2.0) == "lower"
        assert classify_scoring(4.0) == "typical"
        assert classify_scoring(5.0) == "typical"

    def test_fatigue(self):
        assert classify_fatigue(80) == "higher"
        assert classify_fatigue(10) == "lower"
        assert classify_fatigue(55) == "typical"

    def test_rule_impact_uses_regulation_minutes(self):
        state, teams = _make_game()
        # 48 minutes: 300 points is 6.25/min, 150 attempts is ~3.1/min.
        state.score = {"A": 150, "B": 150}
        teams["A"].stats.fg_attempts = 75
        teams["B"].stats.fg_attempts = 75
        impact = analyze_rule_impact(state, teams, DEFAULT_RULESET)
        assert impact.scoring == "higher"
        assert impact.pace == "faster"
        assert impact.fatigue == "lower"

    def test_length_and_comeback_fixed(self):
        state, teams = _make_game()
        impact = analyze_rule_impact(state, teams, DEFAULT_RULESET)
        assert impact.length == "typical"
        assert impact.comeback == "typical"

    def test_league_average_weights_every_player(self):
        rules = RuleSet(team=TeamRules(players_per_team=4))
        state, teams = _make_game(rules)
        for p in teams["A"].players:
            p.fatigue = 80
        teams["B"].players[0].fatigue = 40
        assert teams["A"].average_fatigue == pytest.approx(80)
        assert teams["B"].average_fatigue == pytest.approx(10)
        assert league_average_fatigue(teams) == pytest.approx(45)

    def test_league_average_empty(self):
        assert league_average_fatigue({}) == 0.0

    def test_high_fatigue(self):
        state, teams = _make_game()
        for team in teams.values():
            for p in team.players:
                p.fatigue = 90
        assert analyze_rule_impact(state, teams, DEFAULT_RULESET).fatigue == "higher"


class TestSummary:
    def test_mid_game_summary_has_no_winner(self):
        state, teams = _make_game()
        state.score = {"A": 10, "B": 2}
        summary = generate_game_summary(state, teams, DEFAULT_RULESET)
        assert not summary.game_over
        assert summary.winner is None
        assert summary.final_score == {"A": 10, "B": 2}

    def test_winner_after_game_over(self):
        state, teams = _make_game()
        state.quarter = 5
        state.score = {"A": 90, "B": 97}
        summary = generate_game_summary(state, teams, DEFAULT_RULESET)
        assert summary.game_over
        assert summary.winner == "B"

    def test_score_diff_picks_winner(self):
        state, teams = _make_game()
        state.quarter = 5
        state.score = {"A": 101, "B": 99.5}
        assert state.score_diff == pytest.approx(1.5)
        assert generate_game_summary(state, teams, DEFAULT_RULESET).winner == "A"

    def test_tie_has_no_winner(self):
        state, teams = _make_game()
        state.quarter = 5
        state.score = {"A": 88, "B": 88}
        assert generate_game_summary(state, teams, DEFAULT_RULESET).winner is None

    def test_stats_snapshot(self):
        state, teams = _make_game()
        teams["A"].stats.steals = 4
        summary = generate_game_summary(state, teams, DEFAULT_RULESET)
        teams["A"].stats.steals = 9
        assert summary.stats["A"].steals == 4

    def test_full_game_summary(self):
        sim = SimulationInstance(rules=RuleSet(time=TimeRules(quarter_length=2)), seed=31)
        summary = sim.run_to_completion()
        assert summary.total_events == len(sim.events)
        for tid in ("A", "B"):
            pct = summary.shooting_percentages[tid]
            assert 0.0 <= pct.fg <= 1.0
            assert 0.0 <= pct.three <= 1.0
            assert summary.stats[tid].fg_made == sim.teams[tid].stats.fg_made
        data = summary.model_dump(mode="json")
        assert set(data["rule_impact"]) == {"pace", "scoring", "length", "fatigue", "comeback"}
