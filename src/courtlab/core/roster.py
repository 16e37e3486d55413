"""Roster generation — builds the two teams for a game."""

from __future__ import annotations

import random

from courtlab.core.state import Player, Team
from courtlab.models.rules import RuleSet
from courtlab.models.team import POSITIONS, SKILL_LEVELS, PlayerSkills, Position, SkillLevel, TeamId


def position_for_index(index: int) -> Position:
    """Positions cycle PG, SG, SF, PF, C through the roster."""
    return POSITIONS[index % len(POSITIONS)]


def random_skill(rng: random.Random) -> SkillLevel:
    return rng.choice(SKILL_LEVELS)


def random_skills(rng: random.Random) -> PlayerSkills:
    """Sample each skill independently and uniformly over low/medium/high."""
    return PlayerSkills(
        shooting=random_skill(rng),
        defense=random_skill(rng),
        ball_handling=random_skill(rng),
        rebounding=random_skill(rng),
        speed=random_skill(rng),
    )


def create_team(team_id: TeamId, name: str, rules: RuleSet, rng: random.Random) -> Team:
    """Build a team of ``rules.team.players_per_team`` players with zeroed stats."""
    players = [
        Player(id=i, position=position_for_index(i), skills=random_skills(rng))
        for i in range(rules.team.players_per_team)
    ]
    return Team(id=team_id, name=name, players=players)
