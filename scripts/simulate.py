"""Run a headless game and print the summary.

Usage:
    python scripts/simulate.py                      # NBA rules, random seed
    python scripts/simulate.py preset "FIBA Rules"  # Built-in preset
    python scripts/simulate.py file rules.yaml      # Rules from a YAML file
    python scripts/simulate.py presets              # List built-in presets

Set COURTLAB_SEED for a reproducible game and COURTLAB_FOUL_MODEL=standard
to enable fouls and free throws.
"""

from __future__ import annotations

import json
import logging
import sys

from courtlab.config import Settings
from courtlab.core.simulation import SimulationInstance
from courtlab.logging_setup import configure_logging
from courtlab.models.rules import PRESETS, ConfigurationError, RuleSet, get_preset, load_ruleset_yaml

logger = logging.getLogger("courtlab.scripts.simulate")


def _rules_from_args(args: list[str], settings: Settings) -> RuleSet:
    if not args:
        return settings.default_rules()
    command = args[0]
    if command == "preset" and len(args) > 1:
        return get_preset(args[1])
    if command == "file" and len(args) > 1:
        return load_ruleset_yaml(args[1])
    raise ConfigurationError(f"Unknown command: {' '.join(args)}")


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logging(settings.log_level)

    if argv and argv[0] == "presets":
        for name in PRESETS:
            print(name)
        return 0

    try:
        rules = _rules_from_args(argv, settings)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        print(__doc__, file=sys.stderr)
        return 2

    sim = SimulationInstance(
        rules=rules,
        seed=settings.seed,
        foul_model=settings.foul_model,
        fatigue_per_minute=settings.fatigue_per_minute,
    )
    logger.info("simulate seed=%s foul_model=%s", settings.seed, settings.foul_model)
    summary = sim.run_to_completion()
    print(json.dumps(summary.model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
