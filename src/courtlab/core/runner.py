"""Real-time playback — drives a SimulationInstance over wall-clock time.

The engine itself is synchronous and instant; the runner spaces ticks out
so a visualizer can animate them. Speed only changes the spacing, never
the outcome. Pausing stops issuing ticks; resuming carries on from the
exact same state. A tick always completes before pause, cancel, or reset
take effect.

Usage:
    runner = GameRunner(sim, tick_interval_seconds=0.05, bus=bus)
    summary = await runner.run()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from courtlab.config import Settings
from courtlab.core.event_bus import EventBus
from courtlab.core.simulation import SimulationInstance
from courtlab.models.game import GameSummary
from courtlab.models.rules import ConfigurationError, RuleSet

logger = logging.getLogger(__name__)


class GameRunner:
    """Async tick driver with pause, resume, speed, cancel, and reset."""

    def __init__(
        self,
        sim: SimulationInstance,
        tick_interval_seconds: float = 0.05,
        speed: float = 1.0,
        bus: EventBus | None = None,
    ) -> None:
        if tick_interval_seconds < 0:
            msg = f"tick_interval_seconds must be >= 0, got {tick_interval_seconds}"
            raise ConfigurationError(msg)
        self.sim = sim
        self.tick_interval_seconds = tick_interval_seconds
        self.speed = 1.0
        self.set_speed(speed)
        self.bus = bus
        self.is_running = False
        self._resume = asyncio.Event()
        self._resume.set()
        self._stop_requested = False

    @classmethod
    def from_settings(
        cls,
        sim: SimulationInstance,
        settings: Settings,
        bus: EventBus | None = None,
    ) -> GameRunner:
        return cls(
            sim,
            tick_interval_seconds=settings.tick_interval_seconds,
            speed=settings.speed,
            bus=bus,
        )

    @property
    def is_paused(self) -> bool:
        return not self._resume.is_set()

    @property
    def delay(self) -> float:
        """Wall-clock seconds between ticks at the current speed."""
        return self.tick_interval_seconds / self.speed

    def set_speed(self, speed: float) -> None:
        if speed <= 0:
            raise ConfigurationError(f"Playback speed must be positive, got {speed}")
        self.speed = speed

    def pause(self) -> None:
        self._resume.clear()
        logger.info("runner_paused quarter=%d time=%d", self.sim.state.quarter, self.sim.state.time)

    def resume(self) -> None:
        self._resume.set()
        logger.info("runner_resumed quarter=%d time=%d", self.sim.state.quarter, self.sim.state.time)

    def cancel(self) -> None:
        """Stop after the current tick. The game state is kept as-is."""
        self._stop_requested = True
        self._resume.set()

    def reset(self, rules: RuleSet | Mapping[str, Any] | None = None) -> None:
        """Stop playback and start a fresh game on the same instance."""
        self.cancel()
        self.sim.reset(rules)

    async def run(self) -> GameSummary | None:
        """Tick until game over. Returns None if cancelled or reset first."""
        if self.is_running:
            logger.warning("run() called while runner already active")
            return None
        self.is_running = True
        self._stop_requested = False
        try:
            while not self.sim.is_game_over():
                await self._resume.wait()
                if self._stop_requested:
                    return None
                self.sim.step()
                await asyncio.sleep(self.delay)
                if self._stop_requested:
                    return None
        finally:
            self.is_running = False

        summary = self.sim.generate_game_summary()
        if self.bus is not None:
            self.bus.publish("game.finished", summary.model_dump())
        return summary
