from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.app.services.layer_refresh_service import LayerRefreshService
from src.domain.algorithms.countdown import Countdown
from src.domain.models import RefreshOutcome, RefreshStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RefreshScheduler:
    """Drives refresh cycles on a fixed period, plus a cosmetic countdown.

    `start()` triggers one cycle right away and then one every
    `interval_s`. At most one cycle runs at a time: a trigger that lands
    while a cycle is in flight is dropped. The countdown ticks every
    `tick_s` on its own task and is reset whenever a cycle completes.

    Must be started and stopped from inside a running event loop.
    """

    refresher: LayerRefreshService
    countdown: Countdown = field(default_factory=Countdown)
    interval_s: float = 15.0
    tick_s: float = 1.0

    last_outcome: RefreshOutcome | None = field(default=None, init=False)
    skipped_triggers: int = field(default=0, init=False)

    _cycle_task: asyncio.Task | None = field(default=None, init=False, repr=False)
    _timer_task: asyncio.Task | None = field(default=None, init=False, repr=False)
    _countdown_task: asyncio.Task | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    @property
    def in_flight(self) -> bool:
        return self._cycle_task is not None and not self._cycle_task.done()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("Refresh scheduler already started")

        logger.info(
            "Starting refresh scheduler (interval=%ss, countdown=%s)",
            self.interval_s,
            self.countdown.start,
        )
        self._timer_task = asyncio.create_task(self._run_timer(), name="refresh-timer")
        self.reset_countdown()
        self.trigger()

    def trigger(self) -> bool:
        """Start a cycle unless one is already running."""

        if self.in_flight:
            self.skipped_triggers += 1
            logger.info("Refresh still in flight; skipping this trigger")
            return False
        self._cycle_task = asyncio.create_task(self._run_cycle(), name="refresh-cycle")
        return True

    async def _run_cycle(self) -> RefreshOutcome:
        try:
            outcome = await self.refresher.refresh()
        except Exception as exc:
            logger.exception("Refresh cycle crashed")
            outcome = RefreshOutcome(
                status=RefreshStatus.FAILED,
                finished_at=datetime.now(timezone.utc),
                error=f"{type(exc).__name__}: {exc}",
            )

        self.last_outcome = outcome
        self.reset_countdown()
        return outcome

    async def wait_idle(self) -> RefreshOutcome | None:
        task = self._cycle_task
        if task is not None:
            await asyncio.shield(task)
        return self.last_outcome

    def reset_countdown(self) -> int:
        """Reset the countdown and restart its ticking from now."""

        value = self.countdown.reset()
        if self._countdown_task is not None:
            self._countdown_task.cancel()
            self._countdown_task = None
        if not self.running:
            return value
        self._countdown_task = asyncio.create_task(
            self._run_countdown(), name="refresh-countdown"
        )
        return value

    async def stop(self) -> None:
        tasks = [
            t
            for t in (self._timer_task, self._countdown_task, self._cycle_task)
            if t is not None and not t.done()
        ]
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._timer_task = None
        self._countdown_task = None
        self._cycle_task = None
        logger.info("Refresh scheduler stopped")

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self.interval_s)
            self.trigger()

    async def _run_countdown(self) -> None:
        while True:
            await asyncio.sleep(self.tick_s)
            self.countdown.tick()
