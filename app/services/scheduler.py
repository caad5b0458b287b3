"""
Sweep scheduler.

Single coordinator for everything time-driven in the core:
- periodic sweeps (payment expiry, confirmation expiry), run in registration
  order once per interval
- deferred one-shot actions (verification settle, failed-payment reset), run
  in due-time order

Time comes from the injected clock, so a test can advance a ManualClock and
call tick() without waiting. The runtime calls tick() from APScheduler.
"""

import asyncio
import heapq
import itertools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from loguru import logger

from app.utils.clock import Clock


Action = Callable[[], Awaitable[Any]]


@dataclass(order=True)
class _DeferredAction:
    due: datetime
    seq: int
    name: str = field(compare=False)
    action: Action = field(compare=False, repr=False)


@dataclass
class TickReport:
    """What a tick ran, in execution order."""

    actions: list[str] = field(default_factory=list)
    sweeps: list[str] = field(default_factory=list)


class SweepScheduler:
    """
    Deterministic tick-driven scheduler.

    Args:
        clock: Time source
        interval: Minimum time between two sweep rounds
    """

    def __init__(self, clock: Clock, interval: timedelta = timedelta(seconds=1)) -> None:
        self.clock = clock
        self.interval = interval
        self._sweeps: list[tuple[str, Action]] = []
        self._deferred: list[_DeferredAction] = []
        self._seq = itertools.count()
        self._next_sweep_at: datetime | None = None
        self._tick_lock = asyncio.Lock()

    def add_sweep(self, name: str, sweep: Action) -> None:
        """Register periodic sweep; sweeps run in registration order."""
        self._sweeps.append((name, sweep))
        logger.debug(f"Sweep registered: {name}")

    @property
    def sweep_names(self) -> list[str]:
        return [name for name, _ in self._sweeps]

    @property
    def pending_actions(self) -> int:
        return len(self._deferred)

    def schedule_at(self, due: datetime, name: str, action: Action) -> datetime:
        heapq.heappush(
            self._deferred,
            _DeferredAction(due=due, seq=next(self._seq), name=name, action=action),
        )
        return due

    def schedule_in(self, delay: timedelta, name: str, action: Action) -> datetime:
        """Schedule one-shot action delay from now."""
        return self.schedule_at(self.clock.now() + delay, name, action)

    async def tick(self) -> TickReport:
        """
        Run everything that is due.

        Failures of a single action or sweep are logged and do not stop the
        rest of the tick.

        Returns:
            TickReport with names of what ran
        """
        report = TickReport()
        async with self._tick_lock:
            now = self.clock.now()

            while self._deferred and self._deferred[0].due <= now:
                deferred = heapq.heappop(self._deferred)
                try:
                    await deferred.action()
                except Exception as e:
                    logger.exception(f"Deferred action {deferred.name} failed: {e}")
                report.actions.append(deferred.name)

            if self._next_sweep_at is None or now >= self._next_sweep_at:
                for name, sweep in self._sweeps:
                    try:
                        await sweep()
                    except Exception as e:
                        logger.exception(f"Sweep {name} failed: {e}")
                    report.sweeps.append(name)
                self._next_sweep_at = now + self.interval

        return report
