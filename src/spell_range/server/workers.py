"""Background worker driving the periodic tick."""

from __future__ import annotations

import asyncio
import logging

from spell_range.library import SpellRange

logger = logging.getLogger(__name__)


class TickWorker:
    """Calls SpellRange.tick() at the configured tick interval.

    Stands in for the host's per-frame callback when the library runs
    behind the REST server.
    """

    def __init__(self, spell_range: SpellRange, interval: float) -> None:
        self._spell_range = spell_range
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._running = False
        self._tick_count = 0
        self._error_count = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def error_count(self) -> int:
        return self._error_count

    async def start(self) -> None:
        """Start the background tick loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop(), name="spell-range-tick")

    async def stop(self) -> None:
        """Stop the background tick loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _loop(self) -> None:
        logger.info("Tick worker started (interval=%.2fs)", self._interval)
        while self._running:
            try:
                await asyncio.sleep(self._interval)
                if not self._running:
                    break
                self.run_once()
            except asyncio.CancelledError:
                break
            except Exception:
                self._error_count += 1
                logger.exception("Error in tick")

    def run_once(self) -> None:
        report = self._spell_range.tick()
        if report is not None:
            self._tick_count += 1
            if report.did_work:
                logger.debug(
                    "Tick rebuilt %s, swept %d results",
                    report.rebuilt,
                    report.swept,
                )
