"""Background worker for periodic tier refresh, pruning and prediction refresh."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from temporal_context.config import MaintenanceConfig
from temporal_context.core.utils import utc_now
from temporal_context.orchestration.orchestrator import TemporalOrchestrator
from temporal_context.orchestration.types import MaintenanceReport

logger = logging.getLogger(__name__)


class MaintenanceWorker:
    """Runs maintenance passes at a fixed interval.

    Wiring code starts this next to the orchestrator; the engines
    themselves hold no timers. Stopping mid-pass signals cooperative
    cancellation so the pass returns what it finished.
    """

    def __init__(
        self,
        orchestrator: TemporalOrchestrator,
        config: MaintenanceConfig | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._config = config or MaintenanceConfig()
        self._task: asyncio.Task | None = None
        self._running = False
        self._cancel = asyncio.Event()
        self._cycle_count = 0
        self._last_run: datetime | None = None
        self._last_report: MaintenanceReport | None = None

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def last_run(self) -> datetime | None:
        return self._last_run

    @property
    def last_report(self) -> MaintenanceReport | None:
        return self._last_report

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the background maintenance loop."""
        if self._running:
            return
        self._running = True
        self._cancel.clear()
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Stop the background maintenance loop."""
        self._running = False
        self._cancel.set()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _loop(self) -> None:
        logger.info(
            "Maintenance worker started (interval=%ds, prune_limit=%s)",
            self._config.interval_seconds,
            self._config.prune_limit,
        )
        while self._running:
            try:
                await asyncio.sleep(self._config.interval_seconds)
                if not self._running:
                    break
                await self.run_cycle()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("Error in maintenance cycle")
                await asyncio.sleep(self._config.error_backoff_seconds)

    async def run_cycle(self) -> MaintenanceReport:
        """Run one maintenance pass across every project.

        A pass started after stop() runs to completion; only a stop that
        lands during the pass cancels it.
        """
        self._cancel.clear()
        report = await self._orchestrator.run_maintenance(
            cancel=self._cancel,
            prune_limit=self._config.prune_limit,
            stale_threshold_hours=self._config.stale_threshold_hours,
        )
        self._cycle_count += 1
        self._last_run = utc_now()
        self._last_report = report

        logger.info(
            "Maintenance cycle #%d complete: %d tier(s), %d pruned, %d prediction(s)",
            self._cycle_count,
            report.tiers_updated,
            report.pruned,
            report.predictions_updated,
        )
        return report
