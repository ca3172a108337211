"""
Cleanup scheduler: drives the debris scanner on a fixed interval.

Single threaded and cooperative: the host loop calls `update()` every frame
and at most one pass is ever in progress. Manual triggers arriving while a
pass runs (e.g. from a deletion callback) are ignored.
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from debridement.engine.diagnostics import log_projections, project_cleanup
from debridement.engine.policy import CleanupConfig, CleanupPolicy
from debridement.engine.scanner import DebrisScanner, PassReport

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    STOPPED = "stopped"
    IDLE = "idle"
    SCANNING = "scanning"


class CleanupScheduler:

    def __init__(
        self,
        world,
        config: Optional[CleanupConfig] = None,
        scanner: Optional[DebrisScanner] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.world = world
        self.config = config or CleanupConfig.from_settings()
        self.config.validate()
        self.scanner = scanner or DebrisScanner(CleanupPolicy(self.config))
        self.clock = clock

        self.state = SchedulerState.STOPPED
        self.next_tick: Optional[float] = None
        self.history: List[Dict[str, Any]] = []

    @property
    def policy(self) -> CleanupPolicy:
        return self.scanner.policy

    def _now(self, now):
        return float(self.clock() if now is None else now)

    # -------------------------
    # Lifecycle
    # -------------------------
    def start(self, now: Optional[float] = None) -> None:
        if self.state != SchedulerState.STOPPED:
            return
        self.state = SchedulerState.IDLE
        self.next_tick = self._now(now)
        logger.info("Debris cleanup started (interval %.1f s)", self.config.cleanup_interval)

    def stop(self) -> None:
        self.state = SchedulerState.STOPPED
        self.next_tick = None

    def new_session(self, world, now: Optional[float] = None) -> None:
        """Switch to a new world; the cached reference point is resolved again."""
        self.stop()
        self.world = world
        self.policy.reset()
        self.history.clear()
        self.start(now)

    # -------------------------
    # Ticks
    # -------------------------
    def update(self, now: Optional[float] = None) -> Optional[PassReport]:
        if self.state != SchedulerState.IDLE:
            return None
        t = self._now(now)
        if t < self.next_tick:
            return None

        self.next_tick += self.config.cleanup_interval
        if self.next_tick <= t:
            # fell behind (long frame / time warp): one pass, then realign
            self.next_tick = t + self.config.cleanup_interval
        return self._run_pass(t)

    def trigger_cleanup(self) -> Optional[PassReport]:
        if self.state != SchedulerState.IDLE:
            logger.debug("Manual cleanup ignored while %s", self.state.value)
            return None
        return self._run_pass(self._now(None))

    def trigger_dump(self) -> Optional[List[Dict[str, Any]]]:
        if self.state != SchedulerState.IDLE:
            logger.debug("Diagnostic dump ignored while %s", self.state.value)
            return None
        projections = project_cleanup(self.policy, self.world)
        log_projections(projections)
        return projections

    def _run_pass(self, t: float) -> Optional[PassReport]:
        self.state = SchedulerState.SCANNING
        try:
            report = self.scanner.run_cleanup_pass(self.world)
        finally:
            if self.state == SchedulerState.SCANNING:
                self.state = SchedulerState.IDLE

        if report is not None:
            rec = report.as_dict()
            rec["time"] = t
            self.history.append(rec)
        return report
