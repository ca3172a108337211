"""
Debris scanner: one pass over the world's vessels.

The pass is split in two halves. `scan` only reads the world and builds the
pending-deletion set; `run_cleanup_pass` then hands that set to the
DeletionExecutor once the iteration is over, so the vessel collection is never
mutated while it is being walked.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from debridement.engine.executor import DeletionExecutor
from debridement.engine.policy import CleanupPolicy, is_debris

logger = logging.getLogger(__name__)

LANDED = "landed"
DECAY = "decay"


@dataclass
class PassReport:
    candidates_landed: int = 0
    candidates_decay: int = 0
    queued_landed: int = 0
    queued_decay: int = 0
    deleted_landed: int = 0
    deleted_decay: int = 0
    queued_ids: List[object] = field(default_factory=list)

    @property
    def queued(self) -> int:
        return self.queued_landed + self.queued_decay

    @property
    def deleted(self) -> Tuple[int, int]:
        return self.deleted_landed, self.deleted_decay

    def as_dict(self) -> dict:
        return {
            "candidates_landed": self.candidates_landed,
            "candidates_decay": self.candidates_decay,
            "queued_landed": self.queued_landed,
            "queued_decay": self.queued_decay,
            "deleted_landed": self.deleted_landed,
            "deleted_decay": self.deleted_decay,
        }


def world_ready(world) -> bool:
    return bool(getattr(world, "ready", False)) and bool(getattr(world, "in_flight", False))


class DebrisScanner:

    def __init__(self, policy: Optional[CleanupPolicy] = None, executor: Optional[DeletionExecutor] = None):
        self.policy = policy or CleanupPolicy()
        self.executor = executor or DeletionExecutor()

    def scan(self, world) -> Tuple[Tuple[Tuple[object, str], ...], PassReport]:
        """
        Classify every vessel once. Returns the pending-deletion set (in
        encounter order) and a report with candidate/queued counts.
        """
        self.policy.resolve_reference(world)

        report = PassReport()
        pending = []
        seen = set()

        # snapshot: the live list is not touched until the scan is complete
        for vessel in list(world.vessels):
            if vessel.id in seen:
                continue
            seen.add(vessel.id)
            if not is_debris(vessel):
                continue

            if self.policy.is_landed_candidate(vessel):
                report.candidates_landed += 1
                if self.policy.is_landed_eligible(vessel):
                    pending.append((vessel, LANDED))
                    report.queued_landed += 1
                    report.queued_ids.append(vessel.id)

            elif self.policy.is_decay_candidate(vessel):
                report.candidates_decay += 1
                if self.policy.is_decay_eligible(vessel):
                    pending.append((vessel, DECAY))
                    report.queued_decay += 1
                    report.queued_ids.append(vessel.id)

        return tuple(pending), report

    def run_cleanup_pass(self, world) -> Optional[PassReport]:
        """
        Scan then delete. Returns None without touching anything when the
        world is not ready or not in flight.
        """
        if not world_ready(world):
            logger.debug("World not ready; cleanup pass skipped")
            return None

        pending, report = self.scan(world)

        if report.candidates_decay > 0:
            logger.debug("Found %d debris orbiting in-atmosphere", report.candidates_decay)
        if report.candidates_landed > 0:
            logger.debug("Found %d debris landed at %s", report.candidates_landed, self.policy.config.home_body)

        removed = self.executor.drain(pending)
        report.deleted_landed = removed.get(LANDED, 0)
        report.deleted_decay = removed.get(DECAY, 0)

        if report.deleted_decay > 0:
            logger.info("Removed %d debris orbiting in-atmosphere", report.deleted_decay)
        if report.deleted_landed > 0:
            logger.info("Removed %d debris landed at %s", report.deleted_landed, self.policy.config.home_body)

        return report
