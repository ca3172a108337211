# debridement/engine/executor.py
import logging
from typing import Dict, Sequence, Tuple

from debridement.errors import VesselGone

logger = logging.getLogger(__name__)


class DeletionExecutor:
    """
    Drains a pending-deletion set produced by a finished scan.

    Entries are (vessel, category) pairs removed one at a time in order.
    A vessel that is already gone counts as removed; a failure on one vessel
    never aborts the rest of the queue.
    """

    def __init__(self):
        self._draining = False

    @property
    def draining(self) -> bool:
        return self._draining

    def drain(self, pending: Sequence[Tuple[object, str]]) -> Dict[str, int]:
        if self._draining:
            raise RuntimeError("DeletionExecutor.drain() is not re-entrant")

        # freeze the queue so deletions cannot grow or shrink it
        queue = tuple(pending)
        removed: Dict[str, int] = {}

        self._draining = True
        try:
            for vessel, category in queue:
                try:
                    vessel.die()
                except VesselGone:
                    logger.debug("%s already removed", getattr(vessel, "name", vessel))
                except Exception as e:
                    logger.exception("Could not remove %s: %s", getattr(vessel, "name", vessel), e)
                    continue
                removed[category] = removed.get(category, 0) + 1
        finally:
            self._draining = False

        return removed
