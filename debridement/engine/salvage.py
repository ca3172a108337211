# debridement/engine/salvage.py
"""
Manual salvage: a landed crew harvests resources from nearby loaded debris and
then removes it. Independent of the automatic cleanup passes, which never
touch loaded vessels.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from debridement.config import settings
from debridement.engine.executor import DeletionExecutor

logger = logging.getLogger(__name__)


@dataclass
class SalvageResult:
    salvaged: List[str] = field(default_factory=list)
    resources: Dict[str, float] = field(default_factory=dict)


def salvage_available(salvager) -> bool:
    return bool(salvager.landed_or_splashed)


def nearby_debris(salvager, world, max_distance=None):
    max_distance = float(settings.MAX_SALVAGE_DIST if max_distance is None else max_distance)
    found = []
    for debris in list(world.vessels):
        if (
            debris is not salvager
            and debris.loaded
            and not debris.is_commandable
            and debris.main_body is salvager.main_body
            and np.linalg.norm(debris.position - salvager.position) <= max_distance
        ):
            found.append(debris)
    return found


def salvage_debris(salvager, world, max_distance=None, executor=None) -> SalvageResult:
    """
    Transfer resources from debris within `max_distance` meters into the
    salvager's parts (up to their free capacity), then delete the debris.
    Resources that do not fit stay in the debris and are lost with it.
    """
    result = SalvageResult()
    if not salvage_available(salvager):
        return result

    queue = nearby_debris(salvager, world, max_distance)

    for debris in queue:
        for part in debris.parts:
            for res in part.resources.values():
                if res.amount <= 0.0:
                    continue
                received = salvager.store_resource(res.name, res.amount)
                res.amount -= received
                if received > 0.0:
                    logger.info("Salvaged resource: %s amount: %.3f", res.name, received)
                    result.resources[res.name] = result.resources.get(res.name, 0.0) + received

    executor = executor or DeletionExecutor()
    executor.drain([(d, "salvage") for d in queue])
    result.salvaged = [d.name for d in queue if not d.alive]
    return result
