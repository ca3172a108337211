# debridement/engine/diagnostics.py
import logging
from typing import Any, Dict, List

from debridement.engine.policy import CleanupPolicy
from debridement.physics.atmosphere import (
    atmosphere_seconds_per_orbit,
    atmosphere_seconds_rate,
    total_atmosphere_seconds,
)

logger = logging.getLogger(__name__)


def project_cleanup(policy: CleanupPolicy, world) -> List[Dict[str, Any]]:
    """
    Time-remaining projection for every cleanup candidate in `world`.
    Landed candidates are left out while the reference point is unresolved.
    Loaded vessels are reported too; they are simply not removed while loaded.
    """
    policy.resolve_reference(world)
    out: List[Dict[str, Any]] = []

    for vessel in list(world.vessels):
        if policy.is_landed_candidate(vessel):
            if not policy.reference_resolved:
                continue
            time_left = policy.landed_cleanup_deadline(vessel) - vessel.mission_time
            out.append({
                "name": vessel.name,
                "kind": "landed",
                "situation": vessel.situation.value,
                "distance_factor": policy.distance_factor(vessel),
                "distance": policy.distance(vessel),
                "latitude": vessel.latitude,
                "longitude": vessel.longitude,
                "hours_left": time_left / 3600.0,
            })

        elif policy.is_decay_candidate(vessel):
            total = total_atmosphere_seconds(vessel)
            rate = atmosphere_seconds_rate(vessel.orbit)
            remaining = policy.config.atmosphere_threshold - total
            time_left = remaining / rate if rate > 0.0 else float("inf")
            out.append({
                "name": vessel.name,
                "kind": "decay",
                "situation": vessel.situation.value,
                "total_atmosphere_seconds": total,
                "atmosphere_seconds_per_orbit": atmosphere_seconds_per_orbit(vessel.orbit),
                "hours_left": time_left / 3600.0,
            })

    return out


def log_projections(projections: List[Dict[str, Any]]) -> None:
    if not projections:
        logger.info("No cleanup candidates")
        return
    for p in projections:
        if p["kind"] == "landed":
            logger.info(
                "%s Dist Factor: %.2f Dist: %.2f Time left: %.2f h (Lat: %s Lon: %s)",
                p["name"], p["distance_factor"], p["distance"], p["hours_left"],
                p["latitude"], p["longitude"],
            )
        else:
            logger.info(
                "%s Total ATs: %.4f ATs per orbit: %.4f Time left: %.2f h",
                p["name"], p["total_atmosphere_seconds"], p["atmosphere_seconds_per_orbit"], p["hours_left"],
            )
