"""
Cleanup policy: decides whether a single vessel may be removed.

Two heuristics:
- landed/splashed debris on the home body times out after a delay that grows
  with its great-circle distance from the reference point (launch site);
- orbiting debris is removed once its estimated atmosphere exposure exceeds a
  threshold.

Distances are taken against one reference direction on the home body.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from debridement.config import settings
from debridement.errors import ReferenceUnavailable
from debridement.models.vessel import Situation
from debridement.physics.atmosphere import total_atmosphere_seconds
from debridement.physics import geometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupConfig:
    cleanup_interval: float = settings.CLEANUP_INTERVAL
    landed_min_delay: float = settings.LANDED_CLEANUP_MIN_DELAY
    landed_distance_delay: float = settings.LANDED_CLEANUP_DISTANCE_DELAY
    splash_factor: float = settings.LANDED_CLEANUP_SPLASH_FACTOR
    orbit_min_delay: float = settings.ORBIT_CLEANUP_MIN_DELAY
    atmosphere_threshold: float = settings.ORBIT_CLEANUP_ATMOS_SECS
    home_body: str = settings.HOME_BODY_NAME
    reference_latitude: float = settings.REFERENCE_LATITUDE
    reference_longitude: float = settings.REFERENCE_LONGITUDE

    @classmethod
    def from_settings(cls) -> "CleanupConfig":
        """Snapshot the settings module as it is now (picks up runtime overrides)."""
        return cls(
            cleanup_interval=float(getattr(settings, "CLEANUP_INTERVAL", 5.0)),
            landed_min_delay=float(getattr(settings, "LANDED_CLEANUP_MIN_DELAY", 900.0)),
            landed_distance_delay=float(getattr(settings, "LANDED_CLEANUP_DISTANCE_DELAY", 86400.0)),
            splash_factor=float(getattr(settings, "LANDED_CLEANUP_SPLASH_FACTOR", 2.0)),
            orbit_min_delay=float(getattr(settings, "ORBIT_CLEANUP_MIN_DELAY", 3600.0)),
            atmosphere_threshold=float(getattr(settings, "ORBIT_CLEANUP_ATMOS_SECS", 4.0)),
            home_body=str(getattr(settings, "HOME_BODY_NAME", "Kerbin")),
            reference_latitude=float(getattr(settings, "REFERENCE_LATITUDE", -0.102668048653556)),
            reference_longitude=float(getattr(settings, "REFERENCE_LONGITUDE", -74.5753856554463)),
        )

    def validate(self) -> None:
        if self.cleanup_interval <= 0:
            raise ValueError("cleanup_interval must be > 0")
        if self.landed_min_delay <= 0:
            raise ValueError("landed_min_delay must be > 0")
        if self.landed_distance_delay < 0:
            raise ValueError("landed_distance_delay must be >= 0")
        if self.splash_factor <= 0:
            raise ValueError("splash_factor must be > 0")
        if self.orbit_min_delay < 0:
            raise ValueError("orbit_min_delay must be >= 0")
        if self.atmosphere_threshold <= 0:
            raise ValueError("atmosphere_threshold must be > 0")


def is_debris(vessel) -> bool:
    """Unloaded, uncommandable: the only vessels automatic cleanup may touch."""
    return not vessel.is_commandable and not vessel.loaded


class CleanupPolicy:
    """
    Eligibility predicates plus the lazily resolved reference direction.

    The reference vector is computed once, the first time the home body is
    found in a world, and kept until `reset()` is called for a new session.
    """

    def __init__(self, config: Optional[CleanupConfig] = None):
        self.config = config or CleanupConfig.from_settings()
        self.config.validate()
        self._reference: Optional[np.ndarray] = None
        self._reference_resolved = False

    # -------------------------
    # Reference geometry
    # -------------------------
    @property
    def reference_resolved(self) -> bool:
        return self._reference_resolved

    @property
    def reference(self) -> np.ndarray:
        if not self._reference_resolved:
            raise ReferenceUnavailable(f"{self.config.home_body} reference point not resolved")
        return self._reference

    def resolve_reference(self, world) -> bool:
        if self._reference_resolved:
            return True
        if not getattr(world, "ready", False):
            return False

        body = world.body_by_name(self.config.home_body)
        if body is None:
            logger.debug("Home body %s not in registry yet", self.config.home_body)
            return False

        self._reference = geometry.reference_vector(
            body, self.config.reference_latitude, self.config.reference_longitude
        )
        self._reference_resolved = True
        logger.info("Reference point resolved on %s: %s", body.name, np.round(self._reference, 6))
        return True

    def reset(self) -> None:
        self._reference = None
        self._reference_resolved = False

    def distance_factor(self, vessel) -> float:
        return geometry.distance_factor(vessel, self.reference)

    def distance(self, vessel) -> float:
        return geometry.distance(vessel, self.reference)

    # -------------------------
    # Candidates
    # -------------------------
    def is_landed_candidate(self, vessel) -> bool:
        return (
            not vessel.is_commandable
            and vessel.situation in (Situation.LANDED, Situation.SPLASHED)
            and vessel.main_body.name == self.config.home_body
        )

    def is_decay_candidate(self, vessel) -> bool:
        body = vessel.main_body
        return (
            not vessel.is_commandable
            and vessel.situation == Situation.ORBITING
            and body.atmosphere
            and vessel.orbit is not None
            and vessel.orbit.periapsis_altitude < body.max_atmosphere_altitude
        )

    # -------------------------
    # Deadlines / eligibility
    # -------------------------
    def landed_cleanup_deadline(self, vessel) -> float:
        """Mission time (s) after which landed debris is removed."""
        splash = self.config.splash_factor if vessel.situation == Situation.SPLASHED else 1.0
        delay = max(
            self.config.landed_min_delay,
            self.config.landed_distance_delay * self.distance_factor(vessel),
        )
        return delay * splash

    def is_landed_eligible(self, vessel) -> bool:
        if not is_debris(vessel) or not self.is_landed_candidate(vessel):
            return False
        if not self._reference_resolved:
            return False
        return vessel.mission_time > self.landed_cleanup_deadline(vessel)

    def is_decay_eligible(self, vessel) -> bool:
        if not is_debris(vessel) or not self.is_decay_candidate(vessel):
            return False
        if vessel.mission_time <= self.config.orbit_min_delay:
            return False
        if vessel.orbit.altitude >= vessel.main_body.max_atmosphere_altitude:
            return False
        return total_atmosphere_seconds(vessel) > self.config.atmosphere_threshold
