# debridement/models/vessel.py
import uuid
from enum import Enum

import numpy as np

from debridement.errors import VesselGone


class Situation(Enum):
    LANDED = "landed"
    SPLASHED = "splashed"
    PRELAUNCH = "prelaunch"
    FLYING = "flying"
    SUB_ORBITAL = "sub_orbital"
    ORBITING = "orbiting"
    ESCAPING = "escaping"
    DOCKED = "docked"


class Resource:
    def __init__(self, name, amount, max_amount=None):
        self.name = name
        self.amount = float(amount)
        self.max_amount = float(amount if max_amount is None else max_amount)

    @property
    def free(self):
        return max(0.0, self.max_amount - self.amount)


class Part:
    """
    Vessel part holding named resources. Only salvage looks at parts.
    """
    def __init__(self, name="part", resources=None):
        self.name = name
        self.resources = {r.name: r for r in (resources or [])}


class Vessel:
    """
    Simulated object known to the world (craft or debris).

    `position` is the world-space position (m). Landed vessels also carry the
    surface coordinate they rest at, which only diagnostics report.
    """
    def __init__(self, name, main_body, situation, orbit=None, position=None,
                 mission_time=0.0, is_commandable=False, loaded=False,
                 latitude=None, longitude=None, parts=None, vessel_id=None):
        self.id = vessel_id or uuid.uuid4()
        self.name = name
        self.main_body = main_body
        self.situation = situation
        self.orbit = orbit
        self.mission_time = float(mission_time)
        self.is_commandable = bool(is_commandable)
        self.loaded = bool(loaded)
        self.latitude = latitude
        self.longitude = longitude
        self.parts = list(parts or [])
        self.world = None

        if position is None:
            if latitude is not None and longitude is not None:
                position = main_body.surface_position(latitude, longitude)
            else:
                position = main_body.position
        self.position = np.array(position, dtype=float)

    @property
    def landed_or_splashed(self):
        return self.situation in (Situation.LANDED, Situation.SPLASHED)

    @property
    def alive(self):
        return self.world is not None

    def store_resource(self, name, amount):
        """Put up to `amount` of a resource into this vessel's parts; returns the amount stored."""
        stored = 0.0
        for part in self.parts:
            res = part.resources.get(name)
            if res is None or res.free <= 0.0:
                continue
            take = min(res.free, amount - stored)
            res.amount += take
            stored += take
            if stored >= amount:
                break
        return stored

    def die(self):
        """Remove this vessel from its world permanently."""
        if self.world is None:
            raise VesselGone(f"{self.name} ({self.id}) is no longer in the world")
        self.world.remove(self)

    def __repr__(self):
        return f"Vessel({self.name!r}, {self.situation.value}, body={self.main_body.name})"
