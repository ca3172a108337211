# debridement/simulation/world.py
from typing import Dict, Iterable, List, Optional

from debridement.errors import VesselGone
from debridement.models.body import CelestialBody
from debridement.models.vessel import Vessel


class World:
    """
    In-memory host world: body registry, live vessel collection and the
    readiness flags that gate a cleanup pass.
    """
    def __init__(self, bodies: Iterable[CelestialBody] = (), ready: bool = True, in_flight: bool = True):
        self.bodies: List[CelestialBody] = list(bodies)
        self.vessels: List[Vessel] = []
        self.ready = bool(ready)
        self.in_flight = bool(in_flight)
        self.removed = 0

    def body_by_name(self, name: str) -> Optional[CelestialBody]:
        for body in self.bodies:
            if body.name == name:
                return body
        return None

    def add(self, vessel: Vessel) -> Vessel:
        if any(v is vessel or v.id == vessel.id for v in self.vessels):
            return vessel
        vessel.world = self
        self.vessels.append(vessel)
        return vessel

    def remove(self, vessel: Vessel) -> None:
        try:
            self.vessels.remove(vessel)
        except ValueError:
            raise VesselGone(f"{vessel.name} ({vessel.id}) is not in this world") from None
        vessel.world = None
        self.removed += 1

    def find(self, vessel_id) -> Optional[Vessel]:
        for v in self.vessels:
            if v.id == vessel_id:
                return v
        return None

    def advance(self, dt: float) -> None:
        """Advance mission time of every vessel by dt seconds."""
        for v in self.vessels:
            v.mission_time += float(dt)

    def counts(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for v in self.vessels:
            out[v.situation.value] = out.get(v.situation.value, 0) + 1
        return out

    def __len__(self):
        return len(self.vessels)
