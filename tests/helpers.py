import math

from debridement.models.orbit import Orbit
from debridement.models.vessel import Situation, Vessel


def landed(body, distance_factor, mission_time, situation=Situation.LANDED, **kw):
    """Vessel on the equator, `distance_factor` half-turns east of lon 0."""
    return Vessel(
        name=kw.pop("name", "landed"),
        main_body=body,
        situation=situation,
        latitude=0.0,
        longitude=180.0 * distance_factor,
        mission_time=mission_time,
        **kw,
    )


def decaying(body, exposure_at_5000s, mission_time=5000.0, **kw):
    """
    Circular orbit at 30 km with a 2000 s period, multiplier tuned so that
    total exposure after 5000 s equals `exposure_at_5000s`.
    """
    body.atmosphere_multiplier = exposure_at_5000s * math.exp(30_000.0 / 5000.0) / 5000.0
    orbit = Orbit(body, 30_000.0, 30_000.0, eccentricity=0.0, period=2000.0, altitude=30_000.0)
    return Vessel(
        name=kw.pop("name", "decaying"),
        main_body=body,
        situation=Situation.ORBITING,
        orbit=orbit,
        position=body.position + [body.radius + 30_000.0, 0.0, 0.0],
        mission_time=mission_time,
        **kw,
    )
