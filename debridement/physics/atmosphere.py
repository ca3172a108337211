# debridement/physics/atmosphere.py
"""
Coarse exponential atmosphere and atmosphere-exposure estimates.

Exposure is measured in atmosphere-seconds (density integrated over time).
The per-orbit figure is a two-point blend of periapsis and apoapsis density,
not an integral over true anomaly. It only has to rank decaying debris.
"""
import math

import numpy as np


def atmospheric_density(body, altitude: float) -> float:
    """
    Local density at `altitude` (m) above `body`.
    0.0 without an atmosphere or at/above the top of the atmosphere.
    Negative altitudes are accepted.
    """
    if not body.atmosphere or altitude >= body.max_atmosphere_altitude:
        return 0.0
    scale_height = body.atmosphere_scale_height * 1000.0
    return float(body.atmosphere_multiplier * np.exp(-altitude / scale_height))


def _valid_period(period) -> bool:
    return period is not None and math.isfinite(period) and period > 0.0


def atmosphere_seconds_per_orbit(orbit) -> float:
    pe_density = atmospheric_density(orbit.reference_body, orbit.periapsis_altitude)
    ap_density = atmospheric_density(orbit.reference_body, orbit.apoapsis_altitude)

    # periapsis dominates for circular orbits, apoapsis as e -> 1
    pe_weight = 1.0 - math.sqrt(max(0.0, orbit.eccentricity))
    average_density = pe_density * pe_weight + ap_density * (1.0 - pe_weight)

    return float(average_density * orbit.period)


def atmosphere_seconds_rate(orbit) -> float:
    """Average exposure per second of flight; 0.0 for a degenerate period."""
    if not _valid_period(orbit.period):
        return 0.0
    return atmosphere_seconds_per_orbit(orbit) / orbit.period


def total_atmosphere_seconds(vessel) -> float:
    """
    Exposure accumulated since launch, extrapolated from the current orbit by
    the number of orbits flown. 0.0 when the period is zero or undefined.
    """
    orbit = vessel.orbit
    if orbit is None or not _valid_period(orbit.period):
        return 0.0
    num_orbits = vessel.mission_time / orbit.period
    return atmosphere_seconds_per_orbit(orbit) * num_orbits
