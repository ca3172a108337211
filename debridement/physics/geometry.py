# debridement/physics/geometry.py
import numpy as np


def reference_vector(body, latitude, longitude):
    """
    Unit vector from `body`'s centre toward a surface coordinate (degrees).
    """
    r = np.asarray(body.surface_position(latitude, longitude, 0.0), dtype=float) - body.position
    n = np.linalg.norm(r)
    if n == 0.0:
        raise ValueError(f"Degenerate surface position on {body.name}")
    return r / n


def distance_factor(vessel, reference):
    """
    Great-circle angle between the vessel's radial direction and `reference`,
    normalized to a half turn: 0.0 at the reference point, 1.0 at its antipode.

    The angle is taken against the vessel's own main body centre even when
    `reference` was built on another body.
    """
    radial = np.asarray(vessel.position, dtype=float) - vessel.main_body.position
    n = np.linalg.norm(radial)
    if n == 0.0:
        return 0.0
    cos_angle = np.clip(np.dot(radial / n, reference), -1.0, 1.0)
    return float(np.arccos(cos_angle) / np.pi)


def distance(vessel, reference):
    """Arc length (m) along the vessel's main body surface to the reference point."""
    return distance_factor(vessel, reference) * (np.pi * vessel.main_body.radius)
