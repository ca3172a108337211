# debridement/models/body.py
import numpy as np


class CelestialBody:
    """
    Celestial body as seen by the cleanup engine: atmosphere parameters,
    radius and world position. Scale height is in km, altitudes in meters.
    """
    def __init__(self, name, radius, position=(0.0, 0.0, 0.0), atmosphere=False,
                 atmosphere_scale_height=0.0, atmosphere_multiplier=0.0,
                 max_atmosphere_altitude=0.0, gm=0.0):
        self.name = name
        self.radius = float(radius)
        self.position = np.array(position, dtype=float)
        self.atmosphere = bool(atmosphere)
        self.atmosphere_scale_height = float(atmosphere_scale_height)
        self.atmosphere_multiplier = float(atmosphere_multiplier)
        self.max_atmosphere_altitude = float(max_atmosphere_altitude)
        self.gm = float(gm)

    def surface_direction(self, latitude, longitude):
        """Unit vector from the body centre toward (latitude, longitude) in degrees."""
        lat = np.radians(latitude)
        lon = np.radians(longitude)
        return np.array([
            np.cos(lat) * np.cos(lon),
            np.cos(lat) * np.sin(lon),
            np.sin(lat),
        ], dtype=float)

    def surface_position(self, latitude, longitude, altitude=0.0):
        """World position of a surface coordinate (body rotation is not modelled)."""
        return self.position + (self.radius + altitude) * self.surface_direction(latitude, longitude)

    def __repr__(self):
        return f"CelestialBody({self.name!r}, radius={self.radius:.0f} m, atmosphere={self.atmosphere})"
