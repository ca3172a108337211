# debridement/models/orbit.py
import math


class Orbit:
    """
    Keplerian orbit summary around `reference_body`.
    Altitudes are above the body's surface (m), period in seconds.
    """
    def __init__(self, reference_body, periapsis_altitude, apoapsis_altitude,
                 eccentricity=None, period=None, altitude=None):
        self.reference_body = reference_body
        self.periapsis_altitude = float(periapsis_altitude)
        self.apoapsis_altitude = float(apoapsis_altitude)

        rp = reference_body.radius + self.periapsis_altitude
        ra = reference_body.radius + self.apoapsis_altitude
        self.semi_major_axis = 0.5 * (rp + ra)

        if eccentricity is None:
            eccentricity = (ra - rp) / (ra + rp) if (ra + rp) > 0 else 0.0
        self.eccentricity = float(eccentricity)

        if period is None:
            period = self._kepler_period()
        self.period = float(period)

        self.altitude = float(self.periapsis_altitude if altitude is None else altitude)

    def _kepler_period(self):
        gm = getattr(self.reference_body, "gm", 0.0)
        if gm <= 0.0 or self.semi_major_axis <= 0.0:
            return 0.0
        return 2.0 * math.pi * math.sqrt(self.semi_major_axis ** 3 / gm)

    def __repr__(self):
        return (f"Orbit(PeA={self.periapsis_altitude:.0f} m, ApA={self.apoapsis_altitude:.0f} m, "
                f"e={self.eccentricity:.4f}, T={self.period:.1f} s)")
