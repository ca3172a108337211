"""
Project settings (constants + small helpers).
Units: meters (m), seconds (s), degrees for surface coordinates.
"""
from __future__ import annotations

import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
DEFAULT_RANDOM_SEED: Optional[int] = None
VALIDATE_ON_IMPORT = False

# Scheduling
CLEANUP_INTERVAL = 5.0  # seconds between automatic passes

# Landed cleanup
LANDED_CLEANUP_MIN_DELAY = 60.0 * 15.0
LANDED_CLEANUP_DISTANCE_DELAY = 3600.0 * 24.0  # delay at the antipode of the reference point
LANDED_CLEANUP_SPLASH_FACTOR = 2.0

# Orbital decay cleanup
ORBIT_CLEANUP_MIN_DELAY = 3600.0
ORBIT_CLEANUP_ATMOS_SECS = 4.0  # atmosphere-seconds

# Reference point (launch site on the home body)
HOME_BODY_NAME = "Kerbin"
REFERENCE_LATITUDE = -0.102668048653556
REFERENCE_LONGITUDE = -74.5753856554463

# Salvage
MAX_SALVAGE_DIST = 50.0

# Demo world (CLI)
DEMO_DEBRIS = 12
MAX_DEBRIS = 500
DEMO_DURATION = 6 * 3600.0
DEMO_TIME_STEP = 60.0  # simulated seconds per scheduler tick

# Kerbin-like home body
HOME_RADIUS = 600_000.0
HOME_SCALE_HEIGHT_KM = 5.0
HOME_ATMOSPHERE_MULTIPLIER = 1.0
HOME_MAX_ATMOSPHERE_ALTITUDE = 70_000.0
HOME_GM = 3.5316e12


def validate_settings() -> None:
    if CLEANUP_INTERVAL <= 0:
        raise ValueError("CLEANUP_INTERVAL must be > 0")
    if LANDED_CLEANUP_MIN_DELAY <= 0:
        raise ValueError("LANDED_CLEANUP_MIN_DELAY must be > 0")
    if LANDED_CLEANUP_DISTANCE_DELAY < 0:
        raise ValueError("LANDED_CLEANUP_DISTANCE_DELAY must be >= 0")
    if LANDED_CLEANUP_SPLASH_FACTOR <= 0:
        raise ValueError("LANDED_CLEANUP_SPLASH_FACTOR must be > 0")
    if ORBIT_CLEANUP_MIN_DELAY < 0:
        raise ValueError("ORBIT_CLEANUP_MIN_DELAY must be >= 0")
    if ORBIT_CLEANUP_ATMOS_SECS <= 0:
        raise ValueError("ORBIT_CLEANUP_ATMOS_SECS must be > 0")
    if not -90.0 <= REFERENCE_LATITUDE <= 90.0:
        raise ValueError("REFERENCE_LATITUDE must be within [-90, 90]")
    if MAX_SALVAGE_DIST <= 0:
        raise ValueError("MAX_SALVAGE_DIST must be > 0")
    if DEMO_TIME_STEP <= 0:
        raise ValueError("DEMO_TIME_STEP must be > 0")


if VALIDATE_ON_IMPORT:
    validate_settings()
