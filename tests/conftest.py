import pytest

from debridement.engine.policy import CleanupConfig, CleanupPolicy
from debridement.models.body import CelestialBody
from debridement.simulation.world import World


@pytest.fixture
def home():
    return CelestialBody(
        name="Kerbin",
        radius=600_000.0,
        atmosphere=True,
        atmosphere_scale_height=5.0,
        atmosphere_multiplier=1.0,
        max_atmosphere_altitude=70_000.0,
        gm=3.5316e12,
    )


@pytest.fixture
def moon():
    return CelestialBody(name="Mun", radius=200_000.0, position=(12_000_000.0, 0.0, 0.0), gm=6.5138398e10)


@pytest.fixture
def config():
    # reference point on the equator at lon 0 -> reference vector = +x
    return CleanupConfig(reference_latitude=0.0, reference_longitude=0.0)


@pytest.fixture
def world(home, moon):
    return World([home, moon])


@pytest.fixture
def policy(config, world):
    p = CleanupPolicy(config)
    assert p.resolve_reference(world)
    return p
