# debridement/cli.py
import math
import numpy as np
from debridement.config import settings
from debridement.engine.salvage import salvage_debris
from debridement.models.body import CelestialBody
from debridement.models.orbit import Orbit
from debridement.models.vessel import Part, Resource, Situation, Vessel
from debridement.simulation.world import World

# bring in useful defaults from settings for CLI defaults
from debridement.config.settings import (
    DEMO_DEBRIS,
    DEMO_DURATION,
    MAX_DEBRIS,
    HOME_BODY_NAME,
)


def get_float(prompt, default=None, min_val=None):
    """
    Safe float input with optional default. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return float(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return float(default)
        try:
            val = float(user)
            if min_val is not None and val < min_val:
                raise ValueError
            return val
        except (ValueError, TypeError):
            print("❌ Please enter a valid number.")


def get_int(prompt, default=None, min_val=None, max_val=None):
    """
    Safe integer input with limits. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return int(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return int(default)
        try:
            val = int(user)
            if min_val is not None and val < min_val:
                raise ValueError
            if max_val is not None and val > max_val:
                raise ValueError
            return val
        except (ValueError, TypeError):
            print("❌ Invalid integer input.")


def create_bodies():
    """Kerbin-like home body with an atmosphere and an airless moon."""
    home = CelestialBody(
        name=HOME_BODY_NAME,
        radius=settings.HOME_RADIUS,
        position=(0.0, 0.0, 0.0),
        atmosphere=True,
        atmosphere_scale_height=settings.HOME_SCALE_HEIGHT_KM,
        atmosphere_multiplier=settings.HOME_ATMOSPHERE_MULTIPLIER,
        max_atmosphere_altitude=settings.HOME_MAX_ATMOSPHERE_ALTITUDE,
        gm=settings.HOME_GM,
    )
    moon = CelestialBody(
        name="Mun",
        radius=200_000.0,
        position=(12_000_000.0, 0.0, 0.0),
        atmosphere=False,
        gm=6.5138398e10,
    )
    return [home, moon]


def _sample_surface_debris(rng, body, name, splashed=False):
    lat = float(rng.uniform(-60.0, 60.0))
    lon = float(rng.uniform(-180.0, 180.0))
    # landed debris is a few minutes to a day old
    mission_time = float(rng.uniform(0.0, 24 * 3600.0))
    return Vessel(
        name=name,
        main_body=body,
        situation=Situation.SPLASHED if splashed else Situation.LANDED,
        latitude=lat,
        longitude=lon,
        mission_time=mission_time,
        parts=[Part("tank", [Resource("LiquidFuel", float(rng.uniform(0.0, 90.0)), 90.0)])],
    )


def _sample_orbital_debris(rng, body, name):
    """
    Debris on an orbit dipping into (or just above) the atmosphere.
    """
    pe = float(rng.uniform(0.5, 1.3) * body.max_atmosphere_altitude)
    ap = pe + float(rng.uniform(0.0, 250_000.0))
    orbit = Orbit(body, periapsis_altitude=pe, apoapsis_altitude=ap)
    # current altitude somewhere between Pe and Ap
    alt = pe + (ap - pe) * float(0.5 * (1.0 - math.cos(rng.uniform(0.0, 2 * math.pi))))
    orbit.altitude = alt

    theta = float(rng.uniform(0.0, 2 * math.pi))
    r = body.radius + alt
    position = body.position + np.array([r * math.cos(theta), r * math.sin(theta), 0.0])

    return Vessel(
        name=name,
        main_body=body,
        situation=Situation.ORBITING,
        orbit=orbit,
        position=position,
        mission_time=float(rng.uniform(0.0, 4 * 3600.0)),
    )


def create_world(n_debris, seed=None):
    rng = np.random.default_rng(settings.DEFAULT_RANDOM_SEED if seed is None else seed)
    bodies = create_bodies()
    home, moon = bodies
    world = World(bodies)

    # the player's own craft, never removed
    world.add(Vessel(
        name="Player Craft",
        main_body=home,
        situation=Situation.LANDED,
        latitude=settings.REFERENCE_LATITUDE,
        longitude=settings.REFERENCE_LONGITUDE,
        is_commandable=True,
        loaded=True,
        parts=[Part("tank", [Resource("LiquidFuel", 10.0, 360.0)])],
    ))

    # spent stage lying next to the pad, close enough to salvage
    player = world.vessels[0]
    world.add(Vessel(
        name="Spent Stage",
        main_body=home,
        situation=Situation.LANDED,
        position=player.position + np.array([0.0, 0.0, 20.0]),
        latitude=settings.REFERENCE_LATITUDE,
        longitude=settings.REFERENCE_LONGITUDE,
        loaded=True,
        parts=[Part("tank", [Resource("LiquidFuel", 45.0, 90.0)])],
    ))

    for i in range(n_debris):
        name = f"Debris-{i+1}"
        kind = rng.choice(["landed", "splashed", "orbiting", "moon"], p=[0.4, 0.15, 0.35, 0.1])
        if kind == "landed":
            world.add(_sample_surface_debris(rng, home, name))
        elif kind == "splashed":
            world.add(_sample_surface_debris(rng, home, name, splashed=True))
        elif kind == "orbiting":
            world.add(_sample_orbital_debris(rng, home, name))
        else:
            world.add(_sample_surface_debris(rng, moon, name))

    return world


def run_cli():
    print("======================================")
    print("  DEBRIDEMENT: DEBRIS CLEANUP (CLI)   ")
    print("======================================")

    n = get_int(
        f"Number of debris (1–{MAX_DEBRIS}) [default {DEMO_DEBRIS}]: ",
        default=DEMO_DEBRIS,
        min_val=1,
        max_val=MAX_DEBRIS,
    )
    duration = get_float(
        f"Simulated duration in seconds [default {int(DEMO_DURATION)}]: ",
        default=DEMO_DURATION,
        min_val=0.0,
    )

    world = create_world(n)

    print("\n✅ CLI input complete.")
    print(f"→ Vessels in world: {len(world)} {world.counts()}")
    print(f"→ Simulated duration: {int(duration)} seconds")

    return world, float(duration)


class SimClock:
    """Simulated game clock handed to the scheduler."""
    def __init__(self, t=0.0):
        self.t = float(t)

    def advance(self, dt):
        self.t += float(dt)

    def __call__(self):
        return self.t


def command_loop(trigger, world, clock, step):
    """
    Operator console. Each command is one key press of the keybinding.
      p -> cleanup pass, o -> projection dump, s -> salvage around the player craft,
      t -> advance one step, q -> quit
    """
    while True:
        try:
            cmd = input("\nCommand [p=cleanup, o=dump, s=salvage, t=advance, q=quit]: ").strip().lower()
        except EOFError:
            return
        if cmd in ("", "q"):
            return
        if cmd == "t":
            world.advance(step)
            clock.advance(step)
            trigger.scheduler.update()
            print(f"→ Advanced {int(step)} s; vessels left: {len(world)}")
            continue
        if cmd == "s":
            player = next((v for v in world.vessels if v.is_commandable and v.loaded), None)
            if player is None:
                print("❌ No active craft to salvage with.")
                continue
            result = salvage_debris(player, world)
            print(f"→ Salvaged {len(result.salvaged)} vessel(s): {result.resources}")
            continue
        if cmd not in ("p", "o"):
            print("❌ Unknown command.")
            continue

        trigger.key_down(trigger.modifier)
        result = trigger.key_down(cmd)
        trigger.key_up(cmd)
        trigger.key_up(trigger.modifier)

        if cmd == "p" and result is not None:
            print(f"→ Removed landed={result.deleted_landed} decay={result.deleted_decay}")
        elif cmd == "o" and result is not None:
            print(f"→ {len(result)} candidate(s) projected")
