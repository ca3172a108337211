import pytest

from debridement.config import settings
from debridement.simulation.scheduler import CleanupScheduler, SchedulerState
from debridement.simulation.trigger import KeyboardTrigger
from debridement.simulation.world import World

from helpers import decaying, landed


class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self):
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(world, config, clock):
    return CleanupScheduler(world, config=config, clock=clock)


def test_stopped_until_started(scheduler, world, home):
    world.add(landed(home, 0.02, 2000.0))
    assert scheduler.state == SchedulerState.STOPPED
    assert scheduler.update() is None
    assert scheduler.trigger_cleanup() is None
    assert len(world) == 1


def test_first_tick_is_immediate(scheduler, world, home):
    world.add(landed(home, 0.02, 2000.0))
    scheduler.start()
    report = scheduler.update()
    assert report.deleted == (1, 0)
    assert scheduler.state == SchedulerState.IDLE


def test_ticks_follow_interval(scheduler, clock):
    scheduler.start()
    assert scheduler.update() is not None
    clock.t = 4.9
    assert scheduler.update() is None
    clock.t = 5.0
    assert scheduler.update() is not None
    assert len(scheduler.history) == 2


def test_realigns_after_falling_behind(scheduler, clock):
    scheduler.start()
    scheduler.update()
    clock.t = 60.0
    assert scheduler.update() is not None
    assert scheduler.update() is None
    assert scheduler.next_tick == pytest.approx(65.0)


def test_pass_picks_up_elapsed_mission_time(scheduler, world, home, clock):
    v = world.add(landed(home, 0.02, 1000.0))
    scheduler.start()
    scheduler.update()
    assert v.alive

    world.advance(1000.0)
    clock.t = 1000.0
    scheduler.update()
    assert not v.alive


def test_manual_trigger_while_idle(scheduler, world, home):
    world.add(landed(home, 0.02, 2000.0))
    scheduler.start()
    scheduler.next_tick = 1e9
    assert scheduler.trigger_cleanup().deleted == (1, 0)


def test_manual_trigger_ignored_while_scanning(scheduler, world, home):
    nested = []

    class Reentrant:
        name = "reentrant"

        def die(self):
            nested.append(scheduler.state)
            nested.append(scheduler.trigger_cleanup())
            nested.append(scheduler.trigger_dump())

    v = world.add(landed(home, 0.02, 2000.0))
    scheduler.start()
    # swap in a deletion that tries to start another pass
    original = scheduler.scanner.executor.drain
    scheduler.scanner.executor.drain = lambda pending: original([(Reentrant(), "landed")] + list(pending))
    scheduler.update()

    assert nested == [SchedulerState.SCANNING, None, None]
    assert not v.alive
    assert scheduler.state == SchedulerState.IDLE


def test_world_not_ready_records_nothing(scheduler, world):
    world.ready = False
    scheduler.start()
    assert scheduler.update() is None
    assert scheduler.history == []


def test_stop_halts_ticks(scheduler, clock):
    scheduler.start()
    scheduler.stop()
    clock.t = 100.0
    assert scheduler.update() is None
    assert scheduler.state == SchedulerState.STOPPED


def test_new_session_resets_reference(scheduler, home, moon):
    scheduler.start()
    scheduler.update()
    assert scheduler.policy.reference_resolved

    fresh = World([moon], ready=False)
    scheduler.new_session(fresh)
    assert scheduler.world is fresh
    assert not scheduler.policy.reference_resolved
    assert scheduler.state == SchedulerState.IDLE
    assert scheduler.history == []


def test_dump_reports_projections(scheduler, world, home):
    world.add(landed(home, 0.02, 1000.0, name="a"))
    world.add(decaying(home, 1.0, name="b"))
    scheduler.start()
    projections = scheduler.trigger_dump()
    assert [p["name"] for p in projections] == ["a", "b"]
    assert len(world) == 2


# -----------------------------
# Keyboard trigger
# -----------------------------
@pytest.fixture
def keys(scheduler):
    scheduler.start()
    scheduler.next_tick = 1e9
    return KeyboardTrigger(scheduler)


def test_ctrl_p_runs_cleanup(keys, world, home):
    world.add(landed(home, 0.02, 2000.0))
    keys.key_down("left_ctrl")
    report = keys.key_down("p")
    assert report.deleted == (1, 0)


def test_p_without_modifier_does_nothing(keys, world, home):
    world.add(landed(home, 0.02, 2000.0))
    assert keys.key_down("p") is None
    assert len(world) == 1


def test_modifier_release_disarms(keys, world, home):
    world.add(landed(home, 0.02, 2000.0))
    keys.key_down("left_ctrl")
    keys.key_up("left_ctrl")
    assert keys.key_down("p") is None


def test_held_key_fires_once(keys):
    keys.key_down("left_ctrl")
    assert keys.key_down("p") is not None
    assert keys.key_down("p") is None
    keys.key_up("p")
    assert keys.key_down("p") is not None


def test_ctrl_o_dumps(keys, world, home):
    world.add(landed(home, 0.02, 1000.0))
    keys.key_down("left_ctrl")
    assert len(keys.key_down("o")) == 1
    assert len(world) == 1


def test_keys_ignored_when_world_not_ready(keys, world):
    world.ready = False
    keys.key_down("left_ctrl")
    assert keys.key_down("p") is None


def test_default_scheduler_reads_settings_at_construction(monkeypatch, world):
    monkeypatch.setattr(settings, "CLEANUP_INTERVAL", 30.0)
    s = CleanupScheduler(world)
    assert s.config.cleanup_interval == 30.0
    assert s.policy.config.cleanup_interval == 30.0
