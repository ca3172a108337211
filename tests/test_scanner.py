import pytest

from debridement.engine.executor import DeletionExecutor
from debridement.engine.policy import CleanupPolicy
from debridement.engine.scanner import DECAY, LANDED, DebrisScanner
from debridement.errors import DebridementError
from debridement.models.vessel import Situation

from helpers import decaying, landed


@pytest.fixture
def populated(world, home, moon):
    vessels = {
        "old_landed": landed(home, 0.02, 2000.0, name="old_landed"),
        "young_landed": landed(home, 0.02, 1000.0, name="young_landed"),
        "decayed": decaying(home, 5.0, name="decayed"),
        "player": landed(home, 0.0, 1e9, name="player", is_commandable=True, loaded=True),
        "loaded_debris": landed(home, 0.5, 1e9, name="loaded_debris", loaded=True),
        "mun_debris": landed(moon, 0.5, 1e9, name="mun_debris"),
        "old_splashed": landed(home, 0.0, 1801.0, situation=Situation.SPLASHED, name="old_splashed"),
    }
    for v in vessels.values():
        world.add(v)
    return vessels


@pytest.fixture
def scanner(policy):
    return DebrisScanner(policy)


def test_scan_queues_eligible_in_encounter_order(scanner, world, populated):
    pending, report = scanner.scan(world)
    assert [v.name for v, _ in pending] == ["old_landed", "decayed", "old_splashed"]
    assert [c for _, c in pending] == [LANDED, DECAY, LANDED]
    assert report.candidates_landed == 3
    assert report.candidates_decay == 1
    assert report.queued == 3
    # scanning alone removes nothing
    assert len(world) == len(populated)


def test_pass_removes_queued_vessels(scanner, world, populated):
    report = scanner.run_cleanup_pass(world)
    assert report.deleted == (2, 1)
    remaining = {v.name for v in world.vessels}
    assert remaining == {"young_landed", "player", "loaded_debris", "mun_debris"}
    assert not populated["old_landed"].alive


def test_pass_never_deletes_more_than_queued(scanner, world, populated):
    report = scanner.run_cleanup_pass(world)
    assert report.deleted_landed <= report.queued_landed
    assert report.deleted_decay <= report.queued_decay
    assert world.removed == report.queued


def test_scan_is_idempotent(scanner, world, populated):
    first, _ = scanner.scan(world)
    second, _ = scanner.scan(world)
    assert [v.id for v, _ in first] == [v.id for v, _ in second]


def test_second_pass_finds_nothing_new(scanner, world, populated):
    scanner.run_cleanup_pass(world)
    report = scanner.run_cleanup_pass(world)
    assert report.queued == 0
    assert report.deleted == (0, 0)


@pytest.mark.parametrize("ready,in_flight", [(False, True), (True, False), (False, False)])
def test_pass_is_noop_when_world_not_ready(policy, world, populated, ready, in_flight):
    world.ready = ready
    world.in_flight = in_flight
    assert DebrisScanner(policy).run_cleanup_pass(world) is None
    assert len(world) == len(populated)


def test_pass_resolves_reference_lazily(world, populated):
    scanner = DebrisScanner()
    assert not scanner.policy.reference_resolved
    scanner.run_cleanup_pass(world)
    assert scanner.policy.reference_resolved


def test_landed_skipped_until_home_body_known(config, home, world, populated):
    world.bodies.remove(home)
    report = DebrisScanner(CleanupPolicy(config)).run_cleanup_pass(world)
    assert report.deleted_landed == 0
    assert populated["old_landed"].alive


# -----------------------------
# Executor
# -----------------------------
def test_executor_counts_already_removed_as_done(world, home):
    v = world.add(landed(home, 0.5, 0.0))
    world.remove(v)
    assert DeletionExecutor().drain([(v, LANDED)]) == {LANDED: 1}


def test_executor_continues_after_failure(world, home):
    class Stuck:
        name = "stuck"

        def die(self):
            raise DebridementError("host refused")

    ok = world.add(landed(home, 0.5, 0.0))
    removed = DeletionExecutor().drain([(Stuck(), LANDED), (ok, DECAY)])
    assert removed == {DECAY: 1}
    assert not ok.alive


def test_executor_is_not_reentrant(world, home):
    executor = DeletionExecutor()
    seen = []

    class Greedy:
        name = "greedy"

        def die(self):
            with pytest.raises(RuntimeError):
                executor.drain([])
            seen.append(executor.draining)

    executor.drain([(Greedy(), LANDED)])
    assert seen == [True]
    assert not executor.draining


def test_deletion_cannot_extend_the_queue(world, home):
    extra = world.add(landed(home, 0.5, 0.0, name="extra"))
    pending = []

    class Sneaky:
        name = "sneaky"

        def die(self):
            pending.append((extra, LANDED))

    pending.append((Sneaky(), LANDED))
    DeletionExecutor().drain(pending)
    assert extra.alive


def test_executor_survives_host_errors(world, home):
    class HostRefuses:
        name = "refuses"

        def die(self):
            raise KeyError("vessel not in host registry")

    ok = world.add(landed(home, 0.5, 0.0))
    removed = DeletionExecutor().drain([(HostRefuses(), LANDED), (ok, LANDED)])
    assert removed == {LANDED: 1}
    assert not ok.alive


def test_pass_survives_host_errors(scanner, world, home):
    class HostRefuses:
        id = "refuses"
        name = "refuses"

        def die(self):
            raise KeyError("vessel not in host registry")

    first = landed(home, 0.02, 2000.0, name="first")
    second = landed(home, 0.02, 2000.0, name="second")
    world.add(first)
    world.add(second)
    original = scanner.executor.drain
    scanner.executor.drain = lambda pending: original([(HostRefuses(), LANDED)] + list(pending))

    report = scanner.run_cleanup_pass(world)
    assert report.deleted_landed == 2
    assert not first.alive and not second.alive


def test_duplicate_entries_are_scanned_once(scanner, world, home):
    v = world.add(landed(home, 0.02, 2000.0))
    world.vessels.append(v)
    pending, report = scanner.scan(world)
    assert len(pending) == 1
    assert report.candidates_landed == 1


def test_duplicate_entries_deleted_once(scanner, world, home):
    v = world.add(landed(home, 0.02, 2000.0))
    world.vessels.append(v)
    report = scanner.run_cleanup_pass(world)
    assert report.queued == 1
    assert report.deleted == (1, 0)
    assert world.removed == 1


def test_world_add_ignores_vessel_already_present(world, home):
    v = world.add(landed(home, 0.02, 2000.0))
    world.add(v)
    assert len(world) == 1
