# debridement/main.py
import json
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from debridement.cli import SimClock, command_loop, run_cli
from debridement.config import settings
from debridement.engine.diagnostics import project_cleanup
from debridement.engine.policy import CleanupConfig
from debridement.simulation.scheduler import CleanupScheduler
from debridement.simulation.trigger import KeyboardTrigger
from debridement.visualization.plots import plot_cleanup_projections, plot_pass_history

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")


def save_json(obj: Any, name_prefix: str) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out_dir = Path(getattr(settings, "OUTPUT_DIR", "outputs"))
    out_dir.mkdir(parents=True, exist_ok=True)
    filename = out_dir / f"{name_prefix}_{ts}.json"
    with open(filename, "w") as f:
        json.dump(obj, f, indent=2, default=lambda o: repr(o))
    return str(filename)


def run_demo(world, duration, step=None, interactive=True):
    """
    Advance the demo world in fixed simulated steps, letting the scheduler
    run its passes, then optionally hand over to the operator console.
    """
    step = float(step or getattr(settings, "DEMO_TIME_STEP", 60.0))
    settings.validate_settings()

    clock = SimClock()
    scheduler = CleanupScheduler(world, config=CleanupConfig.from_settings(), clock=clock)
    scheduler.start()

    # first tick runs immediately
    scheduler.update()
    while clock.t < duration:
        world.advance(step)
        clock.advance(step)
        scheduler.update()

    log.info("Simulated %.0f s: %d vessel(s) left, %d removed", clock.t, len(world), world.removed)

    if interactive:
        command_loop(KeyboardTrigger(scheduler), world, clock, step)

    return scheduler


def main():
    try:
        world, duration = run_cli()
        log.info("Starting cleanup demo: %d vessel(s), duration=%ss", len(world), duration)

        scheduler = run_demo(world, duration)

        projections = project_cleanup(scheduler.policy, world)
        out = {
            "meta": {
                "duration": duration,
                "cleanup_interval": scheduler.config.cleanup_interval,
                "home_body": scheduler.config.home_body,
                "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            },
            "passes": scheduler.history,
            "remaining": world.counts(),
            "projections": projections,
        }
        report_file = save_json(out, "cleanup_report")
        log.info("Saved cleanup report: %s", report_file)

        try:
            plot_cleanup_projections(projections)
            plot_pass_history(scheduler.history)
            log.info("Plots generated.")
        except Exception as e:
            log.warning("Plotting failed: %s", e)

    except Exception:
        log.error("Fatal exception during run:")
        traceback.print_exc()


if __name__ == "__main__":
    main()
