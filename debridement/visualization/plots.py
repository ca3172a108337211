import os
import math
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from debridement.config import settings


def plot_cleanup_projections(projections, output_dir=None):
    """
    Bar chart of hours left before each candidate is removed.
    Negative bars are overdue (removed on the next pass).
    """
    output_dir = output_dir or settings.OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)

    rows = [p for p in projections if math.isfinite(p["hours_left"])]
    names = [p["name"] for p in rows]
    hours = [p["hours_left"] for p in rows]
    colors = ["tab:orange" if p["kind"] == "landed" else "tab:blue" for p in rows]

    plt.figure(figsize=(10, 5))
    plt.bar(names, hours, color=colors)
    plt.axhline(0.0, color="black", linewidth=0.8)
    plt.xticks(rotation=45, ha="right")
    plt.ylabel("Hours Left")
    plt.title("Debris Cleanup Projection (orange: landed, blue: decay)")

    save_path = os.path.join(output_dir, "cleanup_projection.png")
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    print(f"[OK] Saved: {save_path}")
    return save_path


def plot_pass_history(history, output_dir=None):
    """
    Cumulative removals per category over simulated time.
    history: list of dicts with "time", "deleted_landed", "deleted_decay".
    """
    output_dir = output_dir or settings.OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)

    times = [h["time"] / 3600.0 for h in history]
    landed, decay = [], []
    total_l = total_d = 0
    for h in history:
        total_l += h["deleted_landed"]
        total_d += h["deleted_decay"]
        landed.append(total_l)
        decay.append(total_d)

    plt.figure(figsize=(10, 6))
    plt.step(times, landed, where="post", label="landed")
    plt.step(times, decay, where="post", label="decay")
    plt.xlabel("Simulated Time (h)")
    plt.ylabel("Debris Removed")
    plt.title("Debris Removed Over Time")
    plt.legend()

    save_path = os.path.join(output_dir, "removal_history.png")
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    print(f"[OK] Saved: {save_path}")
    return save_path
