from pathlib import Path
from typing import Optional, Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from orbit_analytics.scheduling.volume import WeeklyVolumeStats


def plot_weekly_volume(
    labels: Sequence[str],
    counts: Sequence[int],
    stats: WeeklyVolumeStats,
    out_path,
) -> Optional[Path]:
    """
    Bar chart of cases per week with the average line. Weeks at or above
    average are highlighted.
    """
    if not counts:
        return None

    out = Path(out_path)

    colors = ["#34D399" if c >= stats.avg else "#CBD5E1" for c in counts]

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.bar(range(len(counts)), counts, color=colors)
    ax.axhline(stats.avg, color="#64748B", linestyle="--", linewidth=1, label=f"avg: {stats.avg}")

    ax.set_xticks(range(len(counts)))
    ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)
    ax.set_ylabel("Cases")
    ax.set_title(f"Weekly Volume Trend ({stats.trend_direction})")
    ax.grid(axis="y", linestyle="--", alpha=0.4)
    ax.legend(loc="upper left", fontsize=8)

    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)

    if out.exists() and out.stat().st_size > 0:
        return out
    return None
