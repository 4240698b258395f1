from pathlib import Path
from typing import Optional, Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from orbit_analytics.flags.models import DAY_CATEGORIES, DayOfWeekRow


def plot_day_heatmap(rows: Sequence[DayOfWeekRow], out_path) -> Optional[Path]:
    """
    Day-of-week x flag category heatmap.
    """
    if not rows:
        return None

    df = (
        pd.DataFrame([{"day": r.day, "day_num": r.day_num, **r.categories()} for r in rows])
        .sort_values("day_num")
        .set_index("day")[list(DAY_CATEGORIES)]
    )

    # drop categories with no flags at all
    df = df.loc[:, df.sum() > 0]
    if df.empty:
        return None

    out = Path(out_path).resolve()

    fig, ax = plt.subplots(figsize=(6, 4))
    sns.heatmap(df, annot=True, fmt="d", cmap="OrRd", cbar=False, ax=ax)
    ax.set_title("Flags by Day of Week")
    ax.set_xlabel("")
    ax.set_ylabel("")

    fig.tight_layout()
    fig.savefig(str(out), dpi=150)
    plt.close(fig)

    if out.exists() and out.stat().st_size > 0:
        return out
    return None
