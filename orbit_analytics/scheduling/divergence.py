# orbit_analytics/scheduling/divergence.py
"""
Case volume vs OR utilization.

Both directions arrive precomputed ("increase" / "decrease" / "unchanged").
Every one of the 3x3 combinations maps to exactly one narrative category;
anything involving "unchanged" is the stable narrative.
"""

from dataclasses import dataclass
from typing import Literal, Optional

Direction = Literal["increase", "decrease", "unchanged"]
DivergenceCategory = Literal[
    "efficient_growth",
    "declining_pipeline",
    "scheduling_gap",
    "shrinking_pipeline",
    "stable",
]

DIRECTIONS = ("increase", "decrease", "unchanged")

# volume and utilization moving in opposite directions
DIVERGING_CATEGORIES = ("scheduling_gap", "shrinking_pipeline")

NARRATIVES = {
    "scheduling_gap": (
        "More cases are being scheduled but rooms are used less efficiently. This suggests "
        "scheduling gaps, room assignment imbalances, or block time mismatch."
    ),
    "declining_pipeline": (
        "Both volume and utilization are declining. Fewer cases are being scheduled, "
        "directly impacting room usage."
    ),
    "shrinking_pipeline": (
        "Volume is down but utilization is up. Fewer cases are fitting more tightly into "
        "available time. Operations are efficient but the pipeline is shrinking."
    ),
    "efficient_growth": (
        "Both volume and utilization are trending up. Growth is being absorbed efficiently "
        "into available OR time."
    ),
    "stable": "Volume and utilization trends are stable.",
}


@dataclass(frozen=True)
class Divergence:
    volume_delta: float
    volume_direction: Direction
    utilization_delta: float
    utilization_direction: Direction
    category: DivergenceCategory
    is_diverging: bool
    narrative: str


def _check_direction(value: str, name: str) -> str:
    if value not in DIRECTIONS:
        raise ValueError(f"{name} must be one of {DIRECTIONS}, got {value!r}")
    return value


def classify_divergence(volume_direction: str, utilization_direction: str) -> DivergenceCategory:
    volume = _check_direction(volume_direction, "volume_direction")
    utilization = _check_direction(utilization_direction, "utilization_direction")

    if volume == "increase" and utilization == "decrease":
        return "scheduling_gap"
    if volume == "decrease" and utilization == "decrease":
        return "declining_pipeline"
    if volume == "decrease" and utilization == "increase":
        return "shrinking_pipeline"
    if volume == "increase" and utilization == "increase":
        return "efficient_growth"
    return "stable"


def analyze_divergence(
    volume_delta: Optional[float],
    volume_direction: Optional[str],
    utilization_delta: Optional[float],
    utilization_direction: Optional[str],
) -> Optional[Divergence]:
    """
    Narrative comparison of the two trends. None when either side has no
    delta or direction to compare (nothing to say yet).
    """
    if not volume_delta or not utilization_delta or not volume_direction or not utilization_direction:
        return None

    category = classify_divergence(volume_direction, utilization_direction)
    return Divergence(
        volume_delta=volume_delta,
        volume_direction=volume_direction,
        utilization_delta=utilization_delta,
        utilization_direction=utilization_direction,
        category=category,
        is_diverging=category in DIVERGING_CATEGORIES,
        narrative=NARRATIVES[category],
    )
