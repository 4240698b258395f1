from .brackets import (
    PairColor,
    BracketRange,
    PAIR_PALETTE,
    compute_brackets,
    lane_count,
    compute_bracket_area_width,
)

__all__ = [
    "PairColor",
    "BracketRange",
    "PAIR_PALETTE",
    "compute_brackets",
    "lane_count",
    "compute_bracket_area_width",
]
