"""
Pair bracket allocation for milestone timelines.

Milestones tagged with the same pair group (e.g. anesthesia start/end) are
drawn as a vertical bracket spanning their rows. Overlapping brackets are
pushed into separate lanes; disjoint ones share a lane.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence


@dataclass(frozen=True)
class PairColor:
    dot: str
    bg: str
    border: str


@dataclass
class BracketRange:
    group: str
    start: int
    end: int
    color: PairColor
    has_issue: bool
    lane: int = 0

    @property
    def span(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "BracketRange") -> bool:
        return not (self.end < other.start or other.end < self.start)


# Round-robin palette, in order of first appearance
PAIR_PALETTE = (
    PairColor(dot="#3B82F6", bg="#EFF6FF", border="#BFDBFE"),   # blue
    PairColor(dot="#8B5CF6", bg="#F5F3FF", border="#DDD6FE"),   # violet
    PairColor(dot="#10B981", bg="#ECFDF5", border="#A7F3D0"),   # emerald
    PairColor(dot="#F59E0B", bg="#FFFBEB", border="#FDE68A"),   # amber
    PairColor(dot="#EC4899", bg="#FDF2F8", border="#FBCFE8"),   # pink
    PairColor(dot="#06B6D4", bg="#ECFEFF", border="#A5F3FC"),   # cyan
)

DEFAULT_LANE_WIDTH = 14
DEFAULT_MARGIN = 4


def _pair_group(item: Any) -> Optional[str]:
    if item is None or isinstance(item, str):
        return item or None
    if isinstance(item, Mapping):
        return item.get("pair_group") or None
    return getattr(item, "pair_group", None) or None


def _to_color(value: Any) -> PairColor:
    if isinstance(value, PairColor):
        return value
    if isinstance(value, Mapping):
        return PairColor(dot=value["dot"], bg=value["bg"], border=value["border"])
    raise TypeError(f"color must be a PairColor or mapping, got {type(value).__name__}")


def compute_brackets(
    items: Sequence[Any],
    issue_map: Optional[Mapping[str, Any]] = None,
    color_map: Optional[Mapping[str, Any]] = None,
) -> List[BracketRange]:
    """
    Bracket ranges with lanes for the pair groups in `items`.

    Items may be pair-group strings (or None), dicts with a "pair_group"
    key, or objects with a `pair_group` attribute. Groups with fewer than two
    members are not pairs and are dropped. Results keep the order in which
    groups first appear.
    """
    issue_map = issue_map or {}
    color_map = color_map or {}

    # group -> member indices, insertion order = first encounter
    members: Dict[str, List[int]] = {}
    for index, item in enumerate(items):
        group = _pair_group(item)
        if group is not None:
            members.setdefault(group, []).append(index)

    brackets: List[BracketRange] = []
    palette_index = 0
    for group, indices in members.items():
        if len(indices) < 2:
            continue

        if group in color_map:
            color = _to_color(color_map[group])
        else:
            color = PAIR_PALETTE[palette_index % len(PAIR_PALETTE)]
            palette_index += 1

        brackets.append(
            BracketRange(
                group=group,
                start=min(indices),
                end=max(indices),
                color=color,
                has_issue=group in issue_map,
            )
        )

    # widest first, ties keep encounter order (sorted() is stable)
    placed: List[BracketRange] = []
    for bracket in sorted(brackets, key=lambda b: b.span, reverse=True):
        lane = 0
        while any(p.lane == lane and p.overlaps(bracket) for p in placed):
            lane += 1
        bracket.lane = lane
        placed.append(bracket)

    return brackets


def lane_count(brackets: Sequence[BracketRange]) -> int:
    if not brackets:
        return 0
    return max(b.lane for b in brackets) + 1


def compute_bracket_area_width(
    brackets: Sequence[BracketRange],
    lane_width: int = DEFAULT_LANE_WIDTH,
    margin: int = DEFAULT_MARGIN,
) -> int:
    """
    Horizontal space the bracket overlay needs: one unit per lane plus a
    margin, or 0 when there is nothing to draw.
    """
    lanes = lane_count(brackets)
    if lanes == 0:
        return 0
    return lanes * lane_width + margin
