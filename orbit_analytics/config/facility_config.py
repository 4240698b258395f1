from dataclasses import dataclass
from typing import Optional


# -------------------------------------------------
# FACILITY SETTINGS
# -------------------------------------------------
@dataclass
class FacilityConfig:
    """
    Facility-level settings supplied by the settings layer.
    """
    name: Optional[str] = None
    or_hourly_rate: Optional[float] = None
    fcots_grace_minutes: int = 2
    fcots_target_percent: float = 85.0
    utilization_target_percent: float = 75.0

    def __post_init__(self):
        if self.or_hourly_rate is not None and self.or_hourly_rate < 0:
            raise ValueError(
                f"or_hourly_rate must be non-negative, got {self.or_hourly_rate}"
            )
        if self.fcots_grace_minutes < 0:
            raise ValueError(
                f"fcots_grace_minutes must be non-negative, got {self.fcots_grace_minutes}"
            )
        for name in ("fcots_target_percent", "utilization_target_percent"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}")


# -------------------------------------------------
# LAYOUT SETTINGS
# -------------------------------------------------
@dataclass
class BracketLayoutConfig:
    lane_width: int = 14
    margin: int = 4
