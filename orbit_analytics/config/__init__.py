from .loader import load_config
from .defaults import DEFAULT_CONFIG
from .facility_config import FacilityConfig, BracketLayoutConfig

__all__ = [
    "load_config",
    "DEFAULT_CONFIG",
    "FacilityConfig",
    "BracketLayoutConfig",
]
