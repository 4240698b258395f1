import yaml
import copy
from pathlib import Path

from .defaults import DEFAULT_CONFIG
from orbit_analytics.config.facility_config import FacilityConfig, BracketLayoutConfig
from orbit_analytics.flags.thresholds import FlagThresholds


# -------------------------------------------------
# SECTION LOADERS
# -------------------------------------------------
def load_facility_config(cfg: dict) -> FacilityConfig:
    values = cfg.get("facility") or {}
    return FacilityConfig(**values)


def load_flag_thresholds(cfg: dict) -> FlagThresholds:
    values = cfg.get("flags") or {}
    unknown = set(values) - set(FlagThresholds.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown flag threshold(s): {sorted(unknown)}")
    return FlagThresholds(**values)


def load_bracket_layout(cfg: dict) -> BracketLayoutConfig:
    values = cfg.get("brackets") or {}
    return BracketLayoutConfig(**values)


# -------------------------------------------------
# MAIN CONFIG LOADER
# -------------------------------------------------
def load_config(path: str | None) -> dict:
    """
    Load and merge user config with defaults.

    Rules:
    - Defaults ALWAYS win if user omits fields
    - every section is OPTIONAL
    - output_dir MUST always exist
    """

    # -------------------------------------------------
    # 1. Load user config (if provided)
    # -------------------------------------------------
    user_config = {}

    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ValueError("Config file must contain a YAML dictionary")

    # -------------------------------------------------
    # 2. Merge with defaults
    # -------------------------------------------------
    config = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value

    # -------------------------------------------------
    # 3. Enforce required invariants
    # -------------------------------------------------
    config.setdefault("output_dir", "runs")
    config.setdefault("metadata", {})

    if config.get("observers") is None:
        config["observers"] = []

    tolerance = config["trend"].get("tolerance")
    if not isinstance(tolerance, (int, float)) or tolerance < 0:
        raise ValueError(f"trend.tolerance must be a non-negative number, got {tolerance!r}")

    # -------------------------------------------------
    # 4. Attach typed sections
    # -------------------------------------------------
    config["facility_config"] = load_facility_config(config)
    config["flag_thresholds"] = load_flag_thresholds(config)
    config["bracket_layout"] = load_bracket_layout(config)

    return config
