DEFAULT_CONFIG = {
    # -----------------------------
    # FACILITY SETTINGS
    # -----------------------------
    "facility": {
        "name": None,
        "or_hourly_rate": None,            # $/hour, None = OR cost unknown
        "fcots_grace_minutes": 2,          # start within N min of schedule counts as on time
        "fcots_target_percent": 85,
        "utilization_target_percent": 75,
    },

    # -----------------------------
    # FLAG PATTERN THRESHOLDS
    # -----------------------------
    # Empty = built-in defaults (see flags.thresholds)
    "flags": {},

    # -----------------------------
    # TREND CLASSIFICATION
    # -----------------------------
    "trend": {
        "tolerance": 1.0,   # absolute units between half averages
    },

    # -----------------------------
    # PAIR BRACKET LAYOUT
    # -----------------------------
    "brackets": {
        "lane_width": 14,
        "margin": 4,
    },

    # -----------------------------
    # REPORTING
    # -----------------------------
    "report": {
        "charts": False,    # PNG charts next to the markdown
    },

    # -----------------------------
    # OBSERVERS (OPTIONAL)
    # -----------------------------
    # e.g. [{"type": "console"}, {"type": "file", "path": "events.jsonl"}]
    "observers": [],

    # -----------------------------
    # OUTPUT CONTROL
    # -----------------------------
    "output_dir": "runs",

    # -----------------------------
    # METADATA (OPTIONAL)
    # -----------------------------
    "metadata": {
        "framework": "ORbit Analytics",
    },
}
