import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

log = logging.getLogger("orbit.run_metadata")


def create_run_metadata(
    input_files: List[str],
    config: Dict,
    output_dir: Path,
    sections: List[str],
    status: str = "completed",
    errors: List[str] | None = None,
):
    """
    Write a run.json describing a report run.
    """

    metadata = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "input_files": input_files,
        "sections": sections,
        "errors": errors or [],
        "metadata": config.get("metadata", {}),
        "config_summary": sorted(
            k for k, v in config.items() if not k.endswith(("_config", "_thresholds", "_layout"))
        ),
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    metadata_path = output_dir / "run.json"

    with open(metadata_path, "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2)

    log.info("Run metadata written: %s (%s)", metadata_path, status)

    return metadata_path
