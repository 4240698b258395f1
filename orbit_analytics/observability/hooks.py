import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict


@dataclass
class RunEvent:
    event: str
    status: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class AnalyticsObserver(ABC):
    @abstractmethod
    def record(self, event: RunEvent):
        pass


class ConsoleObserver(AnalyticsObserver):
    def __init__(self, logger_name: str = "orbit.events"):
        self.log = logging.getLogger(logger_name)

    def record(self, event: RunEvent):
        self.log.info("[%s] %s %s", event.status.upper(), event.event, event.details)


class FileObserver(AnalyticsObserver):
    def __init__(self, path: str = "analytics_events.jsonl"):
        self.path = Path(path)

    def record(self, event: RunEvent):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(asdict(event), default=str) + "\n")
