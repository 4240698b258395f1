from orbit_analytics.observability.hooks import (
    AnalyticsObserver,
    ConsoleObserver,
    FileObserver,
)


def build_observers(config: dict) -> list[AnalyticsObserver]:
    observers = []

    for obs in config.get("observers") or []:
        if obs["type"] == "console":
            observers.append(ConsoleObserver())

        elif obs["type"] == "file":
            observers.append(
                FileObserver(path=obs.get("path", "analytics_events.jsonl"))
            )

        else:
            raise ValueError(f"Unknown observer type: {obs['type']!r}")

    return observers
