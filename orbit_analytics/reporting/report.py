# orbit_analytics/reporting/report.py
"""
Report runner.

Reads a JSON payload of rows the data-access layer already fetched, runs
each analytics section that has input, and writes a markdown report (plus
optional charts) into the run directory. The analytics functions themselves
stay pure; all file I/O lives here.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from orbit_analytics.automation.run_metadata import create_run_metadata
from orbit_analytics.calendars.holidays import count_in_range, holidays_for_year
from orbit_analytics.config.loader import (
    load_bracket_layout,
    load_facility_config,
    load_flag_thresholds,
)
from orbit_analytics.core.validation import require_number
from orbit_analytics.financials import (
    ActualFinancials,
    CostItem,
    MarginBenchmark,
    ProjectionInputs,
    build_case_financial_data,
    compute_projection,
)
from orbit_analytics.flags.models import FlagAnalytics
from orbit_analytics.flags.patterns import detect_flag_patterns
from orbit_analytics.observability.hooks import AnalyticsObserver, RunEvent
from orbit_analytics.reporting.formatters import (
    fmt_currency,
    fmt_delta_currency,
    fmt_margin,
    fmt_percent_delta,
)
from orbit_analytics.scheduling.divergence import analyze_divergence
from orbit_analytics.scheduling.volume import weekly_volume_stats
from orbit_analytics.timeline.brackets import compute_bracket_area_width, compute_brackets, lane_count

log = logging.getLogger("orbit.report")

SEVERITY_ICONS = {"critical": "[CRITICAL]", "warning": "[WARNING]", "good": "[GOOD]"}


# =====================================================
# INPUT
# =====================================================

def load_payload(input_path: str) -> Dict[str, Any]:
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)

    if not isinstance(payload, dict):
        raise ValueError("Input file must contain a JSON object")
    return payload


# =====================================================
# SECTIONS
# =====================================================

def _scheduling_section(payload: dict, config: dict) -> Optional[dict]:
    weekly = payload.get("weekly_volume")
    volume = payload.get("volume") or {}
    utilization = payload.get("utilization") or {}
    if weekly is None and not volume:
        return None

    tolerance = config.get("trend", {}).get("tolerance", 1.0)
    stats = weekly_volume_stats(weekly or [], tolerance=tolerance)
    divergence = analyze_divergence(
        volume.get("delta"),
        volume.get("direction"),
        utilization.get("delta"),
        utilization.get("direction"),
    )
    return {
        "weeks": [w.get("week") if isinstance(w, dict) else str(i) for i, w in enumerate(weekly or [])],
        "counts": [w.get("count", 0) if isinstance(w, dict) else w for w in weekly or []],
        "stats": stats,
        "divergence": divergence,
    }


def _flags_section(payload: dict, config: dict) -> Optional[dict]:
    raw = payload.get("flag_analytics")
    if raw is None:
        return None

    thresholds = config.get("flag_thresholds") or load_flag_thresholds(config)
    analytics = FlagAnalytics.from_payload(raw)
    return {
        "analytics": analytics,
        "patterns": detect_flag_patterns(analytics, thresholds),
    }


def _financials_section(payload: dict, config: dict) -> Optional[dict]:
    raw = payload.get("case_financials")
    if raw is None:
        return None

    facility = config.get("facility_config") or load_facility_config(config)

    cost_items = [CostItem.from_row(r) for r in raw.get("cost_items") or []]
    inputs_raw = dict(raw.get("inputs") or {})
    if inputs_raw.get("or_hourly_rate") is None:
        inputs_raw["or_hourly_rate"] = facility.or_hourly_rate
    inputs = ProjectionInputs(**inputs_raw, cost_items=cost_items)

    surgeon_name = raw.get("surgeon_name")
    projection = compute_projection(inputs, surgeon_name)

    actual = ActualFinancials(**raw["actual"]) if raw.get("actual") else None

    def benchmark(key):
        row = raw.get(key)
        return MarginBenchmark(row.get("median_margin"), row.get("case_count", 0)) if row else None

    full_day = raw.get("full_day") or {}
    return {
        "surgeon_name": surgeon_name,
        "data": build_case_financial_data(
            projection,
            actual,
            cost_items,
            surgeon_benchmark=benchmark("surgeon_benchmark"),
            facility_benchmark=benchmark("facility_benchmark"),
            full_day_rows=full_day.get("rows"),
            surgeon_id=full_day.get("surgeon_id"),
            surgeon_name=surgeon_name,
        ),
    }


def _holidays_section(payload: dict) -> Optional[dict]:
    raw = payload.get("holidays")
    if raw is None:
        return None

    section = {"year": raw.get("year"), "holidays": [], "range": None}
    if raw.get("year") is not None:
        section["holidays"] = holidays_for_year(int(raw["year"]))
    if raw.get("start") and raw.get("end"):
        section["range"] = {
            "start": raw["start"],
            "end": raw["end"],
            "count": count_in_range(raw["start"], raw["end"]),
        }
    return section


def _brackets_section(payload: dict, config: dict) -> Optional[dict]:
    milestones = payload.get("milestones")
    if milestones is None:
        return None

    layout = config.get("bracket_layout") or load_bracket_layout(config)
    brackets = compute_brackets(milestones, payload.get("pair_issues") or {}, payload.get("pair_colors"))
    return {
        "milestones": milestones,
        "brackets": brackets,
        "lanes": lane_count(brackets),
        "area_width": compute_bracket_area_width(brackets, layout.lane_width, layout.margin),
    }


def _target_row(metric: str, value: Any, target: float) -> dict:
    value = require_number(value, metric, allow_none=False)
    return {"metric": metric, "value": value, "target": target, "met": value >= target}


def _targets_section(payload: dict, config: dict) -> Optional[dict]:
    facility = config.get("facility_config") or load_facility_config(config)
    rows = []

    utilization = (payload.get("utilization") or {}).get("current")
    if utilization is not None:
        rows.append(_target_row("OR utilization", utilization, facility.utilization_target_percent))

    fcots = (payload.get("fcots") or {}).get("on_time_percent")
    if fcots is not None:
        rows.append(
            _target_row(
                f"FCOTS ({facility.fcots_grace_minutes} min grace)",
                fcots,
                facility.fcots_target_percent,
            )
        )

    return {"rows": rows} if rows else None


# =====================================================
# MARKDOWN
# =====================================================

def _render_markdown(sections: Dict[str, Any], title: str) -> str:
    lines: List[str] = [f"# {title}", ""]

    sched = sections.get("scheduling")
    if sched:
        lines += ["## Scheduling & Volume", ""]
        stats = sched["stats"]
        if stats:
            pct = "" if stats.trend_percent is None else f" ({stats.trend_percent:+d}%)"
            lines += [
                f"- Weeks analysed: {stats.weeks}",
                f"- Peak week: {stats.max} cases",
                f"- Avg/week: {stats.avg}",
                f"- Trend: {stats.trend_direction}{pct}, recent avg {stats.second_avg}/week "
                f"vs earlier avg {stats.first_avg}/week",
            ]
        div = sched["divergence"]
        if div:
            marker = " **(diverging)**" if div.is_diverging else ""
            lines += [
                f"- Volume {div.volume_direction} {div.volume_delta}%, "
                f"utilization {div.utilization_direction} {div.utilization_delta}%{marker}",
                f"- {div.narrative}",
            ]
        lines.append("")

    flags = sections.get("flags")
    if flags:
        summary = flags["analytics"].summary
        lines += [
            "## Flag Patterns",
            "",
            f"{summary.total_flags} flags across {summary.total_cases} cases "
            f"({summary.flag_rate:.1f}% flagged).",
            "",
        ]
        if not flags["patterns"]:
            lines.append("No notable patterns detected.")
        for p in flags["patterns"]:
            lines.append(f"- {SEVERITY_ICONS[p.severity]} **{p.title}** ({p.metric}): {p.description}")
        lines.append("")

    fin = sections.get("financials")
    if fin:
        data = fin["data"]
        hero = data.hero
        lines += [
            "## Case Financials",
            "",
            f"- Revenue: {fmt_currency(hero.revenue)}",
            f"- Total costs: {fmt_currency(hero.total_costs)}",
            f"- Profit: {fmt_currency(hero.profit)}",
            f"- Margin: {fmt_margin(hero.margin_percentage)} "
            f"(surgeon: {hero.surgeon_margin_rating}, facility: {hero.facility_margin_rating})",
            f"- Confidence: {data.data_quality.confidence} (costs: {data.data_quality.cost_source})",
        ]
        if data.projection and data.projection.duration_source:
            lines.append(f"- Projected duration: {data.projection.duration_source}")
        if data.cost_breakdown:
            lines += ["", "| Category | Amount | Share |", "|---|---|---|"]
            for item in data.cost_breakdown:
                lines.append(f"| {item.category} | {fmt_currency(item.amount)} | {item.percentage_of_total}% |")
        comp = data.projected_vs_actual
        if comp:
            lines += ["", "| Line | Projected | Actual | Delta | Delta % |", "|---|---|---|---|---|"]
            for li in comp.line_items:
                lines.append(
                    f"| {li.label} | {fmt_currency(li.projected)} | {fmt_currency(li.actual)} "
                    f"| {fmt_delta_currency(li.delta)} | {fmt_percent_delta(li.percent_delta)} |"
                )
            lines.append(
                f"| Profit | {fmt_currency(comp.projected_profit)} | {fmt_currency(comp.actual_profit)} "
                f"| {fmt_delta_currency(comp.profit_delta)} | {fmt_percent_delta(comp.profit_percent_delta)} |"
            )
        forecast = data.full_day_forecast
        if forecast:
            lines += [
                "",
                f"Full day for {forecast.surgeon_name}: {len(forecast.cases)} cases, "
                f"revenue {fmt_currency(forecast.total_revenue)}, profit {fmt_currency(forecast.total_profit)}, "
                f"margin {fmt_margin(forecast.total_margin)}",
            ]
        lines.append("")

    hol = sections.get("holidays")
    if hol:
        lines += ["## Federal Holidays", ""]
        for h in hol["holidays"]:
            shifted = f" (observed {h.observed_date.isoformat()})" if h.is_shifted else ""
            lines.append(f"- {h.date.isoformat()} {h.name}{shifted}")
        if hol["range"]:
            r = hol["range"]
            lines.append(f"- {r['count']} observed holiday(s) between {r['start']} and {r['end']}")
        lines.append("")

    targets = sections.get("targets")
    if targets:
        lines += ["## Facility Targets", ""]
        for row in targets["rows"]:
            status = "on target" if row["met"] else "below target"
            lines.append(
                f"- {row['metric']}: {fmt_margin(row['value'])} "
                f"(target {fmt_margin(row['target'], 0)}), {status}"
            )
        lines.append("")

    br = sections.get("brackets")
    if br:
        lines += ["## Milestone Pairs", "", f"{len(br['brackets'])} pair(s) over {br['lanes']} lane(s).", ""]
        for b in br["brackets"]:
            issue = " (issue)" if b.has_issue else ""
            lines.append(f"- {b.group}: rows {b.start}-{b.end}, lane {b.lane}{issue}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


# =====================================================
# CHARTS
# =====================================================

def _render_charts(sections: Dict[str, Any], run_dir: Path) -> Dict[str, str]:
    charts: Dict[str, str] = {}

    # chart failures never fail the report
    sched = sections.get("scheduling")
    if sched and sched["stats"]:
        try:
            from orbit_analytics.visuals.weekly_volume import plot_weekly_volume

            out = plot_weekly_volume(sched["weeks"], sched["counts"], sched["stats"], run_dir / "weekly_volume.png")
            if out:
                charts["weekly_volume"] = str(out)
        except Exception as e:
            log.warning("Weekly volume chart failed (non-blocking): %s", e)

    flags = sections.get("flags")
    if flags and flags["analytics"].day_of_week_heatmap:
        try:
            from orbit_analytics.visuals.flag_heatmap import plot_day_heatmap

            out = plot_day_heatmap(flags["analytics"].day_of_week_heatmap, run_dir / "flag_heatmap.png")
            if out:
                charts["flag_heatmap"] = str(out)
        except Exception as e:
            log.warning("Flag heatmap chart failed (non-blocking): %s", e)

    return charts


# =====================================================
# ENTRY
# =====================================================

def run(
    input_path: str,
    config: Dict[str, Any],
    observers: Optional[List[AnalyticsObserver]] = None,
) -> Dict[str, Any]:
    """
    Returns:
        {
            "markdown": <path>,
            "payload": <dict of computed sections>,
            "run_dir": <path>,
            "charts": {name: path},
        }
    """
    observers = observers or []
    run_dir = Path(config.get("run_dir") or config.get("output_dir", "runs"))
    run_dir.mkdir(parents=True, exist_ok=True)

    try:
        payload = load_payload(input_path)

        sections = {
            "scheduling": _scheduling_section(payload, config),
            "flags": _flags_section(payload, config),
            "financials": _financials_section(payload, config),
            "holidays": _holidays_section(payload),
            "brackets": _brackets_section(payload, config),
            "targets": _targets_section(payload, config),
        }
        sections = {k: v for k, v in sections.items() if v is not None}
        log.info("Sections computed: %s", ", ".join(sections) or "none")

    except Exception as e:
        create_run_metadata([str(input_path)], config, run_dir, [], status="failed", errors=[str(e)])
        for obs in observers:
            obs.record(RunEvent("report", "failed", {"input": str(input_path), "error": str(e)}))
        raise

    facility_name = config.get("facility", {}).get("name")
    title = f"ORbit Analytics Report: {facility_name}" if facility_name else "ORbit Analytics Report"

    md_path = run_dir / "report.md"
    md_path.write_text(_render_markdown(sections, title), encoding="utf-8")
    log.info("Markdown written: %s", md_path)

    charts = {}
    if config.get("report", {}).get("charts"):
        charts = _render_charts(sections, run_dir)

    create_run_metadata([str(input_path)], config, run_dir, list(sections))

    for obs in observers:
        obs.record(
            RunEvent(
                "report",
                "completed",
                {"input": str(input_path), "sections": list(sections), "run_dir": str(run_dir)},
            )
        )

    return {
        "markdown": str(md_path),
        "payload": {k: asdict_section(v) for k, v in sections.items()},
        "run_dir": str(run_dir),
        "charts": charts,
    }


def asdict_section(section: Any) -> Any:
    """
    Dataclasses -> plain dicts, recursively, for JSON-ready payloads.
    """
    if hasattr(section, "__dataclass_fields__"):
        return asdict(section)
    if isinstance(section, dict):
        return {k: asdict_section(v) for k, v in section.items()}
    if isinstance(section, (list, tuple)):
        return [asdict_section(v) for v in section]
    return section
