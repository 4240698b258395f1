import pytest

from orbit_analytics.flags import (
    DayOfWeekRow,
    FlagAnalytics,
    FlagThresholds,
    WeeklyTrendPoint,
    detect_day_spikes,
    detect_equipment_cascade,
    detect_flag_patterns,
    detect_recurring_surgeon,
    detect_room_concentration,
    detect_trend_changes,
    validate_day_rows,
)


@pytest.fixture
def analytics(flag_payload):
    return FlagAnalytics.from_payload(flag_payload)


def test_all_detectors_fire_sorted_by_severity(analytics):
    patterns = detect_flag_patterns(analytics)

    assert {p.type for p in patterns} == {
        "day_spike",
        "trend_improvement",
        "trend_deterioration",
        "room_concentration",
        "recurring_surgeon",
        "equipment_cascade",
    }
    order = {"critical": 0, "warning": 1, "good": 2}
    assert [order[p.severity] for p in patterns] == sorted(order[p.severity] for p in patterns)


def test_too_few_flags_yields_nothing(flag_payload):
    flag_payload["summary"]["total_flags"] = 2
    assert detect_flag_patterns(FlagAnalytics.from_payload(flag_payload)) == []


def test_day_spike(analytics):
    [spike] = detect_day_spikes(analytics.day_of_week_heatmap)

    assert spike.title == "Monday Spike"
    assert spike.severity == "warning"
    assert spike.metric == "+100%"
    assert spike.description == (
        "Mondays average +100% more flags than other days. 10 of 12 flags are FCOTS."
    )


def test_day_spike_critical():
    rows = [
        DayOfWeekRow("Monday", 1, fcots=14),
        DayOfWeekRow("Tuesday", 2, timing=4),
        DayOfWeekRow("Wednesday", 3, timing=4),
        DayOfWeekRow("Thursday", 4, timing=4),
        DayOfWeekRow("Friday", 5, timing=6),
    ]
    [spike] = detect_day_spikes(rows)
    assert spike.severity == "critical"


def test_day_spike_ignores_quiet_weeks():
    rows = [DayOfWeekRow("Monday", 1, fcots=2), DayOfWeekRow("Tuesday", 2)]
    # +100% but below the minimum flag count
    assert detect_day_spikes(rows) == []
    assert detect_day_spikes([]) == []


def test_trend_changes(analytics):
    by_title = {p.title: p for p in detect_trend_changes(analytics.weekly_trend)}

    declining = by_title["Threshold Flags Declining"]
    assert declining.type == "trend_improvement"
    assert declining.severity == "good"
    assert declining.metric == "-50%"

    increasing = by_title["Reported Delays Increasing"]
    assert increasing.type == "trend_deterioration"
    assert increasing.metric == "+100%"


def test_trend_needs_minimum_weeks():
    weeks = [WeeklyTrendPoint("w1", 10, 0, 10), WeeklyTrendPoint("w2", 1, 0, 1)]
    assert detect_trend_changes(weeks) == []


def test_room_concentration(analytics):
    [room] = detect_room_concentration(analytics.room_flags, 100, 60)

    assert room.title == "OR 3 Flag Concentration"
    assert room.severity == "critical"
    assert room.metric == "50%"
    assert room.description == (
        "OR 3 accounts for 50% of all flags despite handling 20% of cases. Top issue: Turnover."
    )


def test_recurring_surgeon(analytics):
    [surgeon] = detect_recurring_surgeon(analytics.surgeon_flags, 30.0)

    assert surgeon.title == "Dr. Adams Flag Pattern"
    assert surgeon.metric == "2.3x"
    assert detect_recurring_surgeon(analytics.surgeon_flags, 0) == []


def test_equipment_cascade(analytics):
    [cascade] = detect_equipment_cascade(analytics)

    assert cascade.title == "Equipment -> Cascade Pattern"
    assert cascade.metric == "2.0x"
    assert cascade.description.startswith("3 equipment-related delays detected.")


def test_custom_thresholds(analytics):
    strict = FlagThresholds(day_spike_pct=1.5, cascade_min_delays=5)
    types = {p.type for p in detect_flag_patterns(analytics, strict)}

    assert "day_spike" not in types
    assert "equipment_cascade" not in types
    assert "room_concentration" in types


def test_invalid_threshold():
    with pytest.raises(ValueError):
        FlagThresholds(day_spike_pct=-0.1)


def test_payload_accepts_camel_case():
    data = FlagAnalytics.from_payload(
        {
            "summary": {"totalCases": 10, "totalFlags": 4, "flagRate": 20.0, "avgFlagsPerCase": 2.0},
            "dayOfWeekHeatmap": [{"day": "Monday", "dayNum": 1, "fcots": 3, "total": 3}],
            "roomFlags": [{"room": "OR 1", "cases": 10, "flags": 4, "topIssue": "Timing"}],
        }
    )

    assert data.summary.total_cases == 10
    assert data.day_of_week_heatmap[0].day_num == 1
    assert data.room_flags[0].top_issue == "Timing"
    assert data.weekly_trend == []


def test_day_row_total_must_match_categories():
    with pytest.raises(ValueError):
        DayOfWeekRow("Monday", 1, fcots=3, total=5)
    assert DayOfWeekRow("Monday", 1, fcots=3, delay=2).total == 5


def test_negative_counts_rejected(flag_payload):
    flag_payload["room_flags"][0]["flags"] = -1
    with pytest.raises(ValueError):
        FlagAnalytics.from_payload(flag_payload)


def test_validate_day_rows_accepts_rows_and_mappings():
    rows = validate_day_rows([DayOfWeekRow("Monday", 1, fcots=3), {"day": "Tuesday", "day_num": 2, "delay": 2, "total": 2}])

    assert [r.day for r in rows] == ["Monday", "Tuesday"]
    assert rows[1].total == 2


def test_validate_day_rows_rejects_edited_total():
    row = DayOfWeekRow("Monday", 1, fcots=3)
    row.total = 7
    with pytest.raises(ValueError):
        validate_day_rows([row])


def test_validate_day_rows_rejects_repeated_day():
    with pytest.raises(ValueError):
        validate_day_rows([DayOfWeekRow("Monday", 1, fcots=1), DayOfWeekRow("Monday", 1, delay=1)])


def test_payload_with_mismatched_day_total(flag_payload):
    flag_payload["day_of_week_heatmap"][0]["total"] = 99
    with pytest.raises(ValueError):
        FlagAnalytics.from_payload(flag_payload)
