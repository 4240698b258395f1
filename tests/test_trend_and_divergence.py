import pytest

from orbit_analytics.scheduling import (
    NARRATIVES,
    analyze_divergence,
    classify_divergence,
    classify_trend,
    weekly_volume_stats,
)


def test_trend_increasing():
    result = classify_trend([10, 10, 12, 12])
    assert result.direction == "increasing"
    assert result.first_avg == 10
    assert result.second_avg == 12
    assert result.percent_change == pytest.approx(20.0)


def test_trend_within_tolerance_is_stable():
    assert classify_trend([10, 10.5]).direction == "stable"
    assert classify_trend([10, 10.5], tolerance=0.25).direction == "increasing"


def test_trend_decreasing():
    assert classify_trend([20, 18, 12, 10]).direction == "decreasing"


def test_odd_length_puts_middle_in_second_half():
    result = classify_trend([1, 2, 3])
    assert result.first_avg == 1
    assert result.second_avg == 2.5


def test_short_series():
    empty = classify_trend([])
    assert empty.direction == "stable"
    assert empty.percent_change is None

    single = classify_trend([5])
    assert single.first_avg == 0
    assert single.direction == "increasing"
    assert single.percent_change is None


def test_weekly_volume_stats():
    stats = weekly_volume_stats(
        [{"week": "w1", "count": 10}, {"week": "w2", "count": 12}, {"week": "w3", "count": 14}, {"week": "w4", "count": 16}]
    )

    assert stats.max == 16
    assert stats.avg == 13
    assert stats.first_avg == 11
    assert stats.second_avg == 15
    assert stats.trend_direction == "increasing"
    assert stats.trend_percent == 36
    assert stats.weeks == 4


def test_weekly_volume_stats_plain_counts():
    stats = weekly_volume_stats([8, 8, 8, 8])
    assert stats.trend_direction == "stable"
    assert stats.trend_percent == 0


def test_weekly_volume_stats_empty():
    assert weekly_volume_stats([]) is None


@pytest.mark.parametrize(
    "volume, utilization, expected",
    [
        ("increase", "decrease", "scheduling_gap"),
        ("decrease", "decrease", "declining_pipeline"),
        ("decrease", "increase", "shrinking_pipeline"),
        ("increase", "increase", "efficient_growth"),
        ("increase", "unchanged", "stable"),
        ("decrease", "unchanged", "stable"),
        ("unchanged", "increase", "stable"),
        ("unchanged", "decrease", "stable"),
        ("unchanged", "unchanged", "stable"),
    ],
)
def test_divergence_categories(volume, utilization, expected):
    assert classify_divergence(volume, utilization) == expected


def test_scheduling_gap_is_diverging():
    div = analyze_divergence(12.5, "increase", -4.0, "decrease")

    assert div.category == "scheduling_gap"
    assert div.is_diverging
    assert div.narrative == NARRATIVES["scheduling_gap"]


def test_shrinking_pipeline_is_diverging():
    div = analyze_divergence(-8.0, "decrease", 3.0, "increase")
    assert div.category == "shrinking_pipeline"
    assert div.is_diverging


@pytest.mark.parametrize(
    "volume, utilization",
    [("increase", "increase"), ("decrease", "decrease"), ("increase", "unchanged"), ("unchanged", "unchanged")],
)
def test_same_direction_is_not_diverging(volume, utilization):
    assert not analyze_divergence(5.0, volume, 2.0, utilization).is_diverging


def test_missing_inputs_yield_none():
    assert analyze_divergence(None, "increase", -4.0, "decrease") is None
    assert analyze_divergence(0, "increase", -4.0, "decrease") is None
    assert analyze_divergence(12.5, None, -4.0, "decrease") is None


def test_unknown_direction_raises():
    with pytest.raises(ValueError):
        classify_divergence("up", "decrease")
