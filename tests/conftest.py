import json

import pytest

from orbit_analytics.financials import CostItem, ProjectionInputs


@pytest.fixture
def flag_payload():
    """
    Deterministic flag analytics blob, shaped like the RPC response.
    Triggers one pattern of every kind.
    """
    return {
        "summary": {
            "total_cases": 100,
            "flagged_cases": 30,
            "total_flags": 60,
            "flag_rate": 30.0,
            "avg_flags_per_case": 2.0,
        },
        "weekly_trend": [
            {"week": "2025-03-03", "threshold": 10, "delay": 2, "total": 12},
            {"week": "2025-03-10", "threshold": 10, "delay": 2, "total": 12},
            {"week": "2025-03-17", "threshold": 5, "delay": 4, "total": 9},
            {"week": "2025-03-24", "threshold": 5, "delay": 4, "total": 9},
        ],
        "day_of_week_heatmap": [
            {"day": "Monday", "day_num": 1, "fcots": 10, "timing": 2},
            {"day": "Tuesday", "day_num": 2, "timing": 4},
            {"day": "Wednesday", "day_num": 3, "delay": 4},
            {"day": "Thursday", "day_num": 4, "quality": 4},
            {"day": "Friday", "day_num": 5, "turnover": 6},
        ],
        "surgeon_flags": [
            {"name": "Dr. Adams", "cases": 14, "flags": 10, "rate": 70.0, "top_flag": "Late Start"},
            {"name": "Dr. Brown", "cases": 40, "flags": 8, "rate": 20.0, "top_flag": "Long Turnover"},
        ],
        "room_flags": [
            {"room": "OR 3", "cases": 20, "flags": 30, "rate": 60.0, "top_issue": "Turnover"},
            {"room": "OR 1", "cases": 50, "flags": 20, "rate": 25.0, "top_issue": "Timing"},
        ],
        "delay_type_breakdown": [
            {"name": "Equipment Failure", "count": 3},
            {"name": "Patient Late", "count": 5},
        ],
    }


@pytest.fixture
def cost_items():
    return [
        CostItem(800, "Implants"),
        CostItem(200, "Supplies"),
        CostItem(100, "Rebate", "credit"),
    ]


@pytest.fixture
def projection_inputs(cost_items):
    """
    90 min surgeon median at $1200/h, $5000 default reimbursement.
    """
    return ProjectionInputs(
        surgeon_median_duration=90,
        facility_median_duration=100,
        scheduled_duration=120,
        default_reimbursement=5000,
        or_hourly_rate=1200,
        cost_items=cost_items,
    )


@pytest.fixture
def report_payload(flag_payload):
    return {
        "weekly_volume": [
            {"week": "2025-03-03", "count": 10},
            {"week": "2025-03-10", "count": 12},
            {"week": "2025-03-17", "count": 14},
            {"week": "2025-03-24", "count": 16},
        ],
        "volume": {"delta": 12.5, "direction": "increase"},
        "utilization": {"delta": -4.0, "direction": "decrease"},
        "flag_analytics": flag_payload,
        "case_financials": {
            "surgeon_name": "Dr. Smith",
            "inputs": {"surgeon_median_duration": 90, "default_reimbursement": 5000},
            "cost_items": [
                {"amount": 800, "category_name": "Implants", "category_type": "debit"},
                {"amount": 200, "category_name": "Supplies", "category_type": "debit"},
            ],
            "actual": None,
            "surgeon_benchmark": {"median_margin": 40.0, "case_count": 12},
            "full_day": {
                "surgeon_id": "s-1",
                "rows": [
                    {"case_id": "c-1", "case_number": "1001", "procedure_name": "Knee",
                     "status": "scheduled", "revenue": 5000, "total_costs": 3000, "profit": 2000},
                    {"case_id": "c-2", "case_number": "1002", "procedure_name": "Hip",
                     "status": "scheduled", "revenue": 3000, "total_costs": 2000, "profit": 1000},
                ],
            },
        },
        "holidays": {"year": 2026, "start": "2026-01-01", "end": "2026-12-31"},
        "milestones": [
            {"name": "Anesthesia Start", "pair_group": "anesthesia"},
            {"name": "Incision", "pair_group": "surgery"},
            {"name": "Closing", "pair_group": "surgery"},
            {"name": "Anesthesia End", "pair_group": "anesthesia"},
        ],
    }


@pytest.fixture
def report_payload_file(tmp_path, report_payload):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(report_payload), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "facility:\n"
        "  name: Main OR\n"
        "  or_hourly_rate: 1200\n"
        f"output_dir: {(tmp_path / 'runs').as_posix()}\n",
        encoding="utf-8",
    )
    return path
