"""
Pricing engine tests — estimate assembly over both stall cost paths.

Tests:
1-4.  Estimate shape and the authoritative total
5-9.  Assumptions and exclusions
"""

from expo_estimator.calculators.selection import StallDesignSelection
from expo_estimator.pricing_engine import PricingEngine


def _estimate(flight_cost=0.0, hotel_cost=0.0, marketing_cost=None, logistics_cost=None, **fields):
    selection = StallDesignSelection.from_fields({"area": 20, **fields})
    return PricingEngine().build_estimate(
        selection,
        flight_cost=flight_cost,
        hotel_cost=hotel_cost,
        marketing_cost=marketing_cost,
        logistics_cost=logistics_cost,
        event={"exhibition_name": "India Mobile Congress"},
    )


# ============================================================
# Shape and total
# ============================================================

def test_estimate_has_required_fields():
    estimate = _estimate()
    for key in ("event", "stall", "stall_breakdown", "simplified", "fabrication_rate",
                "fabrication_details", "total", "currency", "assumptions", "exclusions", "created_at"):
        assert key in estimate
    assert estimate["currency"] == "INR"
    assert estimate["event"]["exhibition_name"] == "India Mobile Congress"


def test_total_comes_from_simplified_path():
    estimate = _estimate()
    assert estimate["total"] == estimate["simplified"]["total_cost"]
    # The detailed breakdown is carried alongside, not added in
    assert estimate["stall_breakdown"]["total_cost"] == 215000
    assert estimate["total"] == 445000


def test_fixed_costs_default_from_settings():
    estimate = _estimate()
    assert estimate["simplified"]["marketing_cost"] == 25000
    assert estimate["simplified"]["logistics_cost"] == 15000

    estimate = _estimate(marketing_cost=0, logistics_cost=0)
    assert estimate["total"] == 405000


def test_travel_inputs_flow_into_total():
    base = _estimate()["total"]
    with_travel = _estimate(flight_cost=8400, hotel_cost=9600)["total"]
    assert with_travel - base == 18000


# ============================================================
# Assumptions and exclusions
# ============================================================

def test_no_travel_assumption():
    assert any("No flights or hotel" in a for a in _estimate()["assumptions"])
    assert not any("No flights or hotel" in a for a in _estimate(flight_cost=4200)["assumptions"])


def test_zero_area_assumption():
    estimate = _estimate(area=0)
    assert any("No booth area" in a for a in estimate["assumptions"])
    assert estimate["stall_breakdown"]["total_cost"] == 0


def test_position_premium_assumption():
    assumptions = _estimate(booth_position="island")["assumptions"]
    assert any("Island position premium of 25%" in a for a in assumptions)


def test_outstation_changes_exclusions():
    local = _estimate()
    away = _estimate(is_outstation=True)
    assert any("outstation" in e.lower() for e in local["exclusions"])
    assert not any("outstation" in e.lower() for e in away["exclusions"])
    assert any("Outstation" in a for a in away["assumptions"])


def test_raw_space_exclusion():
    exclusions = _estimate(booth_type="raw_space")["exclusions"]
    assert any("raw space" in e for e in exclusions)
