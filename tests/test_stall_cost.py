"""
Stall cost tests — rate table, selection parsing and the detailed aggregator.

Tests:
1-5.   Rate table lookups
6-11.  StallDesignSelection parsing
12-19. Aggregator concrete scenarios
20-24. Position premium
25-32. Aggregator properties (zero area, idempotence, monotonicity, unknown options, bad input)

Pure math, no database.
"""

import pytest

from expo_estimator.calculators.rate_table import (
    ADDITIONAL_ROOM_RATE,
    DIGITAL_DISPLAY_RATE,
    EXTRA_ITEM_RATE,
    OUTSTATION_SURCHARGE,
    RateTable,
    option_key,
)
from expo_estimator.calculators.selection import (
    AreaUnit,
    BoothPosition,
    CostBreakdown,
    FurnitureType,
    StallDesignSelection,
    WallType,
)
from expo_estimator.calculators.stall_cost import StallCostCalculator


def _selection(**fields):
    return StallDesignSelection.from_fields({"area": 20, **fields})


def _calculate(**fields) -> CostBreakdown:
    return StallCostCalculator().calculate(_selection(**fields))


# ============================================================
# Rate table
# ============================================================

def test_rate_table_known_options():
    rates = RateTable()
    assert rates.rate("walls", "octonorm") == 8500
    assert rates.rate("flooring", "carpeting") == 450
    assert rates.rate("ceiling", "branding_fascia") == 4500
    assert rates.rate("power", "3_phase") == 1200


def test_rate_table_accepts_enum_members():
    rates = RateTable()
    assert rates.rate("walls", WallType.MODULAR_ALUMINUM) == 15000
    assert option_key(WallType.MDF) == "mdf"


def test_rate_table_misses_price_at_zero():
    rates = RateTable()
    assert rates.rate("walls", "unknown_material") == 0.0
    assert rates.rate("no_such_category", "octonorm") == 0.0
    assert rates.furniture_rate("lease", "chairs") == 0.0
    assert rates.branding_rate("hologram") == (0.0, "piece")


def test_rate_table_position_multipliers():
    rates = RateTable()
    assert rates.position_multiplier("inline") == 1.0
    assert rates.position_multiplier(BoothPosition.CORNER) == 1.10
    assert rates.position_multiplier("island") == 1.25
    assert rates.position_multiplier("rooftop") == 1.0


def test_rate_table_as_dict_lists_every_category():
    table = RateTable().as_dict()
    for key in ("walls_per_sqm", "flooring_per_sqm", "ceiling_per_sqm", "branding",
                "furniture", "lighting_per_sqm", "power_per_kw", "labor_per_sqm_per_day",
                "position_multipliers"):
        assert key in table
    assert table["branding"]["3d_logos"] == {"rate": 8500, "unit": "piece"}


# ============================================================
# Selection parsing
# ============================================================

def test_selection_defaults():
    s = StallDesignSelection()
    assert s.area == 0.0
    assert s.area_unit == AreaUnit.SQM
    assert s.wall_type == WallType.OCTONORM
    assert s.power_requirement == 5.0
    assert s.installation_days == 3
    assert s.dismantling_days == 1
    assert s.is_outstation is False


def test_selection_accepts_camel_case_keys():
    s = StallDesignSelection.from_fields({
        "area": "18",
        "wallType": "MDF",
        "boothPosition": "corner",
        "furnitureItems": ["chairs"],
        "isOutstation": "true",
    })
    assert s.area == 18.0
    assert s.wall_type == WallType.MDF
    assert s.booth_position == BoothPosition.CORNER
    assert s.furniture_items == ("chairs",)
    assert s.is_outstation is True


def test_selection_keeps_unknown_choice_as_string():
    s = StallDesignSelection.from_fields({"wall_type": "bamboo"})
    assert s.wall_type == "bamboo"
    assert s.to_dict()["wall_type"] == "bamboo"


def test_selection_bad_numbers_fall_back_to_defaults():
    s = StallDesignSelection.from_fields({
        "area": "twenty",
        "power_requirement": None,
        "installation_days": "-2",
        "print_area": float("nan"),
    })
    assert s.area == 0.0
    assert s.power_requirement == 5.0
    assert s.installation_days == 0  # negatives clamp to zero
    assert s.print_area == 0.0


def test_selection_sets_are_deduplicated():
    s = StallDesignSelection.from_fields({"extras": ["plants", "plants", "", "tv"]})
    assert s.extras == ("plants", "tv")


def test_selection_replace_ignores_unknown_fields():
    s = StallDesignSelection().replace(area=10, colour="red")
    assert s.area == 10.0
    assert not hasattr(s, "colour")


# ============================================================
# Aggregator concrete scenarios
# ============================================================

def test_structural_costs_for_20_sqm_octonorm_carpeting():
    b = _calculate(wall_type="octonorm", flooring="carpeting", booth_position="inline")
    assert b.structural_costs["wall_cost"] == 170000
    assert b.structural_costs["flooring_cost"] == 9000
    assert b.structural_costs["ceiling_cost"] == 0


def test_default_20_sqm_booth_total():
    """Walls 170000 + floor 9000 + power 4000 + install 27000 + dismantle 5000."""
    b = _calculate()
    assert b.technical_costs["power_cost"] == 4000
    assert b.labor_costs["installation_cost"] == 27000
    assert b.labor_costs["dismantling_cost"] == 5000
    assert b.subtotal == 215000
    assert b.total_cost == 215000
    assert b.cost_per_sqm == 10750.0


def test_additional_rooms_are_flat_per_room():
    b = _calculate(additional_rooms=["storage", "meeting"])
    assert b.structural_costs["additional_rooms_cost"] == 2 * ADDITIONAL_ROOM_RATE


def test_branding_scales_with_print_area():
    b = _calculate(print_area=10, branding_elements=["flex_prints", "3d_logos"], digital_displays=["tv1"])
    assert b.branding_costs["print_area_cost"] == 1800
    # flex 180 x 10 sqm + one 3D logo at 8500
    assert b.branding_costs["branding_elements_cost"] == 1800 + 8500
    assert b.branding_costs["digital_displays_cost"] == DIGITAL_DISPLAY_RATE


def test_rental_and_custom_build_are_priced_separately():
    items = ["reception_counter", "chairs"]
    rental = _calculate(furniture_type="rental", furniture_items=items)
    custom = _calculate(furniture_type="custom_build", furniture_items=items)

    assert rental.furniture_costs == {"rental_cost": 2700, "custom_build_cost": 0}
    assert custom.furniture_costs == {"rental_cost": 0, "custom_build_cost": 17500}


def test_unknown_furniture_type_prices_nothing():
    b = _calculate(furniture_type="borrowed", furniture_items=["chairs"])
    assert b.furniture_costs == {"rental_cost": 0, "custom_build_cost": 0}


def test_outstation_adds_exactly_the_surcharge():
    base = _calculate(installation_days=3, dismantling_days=1, is_outstation=False)
    away = _calculate(installation_days=3, dismantling_days=1, is_outstation=True)
    assert away.labor_costs["outstation_charges"] == OUTSTATION_SURCHARGE
    assert away.total_cost - base.total_cost == OUTSTATION_SURCHARGE


def test_sqft_area_is_converted():
    b = StallCostCalculator().calculate(
        StallDesignSelection.from_fields({"area": 100, "area_unit": "sqft"})
    )
    assert b.area_sqm == pytest.approx(9.2903)
    assert b.structural_costs["wall_cost"] == round(8500 * 100 * 0.092903)


# ============================================================
# Position premium
# ============================================================

@pytest.mark.parametrize("position,multiplier", [("corner", 1.10), ("island", 1.25)])
def test_position_premium_applies_to_total(position, multiplier):
    fields = {
        "wall_type": "laminated_plywood",
        "flooring": "raised_wooden",
        "lighting_type": ["spot_lights", "track_lighting"],
        "furniture_items": ["chairs", "demo_counter"],
        "extras": ["plants"],
        "print_area": 7.5,
        "branding_elements": ["vinyl_graphics"],
    }
    inline = _calculate(booth_position="inline", **fields)
    premium = _calculate(booth_position=position, **fields)
    assert premium.total_cost == round(inline.total_cost * multiplier)


def test_island_structural_subtotal_scales():
    inline = _calculate(booth_position="inline")
    island = _calculate(booth_position="island")
    assert inline.category_totals()["structural"] == 179000
    assert island.category_totals(adjusted=True)["structural"] == round(179000 * 1.25)


def test_premium_is_applied_once():
    b = _calculate(booth_position="island")
    assert b.subtotal == 215000
    assert b.position_multiplier == 1.25
    assert b.total_cost == 268750
    assert b.position_premium == 53750


def test_unknown_position_is_inline():
    assert _calculate(booth_position="rooftop").total_cost == _calculate().total_cost


def test_breakdown_to_dict_shape():
    d = _calculate(booth_position="corner").to_dict()
    assert d["category_totals"]["structural"] == 179000
    assert d["position_premium"] == d["total_cost"] - d["subtotal"]
    assert set(d) >= {"structural_costs", "branding_costs", "furniture_costs",
                      "technical_costs", "labor_costs", "extras_cost", "cost_per_sqm"}


# ============================================================
# Properties
# ============================================================

@pytest.mark.parametrize("fields", [
    {},
    {"is_outstation": True, "extras": ["plants"], "booth_position": "island"},
    {"additional_rooms": ["storage"], "digital_displays": ["tv"], "power_requirement": 20},
])
def test_zero_area_costs_nothing(fields):
    b = StallCostCalculator().calculate(StallDesignSelection.from_fields({"area": 0, **fields}))
    assert all(v == 0 for v in b.category_totals().values())
    assert b.total_cost == 0
    assert b.cost_per_sqm is None


def test_aggregator_is_idempotent():
    selection = _selection(wall_type="mdf", lighting_type=["led_strips"], extras=["tv"])
    calc = StallCostCalculator()
    assert calc.calculate(selection) == calc.calculate(selection)


@pytest.mark.parametrize("field,items", [
    ("furniture_items", ["chairs", "meeting_table", "unknown_item"]),
    ("branding_elements", ["flex_prints", "led_walls", "3d_logos"]),
    ("lighting_type", ["spot_lights", "ambient_lighting", "lasers"]),
    ("extras", ["plants", "coffee_machine", "tv"]),
])
def test_adding_items_never_lowers_total(field, items):
    previous = _calculate(print_area=5, booth_position="corner").total_cost
    for n in range(1, len(items) + 1):
        total = _calculate(print_area=5, booth_position="corner", **{field: items[:n]}).total_cost
        assert total >= previous
        previous = total


def test_unknown_wall_type_prices_at_zero():
    b = _calculate(wall_type="unknown_material")
    assert b.structural_costs["wall_cost"] == 0
    assert b.structural_costs["flooring_cost"] == 9000


def test_extras_are_flat_per_item():
    b = _calculate(extras=["plants", "tv"])
    assert b.extras_cost == 2 * EXTRA_ITEM_RATE


def test_furniture_type_enum_and_string_agree():
    a = _calculate(furniture_type=FurnitureType.CUSTOM_BUILD, furniture_items=["chairs"])
    b = _calculate(furniture_type="Custom_Build", furniture_items=["chairs"])
    assert a.furniture_costs == b.furniture_costs


@pytest.mark.parametrize("key", [
    "additional_rooms", "additionalRooms", "branding_elements", "digital_displays",
    "furniture_items", "lighting_type", "extras",
])
@pytest.mark.parametrize("value", [3, 2.5, True, {"plants": 1}])
def test_scalar_in_set_field_is_an_empty_selection(key, value):
    b = StallCostCalculator().calculate(StallDesignSelection.from_fields({"area": 20, key: value}))
    assert b.total_cost == _calculate().total_cost


def test_huge_area_is_capped_not_overflowing():
    s = StallDesignSelection.from_fields({"area": 1e305, "wallType": "modular_aluminum"})
    assert s.area == 1_000_000_000
    b = StallCostCalculator().calculate(s)
    assert b.structural_costs["wall_cost"] == 15000 * 1_000_000_000


def test_non_finite_amount_rounds_to_zero():
    calc = StallCostCalculator()
    assert calc.round_cost(float("inf")) == 0
    assert calc.round_cost(float("nan")) == 0
    assert calc.round_cost(1234.5) == 1234  # banker's rounding, as round()
