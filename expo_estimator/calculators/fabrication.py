"""
Simplified cost path: effective per-sqm fabrication rate + grand total.

The fabrication rate is a second, coarser view of the same stall selection.
Premium wall, flooring and lighting choices raise the rate; fixed-cost add-ons
(displays, branding, furniture, extra install days) are spread over the area.

combine() produces the authoritative total shown to the exhibitor.
"""

import logging
from typing import Optional

from ..config import settings
from .base import BaseCalculator
from .rate_table import option_key
from .selection import StallDesignSelection, parse_number

logger = logging.getLogger(__name__)

SPACE_RATE_PER_SQM = 12000

FABRICATION_BASE_RATE = 8000
FABRICATION_MIN_RATE = 8000
FABRICATION_MAX_RATE = 20000

# Per-sqm uplift over the base package
WALL_UPGRADES = {
    "octonorm": 0,
    "mdf": 1000,
    "laminated_plywood": 5000,
    "modular_aluminum": 7000,
}

FLOORING_UPGRADES = {
    "carpeting": 0,
    "ceramic": 500,
    "vinyl_finish": 400,
    "laminate": 600,
    "raised_wooden": 850,
    "marble": 1200,
}

LIGHTING_UPGRADES = {
    "spot_lights": 300,
    "led_strips": 300,
    "track_lighting": 600,
    "pendant_lights": 1000,
    "ambient_lighting": 1200,
}

# Fixed-cost add-ons, spread over the booth area
DISPLAY_ADDON = 15000
BRANDING_ADDON = 3000
FURNITURE_ADDON = 2500
EXTRA_INSTALL_DAY_ADDON = 5000
INCLUDED_INSTALL_DAYS = 2


class FabricationRateCalculator(BaseCalculator):
    """Effective fabrication cost per sqm for a selection, clamped to the published range."""

    def calculate(self, selection: StallDesignSelection) -> float:
        rate = FABRICATION_BASE_RATE
        rate += WALL_UPGRADES.get(option_key(selection.wall_type), 0)
        rate += FLOORING_UPGRADES.get(option_key(selection.flooring), 0)
        rate += sum(LIGHTING_UPGRADES.get(option_key(t), 0) for t in selection.lighting_type)

        area = self.area_sqm(selection)
        if area > 0:
            fixed = (
                len(selection.digital_displays) * DISPLAY_ADDON
                + len(selection.branding_elements) * BRANDING_ADDON
                + len(selection.furniture_items) * FURNITURE_ADDON
                + max(selection.installation_days - INCLUDED_INSTALL_DAYS, 0) * EXTRA_INSTALL_DAY_ADDON
            )
            rate += fixed / area

        return round(min(max(rate, FABRICATION_MIN_RATE), FABRICATION_MAX_RATE), 2)

    def describe(self, selection: StallDesignSelection) -> str:
        """Short human summary of what pushed the rate above the base package."""
        details = []
        wall = option_key(selection.wall_type)
        if wall and wall != "octonorm":
            details.append(f"{wall.replace('_', ' ')} walls")
        flooring = option_key(selection.flooring)
        if flooring and flooring != "carpeting":
            details.append(f"{flooring.replace('_', ' ')} flooring")
        if selection.lighting_type:
            details.append(f"{', '.join(t.replace('_', ' ') for t in selection.lighting_type)} lighting")
        if selection.digital_displays:
            details.append(f"{len(selection.digital_displays)} displays")
        return ", ".join(details) if details else "Base package"


def _amount(value: Optional[float]) -> float:
    return parse_number(value, 0.0)


def combine(area_sqm: float, fabrication_rate: float, flight_cost: float = 0.0,
            hotel_cost: float = 0.0,
            marketing_cost: Optional[float] = settings.MARKETING_COST_DEFAULT,
            logistics_cost: Optional[float] = settings.LOGISTICS_COST_DEFAULT) -> dict:
    """
    Grand total from area, fabrication rate and the external cost inputs.

    Marketing and logistics default to the configured constants. An explicit
    None, like any other missing or bad input, counts as 0. Percentages are
    shares of the total and are all 0 when the total is 0.
    """
    area = _amount(area_sqm)
    rate = min(max(_amount(fabrication_rate), FABRICATION_MIN_RATE), FABRICATION_MAX_RATE)

    space_cost = round(area * SPACE_RATE_PER_SQM, 2)
    stall_fabrication_cost = round(area * rate, 2)
    travel_hotel_cost = round(_amount(flight_cost) + _amount(hotel_cost), 2)
    marketing = round(_amount(marketing_cost), 2)
    logistics = round(_amount(logistics_cost), 2)

    total_cost = round(
        stall_fabrication_cost + space_cost + travel_hotel_cost + marketing + logistics,
        2,
    )

    breakdown = {
        "space_cost": space_cost,
        "stall_fabrication_cost": stall_fabrication_cost,
        "travel_hotel": travel_hotel_cost,
        "marketing": marketing,
        "logistics": logistics,
    }
    percentages = {
        key: round(value / total_cost * 100.0, 1) if total_cost > 0 else 0.0
        for key, value in breakdown.items()
    }

    return {
        "area_sqm": round(area, 2),
        "fabrication_rate_per_sqm": rate,
        "space_cost": space_cost,
        "stall_fabrication_cost": stall_fabrication_cost,
        "travel_hotel_cost": travel_hotel_cost,
        "marketing_cost": marketing,
        "logistics_cost": logistics,
        "total_cost": total_cost,
        "breakdown": breakdown,
        "percentages": percentages,
    }
