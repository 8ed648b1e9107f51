"""
Detailed stall cost aggregator.

Sums rate-table lookups across structure, branding, furniture, technical,
labor and extras for the current selection, then applies the booth position
premium once to the aggregate.

The detailed breakdown is for display. The grand total shown to the user
comes from the simplified fabrication-rate path (see fabrication.py).
"""

import logging

from .base import BaseCalculator
from .rate_table import (
    ADDITIONAL_ROOM_RATE,
    DIGITAL_DISPLAY_RATE,
    EXTRA_ITEM_RATE,
    OUTSTATION_SURCHARGE,
    PRINT_AREA_RATE,
    option_key,
)
from .selection import CostBreakdown, StallDesignSelection

logger = logging.getLogger(__name__)


class StallCostCalculator(BaseCalculator):

    def calculate(self, selection: StallDesignSelection) -> CostBreakdown:
        area = self.area_sqm(selection)

        # No booth, no costs. Also keeps cost_per_sqm from dividing by zero.
        if area <= 0:
            return CostBreakdown()

        print_area = self.print_area_sqm(selection)

        breakdown = CostBreakdown(
            structural_costs=self._structural(selection, area),
            branding_costs=self._branding(selection, print_area),
            furniture_costs=self._furniture(selection),
            technical_costs=self._technical(selection, area),
            labor_costs=self._labor(selection, area),
            extras_cost=self.round_cost(len(selection.extras) * EXTRA_ITEM_RATE),
            area_sqm=area,
        )

        subtotal = sum(breakdown.category_totals().values())
        multiplier = self.rates.position_multiplier(selection.booth_position)

        breakdown.subtotal = subtotal
        breakdown.position_multiplier = multiplier
        breakdown.total_cost = self.round_cost(subtotal * multiplier)

        logger.debug(
            "Stall cost: area=%.2f sqm categories=%s subtotal=%d x%.2f total=%d",
            area, breakdown.category_totals(), subtotal, multiplier, breakdown.total_cost,
        )
        return breakdown

    def _structural(self, selection: StallDesignSelection, area: float) -> dict:
        return {
            "wall_cost": self.round_cost(self.rates.rate("walls", selection.wall_type) * area),
            "flooring_cost": self.round_cost(self.rates.rate("flooring", selection.flooring) * area),
            "ceiling_cost": self.round_cost(self.rates.rate("ceiling", selection.ceiling) * area),
            "additional_rooms_cost": self.round_cost(
                len(selection.additional_rooms) * ADDITIONAL_ROOM_RATE
            ),
        }

    def _branding(self, selection: StallDesignSelection, print_area: float) -> dict:
        elements_cost = 0.0
        for element in selection.branding_elements:
            rate, unit = self.rates.branding_rate(element)
            # Printed media scale with the print area, logos are per piece
            elements_cost += rate * (print_area if unit == "sqm" else 1)

        return {
            "print_area_cost": self.round_cost(print_area * PRINT_AREA_RATE),
            "branding_elements_cost": self.round_cost(elements_cost),
            "digital_displays_cost": self.round_cost(
                len(selection.digital_displays) * DIGITAL_DISPLAY_RATE
            ),
        }

    def _furniture(self, selection: StallDesignSelection) -> dict:
        furniture_type = option_key(selection.furniture_type)
        cost = self.round_cost(sum(
            self.rates.furniture_rate(furniture_type, item)
            for item in selection.furniture_items
        ))
        # Same item list, one rate source. Unknown type leaves both at zero.
        return {
            "rental_cost": cost if furniture_type == "rental" else 0,
            "custom_build_cost": cost if furniture_type == "custom_build" else 0,
        }

    def _technical(self, selection: StallDesignSelection, area: float) -> dict:
        lighting = sum(self.rates.rate("lighting", t) * area for t in selection.lighting_type)
        power = selection.power_requirement * self.rates.rate("power", selection.power_type)
        return {
            "lighting_cost": self.round_cost(lighting),
            "power_cost": self.round_cost(power),
        }

    def _labor(self, selection: StallDesignSelection, area: float) -> dict:
        install_per_day = self.rates.rate("labor", "installation") * area
        dismantle_per_day = self.rates.rate("labor", "dismantling") * area
        return {
            "installation_cost": self.round_cost(selection.installation_days * install_per_day),
            "dismantling_cost": self.round_cost(selection.dismantling_days * dismantle_per_day),
            "outstation_charges": OUTSTATION_SURCHARGE if selection.is_outstation else 0,
        }
