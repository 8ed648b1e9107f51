"""
Estimate assembly.

Runs both stall cost paths over one selection and combines them with the
travel and fixed inputs. Pure math, no I/O.

Input: StallDesignSelection + flight/hotel/marketing/logistics amounts
Output: Estimate dict (stored as Quote.outputs_json, rendered into the PDF)
"""

from datetime import datetime

from .calculators.fabrication import FabricationRateCalculator, combine
from .calculators.selection import StallDesignSelection
from .calculators.stall_cost import StallCostCalculator
from .config import settings


class PricingEngine:
    """
    The simplified fabrication-rate path gives the grand total.
    The detailed stall breakdown is attached for display only.
    """

    BULK_STALL_THRESHOLD = 1000000

    def __init__(self):
        self.stall_calculator = StallCostCalculator()
        self.rate_calculator = FabricationRateCalculator()

    def build_estimate(self, selection: StallDesignSelection, flight_cost: float = 0.0,
                       hotel_cost: float = 0.0, marketing_cost: float = None,
                       logistics_cost: float = None, event: dict = None) -> dict:
        """
        Full recomputation from the current inputs. Nothing is carried over
        between calls.

        marketing_cost / logistics_cost default to the configured constants
        when not given. Pass 0 explicitly to leave them out.
        """
        if marketing_cost is None:
            marketing_cost = settings.MARKETING_COST_DEFAULT
        if logistics_cost is None:
            logistics_cost = settings.LOGISTICS_COST_DEFAULT

        stall_breakdown = self.stall_calculator.calculate(selection)
        fabrication_rate = self.rate_calculator.calculate(selection)
        area_sqm = self.rate_calculator.area_sqm(selection)

        simplified = combine(
            area_sqm=area_sqm,
            fabrication_rate=fabrication_rate,
            flight_cost=flight_cost,
            hotel_cost=hotel_cost,
            marketing_cost=marketing_cost,
            logistics_cost=logistics_cost,
        )

        return {
            "event": dict(event or {}),
            "stall": selection.to_dict(),
            "stall_breakdown": stall_breakdown.to_dict(),
            "simplified": simplified,
            "fabrication_rate": fabrication_rate,
            "fabrication_details": self.rate_calculator.describe(selection),
            "total": simplified["total_cost"],
            "currency": settings.CURRENCY,
            "assumptions": self._build_assumptions(selection, simplified, stall_breakdown),
            "exclusions": self._build_exclusions(selection),
            "created_at": datetime.utcnow().isoformat(),
        }

    def _build_assumptions(self, selection, simplified: dict, stall_breakdown) -> list:
        assumptions = [
            f"Floor space priced at a flat rate per sqm; fabrication at "
            f"{settings.CURRENCY_SYMBOL} {simplified['fabrication_rate_per_sqm']:,.0f} per sqm "
            f"based on the selected materials.",
            "Detailed stall breakdown is indicative; the project total uses the per-sqm fabrication rate.",
        ]

        if simplified["area_sqm"] <= 0:
            assumptions.append("No booth area entered, stall and space costs are zero.")

        if simplified["travel_hotel_cost"] == 0:
            assumptions.append("No flights or hotel selected, travel is not included in the total.")

        multiplier = stall_breakdown.position_multiplier
        if multiplier > 1.0:
            assumptions.append(
                f"{str(getattr(selection.booth_position, 'value', selection.booth_position)).title()} "
                f"position premium of {round((multiplier - 1) * 100)}% applied to the stall build."
            )

        if selection.is_outstation:
            assumptions.append("Outstation crew surcharge included for installation and dismantling.")

        if stall_breakdown.total_cost > self.BULK_STALL_THRESHOLD:
            assumptions.append(
                f"Stall build exceeds {settings.CURRENCY_SYMBOL} {self.BULK_STALL_THRESHOLD:,}, "
                f"request competing fabricator quotes before committing."
            )

        return assumptions

    def _build_exclusions(self, selection) -> list:
        exclusions = [
            "Organiser registration and exhibitor badge fees",
            "Taxes (GST) unless stated otherwise",
        ]
        if getattr(selection.booth_type, "value", selection.booth_type) == "raw_space":
            exclusions.append("Venue-mandated structural approvals for raw space builds")
        if not selection.is_outstation:
            exclusions.append("Crew travel and lodging for outstation installation")
        return exclusions
