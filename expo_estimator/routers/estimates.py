"""
Stateless estimate endpoints.

GET  /api/rates               — rate table, fabrication upgrades and defaults
POST /api/estimates/calculate — stall fields + travel inputs → estimate
"""

from fastapi import APIRouter

from .. import schemas
from ..calculators import fabrication
from ..calculators.rate_table import RateTable
from ..calculators.selection import StallDesignSelection
from ..config import settings
from ..pricing_engine import PricingEngine

router = APIRouter(tags=["estimates"])

# Stateless, safe to share across requests
engine = PricingEngine()


@router.get("/rates")
def get_rates():
    return {
        "currency": settings.CURRENCY,
        "stall": RateTable().as_dict(),
        "fabrication": {
            "space_rate_per_sqm": fabrication.SPACE_RATE_PER_SQM,
            "base_rate_per_sqm": fabrication.FABRICATION_BASE_RATE,
            "min_rate_per_sqm": fabrication.FABRICATION_MIN_RATE,
            "max_rate_per_sqm": fabrication.FABRICATION_MAX_RATE,
            "wall_upgrades": dict(fabrication.WALL_UPGRADES),
            "flooring_upgrades": dict(fabrication.FLOORING_UPGRADES),
            "lighting_upgrades": dict(fabrication.LIGHTING_UPGRADES),
            "display_addon": fabrication.DISPLAY_ADDON,
            "branding_addon": fabrication.BRANDING_ADDON,
            "furniture_addon": fabrication.FURNITURE_ADDON,
            "extra_install_day_addon": fabrication.EXTRA_INSTALL_DAY_ADDON,
            "included_install_days": fabrication.INCLUDED_INSTALL_DAYS,
        },
        "defaults": {
            "stall": StallDesignSelection().to_dict(),
            "marketing_cost": settings.MARKETING_COST_DEFAULT,
            "logistics_cost": settings.LOGISTICS_COST_DEFAULT,
        },
    }


@router.post("/estimates/calculate")
def calculate_estimate(request: schemas.EstimateRequest):
    selection = StallDesignSelection.from_fields(request.stall)
    event = request.event.model_dump(exclude_none=True) if request.event else {}
    return engine.build_estimate(
        selection,
        flight_cost=request.flight_cost,
        hotel_cost=request.hotel_cost,
        marketing_cost=request.marketing_cost,
        logistics_cost=request.logistics_cost,
        event=event,
    )
