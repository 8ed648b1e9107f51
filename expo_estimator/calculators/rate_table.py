"""
Stall rate table: unit prices for every selectable booth option.

All prices are INR unless otherwise noted. The calculators treat money as
unit-less; the currency only matters for display (see config.CURRENCY).

Every lookup degrades to 0.0 on a miss. New options added to the wizard
before they get a price here must never crash the estimate.
"""

import enum
import logging

logger = logging.getLogger(__name__)

SQFT_TO_SQM = 0.092903

# Per square metre of booth area
WALL_RATES = {
    "octonorm": 8500,
    "mdf": 6000,
    "laminated_plywood": 12000,
    "modular_aluminum": 15000,
}

FLOORING_RATES = {
    "carpeting": 450,
    "raised_wooden": 850,
    "vinyl_finish": 650,
    "laminate": 500,
    "marble": 1200,
    "ceramic": 400,
}

CEILING_RATES = {
    "open": 0,
    "truss_lights": 2500,
    "branding_fascia": 4500,
}

# Any named room (storage, meeting, pantry, reception...) is priced the same
ADDITIONAL_ROOM_RATE = 30000

PRINT_AREA_RATE = 180  # base printing, per sqm of print area

# Branding elements: (rate, unit). "sqm" scales with print area, "piece" is flat.
BRANDING_RATES = {
    "flex_prints": (180, "sqm"),
    "vinyl_graphics": (250, "sqm"),
    "fabric_prints": (320, "sqm"),
    "backlit_panels": (1300, "sqm"),
    "led_walls": (45000, "sqm"),
    "3d_logos": (8500, "piece"),
}

DIGITAL_DISPLAY_RATE = 25000  # flat, per display

FURNITURE_RATES = {
    "rental": {
        "reception_counter": 2500,
        "meeting_table": 1200,
        "chairs": 200,
        "display_shelves": 800,
        "storage_cabinets": 1500,
        "product_display": 2000,
        "brochure_stands": 500,
        "demo_counter": 3000,
    },
    "custom_build": {
        "reception_counter": 15000,
        "meeting_table": 8500,
        "chairs": 2500,
        "display_shelves": 12000,
        "storage_cabinets": 18000,
        "product_display": 25000,
        "brochure_stands": 4500,
        "demo_counter": 35000,
    },
}

# Per square metre of booth area. Piece/metre fixtures are normalised against
# the standard 18 sqm booth (spots and pendants x4, strips and tracks x10 m).
LIGHTING_RATES = {
    "spot_lights": 270,
    "led_strips": 470,
    "track_lighting": 1390,
    "pendant_lights": 400,
    "ambient_lighting": 3500,
}

POWER_RATES = {
    "1_phase": 800,  # per kW
    "3_phase": 1200,
}

# Per sqm of booth area, per day on site
LABOR_RATES = {
    "installation": 450,
    "dismantling": 250,
}

OUTSTATION_SURCHARGE = 25000  # flat, crew travelling from another city
EXTRA_ITEM_RATE = 5000

POSITION_MULTIPLIERS = {
    "inline": 1.0,
    "corner": 1.10,
    "island": 1.25,
}

_CATEGORIES = {
    "walls": WALL_RATES,
    "flooring": FLOORING_RATES,
    "ceiling": CEILING_RATES,
    "lighting": LIGHTING_RATES,
    "power": POWER_RATES,
    "labor": LABOR_RATES,
}


def option_key(value) -> str:
    """Normalise an enum member or raw string into a rate-table key."""
    if value is None:
        return ""
    if isinstance(value, enum.Enum):
        value = value.value
    return str(value).strip().lower()


class RateTable:
    """
    Read-only view over the module-level rate dicts.

    Calculators go through this class so a miss is handled in one place.
    """

    def rate(self, category: str, option) -> float:
        """Unit price for an option in a category. 0.0 when either is unknown."""
        rates = _CATEGORIES.get(category)
        if rates is None:
            logger.debug("Unknown rate category %r", category)
            return 0.0
        return float(rates.get(option_key(option), 0.0))

    def furniture_rate(self, furniture_type, item) -> float:
        """Per-item price from the rental or custom-build list."""
        rates = FURNITURE_RATES.get(option_key(furniture_type), {})
        return float(rates.get(option_key(item), 0.0))

    def branding_rate(self, element) -> tuple:
        """Returns (rate, unit). Unknown elements price at (0.0, 'piece')."""
        rate, unit = BRANDING_RATES.get(option_key(element), (0.0, "piece"))
        return float(rate), unit

    def position_multiplier(self, position) -> float:
        """Premium multiplier for booth position. Unknown positions are treated as inline."""
        return POSITION_MULTIPLIERS.get(option_key(position), 1.0)

    def as_dict(self) -> dict:
        """Full table for the /rates endpoint."""
        return {
            "walls_per_sqm": dict(WALL_RATES),
            "flooring_per_sqm": dict(FLOORING_RATES),
            "ceiling_per_sqm": dict(CEILING_RATES),
            "additional_room": ADDITIONAL_ROOM_RATE,
            "print_area_per_sqm": PRINT_AREA_RATE,
            "branding": {k: {"rate": r, "unit": u} for k, (r, u) in BRANDING_RATES.items()},
            "digital_display": DIGITAL_DISPLAY_RATE,
            "furniture": {k: dict(v) for k, v in FURNITURE_RATES.items()},
            "lighting_per_sqm": dict(LIGHTING_RATES),
            "power_per_kw": dict(POWER_RATES),
            "labor_per_sqm_per_day": dict(LABOR_RATES),
            "outstation_surcharge": OUTSTATION_SURCHARGE,
            "extra_item": EXTRA_ITEM_RATE,
            "position_multipliers": dict(POSITION_MULTIPLIERS),
        }
