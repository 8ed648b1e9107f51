"""
Typed booth configuration and the cost breakdown derived from it.

StallDesignSelection is the wizard's stall-design step as a record. Choice
fields hold an enum member when the value is recognised and the raw string
otherwise, so an option the rate table has never heard of prices at zero
instead of failing validation.
"""

import dataclasses
import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


class AreaUnit(str, enum.Enum):
    SQM = "sqm"
    SQFT = "sqft"


class BoothType(str, enum.Enum):
    SHELL_SCHEME = "shell_scheme"
    RAW_SPACE = "raw_space"


class BoothPosition(str, enum.Enum):
    INLINE = "inline"
    CORNER = "corner"
    ISLAND = "island"


class WallType(str, enum.Enum):
    OCTONORM = "octonorm"
    MDF = "mdf"
    LAMINATED_PLYWOOD = "laminated_plywood"
    MODULAR_ALUMINUM = "modular_aluminum"


class Flooring(str, enum.Enum):
    CARPETING = "carpeting"
    RAISED_WOODEN = "raised_wooden"
    VINYL_FINISH = "vinyl_finish"
    LAMINATE = "laminate"
    MARBLE = "marble"
    CERAMIC = "ceramic"


class Ceiling(str, enum.Enum):
    OPEN = "open"
    TRUSS_LIGHTS = "truss_lights"
    BRANDING_FASCIA = "branding_fascia"


class FurnitureType(str, enum.Enum):
    RENTAL = "rental"
    CUSTOM_BUILD = "custom_build"


class PowerType(str, enum.Enum):
    SINGLE_PHASE = "1_phase"
    THREE_PHASE = "3_phase"


# field name -> enum class
CHOICE_FIELDS = {
    "area_unit": AreaUnit,
    "booth_type": BoothType,
    "booth_position": BoothPosition,
    "wall_type": WallType,
    "flooring": Flooring,
    "ceiling": Ceiling,
    "furniture_type": FurnitureType,
    "power_type": PowerType,
}

SET_FIELDS = (
    "additional_rooms",
    "branding_elements",
    "digital_displays",
    "furniture_items",
    "lighting_type",
    "extras",
)

NUMBER_FIELDS = ("area", "print_area", "power_requirement")
INT_FIELDS = ("installation_days", "dismantling_days")

# Wizard forms post camelCase keys
_CAMEL_ALIASES = {
    "areaUnit": "area_unit",
    "boothType": "booth_type",
    "boothPosition": "booth_position",
    "wallType": "wall_type",
    "additionalRooms": "additional_rooms",
    "printArea": "print_area",
    "brandingElements": "branding_elements",
    "digitalDisplays": "digital_displays",
    "furnitureType": "furniture_type",
    "furnitureItems": "furniture_items",
    "lightingType": "lighting_type",
    "powerRequirement": "power_requirement",
    "powerType": "power_type",
    "installationDays": "installation_days",
    "dismantlingDays": "dismantling_days",
    "isOutstation": "is_outstation",
}


def parse_choice(enum_cls, value, default):
    """Enum member for a known value, the stripped raw string for an unknown one."""
    if value is None or value == "":
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, enum.Enum):
        value = value.value
    text = str(value).strip()
    try:
        return enum_cls(text.lower())
    except ValueError:
        return text


# Upper bound for any numeric form input, keeps area x rate products finite
MAX_INPUT_NUMBER = 1_000_000_000


def parse_number(value, default: float = 0.0) -> float:
    """Non-negative finite float, capped at MAX_INPUT_NUMBER. Anything else falls back to the default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).strip())
    except (ValueError, TypeError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return min(max(number, 0.0), MAX_INPUT_NUMBER)


def parse_int(value, default: int = 0) -> int:
    return int(parse_number(value, float(default)))


def parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "on")
    return bool(value)


def parse_set(value) -> tuple:
    """De-duplicated tuple of non-empty strings, first-seen order kept."""
    if isinstance(value, (str, enum.Enum)):
        value = [value]
    elif not isinstance(value, (list, tuple, set, frozenset)):
        # None, a bare number or a mapping is not a selection
        return ()
    seen = []
    for item in value:
        if item is None:
            continue
        if isinstance(item, enum.Enum):
            item = item.value
        text = str(item).strip()
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


def normalise_field_names(fields: dict) -> dict:
    """camelCase form keys to field names. Other keys pass through unchanged."""
    return {_CAMEL_ALIASES.get(key, key): value for key, value in (fields or {}).items()}


def _value(choice):
    return choice.value if isinstance(choice, enum.Enum) else choice


@dataclass(frozen=True)
class StallDesignSelection:
    area: float = 0.0
    area_unit: object = AreaUnit.SQM
    booth_type: object = BoothType.SHELL_SCHEME
    booth_position: object = BoothPosition.INLINE
    wall_type: object = WallType.OCTONORM
    flooring: object = Flooring.CARPETING
    ceiling: object = Ceiling.OPEN
    additional_rooms: tuple = ()
    print_area: float = 0.0
    branding_elements: tuple = ()
    digital_displays: tuple = ()
    furniture_type: object = FurnitureType.RENTAL
    furniture_items: tuple = ()
    lighting_type: tuple = ()
    power_requirement: float = 5.0  # kW
    power_type: object = PowerType.SINGLE_PHASE
    installation_days: int = 3
    dismantling_days: int = 1
    is_outstation: bool = False
    extras: tuple = ()

    @classmethod
    def from_fields(cls, fields: Optional[dict]) -> "StallDesignSelection":
        """
        Build a selection from loose form input.

        Accepts snake_case or camelCase keys. Missing keys take the defaults,
        unknown keys are ignored, bad numbers become the default.
        """
        defaults = cls()
        if not fields:
            return defaults
        return defaults.replace(**normalise_field_names(fields))

    def replace(self, **changes) -> "StallDesignSelection":
        """New selection with the given fields coerced and swapped in."""
        known = {f.name for f in dataclasses.fields(self)}
        coerced = {}
        for name, value in changes.items():
            if name not in known:
                logger.debug("Ignoring unknown stall field %r", name)
                continue
            default = getattr(StallDesignSelection, name, None)
            if name in CHOICE_FIELDS:
                coerced[name] = parse_choice(CHOICE_FIELDS[name], value, default)
            elif name in SET_FIELDS:
                coerced[name] = parse_set(value)
            elif name in NUMBER_FIELDS:
                coerced[name] = parse_number(value, default)
            elif name in INT_FIELDS:
                coerced[name] = parse_int(value, default)
            elif name == "is_outstation":
                coerced[name] = parse_bool(value)
        return dataclasses.replace(self, **coerced)

    def to_dict(self) -> dict:
        out = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.name in SET_FIELDS:
                out[f.name] = list(value)
            else:
                out[f.name] = _value(value)
        return out


def _empty_category(*keys) -> dict:
    return {k: 0 for k in keys}


@dataclass
class CostBreakdown:
    """Result of StallCostCalculator.calculate. Derived, never stored as state."""

    structural_costs: dict = field(default_factory=lambda: _empty_category(
        "wall_cost", "flooring_cost", "ceiling_cost", "additional_rooms_cost"))
    branding_costs: dict = field(default_factory=lambda: _empty_category(
        "print_area_cost", "branding_elements_cost", "digital_displays_cost"))
    furniture_costs: dict = field(default_factory=lambda: _empty_category(
        "rental_cost", "custom_build_cost"))
    technical_costs: dict = field(default_factory=lambda: _empty_category(
        "lighting_cost", "power_cost"))
    labor_costs: dict = field(default_factory=lambda: _empty_category(
        "installation_cost", "dismantling_cost", "outstation_charges"))
    extras_cost: int = 0
    subtotal: int = 0
    position_multiplier: float = 1.0
    total_cost: int = 0
    area_sqm: float = 0.0

    @property
    def position_premium(self) -> int:
        return self.total_cost - self.subtotal

    @property
    def cost_per_sqm(self) -> Optional[float]:
        """None when there is no area to divide by."""
        if self.area_sqm <= 0:
            return None
        return round(self.total_cost / self.area_sqm, 2)

    def category_totals(self, adjusted: bool = False) -> dict:
        """
        Per-category sums. With adjusted=True each category is scaled by the
        position multiplier for display; the authoritative premium is still
        the single one applied to total_cost.
        """
        totals = {
            "structural": sum(self.structural_costs.values()),
            "branding": sum(self.branding_costs.values()),
            "furniture": sum(self.furniture_costs.values()),
            "technical": sum(self.technical_costs.values()),
            "labor": sum(self.labor_costs.values()),
            "extras": self.extras_cost,
        }
        if adjusted:
            return {k: round(v * self.position_multiplier) for k, v in totals.items()}
        return totals

    def to_dict(self) -> dict:
        return {
            "structural_costs": dict(self.structural_costs),
            "branding_costs": dict(self.branding_costs),
            "furniture_costs": dict(self.furniture_costs),
            "technical_costs": dict(self.technical_costs),
            "labor_costs": dict(self.labor_costs),
            "extras_cost": self.extras_cost,
            "category_totals": self.category_totals(),
            "subtotal": self.subtotal,
            "position_multiplier": self.position_multiplier,
            "position_premium": self.position_premium,
            "total_cost": self.total_cost,
            "area_sqm": round(self.area_sqm, 2),
            "cost_per_sqm": self.cost_per_sqm,
        }
