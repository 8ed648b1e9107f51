"""
Wizard form state.

FormStateController owns the current selections (event details, stall design,
flights, hotel, vendors). Every mutation triggers a full, synchronous
recomputation of the estimate and hands the result to each subscribed
listener. There is no partial update path: the estimate is always derived
from the complete current state.
"""

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Callable, List, Optional

from .calculators.selection import (
    StallDesignSelection,
    normalise_field_names,
    parse_int,
    parse_number,
)
from .pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

Listener = Callable[[dict], None]


@dataclass(frozen=True)
class EventDetails:
    exhibition_name: str = ""
    origin_city: str = ""
    origin_state: str = ""
    destination_city: str = ""
    destination_state: str = ""
    start_date: str = ""
    end_date: str = ""
    team_size: int = 1
    nights: int = 3

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EventDetails":
        return cls().updated(**(data or {}))

    def updated(self, **changes) -> "EventDetails":
        known = {f.name for f in fields(self)}
        clean = {}
        for name, value in changes.items():
            if name not in known:
                continue
            if name in ("team_size", "nights"):
                clean[name] = parse_int(value, getattr(self, name))
            else:
                clean[name] = "" if value is None else str(value).strip()
        return replace(self, **clean)


def option_price(option: Optional[dict]) -> float:
    """Price of one selected flight: total_price when the search priced the party, else price."""
    if not option:
        return 0.0
    if option.get("total_price") is not None:
        return parse_number(option.get("total_price"))
    return parse_number(option.get("price"))


def hotel_price(hotel: Optional[dict], nights: int) -> float:
    if not hotel:
        return 0.0
    if hotel.get("total_price") is not None:
        return parse_number(hotel.get("total_price"))
    return parse_number(hotel.get("price_per_night")) * nights


class FormStateController:
    """
    Single-session form state with explicit observer registration.

    Listeners are called in subscription order with the new estimate.
    A listener that raises is logged and skipped; the others still run.
    """

    def __init__(self, engine: PricingEngine = None):
        self.engine = engine or PricingEngine()
        self._listeners: List[Listener] = []
        self._reset_fields()
        self.estimate = self._recompute()

    def _reset_fields(self):
        self.event = EventDetails()
        self.stall = StallDesignSelection()
        self.outbound_flight: Optional[dict] = None
        self.return_flight: Optional[dict] = None
        self.hotel: Optional[dict] = None
        self.vendors: List[dict] = []
        self.marketing_cost: Optional[float] = None
        self.logistics_cost: Optional[float] = None

    # --- Observer registration ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Derived inputs ---

    @property
    def flight_cost(self) -> float:
        return option_price(self.outbound_flight) + option_price(self.return_flight)

    @property
    def hotel_cost(self) -> float:
        return hotel_price(self.hotel, self.event.nights)

    # --- Mutations ---

    def update_event(self, **changes) -> dict:
        self.event = self.event.updated(**changes)
        return self._changed()

    def update_stall(self, **changes) -> dict:
        self.stall = self.stall.replace(**normalise_field_names(changes))
        return self._changed()

    def select_flights(self, outbound: Optional[dict] = None,
                       return_flight: Optional[dict] = None) -> dict:
        self.outbound_flight = dict(outbound) if outbound else None
        self.return_flight = dict(return_flight) if return_flight else None
        return self._changed()

    def select_hotel(self, hotel: Optional[dict]) -> dict:
        self.hotel = dict(hotel) if hotel else None
        return self._changed()

    def select_vendors(self, vendors: Optional[list]) -> dict:
        self.vendors = [dict(v) for v in (vendors or [])]
        return self._changed()

    def set_fixed_costs(self, marketing_cost: Optional[float] = None,
                        logistics_cost: Optional[float] = None) -> dict:
        """Override the marketing/logistics constants. None restores the default."""
        self.marketing_cost = marketing_cost
        self.logistics_cost = logistics_cost
        return self._changed()

    def reset(self) -> dict:
        """Back to defaults, as when the wizard restarts. Listeners stay subscribed."""
        self._reset_fields()
        return self._changed()

    # --- Recompute + notify ---

    def _recompute(self) -> dict:
        estimate = self.engine.build_estimate(
            self.stall,
            flight_cost=self.flight_cost,
            hotel_cost=self.hotel_cost,
            marketing_cost=self.marketing_cost,
            logistics_cost=self.logistics_cost,
            event=asdict(self.event),
        )
        estimate["vendors"] = list(self.vendors)
        return estimate

    def _changed(self) -> dict:
        self.estimate = self._recompute()
        for listener in list(self._listeners):
            try:
                listener(self.estimate)
            except Exception as e:
                logger.warning("Estimate listener %r failed: %s", listener, e)
        return self.estimate

    # --- Persistence helpers (WizardSession.state_json) ---

    def to_state(self) -> dict:
        return {
            "event": asdict(self.event),
            "stall": self.stall.to_dict(),
            "outbound_flight": self.outbound_flight,
            "return_flight": self.return_flight,
            "hotel": self.hotel,
            "vendors": list(self.vendors),
            "marketing_cost": self.marketing_cost,
            "logistics_cost": self.logistics_cost,
        }

    @classmethod
    def from_state(cls, state: Optional[dict], engine: PricingEngine = None) -> "FormStateController":
        """Rebuild a controller from to_state() output. Does not notify anyone."""
        controller = cls(engine=engine)
        state = state or {}
        controller.event = EventDetails.from_dict(state.get("event"))
        controller.stall = StallDesignSelection.from_fields(state.get("stall"))
        controller.outbound_flight = state.get("outbound_flight")
        controller.return_flight = state.get("return_flight")
        controller.hotel = state.get("hotel")
        controller.vendors = list(state.get("vendors") or [])
        controller.marketing_cost = state.get("marketing_cost")
        controller.logistics_cost = state.get("logistics_cost")
        controller.estimate = controller._recompute()
        return controller
