"""
Abstract base class for the stall calculators.

Input: StallDesignSelection
Output: calculator-specific result (CostBreakdown, fabrication rate)
"""

import logging
import math
from abc import ABC, abstractmethod

from .rate_table import RateTable, SQFT_TO_SQM, option_key
from .selection import StallDesignSelection

logger = logging.getLogger(__name__)


class BaseCalculator(ABC):
    """All stall calculators inherit from this."""

    def __init__(self, rates: RateTable = None):
        self.rates = rates or RateTable()

    @abstractmethod
    def calculate(self, selection: StallDesignSelection):
        """Pure function of the selection. Must never raise for option values."""
        pass

    # --- Helper methods for all calculators ---

    def to_sqm(self, value: float, unit) -> float:
        """Convert an area to square metres. Anything but sqft is taken as sqm."""
        if option_key(unit) == "sqft":
            return value * SQFT_TO_SQM
        return value

    def area_sqm(self, selection: StallDesignSelection) -> float:
        return self.to_sqm(selection.area, selection.area_unit)

    def print_area_sqm(self, selection: StallDesignSelection) -> float:
        return self.to_sqm(selection.print_area, selection.area_unit)

    def round_cost(self, amount: float) -> int:
        """Whole currency units. Line items are rounded before they are summed."""
        if not math.isfinite(amount):
            logger.warning("Non-finite cost %r counted as 0", amount)
            return 0
        return int(round(amount))
