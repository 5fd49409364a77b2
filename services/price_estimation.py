"""
Meal Planner Price Estimation
Pluggable per-ingredient price estimates for consolidated shopping lists
"""

import random
from abc import ABC, abstractmethod
from typing import Optional

from core.config import settings
from schemas.consolidation_schemas import ConsolidatedIngredient


class PriceEstimator(ABC):
    """Strategy interface for estimating an ingredient's price in currency units"""

    @abstractmethod
    def estimate_price(self, ingredient: ConsolidatedIngredient) -> float:
        """Return a positive price estimate for the ingredient"""


class RandomPriceEstimator(PriceEstimator):
    """
    Placeholder pricing: uniform in [minimum, minimum + spread).
    Stands in until a grocery pricing API is integrated; the amount is ignored.
    """

    def __init__(
        self,
        minimum: Optional[float] = None,
        spread: Optional[float] = None,
        rng: Optional[random.Random] = None
    ):
        self.minimum = settings.PRICE_ESTIMATE_MIN if minimum is None else minimum
        self.spread = settings.PRICE_ESTIMATE_SPREAD if spread is None else spread
        self.rng = rng or random.Random()

    def estimate_price(self, ingredient: ConsolidatedIngredient) -> float:
        return self.rng.random() * self.spread + self.minimum


class FixedPriceEstimator(PriceEstimator):
    """Deterministic pricing, one flat price for every ingredient"""

    def __init__(self, price: float):
        if price <= 0:
            raise ValueError("price must be positive")
        self.price = price

    def estimate_price(self, ingredient: ConsolidatedIngredient) -> float:
        return self.price


def get_price_estimator() -> PriceEstimator:
    """Default estimator used by the consolidation services"""
    return RandomPriceEstimator()
