"""Domain types for the valuation framework."""

from bike_valuation.domain.errors import InvalidInput
from bike_valuation.domain.types import BRAND_TIERS
from bike_valuation.domain.types import CONDITIONS
from bike_valuation.domain.types import PriceRange
from bike_valuation.domain.types import ValuationInput
from bike_valuation.domain.types import ValuationResult

__all__ = [
    'BRAND_TIERS',
    'CONDITIONS',
    'InvalidInput',
    'PriceRange',
    'ValuationInput',
    'ValuationResult',
]
