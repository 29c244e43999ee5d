'''
Bicycle valuation framework.

This package estimates the resale value of a used bicycle from its original
price (MSRP), model year, condition and brand tier. A pure depreciation
engine (initial drop plus a power-law decay curve) is combined with brand
and condition multipliers, clamped to a floor/ceiling of the MSRP and
rounded. Every tunable lives in an immutable PricingConfig.

Usage:
  from bike_valuation import estimate
  from bike_valuation.scenarios.config import PricingConfig

  result = estimate(2500, 2021, 'good', 'premium')
  result = estimate(2500, 2021, 'good', 'premium', {'range_pct': 0.1})
  print(result.estimated_price, result.price_range)
'''

from bike_valuation.domain.errors import InvalidInput
from bike_valuation.domain.types import ValuationInput
from bike_valuation.domain.types import ValuationResult
from bike_valuation.run import estimate
from bike_valuation.run import estimate_input
from bike_valuation.scenarios.config import PricingConfig

__all__ = [
    'InvalidInput',
    'PricingConfig',
    'ValuationInput',
    'ValuationResult',
    'estimate',
    'estimate_input',
]
