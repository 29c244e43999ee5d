"""
Adjustment policies applied on top of the depreciated base.

Each policy maps a categorical input (brand tier, condition) to a
multiplicative factor resolved from the PricingConfig.
"""

from bike_valuation.policies.brand import brand_multiplier
from bike_valuation.policies.condition import condition_multiplier
from bike_valuation.policies.condition import priced_conditions

__all__ = [
  'brand_multiplier',
  'condition_multiplier',
  'priced_conditions',
]
