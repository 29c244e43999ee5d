"""
Brand tier adjustment.

Premium brands hold their value better than budget ones; the tier is
applied to the depreciated base as a plain multiplier.
"""

from math import isfinite

from bike_valuation.scenarios.config import PricingConfig


def brand_multiplier(brand_tier: str, config: PricingConfig) -> float:
  """
  Multiplier for a brand tier.

  An unrecognized tier is inert (1.0); the composer rejects it before it
  gets here. A configured multiplier that is zero or not a finite number
  also falls back to 1.0.

  Args:
    brand_tier: 'premium' or 'budget'
    config: PricingConfig with the tier multipliers

  Returns:
    Positive multiplier
  """
  if brand_tier == 'premium':
    configured = config.premium_brand_multiplier
  elif brand_tier == 'budget':
    configured = config.budget_brand_multiplier
  else:
    return 1.0

  try:
    value = float(configured)
  except (TypeError, ValueError):
    return 1.0
  if not isfinite(value) or value == 0:
    return 1.0
  return value
