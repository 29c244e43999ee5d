"""Pricing configuration and presets."""

from bike_valuation.scenarios.config import get_preset
from bike_valuation.scenarios.config import PRESETS
from bike_valuation.scenarios.config import PricingConfig

__all__ = [
  'PricingConfig',
  'PRESETS',
  'get_preset',
]
