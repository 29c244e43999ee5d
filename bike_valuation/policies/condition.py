"""Condition adjustment."""

from math import isfinite
from typing import Optional

from bike_valuation.scenarios.config import PricingConfig


def condition_multiplier(condition: str,
                         config: PricingConfig) -> Optional[float]:
  """
  Look up the multiplier for a condition label.

  Returns None when the config does not price the condition (missing key,
  or a value that is not a positive finite number). Rejecting that is the
  composer's job.
  """
  raw = config.condition_multipliers.get(condition)
  if raw is None or isinstance(raw, bool):
    return None
  try:
    value = float(raw)
  except (TypeError, ValueError):
    return None
  if not isfinite(value) or value <= 0:
    return None
  return value


def priced_conditions(config: PricingConfig) -> list[str]:
  """Condition labels the config can price, in config order."""
  return [
      name for name in config.condition_multipliers
      if condition_multiplier(name, config) is not None
  ]
