"""
Pure depreciation math engine.

This module contains pure functions for the depreciation curve. No pandas,
no I/O, just numeric computations on an original price and an age.

The curve is an initial flat drop followed by a power-law decay:

  value(age) = price * (1 - initial_drop) * (1 + age)^(-k)

k is derived from the configured year-1 drop so that value(1) / value(0)
equals 1 - year1_additional_drop_rate exactly. Older bikes keep flattening
out instead of heading to zero.

Key functions:
  depreciated_base: Main entry point, value at a given age
  derive_curve_exponent: Year-1 drop rate to curve exponent k
  round_to_step: Money rounding used for every output
"""

from math import ceil
from math import floor
from math import isfinite
from math import log2

from bike_valuation.scenarios.config import PricingConfig

MAX_INITIAL_DROP_RATE = 0.9
MAX_YEAR1_DROP_RATE = 0.95


def clamp(value: float, low: float, high: float) -> float:
  """
  Clamp value into [low, high].

  A non-finite value collapses to low. If low > high, high wins.
  """
  if not isfinite(value):
    return low
  return min(high, max(low, value))


def to_float(value, default: float = float('nan')) -> float:
  """Coerce a config value to float, default when it is not numeric."""
  try:
    return float(value)
  except (TypeError, ValueError):
    return default


def round_to_step(value: float, step: float) -> float:
  """
  Round value to the nearest multiple of step, ties away from zero.

  Args:
    value: Amount to round
    step: Rounding granularity (1 = whole units, 0.01 = cents)

  Returns:
    Rounded value, or value unchanged when step is not a positive number
  """
  s = to_float(step)
  if not isfinite(s) or s <= 0 or not isfinite(value):
    return value

  q = value / s
  n = floor(abs(q) + 0.5)
  if q < 0:
    n = -n
  # Drop float noise from multiplying by fractional steps (e.g. 0.01).
  return round(n * s, 10)


def round_within(value: float, low: float, high: float, step: float) -> float:
  """
  Clamp to [low, high], then round, keeping the result inside the bounds.

  When plain rounding lands outside the bounds the nearest in-bounds
  multiple of step is used instead, or the bound itself if no multiple of
  step fits between low and high.
  """
  clamped = clamp(value, low, high)
  rounded = round_to_step(clamped, step)
  s = to_float(step)
  if low <= rounded <= high or not isfinite(s) or s <= 0:
    return rounded

  if rounded < low:
    candidate = round(ceil(low / s) * s, 10)
    return candidate if candidate <= high else low
  candidate = round(floor(high / s) * s, 10)
  return candidate if candidate >= low else high


def derive_curve_exponent(year1_additional_drop_rate: float) -> float:
  """
  Convert the year-1 additional drop into the curve exponent k.

  Solves (1 + 1)^(-k) = 1 - r, i.e. k = log2(1 / (1 - r)).

  Args:
    year1_additional_drop_rate: r, clamped to [0, 0.95]

  Returns:
    k >= 0; 0 means a flat curve after the initial drop
  """
  r = clamp(to_float(year1_additional_drop_rate), 0.0, MAX_YEAR1_DROP_RATE)
  if r == 0:
    return 0.0
  return log2(1.0 / (1.0 - r))


def curve_multiplier(age_years: int, k: float) -> float:
  """Fraction of the post-drop value retained at age_years."""
  if k == 0:
    return 1.0
  return (1.0 + age_years)**(-k)


def normalize_age(age_years) -> int:
  """Coerce an age to a non-negative whole number of years."""
  age = to_float(age_years, 0.0)
  if not isfinite(age):
    return 0
  return max(0, int(floor(age)))


def depreciated_base(
    original_price: float,
    age_years,
    config: PricingConfig,
) -> float:
  """
  Compute the depreciated value before brand and condition adjustments.

  Args:
    original_price: MSRP when new (> 0)
    age_years: Years since the model year; negative or fractional ages
      are floored to a non-negative integer
    config: PricingConfig supplying the drop rates

  Returns:
    Non-negative value, non-increasing in age_years
  """
  age = normalize_age(age_years)

  initial_drop = clamp(to_float(config.initial_drop_rate), 0.0,
                       MAX_INITIAL_DROP_RATE)
  after_initial = original_price * (1.0 - initial_drop)

  k = derive_curve_exponent(config.year1_additional_drop_rate)
  return after_initial * curve_multiplier(age, k)
