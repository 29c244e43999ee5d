'''
Single-bike valuation entrypoint.

This module provides the main entry point for valuing a used bicycle. It:
1. Validates the request (fails fast with InvalidInput)
2. Resolves the effective PricingConfig (defaults + per-call override)
3. Runs the depreciation engine and the brand/condition adjustments
4. Returns ValuationResult with range, yearly series and diagnostics

Usage:
  from bike_valuation.run import estimate

  result = estimate(
    original_price=2500,
    model_year=2021,
    condition='good',
    brand_tier='premium',
  )
  print(f"Estimate: ${result.estimated_price:,.0f}")
'''

import argparse
import json
import logging
from math import isfinite
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from bike_valuation.domain.errors import InvalidInput
from bike_valuation.domain.types import (
    BRAND_TIERS,
    CONDITIONS,
    PriceRange,
    ValuationInput,
    ValuationResult,
)
from bike_valuation.engine.depreciation import (
    clamp,
    depreciated_base,
    derive_curve_exponent,
    round_within,
    to_float,
)
from bike_valuation.policies.brand import brand_multiplier
from bike_valuation.policies.condition import condition_multiplier
from bike_valuation.policies.condition import priced_conditions
from bike_valuation.scenarios.config import get_preset
from bike_valuation.scenarios.config import PRESETS
from bike_valuation.scenarios.config import PricingConfig

logger = logging.getLogger(__name__)

MIN_MODEL_YEAR = 1900
MAX_MODEL_YEAR = 3000

ConfigOverride = Union[PricingConfig, Mapping[str, Any], None]


def _parse_original_price(value: Any) -> float:
  '''Finite number > 0; numeric strings are accepted.'''
  if isinstance(value, bool):
    raise InvalidInput('originalPrice', value, reason='must be a number')
  try:
    price = float(value)
  except (TypeError, ValueError, OverflowError):
    raise InvalidInput('originalPrice', value,
                       reason='must be a number') from None
  if not isfinite(price) or price <= 0:
    raise InvalidInput('originalPrice', value, reason='must be > 0')
  return price


def _parse_model_year(value: Any) -> int:
  '''Whole number within [MIN_MODEL_YEAR, MAX_MODEL_YEAR].'''
  if isinstance(value, bool):
    raise InvalidInput('year', value, reason='must be a whole number')
  try:
    year = float(value)
  except (TypeError, ValueError, OverflowError):
    raise InvalidInput('year', value,
                       reason='must be a whole number') from None
  if not isfinite(year) or not year.is_integer():
    raise InvalidInput('year', value, reason='must be a whole number')
  if year < MIN_MODEL_YEAR or year > MAX_MODEL_YEAR:
    raise InvalidInput(
        'year', value,
        reason=f'must be between {MIN_MODEL_YEAR} and {MAX_MODEL_YEAR}')
  return int(year)


def _check_enum(value: Any, allowed: tuple, label: str) -> str:
  if not isinstance(value, str) or value not in allowed:
    raise InvalidInput(label, value, allowed=allowed)
  return value


def estimate(
    original_price: Any,
    model_year: Any,
    condition: Any,
    brand_tier: Any,
    config_override: ConfigOverride = None,
) -> ValuationResult:
  '''
  Estimate the current resale value of a bicycle.

  Args:
    original_price: MSRP when new (finite, > 0)
    model_year: Model year, whole number in [1900, 3000]
    condition: 'new', 'excellent', 'good' or 'fair'
    brand_tier: 'premium' or 'budget'
    config_override: Full PricingConfig or partial mapping merged over the
      defaults (shallow: condition_multipliers is replaced whole)

  Returns:
    ValuationResult with rounded estimate, range, yearly series and
    diagnostics

  Raises:
    InvalidInput: If an input fails validation, or the effective config
      has no multiplier for the requested condition
    KeyError: If config_override names an unknown field
  '''
  price = _parse_original_price(original_price)
  year = _parse_model_year(model_year)
  _check_enum(condition, CONDITIONS, 'condition')
  _check_enum(brand_tier, BRAND_TIERS, 'brandTier')

  config = PricingConfig.default().merged(config_override)

  cond_mult = condition_multiplier(condition, config)
  if cond_mult is None:
    raise InvalidInput('condition',
                       condition,
                       allowed=priced_conditions(config),
                       reason='no multiplier configured')
  tier_mult = brand_multiplier(brand_tier, config)

  current_year = config.resolve_current_year()
  if year > current_year:
    logger.debug('Model year %d is after %d, valuing at age 0', year,
                 current_year)
  age_years = max(0, current_year - year)

  floor_value = price * clamp(to_float(config.floor_of_original), 0.0, 1.0)
  ceiling_value = price * clamp(to_float(config.ceiling_of_original), 0.0, 5.0)
  ceiling_value = max(ceiling_value, floor_value)
  step = config.round_to

  def adjusted_at(age: int) -> float:
    return depreciated_base(price, age, config) * tier_mult * cond_mult

  base_value = depreciated_base(price, age_years, config)
  adjusted = base_value * tier_mult * cond_mult
  unrounded = clamp(adjusted, floor_value, ceiling_value)
  if unrounded != adjusted:
    logger.debug('Estimate %.2f pinned to bounds [%.2f, %.2f]', adjusted,
                 floor_value, ceiling_value)

  estimated_price = round_within(unrounded, floor_value, ceiling_value, step)

  range_pct = clamp(to_float(config.range_pct), 0.0, 0.5)
  price_range = PriceRange(
      min=round_within(unrounded * (1.0 - range_pct), floor_value,
                       ceiling_value, step),
      max=round_within(unrounded * (1.0 + range_pct), floor_value,
                       ceiling_value, step),
  )

  last_year = max(year, current_year)
  series = [(y,
             round_within(adjusted_at(y - year), floor_value, ceiling_value,
                          step)) for y in range(year, last_year + 1)]

  diag: Dict[str, Any] = {
      'current_year': current_year,
      'age_years': age_years,
      'curve_exponent': derive_curve_exponent(
          config.year1_additional_drop_rate),
      'base_value': base_value,
      'brand_multiplier': tier_mult,
      'condition_multiplier': cond_mult,
      'adjusted_value': adjusted,
      'unrounded_estimate': unrounded,
      'floor': floor_value,
      'ceiling': ceiling_value,
      'range_pct': range_pct,
  }

  return ValuationResult(
      estimated_price=estimated_price,
      price_range=price_range,
      depreciation_series=series,
      diag=diag,
  )


def estimate_input(
    valuation_input: ValuationInput,
    config_override: ConfigOverride = None,
) -> ValuationResult:
  '''Run estimate() on a ValuationInput.'''
  return estimate(
      original_price=valuation_input.original_price,
      model_year=valuation_input.model_year,
      condition=valuation_input.condition,
      brand_tier=valuation_input.brand_tier,
      config_override=config_override,
  )


def build_config(
    preset: str = 'default',
    config_path: Optional[Path] = None,
    current_year: Optional[int] = None,
) -> PricingConfig:
  '''
  Resolve the config used by the command line tools.

  Args:
    preset: Preset name from PRESETS
    config_path: Optional JSON file of field overrides applied on the preset
    current_year: Optional evaluation year override

  Returns:
    Effective PricingConfig
  '''
  config = get_preset(preset)
  if config_path is not None:
    with open(config_path, 'r', encoding='utf-8') as f:
      config = config.merged(json.load(f))
    logger.debug('Loaded config overrides from %s', config_path)
  if current_year is not None:
    config = config.merged({'current_year': current_year})
  return config


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
  '''Register the shared --preset/--config/--current-year flags.'''
  parser.add_argument('--preset',
                      type=str,
                      default='default',
                      choices=sorted(PRESETS.keys()),
                      help='Pricing preset (default: default)')
  parser.add_argument('--config',
                      type=Path,
                      help='JSON file with pricing config overrides')
  parser.add_argument('--current-year',
                      type=int,
                      help='Evaluation year (default: this year)')


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Estimate a used bike price')
  parser.add_argument('--price',
                      type=float,
                      required=True,
                      help='Original price (MSRP) when new')
  parser.add_argument('--year', type=int, required=True, help='Model year')
  parser.add_argument('--condition',
                      type=str,
                      required=True,
                      choices=CONDITIONS,
                      help='Bike condition')
  parser.add_argument('--brand-tier',
                      type=str,
                      required=True,
                      choices=BRAND_TIERS,
                      help='Brand tier')
  add_config_arguments(parser)
  parser.add_argument('--json',
                      action='store_true',
                      help='Print the API response JSON instead of a report')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  config = build_config(args.preset, args.config, args.current_year)
  result = estimate(
      original_price=args.price,
      model_year=args.year,
      condition=args.condition,
      brand_tier=args.brand_tier,
      config_override=config,
  )

  if args.json:
    print(json.dumps(result.to_dict(), indent=2))
    return

  separator = '=' * 50
  logger.info(separator)
  logger.info('Bike Valuation - %s %s, model year %d', args.condition,
              args.brand_tier, args.year)
  logger.info(separator)
  logger.info('  Original Price: $%s', f'{args.price:,.2f}')
  logger.info('  Age: %d years (as of %d)', result.diag['age_years'],
              result.diag['current_year'])
  logger.info('  Estimated Price: $%s', f'{result.estimated_price:,.2f}')
  logger.info('  Range: $%s - $%s', f'{result.price_range.min:,.2f}',
              f'{result.price_range.max:,.2f}')
  logger.info('\nDepreciation:')
  for year, value in result.depreciation_series:
    logger.info('  %d: $%s', year, f'{value:,.2f}')
  logger.info(separator)


if __name__ == '__main__':
  main()
