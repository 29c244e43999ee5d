"""
Sensitivity analysis for bike valuations.

This module provides tools to generate 2D sensitivity tables that show
how the estimated price varies across model years and conditions for a
given MSRP and brand tier.

CLI Usage:
  python -m bike_valuation.analysis.sensitivity \\
      --price 2500 \\
      --brand-tier premium \\
      --years 2016,2018,2020,2022,2024 \\
      --conditions excellent,good,fair
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from bike_valuation.domain.types import BRAND_TIERS
from bike_valuation.domain.types import CONDITIONS
from bike_valuation.run import add_config_arguments
from bike_valuation.run import build_config
from bike_valuation.run import estimate
from bike_valuation.scenarios.config import PricingConfig

logger = logging.getLogger(__name__)


class SensitivityTableBuilder:
  """
  Build 2D sensitivity tables of estimated prices.

  Varies model year and condition while keeping MSRP, brand tier and the
  pricing config fixed.
  """

  def __init__(
      self,
      original_price: float,
      brand_tier: str,
      config: Optional[PricingConfig] = None,
  ):
    """
    Initialize sensitivity table builder.

    Args:
        original_price: MSRP when new
        brand_tier: 'premium' or 'budget'
        config: Pricing configuration (default: PricingConfig.default())
    """
    self.original_price = original_price
    self.brand_tier = brand_tier
    self.config = config or PricingConfig.default()
    self.current_year = self.config.resolve_current_year()

    logger.info('Initialized SensitivityTableBuilder')
    logger.info('  MSRP: $%.2f', original_price)
    logger.info('  Brand tier: %s', brand_tier)
    logger.info('  Current year: %d', self.current_year)

  def build(
      self,
      model_years: Sequence[int],
      conditions: Sequence[str] = CONDITIONS,
  ) -> pd.DataFrame:
    """
    Build 2D sensitivity table.

    Args:
        model_years: Model years for the rows (e.g., [2018, 2020, 2022])
        conditions: Condition labels for the columns

    Returns:
        DataFrame with model years as index, conditions as columns,
        and estimated prices as cell values

    Raises:
        ValueError: If model_years or conditions is empty
        InvalidInput: If any year or condition is rejected by estimate()
    """
    if not model_years:
      raise ValueError('model_years cannot be empty')
    if not conditions:
      raise ValueError('conditions cannot be empty')

    logger.info('Building sensitivity table: %d x %d', len(model_years),
                len(conditions))

    data_rows = []
    for year in model_years:
      row_data = []
      for condition in conditions:
        result = estimate(
            original_price=self.original_price,
            model_year=year,
            condition=condition,
            brand_tier=self.brand_tier,
            config_override=self.config,
        )
        row_data.append(result.estimated_price)
      data_rows.append(row_data)

    df = pd.DataFrame(data_rows, index=list(model_years),
                      columns=list(conditions))
    df.index.name = 'Model Year'
    df.columns.name = 'Condition'

    logger.info('Sensitivity table built successfully')
    return df


def _parse_int_list(s: str) -> list[int]:
  """Parse comma-separated int list."""
  return [int(x.strip()) for x in s.split(',')]


def _parse_str_list(s: str) -> list[str]:
  """Parse comma-separated string list."""
  return [x.strip() for x in s.split(',') if x.strip()]


def main() -> None:
  """CLI entrypoint for sensitivity analysis."""
  parser = argparse.ArgumentParser(
      description='Bike valuation sensitivity analysis',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  # Explicit years
  python -m bike_valuation.analysis.sensitivity \\
      --price 2500 --brand-tier premium \\
      --years 2016,2018,2020,2022,2024

  # Last 10 model years, budget brand, cents rounding
  python -m bike_valuation.analysis.sensitivity \\
      --price 800 --brand-tier budget --last-years 10 --preset cents
      """)

  parser.add_argument('--price',
                      type=float,
                      required=True,
                      help='Original price (MSRP) when new')
  parser.add_argument('--brand-tier',
                      choices=BRAND_TIERS,
                      default='premium',
                      help='Brand tier (default: premium)')

  # Option 1: Explicit list
  parser.add_argument('--years',
                      type=str,
                      help='Comma-separated model years (e.g., 2018,2020)')
  # Option 2: Trailing window
  parser.add_argument('--last-years',
                      type=int,
                      default=6,
                      help='Number of trailing model years (default: 6)')

  parser.add_argument('--conditions',
                      type=str,
                      default=','.join(CONDITIONS),
                      help='Comma-separated conditions')
  add_config_arguments(parser)
  parser.add_argument('--output', type=Path, help='Output CSV path (optional)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  config = build_config(args.preset, args.config, args.current_year)
  current_year = config.resolve_current_year()

  if args.years:
    model_years = _parse_int_list(args.years)
  else:
    model_years = list(
        range(current_year - args.last_years + 1, current_year + 1))
    logger.info('No years specified, using last %d: %s', args.last_years,
                model_years)

  conditions = _parse_str_list(args.conditions)

  builder = SensitivityTableBuilder(args.price, args.brand_tier, config)
  table = builder.build(model_years=model_years, conditions=conditions)

  print('\n' + '=' * 60)
  print(f'Sensitivity Analysis: MSRP ${args.price:,.0f} '
        f'({args.brand_tier}, as of {current_year})')
  print('=' * 60)
  print(table.to_string(float_format=lambda x: f'${x:,.0f}'))
  print('=' * 60 + '\n')

  if args.output:
    table.to_csv(args.output)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
