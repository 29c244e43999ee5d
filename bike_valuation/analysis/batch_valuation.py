'''
Batch valuation for many bikes at once.

This module provides tools to:
1. Value every bike listed in a table (DataFrame or CSV)
2. Skip and report rows that fail validation
3. Export results to CSV for further analysis

Input columns: original_price, model_year, condition, brand_tier. Any other
column (listing id, title, ...) is carried through to the output.

Usage (CLI):
  python -m bike_valuation.analysis.batch_valuation \
    --input data/bikes.csv \
    --output results/bikes_valued.csv \
    --current-year 2025 \
    -v

Usage (Python API):
  from bike_valuation.analysis.batch_valuation import batch_valuation
  from bike_valuation.scenarios.config import PricingConfig

  df = batch_valuation(bikes_df, config=PricingConfig.default())
  df.to_csv('results.csv', index=False)
'''

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from bike_valuation.domain.errors import InvalidInput
from bike_valuation.domain.types import ValuationResult
from bike_valuation.run import add_config_arguments
from bike_valuation.run import build_config
from bike_valuation.run import estimate
from bike_valuation.scenarios.config import PricingConfig

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['original_price', 'model_year', 'condition', 'brand_tier']


def _result_to_dict(row: Dict[str, Any],
                    result: ValuationResult) -> Dict[str, Any]:
  '''Flatten ValuationResult into the input row for a DataFrame row.'''
  out = dict(row)
  out.update({
      'estimated_price': result.estimated_price,
      'price_min': result.price_range.min,
      'price_max': result.price_range.max,
      'age_years': result.diag['age_years'],
      'current_year': result.diag['current_year'],
  })
  return out


def batch_valuation(
    bikes: pd.DataFrame,
    config: Optional[PricingConfig] = None,
    verbose: bool = False,
) -> pd.DataFrame:
  '''
  Run valuation for every bike in a table.

  Args:
    bikes: DataFrame with REQUIRED_COLUMNS (extra columns are kept)
    config: Pricing configuration (default: PricingConfig.default())
    verbose: Log every row

  Returns:
    DataFrame with the input columns plus:
    - estimated_price: Rounded point estimate
    - price_min / price_max: Rounded range bounds
    - age_years: Age used for the estimate
    - current_year: Evaluation year

  Raises:
    ValueError: If required columns are missing or no row could be valued
  '''
  missing = [c for c in REQUIRED_COLUMNS if c not in bikes.columns]
  if missing:
    raise ValueError(f'Missing required columns: {missing}')

  config = config or PricingConfig.default()
  records = bikes.to_dict('records')
  results = []

  for i, row in enumerate(records, 1):
    if verbose:
      logger.info('[%d/%d] Valuing %s %s (%s)...', i, len(records),
                  row['model_year'], row['brand_tier'], row['condition'])

    try:
      result = estimate(
          original_price=row['original_price'],
          model_year=row['model_year'],
          condition=row['condition'],
          brand_tier=row['brand_tier'],
          config_override=config,
      )
    except InvalidInput as e:
      logger.warning('Skipping row %d: %s', i, e)
      continue

    results.append(_result_to_dict(row, result))

    if verbose:
      logger.info('  Estimate: $%.2f (range $%.2f - $%.2f)',
                  result.estimated_price, result.price_range.min,
                  result.price_range.max)

  if not results:
    raise ValueError(f'No bikes could be valued out of {len(records)} rows')

  return pd.DataFrame(results)


def _print_summary(df: pd.DataFrame, total_rows: int) -> None:
  '''Print summary statistics for batch valuation results.'''
  logger.info('')
  logger.info('=' * 70)
  logger.info('Summary Statistics')
  logger.info('=' * 70)
  logger.info('Valued: %d / %d', len(df), total_rows)
  logger.info('')

  logger.info('Estimated Price:')
  logger.info('  Mean:   $%.2f', df['estimated_price'].mean())
  logger.info('  Median: $%.2f', df['estimated_price'].median())
  logger.info('  Min:    $%.2f', df['estimated_price'].min())
  logger.info('  Max:    $%.2f', df['estimated_price'].max())
  logger.info('')

  retained = df['estimated_price'] / df['original_price'].astype(float)
  logger.info('Value retained vs MSRP:')
  logger.info('  Mean:   %.1f%%', retained.mean() * 100)
  logger.info('  Median: %.1f%%', retained.median() * 100)

  by_condition = df.groupby('condition')['estimated_price'].mean()
  if len(by_condition) > 1:
    logger.info('')
    logger.info('Mean estimate by condition:')
    for condition, value in by_condition.items():
      logger.info('  %s: $%.2f', condition, value)

  logger.info('=' * 70)


def main() -> None:
  '''CLI entrypoint for batch valuation.'''
  parser = argparse.ArgumentParser(
      description='Batch valuation for a CSV of bikes',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog=__doc__,
  )
  parser.add_argument('--input',
                      type=Path,
                      required=True,
                      help='Input CSV with one bike per row')
  parser.add_argument('--output',
                      type=Path,
                      required=True,
                      help='Output CSV file path')
  add_config_arguments(parser)
  parser.add_argument('-v',
                      '--verbose',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  if not args.input.exists():
    raise FileNotFoundError(f'File not found: {args.input}')

  bikes = pd.read_csv(args.input)
  logger.info('Loaded %d bikes from %s', len(bikes), args.input)

  config = build_config(args.preset, args.config, args.current_year)
  logger.info('Using preset: %s (as of %d)', args.preset,
              config.resolve_current_year())

  results = batch_valuation(bikes, config=config, verbose=args.verbose)

  args.output.parent.mkdir(parents=True, exist_ok=True)
  results.to_csv(args.output, index=False)

  logger.info('')
  logger.info('Saved %d results to %s', len(results), args.output)

  _print_summary(results, len(bikes))


if __name__ == '__main__':
  main()
