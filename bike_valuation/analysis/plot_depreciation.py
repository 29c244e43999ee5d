'''
Depreciation chart for a single valuation.

Renders the yearly depreciation series of a ValuationResult, with a summary
box showing the first/last values and the series extremes.

Usage:
  python -m bike_valuation.analysis.plot_depreciation \\
      --price 2500 --year 2019 --condition good --brand-tier premium \\
      --output-dir charts/depreciation
'''

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.ticker import MaxNLocator
import pandas as pd

from bike_valuation.domain.types import BRAND_TIERS
from bike_valuation.domain.types import CONDITIONS
from bike_valuation.domain.types import ValuationResult
from bike_valuation.run import add_config_arguments
from bike_valuation.run import build_config
from bike_valuation.run import estimate

logger = logging.getLogger(__name__)


def series_frame(series: Sequence[Tuple[int, float]]) -> pd.DataFrame:
  '''Depreciation series as a DataFrame with year and value columns.'''
  return pd.DataFrame(list(series), columns=['year', 'value'])


def summarize_series(series: Sequence[Tuple[int, float]]) -> Dict[str, Any]:
  '''
  Summarize a depreciation series.

  Args:
    series: (year, value) pairs in ascending year order

  Returns:
    Dict with first_year, last_year, first_value, last_value, min_value,
    min_year, max_value, max_year. Empty dict for an empty series.
  '''
  if not series:
    return {}

  first_year, first_value = series[0]
  last_year, last_value = series[-1]
  min_year, min_value = min(series, key=lambda p: p[1])
  max_year, max_value = max(series, key=lambda p: p[1])
  return {
      'first_year': first_year,
      'last_year': last_year,
      'first_value': first_value,
      'last_value': last_value,
      'min_year': min_year,
      'min_value': min_value,
      'max_year': max_year,
      'max_value': max_value,
  }


def plot_depreciation(
    result: ValuationResult,
    output_path: Path,
    title: Optional[str] = None,
) -> Optional[Path]:
  '''
  Plot the depreciation series of a valuation to a PNG file.

  Args:
    result: ValuationResult to plot
    output_path: Destination PNG path (parent dirs are created)
    title: Chart title

  Returns:
    output_path, or None when the series is empty
  '''
  series = result.depreciation_series
  if not series:
    logger.warning('Empty depreciation series, nothing to plot')
    return None

  df = series_frame(series)
  summary = summarize_series(series)

  _, ax = plt.subplots(figsize=(12, 6))

  ax.plot(df['year'],
          df['value'],
          'o-',
          label='Estimated value',
          linewidth=2.5,
          markersize=6,
          color='#2563eb',
          alpha=0.9)
  ax.errorbar([summary['last_year']], [result.estimated_price],
              yerr=[[result.estimated_price - result.price_range.min],
                    [result.price_range.max - result.estimated_price]],
              fmt='D',
              color='red',
              capsize=6,
              label='Estimate and range')

  ax.set_xlabel('Year', fontsize=12, fontweight='bold')
  ax.set_ylabel('Value ($)', fontsize=12, fontweight='bold')
  ax.set_title(title or 'Depreciation Curve',
               fontsize=14,
               fontweight='bold',
               pad=20)
  ax.legend(loc='best', fontsize=11, framealpha=0.9)
  ax.grid(True, alpha=0.3, linestyle='--')
  ax.xaxis.set_major_locator(MaxNLocator(integer=True))

  stats_text = (f"Year {summary['first_year']} -> {summary['last_year']}\n"
                f"  ${summary['first_value']:,.0f} -> "
                f"${summary['last_value']:,.0f}\n"
                f"  Max: ${summary['max_value']:,.0f}\n"
                f"  Min: ${summary['min_value']:,.0f}")

  ax.text(0.98,
          0.98,
          stats_text,
          transform=ax.transAxes,
          verticalalignment='top',
          horizontalalignment='right',
          fontsize=10,
          bbox=dict(boxstyle='round', facecolor='lightblue', alpha=0.8))

  plt.tight_layout()

  output_path = Path(output_path)
  output_path.parent.mkdir(parents=True, exist_ok=True)
  plt.savefig(output_path, dpi=150, bbox_inches='tight')
  logger.info('Saved: %s', output_path)

  plt.close()
  return output_path


def main() -> None:
  '''CLI entrypoint for the depreciation chart.'''
  parser = argparse.ArgumentParser(
      description='Plot the depreciation curve of a bike')
  parser.add_argument('--price',
                      type=float,
                      required=True,
                      help='Original price (MSRP) when new')
  parser.add_argument('--year', type=int, required=True, help='Model year')
  parser.add_argument('--condition',
                      choices=CONDITIONS,
                      default='good',
                      help='Bike condition (default: good)')
  parser.add_argument('--brand-tier',
                      choices=BRAND_TIERS,
                      default='premium',
                      help='Brand tier (default: premium)')
  add_config_arguments(parser)
  parser.add_argument('--output-dir',
                      type=Path,
                      default=Path('output/depreciation_charts'),
                      help='Output directory for charts')
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
  result = estimate(args.price, args.year, args.condition, args.brand_tier,
                    config)

  filename = (f'{args.year}_{args.condition}_{args.brand_tier}_'
              f'{args.price:.0f}.png')
  plot_depreciation(
      result,
      args.output_dir / filename,
      title=(f'{args.year} {args.brand_tier} bike ({args.condition}), '
             f'MSRP ${args.price:,.0f}'),
  )


if __name__ == '__main__':
  main()
