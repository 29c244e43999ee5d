'''
Valuation analysis utilities.

Note: To avoid RuntimeWarning when using -m flag, import directly:
  from bike_valuation.analysis.batch_valuation import batch_valuation
  from bike_valuation.analysis.plot_depreciation import plot_depreciation
  from bike_valuation.analysis.sensitivity import SensitivityTableBuilder
'''

__all__ = [
    'batch_valuation',
    'plot_depreciation',
    'summarize_series',
    'SensitivityTableBuilder',
]

# Direct imports for convenience (may cause RuntimeWarning with -m flag)
from bike_valuation.analysis.batch_valuation import batch_valuation
from bike_valuation.analysis.plot_depreciation import plot_depreciation
from bike_valuation.analysis.plot_depreciation import summarize_series
from bike_valuation.analysis.sensitivity import SensitivityTableBuilder
