'''Depreciation engine with pure math functions.'''

from bike_valuation.engine.depreciation import (
    clamp,
    curve_multiplier,
    depreciated_base,
    derive_curve_exponent,
    round_to_step,
    round_within,
)

__all__ = [
    'clamp',
    'curve_multiplier',
    'depreciated_base',
    'derive_curve_exponent',
    'round_to_step',
    'round_within',
]
