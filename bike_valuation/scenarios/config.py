"""
Pricing configuration for bicycle valuations.

PricingConfig is an immutable, JSON-friendly record of every tunable of the
depreciation model. Callers start from a preset and override individual
fields per call with merged().

Note: merged() is a shallow merge. Overriding condition_multipliers replaces
the whole mapping, so conditions left out of the override are no longer
priced and the composer rejects them.
"""

from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from dataclasses import replace
from datetime import date
import json
from math import floor
from math import isfinite
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

DEFAULT_CONDITION_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    'new': 1.05,
    'excellent': 1.0,
    'good': 0.9,
    'fair': 0.75,
})

# Years at or below this are treated as "not set" for current_year.
MIN_CURRENT_YEAR = 1900


@dataclass(frozen=True)
class PricingConfig:
  """
  Configuration for the depreciation model.

  Values outside their documented ranges are clamped where they are used,
  never rejected.

  Attributes:
    initial_drop_rate: Flat loss when the bike stops being new, [0, 0.9]
    year1_additional_drop_rate: Extra loss by the end of year 1 on the
      post-initial-drop value, [0, 0.95]. Sets the decay curve steepness.
    premium_brand_multiplier: Multiplier for premium brands
    budget_brand_multiplier: Multiplier for budget brands
    condition_multipliers: Multiplier per condition label
    range_pct: Half-width of the price range, [0, 0.5]
    floor_of_original: Lower bound as a fraction of MSRP, [0, 1]
    ceiling_of_original: Upper bound as a fraction of MSRP, [0, 5]
    round_to: Rounding step for money outputs (1 = whole units)
    current_year: Evaluation year override (None = today's year)
  """
  initial_drop_rate: float = 0.18
  year1_additional_drop_rate: float = 0.08
  premium_brand_multiplier: float = 1.1
  budget_brand_multiplier: float = 1.0
  condition_multipliers: Mapping[str, float] = field(
      default_factory=lambda: DEFAULT_CONDITION_MULTIPLIERS)
  range_pct: float = 0.05
  floor_of_original: float = 0.05
  ceiling_of_original: float = 1.0
  round_to: float = 1
  current_year: Optional[int] = None

  def __post_init__(self):
    multipliers = self.condition_multipliers
    if isinstance(multipliers, MappingProxyType):
      return
    # A missing or malformed map prices no condition at all.
    if not isinstance(multipliers, Mapping):
      multipliers = {}
    object.__setattr__(self, 'condition_multipliers',
                       MappingProxyType(dict(multipliers)))

  def __hash__(self):
    values = tuple(
        getattr(self, f.name)
        for f in fields(self)
        if f.name != 'condition_multipliers')
    return hash((values, frozenset(self.condition_multipliers.items())))

  @classmethod
  def default(cls) -> 'PricingConfig':
    """Create default pricing configuration (whole-unit rounding)."""
    return cls()

  @classmethod
  def cents(cls) -> 'PricingConfig':
    """Default model with money outputs rounded to cents."""
    return cls(round_to=0.01)

  def merged(
      self,
      override: Union['PricingConfig', Mapping[str, Any], None] = None,
  ) -> 'PricingConfig':
    """
    Return a copy with the override applied field by field.

    Args:
      override: None, a full PricingConfig, or a mapping of field names to
        values. UPPER_CASE keys (INITIAL_DROP_RATE, ...) are accepted as
        aliases of the snake_case field names.

    Returns:
      New PricingConfig; self is left untouched

    Raises:
      KeyError: If the mapping names an unknown field
    """
    if override is None:
      return self
    if isinstance(override, PricingConfig):
      return override

    names = [f.name for f in fields(self)]
    changes = {}
    for key, value in override.items():
      name = key.lower() if isinstance(key, str) and key.isupper() else key
      if name not in names:
        raise KeyError(f"Unknown pricing config field: '{key}'. "
                       f'Available: {names}')
      changes[name] = value
    return replace(self, **changes)

  def resolve_current_year(self) -> int:
    """Evaluation year: current_year when set and > 1900, else today."""
    try:
      explicit = float(self.current_year)
    except (TypeError, ValueError):
      explicit = float('nan')
    if isfinite(explicit) and explicit > MIN_CURRENT_YEAR:
      return int(floor(explicit))
    return date.today().year

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    result = {f.name: getattr(self, f.name) for f in fields(self)}
    result['condition_multipliers'] = dict(self.condition_multipliers)
    return result

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'PricingConfig':
    """Create from dictionary, missing fields keep their defaults."""
    return cls.default().merged(data)

  @classmethod
  def from_json(cls, json_str: str) -> 'PricingConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))

  @classmethod
  def from_json_file(cls, path: Path) -> 'PricingConfig':
    """Load from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
      return cls.from_dict(json.load(f))


PRESETS = {
    'default': PricingConfig.default,
    'cents': PricingConfig.cents,
}


def get_preset(name: str) -> PricingConfig:
  """
  Create a preset configuration by name.

  Raises:
    KeyError: If the preset is not found
  """
  try:
    factory = PRESETS[name]
  except KeyError as e:
    raise KeyError(f"Unknown pricing preset: '{name}'. "
                   f'Available: {list(PRESETS.keys())}') from e
  return factory()
