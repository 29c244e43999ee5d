'''
Domain types for the bicycle valuation framework.

These dataclasses provide typed interfaces between the composer, the pure
depreciation engine and the analysis tools, so none of them depends on the
raw request payload shape.
'''

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

CONDITIONS: Tuple[str, ...] = ('new', 'excellent', 'good', 'fair')
BRAND_TIERS: Tuple[str, ...] = ('premium', 'budget')

SeriesPoint = Tuple[int, float]


@dataclass
class ValuationInput:
  '''
  Per-call valuation request.

  Values are kept as received; validation happens in the composer so that
  every rejection is reported as InvalidInput with the failing field.

  Attributes:
    original_price: MSRP when the bicycle was new
    model_year: Model year of the bicycle
    condition: One of CONDITIONS
    brand_tier: One of BRAND_TIERS
  '''
  original_price: Any
  model_year: Any
  condition: Any
  brand_tier: Any

  @classmethod
  def from_dict(cls, payload: Mapping[str, Any]) -> 'ValuationInput':
    '''
    Build from a request payload.

    Accepts the marketplace API keys (originalPriceUsd, year, condition,
    brandTier) as well as the snake_case field names. Missing keys become
    None.
    '''

    def pick(*keys: str) -> Any:
      for key in keys:
        if key in payload:
          return payload[key]
      return None

    return cls(
        original_price=pick('original_price', 'originalPriceUsd',
                            'originalPrice'),
        model_year=pick('model_year', 'year', 'modelYear'),
        condition=pick('condition'),
        brand_tier=pick('brand_tier', 'brandTier'),
    )


@dataclass(frozen=True)
class PriceRange:
  '''Confidence interval around the estimated price.'''
  min: float
  max: float


@dataclass
class ValuationResult:
  '''
  Complete valuation result with diagnostics.

  Attributes:
    estimated_price: Rounded point estimate
    price_range: Rounded bounds, each clamped to the floor/ceiling
    depreciation_series: (year, value) pairs in ascending year order
    diag: Intermediate values explaining how the estimate was computed
  '''
  estimated_price: float
  price_range: PriceRange
  depreciation_series: List[SeriesPoint] = field(default_factory=list)
  diag: Dict[str, Any] = field(default_factory=dict)

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to the marketplace API response shape.'''
    return {
        'estimatedPrice': self.estimated_price,
        'priceRange': {
            'min': self.price_range.min,
            'max': self.price_range.max,
        },
        'depreciationGraphData': [[year, value]
                                  for year, value in self.depreciation_series],
    }
