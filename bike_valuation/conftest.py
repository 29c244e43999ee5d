import matplotlib

matplotlib.use('Agg')

import pandas as pd  # pylint: disable=wrong-import-position
import pytest  # pylint: disable=wrong-import-position

from bike_valuation.scenarios.config import PricingConfig  # pylint: disable=wrong-import-position

CURRENT_YEAR = 2024


@pytest.fixture
def fixed_config() -> PricingConfig:
  """Default model evaluated as of CURRENT_YEAR."""
  return PricingConfig(current_year=CURRENT_YEAR)


@pytest.fixture
def steep_config() -> PricingConfig:
  """Aggressive depreciation that drives old bikes onto the floor.

  After initial drop: 10% of MSRP. k = log2(1 / 0.5) = 1, so the value
  halves by year 1 and is 1/11 of the post-drop value at age 10.
  """
  return PricingConfig(
      initial_drop_rate=0.9,
      year1_additional_drop_rate=0.5,
      current_year=CURRENT_YEAR,
  )


@pytest.fixture
def sample_bikes() -> pd.DataFrame:
  """Small listing table with one invalid row."""
  return pd.DataFrame({
      'listing_id': ['a1', 'b2', 'c3', 'd4'],
      'original_price': [1000, 1000, 2500, -5],
      'model_year': [2023, 2023, 2024, 2020],
      'condition': ['excellent', 'good', 'new', 'good'],
      'brand_tier': ['budget', 'budget', 'premium', 'budget'],
  })
