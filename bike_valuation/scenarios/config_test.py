from dataclasses import FrozenInstanceError
from datetime import date
import json

import pytest

from bike_valuation.scenarios.config import get_preset
from bike_valuation.scenarios.config import PricingConfig


class TestPricingConfig:
  """Tests for PricingConfig dataclass."""

  def test_defaults(self):
    """Default values of the depreciation model."""
    config = PricingConfig.default()

    assert config.initial_drop_rate == 0.18
    assert config.year1_additional_drop_rate == 0.08
    assert config.premium_brand_multiplier == 1.1
    assert config.budget_brand_multiplier == 1.0
    assert dict(config.condition_multipliers) == {
        'new': 1.05,
        'excellent': 1.0,
        'good': 0.9,
        'fair': 0.75,
    }
    assert config.range_pct == 0.05
    assert config.floor_of_original == 0.05
    assert config.ceiling_of_original == 1.0
    assert config.round_to == 1
    assert config.current_year is None

  def test_cents_preset(self):
    assert PricingConfig.cents().round_to == 0.01

  def test_immutable(self):
    """Fields and the condition map cannot be changed in place."""
    config = PricingConfig.default()

    with pytest.raises(FrozenInstanceError):
      config.range_pct = 0.2  # type: ignore[misc]
    with pytest.raises(TypeError):
      config.condition_multipliers['good'] = 2.0  # type: ignore[index]

  def test_condition_map_copied(self):
    """Mutating the source dict does not leak into the config."""
    source = {'good': 0.9}
    config = PricingConfig(condition_multipliers=source)
    source['good'] = 0.1

    assert config.condition_multipliers['good'] == 0.9

  def test_hashable(self):
    """Equal configs hash alike and can key a dict."""
    a = PricingConfig(current_year=2024)
    b = PricingConfig.default().merged({'current_year': 2024})

    assert hash(a) == hash(b)
    assert {a: 'cached'}[b] == 'cached'


class TestMerged:
  """Tests for PricingConfig.merged."""

  def test_none_returns_same(self):
    config = PricingConfig.default()

    assert config.merged(None) is config

  def test_field_override(self):
    """Overridden fields change, the rest keep defaults."""
    base = PricingConfig.default()
    config = base.merged({'range_pct': 0.1, 'current_year': 2020})

    assert config.range_pct == 0.1
    assert config.current_year == 2020
    assert config.initial_drop_rate == 0.18
    assert base.range_pct == 0.05

  def test_full_config_replaces(self):
    override = PricingConfig(round_to=5)

    assert PricingConfig.default().merged(override) is override

  def test_upper_case_aliases(self):
    """Legacy UPPER_CASE keys map onto the snake_case fields."""
    config = PricingConfig.default().merged({
        'INITIAL_DROP_RATE': 0.2,
        'ROUND_TO': 0.01,
    })

    assert config.initial_drop_rate == 0.2
    assert config.round_to == 0.01

  def test_condition_multipliers_replaced_whole(self):
    """Shallow merge: a partial condition map drops the other labels."""
    config = PricingConfig.default().merged(
        {'condition_multipliers': {
            'fair': 0.5
        }})

    assert dict(config.condition_multipliers) == {'fair': 0.5}

  def test_unknown_field(self):
    with pytest.raises(KeyError, match="Unknown pricing config field: 'foo'"):
      PricingConfig.default().merged({'foo': 1})

  def test_non_string_key(self):
    with pytest.raises(KeyError, match="Unknown pricing config field: '3'"):
      PricingConfig.default().merged({3: 1})

  def test_non_mapping_condition_map(self):
    """None or a list leaves the config with no priced conditions."""
    for value in (None, ['good', 0.9]):
      config = PricingConfig.default().merged(
          {'condition_multipliers': value})

      assert dict(config.condition_multipliers) == {}


class TestResolveCurrentYear:
  """Tests for PricingConfig.resolve_current_year."""

  def test_explicit_year(self):
    assert PricingConfig(current_year=2024).resolve_current_year() == 2024

  def test_fractional_year_floored(self):
    assert PricingConfig(current_year=2024.9).resolve_current_year() == 2024

  def test_unset_uses_today(self):
    assert PricingConfig().resolve_current_year() == date.today().year

  def test_year_not_after_1900_uses_today(self):
    """1900 and earlier count as unset."""
    assert (PricingConfig(current_year=1900).resolve_current_year() ==
            date.today().year)
    assert (PricingConfig(current_year='abc').resolve_current_year() ==
            date.today().year)


class TestSerialization:
  """Tests for dict/JSON conversion."""

  def test_to_dict(self):
    data = PricingConfig.default().to_dict()

    assert data['initial_drop_rate'] == 0.18
    assert data['condition_multipliers'] == {
        'new': 1.05,
        'excellent': 1.0,
        'good': 0.9,
        'fair': 0.75,
    }
    assert isinstance(data['condition_multipliers'], dict)

  def test_json_round_trip(self):
    config = PricingConfig(range_pct=0.1, current_year=2022)

    assert PricingConfig.from_json(config.to_json()) == config

  def test_from_dict_partial(self):
    """Missing fields keep their defaults."""
    config = PricingConfig.from_dict({'floor_of_original': 0.1})

    assert config.floor_of_original == 0.1
    assert config.ceiling_of_original == 1.0

  def test_from_json_file(self, tmp_path):
    path = tmp_path / 'pricing.json'
    path.write_text(json.dumps({'ROUND_TO': 5, 'range_pct': 0.08}),
                    encoding='utf-8')

    config = PricingConfig.from_json_file(path)

    assert config.round_to == 5
    assert config.range_pct == 0.08


class TestGetPreset:
  """Tests for get_preset."""

  def test_known_presets(self):
    assert get_preset('default') == PricingConfig.default()
    assert get_preset('cents').round_to == 0.01

  def test_unknown_preset(self):
    with pytest.raises(KeyError, match="Unknown pricing preset: 'fancy'"):
      get_preset('fancy')
