import json

import pytest

from fairvalue.scenarios.config import EngineConfig
from fairvalue.scenarios.registry import SCENARIO_RULES


class TestEngineConfig:
  """Tests for EngineConfig."""

  def test_default(self):
    config = EngineConfig.default()

    assert config.name == 'default'
    assert config.pe_axis == (15.0, 20.0, 25.0, 30.0, 35.0, 40.0)
    assert config.growth_axis == (5.0, 10.0, 15.0, 20.0, 25.0, 30.0)
    assert config.scenario_rules == SCENARIO_RULES

  def test_default_rules_are_a_copy(self):
    """Editing a config's rules leaves the registry alone."""
    config = EngineConfig.default()
    del config.scenario_rules['bear']

    assert 'bear' in SCENARIO_RULES

  def test_axes_coerced_to_float_tuples(self):
    config = EngineConfig(pe_axis=[10, 20], growth_axis=[5])

    assert config.pe_axis == (10.0, 20.0)
    assert config.growth_axis == (5.0,)

  def test_empty_axis(self):
    with pytest.raises(ValueError, match='pe_axis cannot be empty'):
      EngineConfig(pe_axis=())
    with pytest.raises(ValueError, match='growth_axis cannot be empty'):
      EngineConfig(growth_axis=())

  def test_duplicate_axis_values(self):
    with pytest.raises(ValueError, match='duplicate'):
      EngineConfig(pe_axis=(10.0, 10.0))

  def test_json_round_trip(self):
    config = EngineConfig(name='wide', pe_axis=(10.0, 50.0))

    restored = EngineConfig.from_json(config.to_json())

    assert restored == config

  def test_from_dict_partial(self):
    """Missing keys take default values."""
    config = EngineConfig.from_dict({'name': 'partial', 'growth_axis': [3]})

    assert config.growth_axis == (3.0,)
    assert config.pe_axis == EngineConfig.default().pe_axis
    assert config.scenario_rules == SCENARIO_RULES

  def test_from_dict_bad_rule(self):
    data = {'scenario_rules': {'bear': {'pe_field': 'normalized_current_pe'}}}

    with pytest.raises(ValueError, match='Scenario rule missing field'):
      EngineConfig.from_dict(data)

  def test_to_dict_is_json_serializable(self):
    data = json.loads(json.dumps(EngineConfig.default().to_dict()))

    assert data['scenario_rules']['bull']['pe_multiplier'] == 1.3
