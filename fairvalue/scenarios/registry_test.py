import pytest

from fairvalue.scenarios.registry import get_rule
from fairvalue.scenarios.registry import list_scenarios
from fairvalue.scenarios.registry import SCENARIO_RULES
from fairvalue.scenarios.registry import ScenarioRule


class TestScenarioRules:
  """Tests for the scenario rule registry."""

  def test_registered_scenarios(self):
    assert list_scenarios() == ['bear', 'bull']

  def test_bear_rule(self):
    rule = get_rule('bear')

    assert rule.pe_field == 'normalized_current_pe'
    assert rule.pe_multiplier == 0.7
    assert rule.growth_multiplier == 0.5
    assert rule.margin_multiplier == 0.8

  def test_bull_rule(self):
    rule = get_rule('bull')

    assert rule.pe_field == 'expected_pe_at_year_end'
    assert rule.pe_multiplier == 1.3
    assert rule.growth_multiplier == 1.5
    assert rule.margin_multiplier == 1.2

  def test_unknown_name(self):
    with pytest.raises(KeyError, match='Available'):
      get_rule('sideways')

  def test_custom_mapping(self):
    rules = {'x': SCENARIO_RULES['bear']}

    assert get_rule('x', rules) is SCENARIO_RULES['bear']
    assert list_scenarios(rules) == ['x']

  def test_invalid_pe_field(self):
    with pytest.raises(ValueError, match='Unknown pe_field'):
      ScenarioRule('current_price', 1.0, 1.0, 1.0)

  def test_dict_round_trip(self):
    rule = SCENARIO_RULES['bull']

    assert ScenarioRule.from_dict(rule.to_dict()) == rule
