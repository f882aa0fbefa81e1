import pytest

from fairvalue.analysis.sensitivity import _parse_float_list
from fairvalue.analysis.sensitivity import SensitivityTableBuilder
from fairvalue.engine.evaluate import evaluate
from fairvalue.scenarios.config import EngineConfig


class TestSensitivityTableBuilder:
  """Tests for SensitivityTableBuilder."""

  def test_explicit_axes(self, example_assumptions):
    table = SensitivityTableBuilder(example_assumptions).build(
        pe_ratios=[15, 20], growth_rates=[5, 10])

    assert list(table.index) == ['15x', '20x']
    assert list(table.columns) == ['5%', '10%']
    assert table.loc['15x', '5%'] == pytest.approx(38.29, abs=0.01)
    assert table.index.name == 'P/E'
    assert table.columns.name == 'Growth'

  def test_default_axes_match_evaluation(self, example_assumptions):
    table = SensitivityTableBuilder(example_assumptions).build()
    grid = evaluate(example_assumptions).grid_frame()

    assert table.shape == (6, 6)
    assert table.values.tolist() == grid.values.tolist()

  def test_config_axes(self, example_assumptions):
    config = EngineConfig(pe_axis=(10, 12), growth_axis=(0,))

    table = SensitivityTableBuilder(example_assumptions, config).build()

    assert list(table.index) == ['10x', '12x']
    assert list(table.columns) == ['0%']
    # no growth: 100 sales * 20% margin / 10 shares = 2.00 EPS
    assert table.loc['12x', '0%'] == pytest.approx(24.0)

  def test_empty_axis(self, example_assumptions):
    builder = SensitivityTableBuilder(example_assumptions)

    with pytest.raises(ValueError, match='pe_ratios cannot be empty'):
      builder.build(pe_ratios=[])
    with pytest.raises(ValueError, match='growth_rates cannot be empty'):
      builder.build(growth_rates=[])


def test_parse_float_list():
  assert _parse_float_list('15, 20,25.5') == [15.0, 20.0, 25.5]
