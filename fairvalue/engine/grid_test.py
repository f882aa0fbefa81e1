import math

import pytest

from fairvalue.domain.types import AssumptionSet
from fairvalue.engine.grid import GROWTH_AXIS
from fairvalue.engine.grid import PE_AXIS
from fairvalue.engine.grid import generate_grid


class TestGenerateGrid:
  """Tests for generate_grid function."""

  def test_shape_and_order(self, example_assumptions):
    """36 cells, P/E outer loop, growth inner loop."""
    grid = generate_grid(example_assumptions)

    assert len(grid) == 36
    expected = [(pe, g) for pe in PE_AXIS for g in GROWTH_AXIS]
    assert [(c.pe_ratio, c.growth_rate_percent) for c in grid] == expected

  def test_default_axes(self):
    assert PE_AXIS == (15.0, 20.0, 25.0, 30.0, 35.0, 40.0)
    assert GROWTH_AXIS == (5.0, 10.0, 15.0, 20.0, 25.0, 30.0)

  def test_first_and_last_cells(self, example_assumptions):
    """Corner cells of the worked example.

    P/E 15, growth 5%: 100 * 1.05^5 * 0.20 / 10 * 15 = 38.29
    P/E 40, growth 30%: 100 * 1.30^5 * 0.20 / 10 * 40 = 297.03
    """
    grid = generate_grid(example_assumptions)

    assert grid[0].implied_price == pytest.approx(38.29, abs=0.01)
    assert grid[-1].implied_price == pytest.approx(297.03, abs=0.01)

  def test_ignores_share_adjustment(self, example_assumptions):
    """Repurchase and issuance do not affect the grid."""
    adjusted = example_assumptions.replace(share_repurchase_percent=20.0,
                                           share_issue_percent=3.0)

    assert generate_grid(adjusted) == generate_grid(example_assumptions)

  def test_uses_net_margin_without_normalized(self):
    """Net margin is used when no normalized margin is recorded."""
    assumptions = AssumptionSet(current_sales=100.0,
                                net_profit_margin_percent=10.0,
                                shares_outstanding=10.0,
                                investment_horizon_years=0.0)

    grid = generate_grid(assumptions, pe_axis=[10.0], growth_axis=[50.0])

    # Zero horizon: EPS = 100 * 0.10 / 10 = 1.0
    assert grid[0].implied_price == pytest.approx(10.0)

  def test_custom_axes(self, example_assumptions):
    """Custom axes keep the row-major layout."""
    grid = generate_grid(example_assumptions,
                         pe_axis=[10.0, 12.0],
                         growth_axis=[0.0, 3.0, 6.0])

    assert len(grid) == 6
    assert [c.pe_ratio for c in grid] == [10.0] * 3 + [12.0] * 3
    assert [c.growth_rate_percent for c in grid[:3]] == [0.0, 3.0, 6.0]

  def test_zero_shares(self, zero_shares_assumptions):
    """Zero shares yields nan prices without raising."""
    grid = generate_grid(zero_shares_assumptions)

    assert len(grid) == 36
    assert all(math.isnan(c.implied_price) for c in grid)
