import math

import pytest

from fairvalue.engine.projection import adjusted_shares
from fairvalue.engine.projection import compound_growth
from fairvalue.engine.projection import divide_or_nan
from fairvalue.engine.projection import project


class TestCompoundGrowth:
  """Tests for compound_growth function."""

  def test_five_years_at_15_percent(self):
    """1.15^5 = 2.0114."""
    assert compound_growth(15.0, 5.0) == pytest.approx(2.011357, abs=1e-6)

  def test_zero_years(self):
    """Any rate over zero years is a factor of 1."""
    assert compound_growth(37.0, 0.0) == 1.0

  def test_negative_years(self):
    """Negative years discount instead of compounding."""
    assert compound_growth(10.0, -1.0) == pytest.approx(1 / 1.1)

  def test_fractional_power_of_negative_base(self):
    """Growth below -100% with a fractional horizon is nan, not complex."""
    assert math.isnan(compound_growth(-150.0, 2.5))

  def test_integer_power_of_negative_base(self):
    """Growth below -100% with an integer horizon stays real."""
    assert compound_growth(-150.0, 3.0) == pytest.approx(-0.125)

  def test_zero_base_negative_years(self):
    """A -100% rate raised to a negative power is inf."""
    assert compound_growth(-100.0, -2.0) == float('inf')
    assert compound_growth(-100.0, -0.5) == float('inf')

  def test_zero_base_positive_years(self):
    assert compound_growth(-100.0, 3.0) == 0.0

  def test_overflow(self):
    """Overflow saturates to inf."""
    assert compound_growth(1e6, 1e6) == float('inf')


class TestDivideOrNan:
  """Tests for divide_or_nan function."""

  def test_normal_division(self):
    assert divide_or_nan(10.0, 4.0) == 2.5

  def test_zero_denominator(self):
    """Zero divisor yields nan instead of raising."""
    assert math.isnan(divide_or_nan(10.0, 0.0))
    assert math.isnan(divide_or_nan(0.0, 0.0))


class TestAdjustedShares:
  """Tests for adjusted_shares function."""

  def test_net_repurchase(self):
    """5% repurchased, 1% issued: 100 * 0.96 = 96."""
    assert adjusted_shares(100.0, 5.0, 1.0) == pytest.approx(96.0)

  def test_no_change(self):
    assert adjusted_shares(100.0, 0.0, 0.0) == 100.0


class TestProject:
  """Tests for project function."""

  def test_worked_example(self):
    """Sales 100 at 15% for 5 years, 20% margin, 10 shares.

    Manual calculation:
    Projected sales = 100 * 1.15^5 = 201.136
    Net profit = 201.136 * 0.20 = 40.227
    EPS = 40.227 / 10 = 4.023
    """
    sales, profit, eps = project(
        sales=100.0,
        growth_percent=15.0,
        margin_percent=20.0,
        years=5.0,
        shares_outstanding=10.0,
        repurchase_percent=0.0,
        issue_percent=0.0,
    )

    assert sales == pytest.approx(201.136, abs=0.001)
    assert profit == pytest.approx(40.227, abs=0.001)
    assert eps == pytest.approx(4.023, abs=0.001)

  def test_share_adjustment(self):
    """Repurchases shrink the share count EPS is spread over.

    Manual calculation:
    Projected sales = 100 * 1.10^2 = 121.0
    Net profit = 121.0 * 0.10 = 12.1
    Adjusted shares = 10 * (1 - 0.10 + 0.00) = 9.0
    EPS = 12.1 / 9 = 1.344
    """
    _, _, eps = project(100.0, 10.0, 10.0, 2.0, 10.0, 10.0, 0.0)

    assert eps == pytest.approx(1.3444, abs=0.0001)

  def test_zero_growth_keeps_sales(self):
    """Zero growth keeps sales flat for any horizon."""
    for years in (0.0, 1.0, 7.5, 30.0):
      sales, _, _ = project(250.0, 0.0, 10.0, years, 5.0, 0.0, 0.0)
      assert sales == 250.0

  def test_zero_years_keeps_sales(self):
    """A zero horizon returns current sales."""
    sales, profit, _ = project(250.0, 40.0, 10.0, 0.0, 5.0, 0.0, 0.0)

    assert sales == 250.0
    assert profit == pytest.approx(25.0)

  def test_negative_sales_pass_through(self):
    """Negative sales are projected arithmetically."""
    sales, profit, eps = project(-100.0, 10.0, 10.0, 1.0, 10.0, 0.0, 0.0)

    assert sales == pytest.approx(-110.0)
    assert profit == pytest.approx(-11.0)
    assert eps == pytest.approx(-1.1)

  def test_zero_shares_gives_nan_eps(self):
    """Zero shares: EPS is nan, sales and profit are still computed."""
    sales, profit, eps = project(100.0, 10.0, 10.0, 1.0, 0.0, 0.0, 0.0)

    assert sales == pytest.approx(110.0)
    assert profit == pytest.approx(11.0)
    assert math.isnan(eps)

  def test_full_repurchase_gives_nan_eps(self):
    """Repurchasing every share leaves nothing to divide by."""
    _, _, eps = project(100.0, 10.0, 10.0, 1.0, 10.0, 100.0, 0.0)

    assert math.isnan(eps)
