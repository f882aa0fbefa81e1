import math

import pytest

from fairvalue.engine.returns import compute_returns


class TestComputeReturns:
  """Tests for compute_returns function."""

  def test_worked_example(self):
    """Price 50, target 120.68 over 5 years, no capital return.

    Manual calculation:
    Price return = (120.68 - 50) / 50 = 141.36%
    Total return = 141.36%
    Annualized = 2.4136^(1/5) - 1 = 19.27%
    """
    price_return, total_return, annualized = compute_returns(
        current_price=50.0,
        target_price=120.6814,
        years=5.0,
        dividend_yield_percent=0.0,
        repurchase_percent=0.0,
    )

    assert price_return == pytest.approx(141.36, abs=0.01)
    assert total_return == price_return
    assert annualized == pytest.approx(19.27, abs=0.01)

  def test_capital_return_is_additive(self):
    """Dividends and buybacks add directly to the price return."""
    price_return, total_return, _ = compute_returns(100.0, 110.0, 1.0, 2.0,
                                                    3.0)

    assert price_return == pytest.approx(10.0)
    assert total_return == pytest.approx(15.0)

  def test_one_year_annualized_equals_total(self):
    _, total_return, annualized = compute_returns(100.0, 125.0, 1.0, 0.0, 0.0)

    assert annualized == pytest.approx(total_return)

  def test_zero_price_guard(self):
    """Zero current price gives zero price return, not an error."""
    price_return, total_return, _ = compute_returns(0.0, 120.0, 5.0, 1.5, 0.5)

    assert price_return == 0.0
    assert total_return == pytest.approx(2.0)

  def test_negative_price_guard(self):
    price_return, _, _ = compute_returns(-10.0, 120.0, 5.0, 0.0, 0.0)

    assert price_return == 0.0

  def test_zero_years_guard(self):
    """Zero horizon gives zero annualized return."""
    _, _, annualized = compute_returns(50.0, 100.0, 0.0, 0.0, 0.0)

    assert annualized == 0.0

  def test_negative_years_guard(self):
    _, _, annualized = compute_returns(50.0, 100.0, -2.0, 0.0, 0.0)

    assert annualized == 0.0

  def test_total_loss(self):
    """Target of zero with no capital return is -100% annualized."""
    price_return, _, annualized = compute_returns(50.0, 0.0, 5.0, 0.0, 0.0)

    assert price_return == pytest.approx(-100.0)
    assert annualized == pytest.approx(-100.0)

  def test_loss_beyond_total_is_nan(self):
    """A negative target over a fractional root has no real annualization."""
    _, _, annualized = compute_returns(50.0, -25.0, 5.0, 0.0, 0.0)

    assert math.isnan(annualized)
