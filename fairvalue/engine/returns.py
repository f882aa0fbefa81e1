"""
Return metrics for a price target.

Pure functions, no I/O.
"""

from fairvalue.engine.projection import compound_growth


def compute_returns(
    current_price: float,
    target_price: float,
    years: float,
    dividend_yield_percent: float,
    repurchase_percent: float,
) -> tuple[float, float, float]:
  """
  Convert a target price and capital return into return metrics.

  Total return adds the dividend yield and the buyback percentage
  directly to the price return. This is an additive approximation, not an
  IRR decomposition.

  Args:
    current_price: Current market price per share
    target_price: Price target at the end of the horizon
    years: Investment horizon
    dividend_yield_percent: Dividend yield in percent
    repurchase_percent: Share repurchase in percent

  Returns:
    Tuple of (price_return_percent, total_return_percent,
    annualized_return_percent):
    - price_return_percent: 0 when current_price <= 0
    - total_return_percent: price return + dividend yield + repurchase
    - annualized_return_percent: 0 when years <= 0; nan when the total
      return is below -100% and the root is fractional
  """
  if current_price > 0:
    price_return = (target_price - current_price) / current_price * 100.0
  else:
    price_return = 0.0

  total_return = price_return + dividend_yield_percent + repurchase_percent

  if years > 0:
    annualized = (compound_growth(total_return, 1.0 / years) - 1.0) * 100.0
  else:
    annualized = 0.0

  return price_return, total_return, annualized
