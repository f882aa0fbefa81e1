"""
Pure projection math.

This module contains pure functions for compounding sales forward and
converting them to profit and EPS. No pandas, no I/O, just numeric
computations over floats.

Division by zero and fractional powers of negative numbers yield nan
instead of raising, so every function here is total over the reals.

Key functions:
  project: Projected sales, net profit and EPS for one growth/margin pair
  compound_growth: (1 + rate/100) ** years
  divide_or_nan: Division that yields nan for a zero divisor
"""

import math


def compound_growth(rate_percent: float, years: float) -> float:
  """
  Compound growth factor for a percent rate over a number of years.

  Args:
    rate_percent: Annual rate in percent
    years: Number of years (any real number)

  Returns:
    (1 + rate_percent/100) ** years; nan when the base is negative and
    years is fractional, inf on overflow or when a zero base is raised to
    a negative power
  """
  base = 1.0 + rate_percent / 100.0
  if base == 0 and years < 0:
    return float('inf')
  try:
    return math.pow(base, years)
  except ValueError:
    return float('nan')
  except OverflowError:
    return float('inf')


def divide_or_nan(numerator: float, denominator: float) -> float:
  """Return numerator / denominator, or nan when the denominator is zero."""
  if denominator == 0:
    return float('nan')
  return numerator / denominator


def adjusted_shares(
    shares_outstanding: float,
    repurchase_percent: float,
    issue_percent: float,
) -> float:
  """Share count after net repurchases and issuance over the horizon."""
  return shares_outstanding * (1.0 - repurchase_percent / 100.0 +
                               issue_percent / 100.0)


def project(
    sales: float,
    growth_percent: float,
    margin_percent: float,
    years: float,
    shares_outstanding: float,
    repurchase_percent: float,
    issue_percent: float,
) -> tuple[float, float, float]:
  """
  Project sales, net profit and EPS to the end of the horizon.

  Negative sales or years pass through arithmetically; years == 0 returns
  the current sales unchanged.

  Args:
    sales: Current annual sales
    growth_percent: Sales CAGR in percent
    margin_percent: Net margin in percent
    years: Investment horizon
    shares_outstanding: Current share count
    repurchase_percent: Share reduction over the horizon in percent
    issue_percent: Share increase over the horizon in percent

  Returns:
    Tuple of (projected_sales, net_profit, eps):
    - projected_sales: sales * (1 + growth/100) ** years
    - net_profit: projected_sales * margin/100
    - eps: net_profit / adjusted shares (nan if adjusted shares are zero)
  """
  projected_sales = sales * compound_growth(growth_percent, years)
  net_profit = projected_sales * (margin_percent / 100.0)
  shares = adjusted_shares(shares_outstanding, repurchase_percent,
                           issue_percent)
  eps = divide_or_nan(net_profit, shares)
  return projected_sales, net_profit, eps
