"""
Market sizing math.
"""


def compute_market_sizing(
    current_sales: float,
    tam: float,
    sam: float,
    som: float,
    penetration_percent: float,
) -> tuple[float, float, float]:
  """
  Compute implied market share and achievable revenue.

  Args:
    current_sales: Current annual sales
    tam: Total addressable market
    sam: Serviceable addressable market
    som: Serviceable obtainable market
    penetration_percent: Target penetration of the SOM in percent

  Returns:
    Tuple of (implied_market_share_percent, sales_at_full_penetration,
    sam_share_of_tam_percent). Shares are 0 when the divisor is <= 0.
  """
  sales_at_full_penetration = som * (penetration_percent / 100.0)
  implied_share = current_sales / sam * 100.0 if sam > 0 else 0.0
  sam_share_of_tam = sam / tam * 100.0 if tam > 0 else 0.0
  return implied_share, sales_at_full_penetration, sam_share_of_tam
