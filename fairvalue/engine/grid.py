"""
P/E x growth sensitivity grid.

The grid does not apply the repurchase/issue share adjustment used by
project(): every cell divides by the current share count.
"""

from collections.abc import Sequence

from fairvalue.domain.types import AssumptionSet, GridCell
from fairvalue.engine.projection import compound_growth, divide_or_nan
from fairvalue.policies.margin import effective_margin

PE_AXIS = (15.0, 20.0, 25.0, 30.0, 35.0, 40.0)
GROWTH_AXIS = (5.0, 10.0, 15.0, 20.0, 25.0, 30.0)


def generate_grid(
    assumptions: AssumptionSet,
    pe_axis: Sequence[float] = PE_AXIS,
    growth_axis: Sequence[float] = GROWTH_AXIS,
) -> tuple[GridCell, ...]:
  """
  Sweep P/E and growth to build an implied price grid.

  Cells are row-major: the outer loop runs over pe_axis and the inner loop
  over growth_axis, both in the given order.

  Args:
    assumptions: Assumptions supplying sales, margin, shares and horizon
    pe_axis: P/E multiples (rows)
    growth_axis: Sales CAGR values in percent (columns)

  Returns:
    Tuple of len(pe_axis) * len(growth_axis) GridCells
  """
  margin = effective_margin(assumptions)
  years = assumptions.investment_horizon_years
  cells = []

  for pe in pe_axis:
    for growth in growth_axis:
      sales = assumptions.current_sales * compound_growth(growth, years)
      profit = sales * margin / 100.0
      eps = divide_or_nan(profit, assumptions.shares_outstanding)
      cells.append(
          GridCell(pe_ratio=pe, growth_rate_percent=growth,
                   implied_price=eps * pe))

  return tuple(cells)
