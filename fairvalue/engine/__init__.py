'''Pure valuation math: projection, returns, market sizing and grid.

The evaluate() aggregator lives in fairvalue.engine.evaluate and is
re-exported from the fairvalue package.
'''

from fairvalue.engine.grid import (
    GROWTH_AXIS,
    PE_AXIS,
    generate_grid,
)
from fairvalue.engine.market import compute_market_sizing
from fairvalue.engine.projection import (
    adjusted_shares,
    compound_growth,
    divide_or_nan,
    project,
)
from fairvalue.engine.returns import compute_returns

__all__ = [
    'GROWTH_AXIS',
    'PE_AXIS',
    'adjusted_shares',
    'compound_growth',
    'compute_market_sizing',
    'compute_returns',
    'divide_or_nan',
    'generate_grid',
    'project',
]
