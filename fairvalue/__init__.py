'''
Assumption-driven fair value engine.

This package turns per-company analyst assumptions (price, growth,
margins, share count, multiples, capital return and market sizing) into
projected financials, fair value prices, return metrics, bear/base/bull
price targets and a P/E x growth sensitivity grid.

The engine is a pure function of its input. Storage, CSV export, batch
runs and charts are thin collaborators around it.

Usage:
  from fairvalue import AssumptionSet, evaluate

  assumptions = AssumptionSet(
      current_price=50.0,
      current_sales=100.0,
      sales_growth_cagr_percent=15.0,
      net_profit_margin_percent=20.0,
      shares_outstanding=10.0,
      normalized_current_pe=25.0,
      expected_pe_at_year_end=30.0,
  )
  result = evaluate(assumptions)
'''

from fairvalue.domain.types import AssumptionSet
from fairvalue.domain.types import EvaluationResult
from fairvalue.domain.types import ScenarioOverride
from fairvalue.engine.evaluate import evaluate
from fairvalue.scenarios.config import EngineConfig

__all__ = [
    'AssumptionSet',
    'EngineConfig',
    'EvaluationResult',
    'ScenarioOverride',
    'evaluate',
]
