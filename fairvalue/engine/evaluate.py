'''
Evaluation entrypoint.

evaluate() composes the projection, scenario, return, market sizing and
sensitivity calculations into one EvaluationResult:
1. Derives the effective margin and projects the base case
2. Prices the base case (normalized EPS, P/E expansion, margin of safety)
3. Computes headline returns against the P/E expansion price
4. Resolves the bear and bull scenarios
5. Sizes the market and sweeps the sensitivity grid

Nothing is cached between calls; every call recomputes from its input.

Usage:
  from fairvalue import AssumptionSet, evaluate

  result = evaluate(AssumptionSet(current_price=50.0, current_sales=100.0))
  print(f"Fair price: ${result.fair_price_with_pe_expansion:.2f}")
'''

import logging
from math import isfinite
from typing import Any, Dict, Optional

from fairvalue.domain.types import AssumptionSet
from fairvalue.domain.types import EvaluationResult
from fairvalue.domain.types import SCENARIO_BASE
from fairvalue.domain.types import SCENARIO_BEAR
from fairvalue.domain.types import SCENARIO_BULL
from fairvalue.domain.types import ScenarioOutput
from fairvalue.engine.grid import generate_grid
from fairvalue.engine.market import compute_market_sizing
from fairvalue.engine.projection import project
from fairvalue.engine.returns import compute_returns
from fairvalue.policies.eps import OverrideOrProjectedEPS
from fairvalue.policies.margin import NormalizedMargin
from fairvalue.scenarios.config import EngineConfig
from fairvalue.scenarios.resolver import resolve_scenario

logger = logging.getLogger(__name__)


def evaluate(
    assumptions: AssumptionSet,
    config: Optional[EngineConfig] = None,
) -> EvaluationResult:
  '''
  Evaluate one set of assumptions.

  Never raises for numeric input. A zero adjusted share count yields nan
  EPS that propagates into every price; such results report
  is_finite == False and diag['eps_undefined'] == True.

  Args:
    assumptions: Assumptions to evaluate
    config: EngineConfig (default: EngineConfig.default())

  Returns:
    EvaluationResult with projections, prices, returns, scenarios, market
    sizing and the sensitivity grid

  Raises:
    KeyError: If the config has no rule for 'bear' or 'bull'
  '''
  if config is None:
    config = EngineConfig.default()

  all_diag: Dict[str, Any] = {'config': config.name}

  margin_result = NormalizedMargin().compute(assumptions)
  all_diag.update(margin_result.diag)
  margin = margin_result.value

  projected_sales, net_profit, eps_at_year_end = project(
      sales=assumptions.current_sales,
      growth_percent=assumptions.sales_growth_cagr_percent,
      margin_percent=margin,
      years=assumptions.investment_horizon_years,
      shares_outstanding=assumptions.shares_outstanding,
      repurchase_percent=assumptions.share_repurchase_percent,
      issue_percent=assumptions.share_issue_percent,
  )
  all_diag['eps_undefined'] = not isfinite(eps_at_year_end)

  eps_result = OverrideOrProjectedEPS().compute(assumptions, eps_at_year_end)
  all_diag.update(eps_result.diag)
  normalized_eps = eps_result.value

  fair_price_base = normalized_eps * assumptions.normalized_current_pe
  fair_price_with_pe_expansion = (eps_at_year_end *
                                  assumptions.expected_pe_at_year_end)
  fair_price_with_margin_of_safety = fair_price_base * (
      1.0 - assumptions.margin_of_safety_percent / 100.0)

  price_return, total_return, annualized_return = compute_returns(
      current_price=assumptions.current_price,
      target_price=fair_price_with_pe_expansion,
      years=assumptions.investment_horizon_years,
      dividend_yield_percent=assumptions.dividend_yield_percent,
      repurchase_percent=assumptions.share_repurchase_percent,
  )

  scenarios = {}
  for name in config.scenario_rules:
    output = resolve_scenario(name, assumptions,
                              assumptions.override_for(name),
                              config.scenario_rules)
    all_diag[f'{name}_overridden'] = ','.join(output.overridden) or 'none'
    scenarios[name] = output

  base_output = ScenarioOutput(
      name=SCENARIO_BASE,
      pe_ratio=assumptions.expected_pe_at_year_end,
      growth_rate_percent=assumptions.sales_growth_cagr_percent,
      margin_percent=margin,
      price=fair_price_with_pe_expansion,
  )
  ordered = [scenarios[SCENARIO_BEAR], base_output, scenarios[SCENARIO_BULL]]
  ordered.extend(output for name, output in scenarios.items()
                 if name not in (SCENARIO_BEAR, SCENARIO_BULL))

  implied_share, sales_at_full_penetration, sam_share_of_tam = (
      compute_market_sizing(
          current_sales=assumptions.current_sales,
          tam=assumptions.tam,
          sam=assumptions.sam,
          som=assumptions.som,
          penetration_percent=assumptions.penetration_percent,
      ))

  grid = generate_grid(assumptions, config.pe_axis, config.growth_axis)

  result = EvaluationResult(
      projected_sales=projected_sales,
      net_profit_at_year_end=net_profit,
      eps_at_year_end=eps_at_year_end,
      normalized_eps=normalized_eps,
      fair_price_base=fair_price_base,
      fair_price_with_pe_expansion=fair_price_with_pe_expansion,
      fair_price_with_margin_of_safety=fair_price_with_margin_of_safety,
      price_return_percent=price_return,
      total_return_percent=total_return,
      annualized_return_percent=annualized_return,
      bear_price=scenarios[SCENARIO_BEAR].price,
      bull_price=scenarios[SCENARIO_BULL].price,
      implied_market_share_percent=implied_share,
      sales_at_full_penetration=sales_at_full_penetration,
      sam_share_of_tam_percent=sam_share_of_tam,
      sensitivity_grid=grid,
      scenarios=tuple(ordered),
      diag=all_diag,
  )

  logger.debug('Evaluated: fair price %.2f, bear %.2f, bull %.2f',
               result.fair_price_with_pe_expansion, result.bear_price,
               result.bull_price)
  if not result.is_finite:
    logger.warning('Non-finite outputs: %s',
                   ', '.join(result.non_finite_fields()))

  return result
