"""
Scenario resolution.

Derives the P/E, growth and margin of a named scenario from analyst
overrides or, field by field, from the base assumptions via the
scenario's rule, then prices the scenario off a projection that shares
the base share count, capital return and horizon.
"""

from collections.abc import Mapping
from typing import Optional

from fairvalue.domain.types import AssumptionSet
from fairvalue.domain.types import ScenarioOutput
from fairvalue.domain.types import ScenarioOverride
from fairvalue.engine.projection import project
from fairvalue.policies.margin import effective_margin
from fairvalue.scenarios.registry import get_rule
from fairvalue.scenarios.registry import SCENARIO_RULES
from fairvalue.scenarios.registry import ScenarioRule


def resolve_scenario(
    name: str,
    base: AssumptionSet,
    override: Optional[ScenarioOverride] = None,
    rules: Optional[Mapping[str, ScenarioRule]] = None,
) -> ScenarioOutput:
  """
  Resolve and price one scenario.

  Args:
    name: Scenario name (e.g., 'bear', 'bull')
    base: Base assumptions
    override: Analyst override; None fields fall back to the rule
    rules: Rule mapping (default: registry SCENARIO_RULES)

  Returns:
    ScenarioOutput with resolved inputs and price = eps * pe_ratio

  Raises:
    KeyError: If the scenario name has no rule
  """
  rule = get_rule(name, rules)
  if override is None:
    override = ScenarioOverride()

  overridden = []

  if override.pe_ratio is not None:
    pe_ratio = override.pe_ratio
    overridden.append('pe_ratio')
  else:
    pe_ratio = getattr(base, rule.pe_field) * rule.pe_multiplier

  if override.growth_rate is not None:
    growth = override.growth_rate
    overridden.append('growth_rate')
  else:
    growth = base.sales_growth_cagr_percent * rule.growth_multiplier

  if override.margin is not None:
    margin = override.margin
    overridden.append('margin')
  else:
    margin = effective_margin(base) * rule.margin_multiplier

  _, _, eps = project(
      sales=base.current_sales,
      growth_percent=growth,
      margin_percent=margin,
      years=base.investment_horizon_years,
      shares_outstanding=base.shares_outstanding,
      repurchase_percent=base.share_repurchase_percent,
      issue_percent=base.share_issue_percent,
  )

  return ScenarioOutput(
      name=name,
      pe_ratio=pe_ratio,
      growth_rate_percent=growth,
      margin_percent=margin,
      price=eps * pe_ratio,
      overridden=tuple(overridden),
  )


def resolve_scenarios(
    base: AssumptionSet,
    rules: Optional[Mapping[str, ScenarioRule]] = None,
) -> dict[str, ScenarioOutput]:
  """Resolve every scenario in rules using the overrides recorded on base."""
  if rules is None:
    rules = SCENARIO_RULES
  return {
      name: resolve_scenario(name, base, base.override_for(name), rules)
      for name in rules
  }
