"""
Scenario rule registry.

Maps scenario names to the rules that derive their P/E, growth and margin
from the base assumptions when the analyst has not overridden them.

To add a new scenario:
1. Add a ScenarioRule to SCENARIO_RULES (or to an EngineConfig's
   scenario_rules)
2. Record overrides for it under the same name in AssumptionSet.overrides

Example:
  SCENARIO_RULES['stress'] = ScenarioRule(
      pe_field='normalized_current_pe',
      pe_multiplier=0.5,
      growth_multiplier=0.0,
      margin_multiplier=0.6,
  )
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, Optional

from fairvalue.domain.types import SCENARIO_BEAR, SCENARIO_BULL

PE_FIELDS = ('normalized_current_pe', 'expected_pe_at_year_end')


@dataclass(frozen=True)
class ScenarioRule:
  """
  Fallback derivation for a scenario.

  Attributes:
    pe_field: AssumptionSet field the scenario P/E is derived from
    pe_multiplier: Multiplier on that P/E
    growth_multiplier: Multiplier on the sales CAGR
    margin_multiplier: Multiplier on the effective margin
  """
  pe_field: str
  pe_multiplier: float
  growth_multiplier: float
  margin_multiplier: float

  def __post_init__(self):
    if self.pe_field not in PE_FIELDS:
      raise ValueError(f"Unknown pe_field: '{self.pe_field}'. "
                       f'Available: {list(PE_FIELDS)}')

  def to_dict(self) -> dict[str, Any]:
    return asdict(self)

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'ScenarioRule':
    return cls(
        pe_field=str(data['pe_field']),
        pe_multiplier=float(data['pe_multiplier']),
        growth_multiplier=float(data['growth_multiplier']),
        margin_multiplier=float(data['margin_multiplier']),
    )


SCENARIO_RULES: dict[str, ScenarioRule] = {
    SCENARIO_BEAR:
        ScenarioRule(pe_field='normalized_current_pe',
                     pe_multiplier=0.7,
                     growth_multiplier=0.5,
                     margin_multiplier=0.8),
    SCENARIO_BULL:
        ScenarioRule(pe_field='expected_pe_at_year_end',
                     pe_multiplier=1.3,
                     growth_multiplier=1.5,
                     margin_multiplier=1.2),
}


def get_rule(
    name: str,
    rules: Optional[Mapping[str, ScenarioRule]] = None,
) -> ScenarioRule:
  """
  Look up the rule for a scenario.

  Args:
    name: Scenario name (e.g., 'bear', 'bull')
    rules: Rule mapping (default: SCENARIO_RULES)

  Returns:
    ScenarioRule

  Raises:
    KeyError: If the scenario name is not registered
  """
  if rules is None:
    rules = SCENARIO_RULES
  try:
    return rules[name]
  except KeyError as e:
    raise KeyError(f"Unknown scenario: '{name}'. "
                   f'Available: {list(rules.keys())}') from e


def list_scenarios(
    rules: Optional[Mapping[str, ScenarioRule]] = None) -> list[str]:
  """List registered scenario names in registration order."""
  if rules is None:
    rules = SCENARIO_RULES
  return list(rules.keys())
