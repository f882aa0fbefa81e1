'''
Domain types for the fair value engine.

These dataclasses are the typed interfaces between the engine components.
Inputs and outputs are frozen: every evaluation builds fresh values and
nothing downstream of AssumptionSet mutates it.
'''

from dataclasses import asdict, dataclass, field, fields, replace
from math import isfinite
from types import MappingProxyType
from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

import pandas as pd

T = TypeVar('T')

SCENARIO_BEAR = 'bear'
SCENARIO_BASE = 'base'
SCENARIO_BULL = 'bull'


@dataclass
class PolicyOutput(Generic[T]):
  '''
  Standard output from any policy.

  Every policy returns both a computed value and diagnostic information
  explaining how the value was computed.

  Attributes:
    value: The computed value (type depends on policy)
    diag: Dictionary of diagnostic information
  '''
  value: T
  diag: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScenarioOverride:
  '''
  Analyst-supplied values for a named scenario.

  A field left as None is derived from the base assumptions by the
  scenario rules. Zero is a legitimate override value.

  Attributes:
    pe_ratio: P/E multiple applied to scenario EPS
    growth_rate: Sales CAGR in percent
    margin: Net profit margin in percent
  '''
  pe_ratio: Optional[float] = None
  growth_rate: Optional[float] = None
  margin: Optional[float] = None

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'ScenarioOverride':
    '''Create from a camelCase or snake_case mapping.'''
    keys = {'pe_ratio': 'pe_ratio', 'peRatio': 'pe_ratio',
            'growth_rate': 'growth_rate', 'growthRate': 'growth_rate',
            'margin': 'margin'}
    values: Dict[str, Optional[float]] = {}
    for key, value in data.items():
      if key not in keys:
        raise KeyError(f"Unknown scenario override field: '{key}'. "
                       f'Available: {sorted(set(keys.values()))}')
      values[keys[key]] = None if value is None else float(value)
    return cls(**values)

  def to_dict(self) -> Dict[str, Optional[float]]:
    '''Convert to dictionary.'''
    return asdict(self)


_CAMEL_ALIASES = {
    'currentPrice': 'current_price',
    'investmentHorizonYears': 'investment_horizon_years',
    'currentSales': 'current_sales',
    'salesGrowthCAGRPercent': 'sales_growth_cagr_percent',
    'netProfitMarginPercent': 'net_profit_margin_percent',
    'normalizedNetProfitMarginPercent': 'normalized_net_profit_margin_percent',
    'sharesOutstanding': 'shares_outstanding',
    'normalizedEPS': 'normalized_eps',
    'shareRepurchasePercent': 'share_repurchase_percent',
    'shareIssuePercent': 'share_issue_percent',
    'dividendYieldPercent': 'dividend_yield_percent',
    'normalizedCurrentPE': 'normalized_current_pe',
    'expectedPEAtYearEnd': 'expected_pe_at_year_end',
    'peExpansionPercent': 'pe_expansion_percent',
    'marginOfSafetyPercent': 'margin_of_safety_percent',
    'penetrationPercent': 'penetration_percent',
}

_OPTIONAL_FIELDS = ('normalized_net_profit_margin_percent', 'normalized_eps')


@dataclass(frozen=True)
class AssumptionSet:
  '''
  Per-company valuation assumptions.

  This is the sole input to the engine. Percent fields are in percent
  units (15.0 means 15%).

  Attributes:
    current_price: Current market price per share
    investment_horizon_years: Years to project forward (> 0 expected)
    current_sales: Current annual sales
    sales_growth_cagr_percent: Expected sales CAGR over the horizon
    net_profit_margin_percent: Current net profit margin
    normalized_net_profit_margin_percent: Margin to project with; None
      falls back to net_profit_margin_percent
    shares_outstanding: Current share count (> 0 for a finite EPS)
    normalized_eps: EPS override for the base fair price; None uses the
      projected year-end EPS
    share_repurchase_percent: Share count reduction over the horizon
    share_issue_percent: Share count increase over the horizon
    dividend_yield_percent: Dividend contribution to total return
    normalized_current_pe: Multiple for the base fair price
    expected_pe_at_year_end: Multiple expected at the end of the horizon
    pe_expansion_percent: Informational, not used by the formulas
    margin_of_safety_percent: Discount applied to the base fair price
    tam: Total addressable market
    sam: Serviceable addressable market
    som: Serviceable obtainable market
    penetration_percent: Target penetration of the SOM
    overrides: Read-only mapping of scenario name ('bear' or 'bull') to
      ScenarioOverride
  '''
  current_price: float = 0.0
  investment_horizon_years: float = 5.0
  current_sales: float = 0.0
  sales_growth_cagr_percent: float = 0.0
  net_profit_margin_percent: float = 0.0
  normalized_net_profit_margin_percent: Optional[float] = None
  shares_outstanding: float = 1.0
  normalized_eps: Optional[float] = None
  share_repurchase_percent: float = 0.0
  share_issue_percent: float = 0.0
  dividend_yield_percent: float = 0.0
  normalized_current_pe: float = 0.0
  expected_pe_at_year_end: float = 0.0
  pe_expansion_percent: float = 0.0
  margin_of_safety_percent: float = 0.0
  tam: float = 0.0
  sam: float = 0.0
  som: float = 0.0
  penetration_percent: float = 0.0
  overrides: Mapping[str, ScenarioOverride] = field(default_factory=dict,
                                                    hash=False)

  def __post_init__(self):
    object.__setattr__(self, 'overrides',
                       MappingProxyType(dict(self.overrides)))

  def override_for(self, scenario: str) -> Optional[ScenarioOverride]:
    '''Return the override recorded for a scenario, if any.'''
    return self.overrides.get(scenario)

  def replace(self, **changes: Any) -> 'AssumptionSet':
    '''Return a copy with the given fields changed.'''
    return replace(self, **changes)

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to a JSON-friendly snake_case dictionary.'''
    result = {
        f.name: getattr(self, f.name)
        for f in fields(self)
        if f.name != 'overrides'
    }
    result['overrides'] = {
        name: override.to_dict() for name, override in self.overrides.items()
    }
    return result

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'AssumptionSet':
    '''
    Create from a camelCase or snake_case mapping.

    Later keys win when a field appears under both spellings. Optional
    fields accept None; every other field is coerced to float. A 0 under
    the camelCase keys normalizedEPS and normalizedNetProfitMarginPercent
    reads as None, while a 0 under the snake_case name is kept.

    Args:
      data: Mapping as produced by the form or store layer

    Returns:
      AssumptionSet

    Raises:
      KeyError: If a key does not name an assumption
      ValueError: If a value cannot be converted to float
    '''
    known = {f.name for f in fields(cls)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
      name = _CAMEL_ALIASES.get(key, key)
      if name not in known:
        raise KeyError(f"Unknown assumption: '{key}'. "
                       f'Available: {sorted(known)}')
      if name == 'overrides':
        values[name] = {
            str(scenario): ScenarioOverride.from_dict(override or {})
            for scenario, override in (value or {}).items()
        }
      elif value is None and name in _OPTIONAL_FIELDS:
        values[name] = None
      else:
        try:
          number = float(value)
        except (TypeError, ValueError) as e:
          raise ValueError(f'Invalid value for {key}: {value!r}') from e
        # The form writes 0 for an unset optional under its camelCase key
        if number == 0 and name in _OPTIONAL_FIELDS and key != name:
          values[name] = None
        else:
          values[name] = number
    return cls(**values)


@dataclass(frozen=True)
class ScenarioOutput:
  '''
  Resolved assumptions and price target for one scenario.

  Attributes:
    name: Scenario name ('bear', 'base' or 'bull')
    pe_ratio: Multiple applied to scenario EPS
    growth_rate_percent: Sales CAGR used for the projection
    margin_percent: Net margin used for the projection
    price: Scenario price target
    overridden: Names of the fields taken from an analyst override
  '''
  name: str
  pe_ratio: float
  growth_rate_percent: float
  margin_percent: float
  price: float
  overridden: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GridCell:
  '''One cell of the P/E x growth sensitivity grid.'''
  pe_ratio: float
  growth_rate_percent: float
  implied_price: float


@dataclass(frozen=True)
class EvaluationResult:
  '''
  Complete engine output for one AssumptionSet.

  Attributes:
    projected_sales: Sales at the end of the horizon
    net_profit_at_year_end: Projected net profit
    eps_at_year_end: Projected EPS on the adjusted share count
    normalized_eps: EPS override, or eps_at_year_end
    fair_price_base: normalized_eps times normalized current P/E
    fair_price_with_pe_expansion: eps_at_year_end times expected P/E
    fair_price_with_margin_of_safety: Base fair price less the margin
    price_return_percent: Headline price return to the expansion target
    total_return_percent: Price return plus dividends and buybacks
    annualized_return_percent: Total return annualized over the horizon
    bear_price: Bear scenario price target
    bull_price: Bull scenario price target
    implied_market_share_percent: Current sales as a share of SAM
    sales_at_full_penetration: SOM times target penetration
    sam_share_of_tam_percent: SAM as a share of TAM
    sensitivity_grid: Row-major P/E x growth grid
    scenarios: Bear, base and bull outputs in that order
    diag: Diagnostics from policies and scenario resolution
  '''
  projected_sales: float
  net_profit_at_year_end: float
  eps_at_year_end: float
  normalized_eps: float
  fair_price_base: float
  fair_price_with_pe_expansion: float
  fair_price_with_margin_of_safety: float
  price_return_percent: float
  total_return_percent: float
  annualized_return_percent: float
  bear_price: float
  bull_price: float
  implied_market_share_percent: float
  sales_at_full_penetration: float
  sam_share_of_tam_percent: float = 0.0
  sensitivity_grid: Tuple[GridCell, ...] = ()
  scenarios: Tuple[ScenarioOutput, ...] = ()
  diag: Mapping[str, Any] = field(default_factory=dict, hash=False)

  def __post_init__(self):
    object.__setattr__(self, 'diag', MappingProxyType(dict(self.diag)))

  def scenario(self, name: str) -> ScenarioOutput:
    '''Return the output for a scenario by name.'''
    for output in self.scenarios:
      if output.name == name:
        return output
    raise KeyError(f"Unknown scenario: '{name}'. "
                   f'Available: {[s.name for s in self.scenarios]}')

  def to_dict(self) -> Dict[str, float]:
    '''Convert scalar outputs to a flat dictionary for DataFrame rows.'''
    return {
        f.name: getattr(self, f.name)
        for f in fields(self)
        if f.name not in ('sensitivity_grid', 'scenarios', 'diag')
    }

  def non_finite_fields(self) -> List[str]:
    '''Names of outputs holding nan or inf, grid cells included.'''
    names = [name for name, value in self.to_dict().items()
             if not isfinite(value)]
    if any(not isfinite(cell.implied_price) for cell in self.sensitivity_grid):
      names.append('sensitivity_grid')
    return names

  @property
  def is_finite(self) -> bool:
    '''True when every output is a finite number.'''
    return not self.non_finite_fields()

  def grid_frame(self) -> pd.DataFrame:
    '''Sensitivity grid as a DataFrame with P/E rows and growth columns.'''
    rows = pd.DataFrame([asdict(cell) for cell in self.sensitivity_grid],
                        columns=['pe_ratio', 'growth_rate_percent',
                                 'implied_price'])
    table = rows.pivot(index='pe_ratio',
                       columns='growth_rate_percent',
                       values='implied_price')
    # pivot sorts its labels; keep the axis order the grid was built with
    table = table.reindex(
        index=list(dict.fromkeys(rows['pe_ratio'])),
        columns=list(dict.fromkeys(rows['growth_rate_percent'])),
    )
    table.index.name = 'P/E'
    table.columns.name = 'Growth (%)'
    return table
