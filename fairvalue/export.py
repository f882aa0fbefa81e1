"""
CSV export of an evaluation.

Writes a flat two-column (Metric, Value) file with section header rows
INPUTS, CALCULATED OUTPUTS and SCENARIOS. Numbers are formatted with two
decimals. Non-finite numbers are written as an empty value, so the file
never contains nan or inf tokens. There is no reader for this format.
"""

import logging
from math import isfinite
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from fairvalue.domain.types import AssumptionSet, EvaluationResult
from fairvalue.policies.margin import effective_margin

logger = logging.getLogger(__name__)

SECTION_INPUTS = 'INPUTS'
SECTION_OUTPUTS = 'CALCULATED OUTPUTS'
SECTION_SCENARIOS = 'SCENARIOS'


def format_value(value: float) -> str:
  """Two-decimal text for finite numbers, empty text otherwise."""
  if not isfinite(value):
    return ''
  return f'{value:.2f}'


def build_export_rows(
    assumptions: AssumptionSet,
    result: EvaluationResult,
) -> List[Tuple[str, str]]:
  """
  Build label/value rows for export.

  Args:
    assumptions: Inputs that were evaluated
    result: Evaluation of those inputs

  Returns:
    List of (label, value) pairs; section headers have an empty value
  """
  inputs = [
      ('Current Price', assumptions.current_price),
      ('Current Sales', assumptions.current_sales),
      ('Sales Growth CAGR (%)', assumptions.sales_growth_cagr_percent),
      ('Net Profit Margin (%)', assumptions.net_profit_margin_percent),
      ('Normalized Net Profit Margin (%)', effective_margin(assumptions)),
      ('Shares Outstanding', assumptions.shares_outstanding),
      ('Share Repurchase (%)', assumptions.share_repurchase_percent),
      ('Share Issue (%)', assumptions.share_issue_percent),
      ('Dividend Yield (%)', assumptions.dividend_yield_percent),
      ('Normalized Current P/E', assumptions.normalized_current_pe),
      ('Expected P/E at Year End', assumptions.expected_pe_at_year_end),
      ('Investment Horizon (Years)', assumptions.investment_horizon_years),
      ('Margin of Safety (%)', assumptions.margin_of_safety_percent),
      ('TAM', assumptions.tam),
      ('SAM', assumptions.sam),
      ('SOM', assumptions.som),
      ('Penetration (%)', assumptions.penetration_percent),
  ]
  outputs = [
      ('Projected Sales', result.projected_sales),
      ('Net Profit at Year End', result.net_profit_at_year_end),
      ('EPS at Year End', result.eps_at_year_end),
      ('Normalized EPS', result.normalized_eps),
      ('Fair Price (Base)', result.fair_price_base),
      ('Fair Price with P/E Expansion', result.fair_price_with_pe_expansion),
      ('Fair Price with Margin of Safety',
       result.fair_price_with_margin_of_safety),
      ('Price Return (%)', result.price_return_percent),
      ('Total Return (%)', result.total_return_percent),
      ('Annualized Return (%)', result.annualized_return_percent),
      ('Implied Market Share (%)', result.implied_market_share_percent),
      ('Sales at Full Penetration', result.sales_at_full_penetration),
  ]

  rows: List[Tuple[str, str]] = [(SECTION_INPUTS, '')]
  rows.extend((label, format_value(value)) for label, value in inputs)
  rows.append((SECTION_OUTPUTS, ''))
  rows.extend((label, format_value(value)) for label, value in outputs)
  rows.append((SECTION_SCENARIOS, ''))
  for scenario in result.scenarios:
    title = scenario.name.capitalize()
    rows.append((f'{title} Case Price', format_value(scenario.price)))
    rows.append((f'{title} P/E', format_value(scenario.pe_ratio)))
    rows.append(
        (f'{title} Growth (%)', format_value(scenario.growth_rate_percent)))
    rows.append((f'{title} Margin (%)', format_value(scenario.margin_percent)))
  return rows


def export_frame(assumptions: AssumptionSet,
                 result: EvaluationResult) -> pd.DataFrame:
  """Export rows as a two-column DataFrame."""
  return pd.DataFrame(build_export_rows(assumptions, result),
                      columns=['Metric', 'Value'])


def export_csv(assumptions: AssumptionSet, result: EvaluationResult,
               path: Path) -> Path:
  """
  Write the export to a CSV file.

  Args:
    assumptions: Inputs that were evaluated
    result: Evaluation of those inputs
    path: Output file path (parent directories are created)

  Returns:
    The path written
  """
  path = Path(path)
  path.parent.mkdir(parents=True, exist_ok=True)
  export_frame(assumptions, result).to_csv(path, index=False)
  logger.info('Exported valuation to: %s', path)
  return path
