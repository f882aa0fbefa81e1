"""
Sensitivity tables for fair value analysis.

Builds 2D tables of implied price across P/E multiples and sales growth
rates from the engine's sensitivity grid, keeping every other assumption
fixed.

CLI Usage:
  python -m fairvalue.analysis.sensitivity \\
      --company AAPL \\
      --pe-ratios 15,20,25,30 \\
      --growth-rates 5,10,15
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from fairvalue.domain.types import AssumptionSet
from fairvalue.engine.grid import generate_grid
from fairvalue.policies.margin import effective_margin
from fairvalue.scenarios.config import EngineConfig
from fairvalue.store import CompanyStore, DEFAULT_STORE_PATH

logger = logging.getLogger(__name__)


class SensitivityTableBuilder:
  """
  Build 2D sensitivity tables of implied price.

  Varies the P/E multiple and the sales CAGR while sales, margin, shares
  and horizon come from the assumptions.
  """

  def __init__(
      self,
      assumptions: AssumptionSet,
      base_config: Optional[EngineConfig] = None,
  ):
    """
    Initialize sensitivity table builder.

    Args:
        assumptions: Company assumptions
        base_config: Config supplying the default axes
    """
    self.assumptions = assumptions
    self.base_config = base_config or EngineConfig.default()

    logger.info('Initialized SensitivityTableBuilder')
    logger.info('  Sales: %s', f'{assumptions.current_sales:,.2f}')
    logger.info('  Margin: %.2f%%', effective_margin(assumptions))
    logger.info('  Shares: %s', f'{assumptions.shares_outstanding:,.2f}')
    logger.info('  Horizon: %.1f years', assumptions.investment_horizon_years)

  def build(
      self,
      pe_ratios: Optional[Sequence[float]] = None,
      growth_rates: Optional[Sequence[float]] = None,
  ) -> pd.DataFrame:
    """
    Build 2D sensitivity table.

    Args:
        pe_ratios: P/E multiples (default: config pe_axis)
        growth_rates: Sales CAGR values in percent (default: config
                      growth_axis)

    Returns:
        DataFrame with P/E as index, growth rates as columns and implied
        prices as cell values
    """
    if pe_ratios is None:
      pe_ratios = self.base_config.pe_axis
    if growth_rates is None:
      growth_rates = self.base_config.growth_axis
    if not pe_ratios:
      raise ValueError('pe_ratios cannot be empty')
    if not growth_rates:
      raise ValueError('growth_rates cannot be empty')

    logger.info('Building sensitivity table: %d x %d', len(pe_ratios),
                len(growth_rates))

    cells = generate_grid(self.assumptions, pe_ratios, growth_rates)
    width = len(growth_rates)
    data_rows = [[cell.implied_price for cell in cells[i:i + width]]
                 for i in range(0, len(cells), width)]

    pe_labels = [f'{pe:g}x' for pe in pe_ratios]
    g_labels = [f'{g:g}%' for g in growth_rates]

    df = pd.DataFrame(data_rows, index=pe_labels, columns=g_labels)
    df.index.name = 'P/E'
    df.columns.name = 'Growth'

    logger.info('Sensitivity table built successfully')
    return df


def _parse_float_list(s: str) -> list[float]:
  """Parse comma-separated float list."""
  return [float(x.strip()) for x in s.split(',')]


def main() -> None:
  """CLI entrypoint for sensitivity analysis."""
  parser = argparse.ArgumentParser(
      description='Fair value sensitivity analysis',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  # Default axes (P/E 15-40, growth 5-30%)
  python -m fairvalue.analysis.sensitivity --company AAPL

  # Explicit axes
  python -m fairvalue.analysis.sensitivity \\
      --company MSFT --pe-ratios 20,25,30 --growth-rates 8,10,12
      """)

  parser.add_argument('--company',
                      type=str,
                      required=True,
                      help='Company identifier in the store')
  parser.add_argument('--store',
                      type=Path,
                      default=DEFAULT_STORE_PATH,
                      help='Path to the company store JSON file')
  parser.add_argument('--pe-ratios',
                      type=str,
                      help='Comma-separated P/E multiples (e.g., 15,20,25)')
  parser.add_argument('--growth-rates',
                      type=str,
                      help='Comma-separated growth rates in %% (e.g., 5,10)')
  parser.add_argument('--output', type=Path, help='Output CSV path (optional)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  logger.info('Loading store: %s', args.store)
  assumptions = CompanyStore(args.store).load_assumptions(args.company)

  pe_ratios = _parse_float_list(args.pe_ratios) if args.pe_ratios else None
  growth_rates = (_parse_float_list(args.growth_rates)
                  if args.growth_rates else None)

  builder = SensitivityTableBuilder(assumptions)
  table = builder.build(pe_ratios=pe_ratios, growth_rates=growth_rates)

  print('\n' + '=' * 80)
  print(f'Sensitivity Analysis: {args.company}')
  print('=' * 80)
  print(f'Current Price: ${assumptions.current_price:.2f}')
  print(f'Horizon: {assumptions.investment_horizon_years:g} years')
  print('\n' + '=' * 80)
  print('Implied Price per Share ($)')
  print('=' * 80)
  print(table.to_string(float_format=lambda x: f'${x:.2f}'))
  print('=' * 80 + '\n')

  if args.output:
    table.to_csv(args.output)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
