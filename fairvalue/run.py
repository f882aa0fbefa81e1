'''
Single-company valuation entrypoint.

This module provides the command line entry point for running a valuation.
It:
1. Loads the assumption set from a company store or a JSON file
2. Logs caller-side input problems
3. Runs the engine
4. Logs the result and optionally exports CSV and charts
5. Optionally logs the stored financial statements of the company

Usage:
  python -m fairvalue.run --company AAPL --store data/companies.json
  python -m fairvalue.run --assumptions aapl.json --output out/aapl.csv
  python -m fairvalue.run --company AAPL --statements
'''

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from fairvalue.domain.statements import changes_frame
from fairvalue.domain.statements import DEFAULT_METRICS
from fairvalue.domain.statements import statements_frame
from fairvalue.domain.types import AssumptionSet, EvaluationResult
from fairvalue.domain.validation import check_assumptions
from fairvalue.engine.evaluate import evaluate
from fairvalue.export import export_csv
from fairvalue.scenarios.config import EngineConfig
from fairvalue.store import CompanyStore, DEFAULT_STORE_PATH

logger = logging.getLogger(__name__)


def load_assumptions_file(path: Path) -> AssumptionSet:
  '''Load an assumption set from a JSON object file.'''
  if not path.exists():
    raise FileNotFoundError(f'Assumptions file not found: {path}')

  with path.open('r', encoding='utf-8') as f:
    try:
      data = json.load(f)
    except json.JSONDecodeError as e:
      raise ValueError(f'Invalid assumptions file {path}: {e}') from e

  return AssumptionSet.from_dict(data)


def load_config_file(path: Optional[Path]) -> EngineConfig:
  '''Load an EngineConfig JSON file, or the default config if path is None.'''
  if path is None:
    return EngineConfig.default()
  if not path.exists():
    raise FileNotFoundError(f'Config file not found: {path}')
  return EngineConfig.from_json(path.read_text(encoding='utf-8'))


def log_result(label: str, result: EvaluationResult) -> None:
  '''Log a human-readable summary of an evaluation.'''
  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('Fair Value - %s', label)
  logger.info(separator)

  logger.info('\nProjection:')
  logger.info('  Projected Sales: %s', f'{result.projected_sales:,.2f}')
  logger.info('  Net Profit: %s', f'{result.net_profit_at_year_end:,.2f}')
  logger.info('  EPS at Year End: $%.2f', result.eps_at_year_end)
  logger.info('  Normalized EPS: $%.2f (%s)', result.normalized_eps,
              result.diag.get('eps_source'))

  logger.info('\nFair Price:')
  logger.info('  Base: $%.2f', result.fair_price_base)
  logger.info('  With P/E Expansion: $%.2f',
              result.fair_price_with_pe_expansion)
  logger.info('  With Margin of Safety: $%.2f',
              result.fair_price_with_margin_of_safety)

  logger.info('\nReturns:')
  logger.info('  Price Return: %.2f%%', result.price_return_percent)
  logger.info('  Total Return: %.2f%%', result.total_return_percent)
  logger.info('  Annualized Return: %.2f%%', result.annualized_return_percent)

  logger.info('\nScenarios:')
  for scenario in result.scenarios:
    logger.info('  %-5s $%.2f (P/E %.1f, growth %.1f%%, margin %.1f%%)',
                scenario.name, scenario.price, scenario.pe_ratio,
                scenario.growth_rate_percent, scenario.margin_percent)

  logger.info('\nMarket Sizing:')
  logger.info('  Implied Market Share: %.2f%%',
              result.implied_market_share_percent)
  logger.info('  Sales at Full Penetration: %s',
              f'{result.sales_at_full_penetration:,.2f}')

  logger.info('%s\n', separator)


def log_statements(store: CompanyStore, company_id: str) -> None:
  '''Log stored statement values and period-over-period changes.'''
  periods = store.load_financials(company_id)
  if not periods:
    logger.info('No financial statements stored for %s', company_id)
    return

  metrics = list(DEFAULT_METRICS) + store.load_custom_metrics(company_id)
  logger.info('\nFinancial Statements - %s', company_id)
  logger.info('%s', statements_frame(periods, metrics).to_string(
      float_format=lambda x: f'{x:,.2f}'))
  logger.info('\nPeriod-over-Period Change (%)')
  logger.info('%s', changes_frame(periods, metrics).to_string(
      float_format=lambda x: f'{x:.1f}'))


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Run fair value evaluation')
  source = parser.add_mutually_exclusive_group(required=True)
  source.add_argument('--company',
                      type=str,
                      help='Company identifier in the store')
  source.add_argument('--assumptions',
                      type=Path,
                      help='Path to an assumptions JSON file')
  parser.add_argument('--store',
                      type=Path,
                      default=DEFAULT_STORE_PATH,
                      help='Path to the company store JSON file')
  parser.add_argument('--config',
                      type=Path,
                      help='Path to an EngineConfig JSON file')
  parser.add_argument('--output', type=Path, help='CSV export path')
  parser.add_argument('--charts-dir',
                      type=Path,
                      help='Directory for scenario and sensitivity charts')
  parser.add_argument('--statements',
                      action='store_true',
                      help='Also log stored financial statements (--company)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  args = parser.parse_args()
  if args.statements and not args.company:
    parser.error('--statements requires --company')

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  if args.company:
    assumptions = CompanyStore(args.store).load_assumptions(args.company)
    label = args.company
  else:
    assumptions = load_assumptions_file(args.assumptions)
    label = args.assumptions.stem

  for problem in check_assumptions(assumptions):
    logger.warning('%s: %s', label, problem)

  config = load_config_file(args.config)
  result = evaluate(assumptions, config)
  log_result(label, result)

  if args.output:
    export_csv(assumptions, result, args.output)

  if args.statements:
    log_statements(CompanyStore(args.store), args.company)

  if args.charts_dir:
    # matplotlib is only imported when charts are requested
    from fairvalue.analysis.plot_valuation import plot_scenarios
    from fairvalue.analysis.plot_valuation import plot_sensitivity_heatmap
    plot_scenarios(result, args.charts_dir / f'{label}_scenarios.png', label,
                   assumptions.current_price)
    plot_sensitivity_heatmap(result, args.charts_dir / f'{label}_grid.png',
                             label)


if __name__ == '__main__':
  main()
