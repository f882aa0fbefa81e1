'''
Batch valuation for every company in a store.

This module provides tools to:
1. Evaluate many companies at once
2. Compare fair values and expected returns across companies
3. Export results to CSV for further analysis

Usage (CLI):
  # Every stored company
  python -m fairvalue.analysis.batch_valuation \
    --store data/companies.json \
    --output results/watchlist.csv

  # Specific companies
  python -m fairvalue.analysis.batch_valuation \
    --companies AAPL MSFT GOOGL \
    --output results/bigtech.csv \
    -v

Usage (Python API):
  from fairvalue.analysis.batch_valuation import batch_valuation
  from fairvalue.store import CompanyStore

  df = batch_valuation(CompanyStore(Path('data/companies.json')))
  df.to_csv('results.csv', index=False)
'''

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from fairvalue.domain.types import EvaluationResult
from fairvalue.domain.validation import check_assumptions
from fairvalue.engine.evaluate import evaluate
from fairvalue.scenarios.config import EngineConfig
from fairvalue.store import CompanyStore, DEFAULT_STORE_PATH

logger = logging.getLogger(__name__)


def _result_to_dict(
    company_id: str,
    config_name: str,
    current_price: float,
    result: EvaluationResult,
) -> dict:
  '''Convert EvaluationResult to flat dictionary for DataFrame row.'''
  row = {
      'company': company_id,
      'config': config_name,
      'current_price': current_price,
  }
  row.update(result.to_dict())
  row['is_finite'] = result.is_finite
  return row


def batch_valuation(
    store: CompanyStore,
    company_ids: Optional[List[str]] = None,
    config: Optional[EngineConfig] = None,
    verbose: bool = False,
) -> pd.DataFrame:
  '''
  Evaluate several companies from a store.

  Companies whose records cannot be turned into assumptions are logged and
  skipped.

  Args:
    store: Company store to read from
    company_ids: Companies to evaluate (default: every stored company)
    config: EngineConfig (default: EngineConfig.default())
    verbose: Enable verbose logging

  Returns:
    DataFrame with one row per company: company, config, current_price,
    every scalar EvaluationResult field and is_finite

  Raises:
    ValueError: If no company could be evaluated
  '''
  if config is None:
    config = EngineConfig.default()
  if company_ids is None:
    company_ids = store.list_ids()

  results = []

  for i, company_id in enumerate(company_ids, 1):
    if verbose:
      logger.info('[%d/%d] Processing %s...', i, len(company_ids), company_id)

    try:
      assumptions = store.load_assumptions(company_id)
    except (KeyError, ValueError) as e:
      logger.warning('Failed to process %s: %s', company_id, str(e))
      continue

    for problem in check_assumptions(assumptions):
      logger.warning('%s: %s', company_id, problem)

    result = evaluate(assumptions, config)
    results.append(
        _result_to_dict(company_id, config.name, assumptions.current_price,
                        result))

    if verbose:
      logger.info('  Fair: $%.2f, Price: $%.2f, Annualized: %.1f%%',
                  result.fair_price_with_pe_expansion,
                  assumptions.current_price, result.annualized_return_percent)

  if not results:
    raise ValueError(f'No successful results for any company in {company_ids}')

  return pd.DataFrame(results)


def _print_summary(df: pd.DataFrame) -> None:
  '''Print summary statistics for batch valuation results.'''
  total = len(df)
  finite = df[df['is_finite']]

  logger.info('')
  logger.info('=' * 70)
  logger.info('Summary Statistics')
  logger.info('=' * 70)
  logger.info('Total companies: %d', total)
  logger.info('With finite outputs: %d', len(finite))
  logger.info('')

  if finite.empty:
    return

  logger.info('Annualized Return:')
  logger.info('  Mean:   %.2f%%', finite['annualized_return_percent'].mean())
  logger.info('  Median: %.2f%%', finite['annualized_return_percent'].median())
  logger.info('')

  upside = finite[finite['price_return_percent'] > 0]
  logger.info('Upside to fair price: %d / %d (%.1f%%)', len(upside),
              len(finite), len(upside) / len(finite) * 100)

  if len(upside) > 0:
    logger.info('Top 5 by annualized return:')
    top5 = upside.nlargest(5, 'annualized_return_percent')
    for _, row in top5.iterrows():
      logger.info('  %-8s %6.1f%%  (fair $%.2f vs $%.2f)', row['company'],
                  row['annualized_return_percent'],
                  row['fair_price_with_pe_expansion'], row['current_price'])


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Batch fair value evaluation')
  parser.add_argument('--store',
                      type=Path,
                      default=DEFAULT_STORE_PATH,
                      help='Path to the company store JSON file')
  parser.add_argument('--companies',
                      nargs='+',
                      help='Company identifiers (default: all stored)')
  parser.add_argument('--config',
                      type=Path,
                      help='Path to an EngineConfig JSON file')
  parser.add_argument('--output', type=Path, help='Output CSV path')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  config = (EngineConfig.from_json(args.config.read_text(encoding='utf-8'))
            if args.config else EngineConfig.default())

  df = batch_valuation(
      store=CompanyStore(args.store),
      company_ids=args.companies,
      config=config,
      verbose=args.verbose,
  )

  _print_summary(df)

  if args.output:
    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index=False)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
