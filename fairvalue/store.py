"""
JSON-file company store.

Keeps a collection of company records keyed by identifier (usually the
ticker symbol) in a single JSON file so edits survive restarts. A record
is a free-form dict; the keys this package reads are:

  symbol, companyName, currentPrice: identity and last price
  tam: market sizing object with tam, sam and som keys
  assumptions: mapping accepted by AssumptionSet.from_dict
  financials: list of period records (see domain.statements)
  customMetrics: list of metric descriptors (see domain.statements)

Unknown keys are stored and returned untouched.

Usage:
  store = CompanyStore(Path('companies.json'))
  store.upsert('AAPL', {'companyName': 'Apple Inc.', 'currentPrice': 178.45})
  assumptions = store.load_assumptions('AAPL')
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from fairvalue.domain.statements import FinancialPeriod
from fairvalue.domain.statements import MetricDescriptor
from fairvalue.domain.types import AssumptionSet

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path('data/companies.json')

# Form defaults merged under stored values.
DEFAULT_ASSUMPTIONS: Dict[str, Any] = {
    'current_price': 0.0,
    'investment_horizon_years': 5.0,
    'current_sales': 0.0,
    'sales_growth_cagr_percent': 10.0,
    'net_profit_margin_percent': 10.0,
    'normalized_net_profit_margin_percent': None,
    'shares_outstanding': 1.0,
    'normalized_eps': None,
    'share_repurchase_percent': 0.0,
    'share_issue_percent': 0.0,
    'dividend_yield_percent': 0.0,
    'normalized_current_pe': 20.0,
    'expected_pe_at_year_end': 20.0,
    'pe_expansion_percent': 0.0,
    'margin_of_safety_percent': 25.0,
    'tam': 0.0,
    'sam': 0.0,
    'som': 0.0,
    'penetration_percent': 0.0,
}


class CompanyStore:
  """
  Company records persisted as one JSON object keyed by identifier.

  Records are cached after the first load; every write goes straight to
  disk and refreshes the cache. Not safe for concurrent writers.
  """

  def __init__(self, path: Path = DEFAULT_STORE_PATH):
    """
    Initialize store.

    Args:
      path: JSON file path (created on first write)
    """
    self.path = Path(path)
    self._records: Optional[Dict[str, Dict[str, Any]]] = None

  def _load(self) -> Dict[str, Dict[str, Any]]:
    if self._records is not None:
      return self._records

    if not self.path.exists():
      logger.debug('Store %s does not exist yet, starting empty', self.path)
      self._records = {}
      return self._records

    with self.path.open('r', encoding='utf-8') as f:
      try:
        data = json.load(f)
      except json.JSONDecodeError as e:
        raise ValueError(f'Invalid store file {self.path}: {e}') from e

    if not isinstance(data, dict):
      raise ValueError(f'Store file {self.path} must hold a JSON object, '
                       f'got {type(data).__name__}')

    self._records = data
    return self._records

  def _write(self, records: Dict[str, Dict[str, Any]]) -> None:
    self.path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
    with tmp_path.open('w', encoding='utf-8') as f:
      json.dump(records, f, indent=2, sort_keys=True)
    tmp_path.replace(self.path)
    self._records = records

  def clear_cache(self) -> None:
    """Drop cached records so the next read goes to disk."""
    self._records = None

  def list_ids(self) -> List[str]:
    """Identifiers of all stored companies, sorted."""
    return sorted(self._load().keys())

  def get(self, company_id: str) -> Dict[str, Any]:
    """
    Return a copy of a stored record.

    Raises:
      KeyError: If the company is not stored
    """
    records = self._load()
    if company_id not in records:
      raise KeyError(f"Unknown company: '{company_id}'. "
                     f'Available: {sorted(records.keys())}')
    return json.loads(json.dumps(records[company_id]))

  def upsert(self, company_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a record or merge updates into it (top-level keys replace).

    Returns:
      The stored record after the update
    """
    records = dict(self._load())
    record = dict(records.get(company_id, {}))
    record.update(updates)
    records[company_id] = record
    self._write(records)
    logger.info('Saved company %s', company_id)
    return self.get(company_id)

  def delete(self, company_id: str) -> None:
    """
    Remove a record.

    Raises:
      KeyError: If the company is not stored
    """
    records = dict(self._load())
    if company_id not in records:
      raise KeyError(f"Unknown company: '{company_id}'")
    del records[company_id]
    self._write(records)
    logger.info('Deleted company %s', company_id)

  def load_assumptions(self, company_id: str) -> AssumptionSet:
    """
    Build the assumption set for a company.

    Defaults are merged under the stored assumptions. The record-level
    currentPrice and the tam, sam and som of the record-level tam object
    are used when the assumptions do not carry those values.

    Raises:
      KeyError: If the company is not stored or an assumption key is unknown
    """
    record = self.get(company_id)
    merged: Dict[str, Any] = dict(DEFAULT_ASSUMPTIONS)
    if 'currentPrice' in record:
      merged['current_price'] = record['currentPrice']
    market = record.get('tam') or {}
    for key in ('tam', 'sam', 'som'):
      if key in market:
        merged[key] = market[key]
    merged.update(record.get('assumptions') or {})
    return AssumptionSet.from_dict(merged)

  def save_assumptions(self, company_id: str,
                       assumptions: AssumptionSet) -> None:
    """Store an assumption set on a company record (created if missing)."""
    self.upsert(company_id, {'assumptions': assumptions.to_dict()})

  def load_financials(self, company_id: str) -> List[FinancialPeriod]:
    """Statement periods recorded for a company, in stored order."""
    record = self.get(company_id)
    return [FinancialPeriod.from_dict(p) for p in record.get('financials', [])]

  def load_custom_metrics(self, company_id: str) -> List[MetricDescriptor]:
    """Custom metric descriptors recorded for a company."""
    record = self.get(company_id)
    return [
        MetricDescriptor.from_dict(m) for m in record.get('customMetrics', [])
    ]
