import json
from pathlib import Path

import pytest

from fairvalue.domain.types import AssumptionSet
from fairvalue.store import CompanyStore


@pytest.fixture
def example_assumptions() -> AssumptionSet:
  """Worked example: 100 sales growing 15% for 5 years at a 20% margin."""
  return AssumptionSet(
      current_price=50.0,
      investment_horizon_years=5.0,
      current_sales=100.0,
      sales_growth_cagr_percent=15.0,
      net_profit_margin_percent=20.0,
      normalized_net_profit_margin_percent=20.0,
      shares_outstanding=10.0,
      normalized_current_pe=25.0,
      expected_pe_at_year_end=30.0,
  )


@pytest.fixture
def full_assumptions() -> AssumptionSet:
  """Assumptions with capital return, margin of safety and market sizing."""
  return AssumptionSet(
      current_price=80.0,
      investment_horizon_years=4.0,
      current_sales=500.0,
      sales_growth_cagr_percent=12.0,
      net_profit_margin_percent=18.0,
      normalized_net_profit_margin_percent=22.0,
      shares_outstanding=50.0,
      share_repurchase_percent=4.0,
      share_issue_percent=1.0,
      dividend_yield_percent=2.0,
      normalized_current_pe=22.0,
      expected_pe_at_year_end=26.0,
      margin_of_safety_percent=25.0,
      tam=20000.0,
      sam=5000.0,
      som=1500.0,
      penetration_percent=40.0,
  )


@pytest.fixture
def zero_shares_assumptions(example_assumptions) -> AssumptionSet:
  """Share count of zero: EPS is undefined."""
  return example_assumptions.replace(shares_outstanding=0.0)


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
  """Store file with two companies, one stored in camelCase form."""
  path = tmp_path / 'companies.json'
  records = {
      'AAPL': {
          'symbol': 'AAPL',
          'companyName': 'Apple Inc.',
          'currentPrice': 178.45,
          'assumptions': {
              'currentSales': 383.0,
              'salesGrowthCAGRPercent': 6.0,
              'netProfitMarginPercent': 25.0,
              'sharesOutstanding': 15.5,
              'normalizedCurrentPE': 28.0,
              'expectedPEAtYearEnd': 25.0,
              'sam': 1200.0,
          },
          'financials': [
              {'period': 'FY 2023', 'revenue': 383.3, 'netIncome': 97.0},
              {'period': 'FY 2024', 'revenue': 391.0, 'netIncome': 93.7},
          ],
          'customMetrics': [
              {
                  'key': 'servicesRevenue',
                  'label': 'Services',
                  'color': 'tab:purple',
              },
          ],
      },
      'MSFT': {
          'symbol': 'MSFT',
          'companyName': 'Microsoft Corporation',
          'currentPrice': 412.78,
          'assumptions': {
              'current_sales': 245.0,
              'sales_growth_cagr_percent': 12.0,
              'net_profit_margin_percent': 36.0,
              'shares_outstanding': 7.4,
              'normalized_current_pe': 32.0,
              'expected_pe_at_year_end': 30.0,
          },
      },
  }
  path.write_text(json.dumps(records), encoding='utf-8')
  return path


@pytest.fixture
def company_store(store_path: Path) -> CompanyStore:
  return CompanyStore(store_path)
