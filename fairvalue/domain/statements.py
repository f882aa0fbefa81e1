'''
Financial statement periods with analyst-defined metrics.

A company record can carry a list of reporting periods, each holding an
open-ended mapping from metric key to value, plus descriptors for the
custom metrics the analyst added on top of the standard ones.
'''

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd


@dataclass(frozen=True)
class MetricDescriptor:
  '''
  Display information for a statement metric.

  Attributes:
    key: Key used in FinancialPeriod.values
    label: Human-readable name
    color: Chart color (any CSS/matplotlib color string)
  '''
  key: str
  label: str
  color: str = ''

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'MetricDescriptor':
    '''Create from dictionary.'''
    return cls(key=str(data['key']),
               label=str(data.get('label', data['key'])),
               color=str(data.get('color', '')))


DEFAULT_METRICS = (
    MetricDescriptor('revenue', 'Revenue', 'tab:blue'),
    MetricDescriptor('grossProfit', 'Gross Profit', 'tab:orange'),
    MetricDescriptor('netIncome', 'Net Income', 'tab:green'),
    MetricDescriptor('freeCashFlow', 'Free Cash Flow', 'tab:red'),
)


@dataclass(frozen=True)
class FinancialPeriod:
  '''
  One reporting period.

  Attributes:
    period: Period label (e.g. 'Q1 2024', 'FY 2024')
    values: Metric key to value
  '''
  period: str
  values: Mapping[str, float] = field(default_factory=dict)

  def get(self, key: str) -> Optional[float]:
    return self.values.get(key)

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'FinancialPeriod':
    '''Create from a flat record with a 'period' key and numeric metrics.'''
    values: Dict[str, float] = {}
    for key, value in data.items():
      if key == 'period':
        continue
      try:
        values[key] = float(value)
      except (TypeError, ValueError) as e:
        raise ValueError(
            f"Invalid value for {key} in period {data.get('period')}: "
            f'{value!r}') from e
    return cls(period=str(data['period']), values=values)

  def to_dict(self) -> Dict[str, Any]:
    result: Dict[str, Any] = {'period': self.period}
    result.update(self.values)
    return result


def period_change_percent(current: Optional[float],
                          previous: Optional[float]) -> float:
  '''
  Period-over-period change in percent.

  Returns 0 when there is no previous value or it is zero.
  '''
  if not previous or current is None:
    return 0.0
  return (current - previous) / previous * 100.0


def statements_frame(
    periods: Sequence[FinancialPeriod],
    metrics: Sequence[MetricDescriptor] = DEFAULT_METRICS,
) -> pd.DataFrame:
  '''
  Tabulate periods as a DataFrame with metric labels as rows.

  Metrics missing from a period show as NaN. Columns follow the order of
  periods, and repeated period labels stay separate columns.

  Args:
    periods: Periods in display order
    metrics: Metrics to include, in row order

  Returns:
    DataFrame indexed by metric label with one column per period
  '''
  rows = [[p.values.get(m.key, float('nan')) for p in periods]
          for m in metrics]
  frame = pd.DataFrame(rows,
                       index=[m.label for m in metrics],
                       columns=[p.period for p in periods])
  frame.index.name = 'Metric'
  return frame


def changes_frame(
    periods: Sequence[FinancialPeriod],
    metrics: Sequence[MetricDescriptor] = DEFAULT_METRICS,
) -> pd.DataFrame:
  '''Period-over-period change (%) for each metric; first period is 0.'''
  columns: List[List[float]] = []
  previous: Optional[FinancialPeriod] = None
  for p in periods:
    columns.append([
        period_change_percent(p.get(m.key),
                              previous.get(m.key) if previous else None)
        for m in metrics
    ])
    previous = p
  rows = [[column[i] for column in columns] for i in range(len(metrics))]
  frame = pd.DataFrame(rows,
                       index=[m.label for m in metrics],
                       columns=[p.period for p in periods])
  frame.index.name = 'Metric'
  return frame
