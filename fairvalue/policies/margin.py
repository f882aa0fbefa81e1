'''
Net margin policies.

These policies pick the net profit margin that projections are built on.
'''

from abc import ABC, abstractmethod

from fairvalue.domain.types import AssumptionSet, PolicyOutput


class MarginPolicy(ABC):
  '''
  Base class for margin policies.

  Subclasses implement compute() to return a margin in percent.
  '''

  @abstractmethod
  def compute(self, data: AssumptionSet) -> PolicyOutput[float]:
    '''
    Compute the margin to project with.

    Args:
      data: Assumptions being evaluated

    Returns:
      PolicyOutput with margin (percent) and diagnostics
    '''


class NormalizedMargin(MarginPolicy):
  '''
  Normalized margin with fallback to the current net margin.

  The normalized margin is used when the analyst recorded one (zero
  included); otherwise the current net profit margin is used.
  '''

  def compute(self, data: AssumptionSet) -> PolicyOutput[float]:
    '''Return normalized margin, or net margin when none is recorded.'''
    if data.normalized_net_profit_margin_percent is not None:
      return PolicyOutput(
          value=data.normalized_net_profit_margin_percent,
          diag={
              'margin_source': 'normalized',
              'effective_margin_percent':
                  data.normalized_net_profit_margin_percent,
          })

    return PolicyOutput(value=data.net_profit_margin_percent,
                        diag={
                            'margin_source': 'net',
                            'effective_margin_percent':
                                data.net_profit_margin_percent,
                        })


def effective_margin(data: AssumptionSet) -> float:
  '''Margin used by projections, scenarios and the sensitivity grid.'''
  return NormalizedMargin().compute(data).value
