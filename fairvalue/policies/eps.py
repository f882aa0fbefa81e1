'''
EPS policies for the base fair price.
'''

from abc import ABC, abstractmethod

from fairvalue.domain.types import AssumptionSet, PolicyOutput


class EPSPolicy(ABC):
  '''
  Base class for EPS policies.

  Subclasses implement compute() to return the EPS that the normalized
  current P/E is applied to.
  '''

  @abstractmethod
  def compute(self, data: AssumptionSet,
              eps_at_year_end: float) -> PolicyOutput[float]:
    '''
    Compute normalized EPS.

    Args:
      data: Assumptions being evaluated
      eps_at_year_end: Projected EPS at the end of the horizon

    Returns:
      PolicyOutput with EPS and diagnostics
    '''


class OverrideOrProjectedEPS(EPSPolicy):
  '''
  Analyst EPS override, falling back to projected year-end EPS.
  '''

  def compute(self, data: AssumptionSet,
              eps_at_year_end: float) -> PolicyOutput[float]:
    if data.normalized_eps is not None:
      return PolicyOutput(value=data.normalized_eps,
                          diag={'eps_source': 'override'})
    return PolicyOutput(value=eps_at_year_end,
                        diag={'eps_source': 'projected'})
