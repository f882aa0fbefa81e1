'''
Caller-side input checks.

The engine accepts any numbers and never calls these checks. Callers that
want to reject or flag suspicious inputs (the CLI and batch runner log
them) use check_assumptions before evaluating.
'''

from typing import List

from fairvalue.domain.types import AssumptionSet


def check_assumptions(assumptions: AssumptionSet) -> List[str]:
  '''
  List problems that lead to degenerate engine output.

  Args:
    assumptions: Assumptions about to be evaluated

  Returns:
    Human-readable problem descriptions, empty if none were found
  '''
  problems: List[str] = []

  if assumptions.shares_outstanding <= 0:
    problems.append(
        f'shares_outstanding must be > 0, got {assumptions.shares_outstanding}')
  else:
    net_factor = (1.0 - assumptions.share_repurchase_percent / 100.0 +
                  assumptions.share_issue_percent / 100.0)
    if net_factor <= 0:
      problems.append('share_repurchase_percent and share_issue_percent '
                      f'leave no shares outstanding (factor {net_factor:.4f})')

  if assumptions.investment_horizon_years <= 0:
    problems.append('investment_horizon_years must be > 0, got '
                    f'{assumptions.investment_horizon_years}')

  if assumptions.current_price <= 0:
    problems.append('current_price must be > 0 for return metrics, got '
                    f'{assumptions.current_price}')

  if assumptions.sam <= 0:
    problems.append(f'sam must be > 0 for market share, got {assumptions.sam}')

  if not 0 <= assumptions.margin_of_safety_percent <= 100:
    problems.append('margin_of_safety_percent outside 0-100: '
                    f'{assumptions.margin_of_safety_percent}')

  return problems
