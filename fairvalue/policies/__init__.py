"""
Valuation policies for deriving engine inputs from assumptions.

Each policy derives one input of the valuation (the margin to project
with, the EPS behind the base fair price) and returns both a value and
diagnostic information.

To add a new policy:
1. Create a new class inheriting from the appropriate base (e.g., MarginPolicy)
2. Implement the compute() method returning PolicyOutput

Example:
  class ReportedMargin(MarginPolicy):
    def compute(self, data: AssumptionSet) -> PolicyOutput[float]:
      return PolicyOutput(value=data.net_profit_margin_percent,
                          diag={'margin_source': 'net'})
"""

from fairvalue.policies.eps import EPSPolicy
from fairvalue.policies.eps import OverrideOrProjectedEPS
from fairvalue.policies.margin import effective_margin
from fairvalue.policies.margin import MarginPolicy
from fairvalue.policies.margin import NormalizedMargin

__all__ = [
  'MarginPolicy', 'NormalizedMargin', 'effective_margin',
  'EPSPolicy', 'OverrideOrProjectedEPS',
]
