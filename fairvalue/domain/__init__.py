"""Domain types for the fair value engine."""

from fairvalue.domain.types import AssumptionSet
from fairvalue.domain.types import EvaluationResult
from fairvalue.domain.types import GridCell
from fairvalue.domain.types import PolicyOutput
from fairvalue.domain.types import ScenarioOutput
from fairvalue.domain.types import ScenarioOverride

__all__ = [
    'AssumptionSet',
    'EvaluationResult',
    'GridCell',
    'PolicyOutput',
    'ScenarioOutput',
    'ScenarioOverride',
]
