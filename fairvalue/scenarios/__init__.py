"""Scenario rules, resolution and engine configuration."""

from fairvalue.scenarios.config import EngineConfig
from fairvalue.scenarios.registry import get_rule
from fairvalue.scenarios.registry import list_scenarios
from fairvalue.scenarios.registry import SCENARIO_RULES
from fairvalue.scenarios.registry import ScenarioRule
from fairvalue.scenarios.resolver import resolve_scenario
from fairvalue.scenarios.resolver import resolve_scenarios

__all__ = [
  'EngineConfig',
  'SCENARIO_RULES',
  'ScenarioRule',
  'get_rule',
  'list_scenarios',
  'resolve_scenario',
  'resolve_scenarios',
]
