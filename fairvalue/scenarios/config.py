"""
Engine configuration.

EngineConfig is a serializable (JSON-friendly) configuration class that
fixes the sensitivity grid axes and the scenario fallback rules. The
default configuration reproduces the engine constants; custom configs
make experiments reproducible without touching the assumptions.
"""

from dataclasses import dataclass
from dataclasses import field
import json
from typing import Any

from fairvalue.engine.grid import GROWTH_AXIS
from fairvalue.engine.grid import PE_AXIS
from fairvalue.scenarios.registry import SCENARIO_RULES
from fairvalue.scenarios.registry import ScenarioRule


@dataclass
class EngineConfig:
  """
  Configuration for an evaluation.

  Attributes:
    name: Human-readable configuration name
    pe_axis: P/E values for the sensitivity grid rows
    growth_axis: Growth rates (percent) for the sensitivity grid columns
    scenario_rules: Scenario name to fallback rule; evaluated in order
  """
  name: str = 'default'
  pe_axis: tuple[float, ...] = PE_AXIS
  growth_axis: tuple[float, ...] = GROWTH_AXIS
  scenario_rules: dict[str, ScenarioRule] = field(
      default_factory=lambda: dict(SCENARIO_RULES))

  def __post_init__(self):
    self.pe_axis = tuple(float(x) for x in self.pe_axis)
    self.growth_axis = tuple(float(x) for x in self.growth_axis)
    if not self.pe_axis:
      raise ValueError('pe_axis cannot be empty')
    if not self.growth_axis:
      raise ValueError('growth_axis cannot be empty')
    if len(set(self.pe_axis)) != len(self.pe_axis):
      raise ValueError(f'pe_axis has duplicate values: {self.pe_axis}')
    if len(set(self.growth_axis)) != len(self.growth_axis):
      raise ValueError(f'growth_axis has duplicate values: {self.growth_axis}')

  @classmethod
  def default(cls) -> 'EngineConfig':
    """
    Create default configuration.

    Uses:
      - P/E axis 15, 20, 25, 30, 35, 40
      - Growth axis 5%, 10%, 15%, 20%, 25%, 30%
      - Bear: 0.7x current P/E, 0.5x growth, 0.8x margin
      - Bull: 1.3x expected P/E, 1.5x growth, 1.2x margin
    """
    return cls(name='default')

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return {
        'name': self.name,
        'pe_axis': list(self.pe_axis),
        'growth_axis': list(self.growth_axis),
        'scenario_rules': {
            name: rule.to_dict() for name, rule in self.scenario_rules.items()
        },
    }

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'EngineConfig':
    """Create from dictionary; missing keys take default values."""
    kwargs: dict[str, Any] = dict(data)
    if 'scenario_rules' in kwargs:
      try:
        kwargs['scenario_rules'] = {
            name: ScenarioRule.from_dict(rule)
            for name, rule in kwargs['scenario_rules'].items()
        }
      except KeyError as e:
        raise ValueError(f'Scenario rule missing field: {e}') from e
    return cls(**kwargs)

  @classmethod
  def from_json(cls, json_str: str) -> 'EngineConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))
