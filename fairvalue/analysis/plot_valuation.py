'''
Charts for a single evaluation.

Renders the bear/base/bull price targets as a bar chart against the
current price, and the sensitivity grid as a heatmap.
'''

import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt

from fairvalue.domain.types import EvaluationResult

logger = logging.getLogger(__name__)

SCENARIO_COLORS = {
    'bear': 'tab:red',
    'base': 'tab:blue',
    'bull': 'tab:green',
}


def plot_scenarios(
    result: EvaluationResult,
    output_path: Path,
    title: str = '',
    current_price: Optional[float] = None,
) -> Path:
  '''
  Bar chart of scenario price targets.

  Args:
    result: Evaluation to plot
    output_path: PNG path (parent directories are created)
    title: Chart title prefix
    current_price: Draws a reference line when given

  Returns:
    The path written
  '''
  names = [s.name.capitalize() for s in result.scenarios]
  prices = [s.price for s in result.scenarios]
  colors = [SCENARIO_COLORS.get(s.name, 'tab:gray') for s in result.scenarios]

  fig, ax = plt.subplots(figsize=(8, 5))
  bars = ax.bar(names, prices, color=colors)
  ax.bar_label(bars, fmt='$%.2f')

  if current_price is not None:
    ax.axhline(current_price,
               color='black',
               linestyle='--',
               linewidth=1,
               label=f'Current ${current_price:.2f}')
    ax.legend()

  ax.set_title(f'{title} Scenario Price Targets'.strip())
  ax.set_ylabel('Price per Share ($)')
  ax.grid(True, axis='y', alpha=0.3)
  fig.tight_layout()

  output_path = Path(output_path)
  output_path.parent.mkdir(parents=True, exist_ok=True)
  fig.savefig(output_path, dpi=150)
  plt.close(fig)

  logger.info('Saved scenario chart: %s', output_path)
  return output_path


def plot_sensitivity_heatmap(
    result: EvaluationResult,
    output_path: Path,
    title: str = '',
) -> Path:
  '''
  Heatmap of the P/E x growth sensitivity grid.

  Args:
    result: Evaluation to plot
    output_path: PNG path (parent directories are created)
    title: Chart title prefix

  Returns:
    The path written
  '''
  table = result.grid_frame()

  fig, ax = plt.subplots(figsize=(9, 6))
  image = ax.imshow(table.values, cmap='RdYlGn', aspect='auto')
  fig.colorbar(image, ax=ax, label='Implied Price ($)')

  ax.set_xticks(range(len(table.columns)))
  ax.set_xticklabels([f'{g:g}%' for g in table.columns])
  ax.set_yticks(range(len(table.index)))
  ax.set_yticklabels([f'{pe:g}x' for pe in table.index])
  ax.set_xlabel('Sales Growth (CAGR)')
  ax.set_ylabel('P/E')

  for i in range(len(table.index)):
    for j in range(len(table.columns)):
      ax.text(j, i, f'{table.values[i, j]:.0f}',
              ha='center', va='center', fontsize=8)

  ax.set_title(f'{title} Sensitivity: Implied Price'.strip())
  fig.tight_layout()

  output_path = Path(output_path)
  output_path.parent.mkdir(parents=True, exist_ok=True)
  fig.savefig(output_path, dpi=150)
  plt.close(fig)

  logger.info('Saved sensitivity heatmap: %s', output_path)
  return output_path
