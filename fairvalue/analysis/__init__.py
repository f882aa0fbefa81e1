'''
Valuation analysis utilities.

Import the modules directly; nothing is imported here so that running them
with -m does not trigger a RuntimeWarning:
  from fairvalue.analysis.batch_valuation import batch_valuation
  from fairvalue.analysis.plot_valuation import plot_scenarios
  from fairvalue.analysis.sensitivity import SensitivityTableBuilder
'''
