# pairplan: covering plans for pairwise comparison in fixed-size groups
# Package: pairplan

__version__ = "1.0.0.dev0"
__author__ = "pairplan Contributors"
__description__ = "Plan groups of at most K items so that every pair is compared at least once"

# Module structure:
#   - pairplan.plan     : Pair universe, plan strategies, validation, comparison
#   - pairplan.execute  : Group execution with retry, JSON result cache
#   - pairplan.report   : Ranking of pairwise results
#   - pairplan.items    : Item universe sources
#   - pairplan.config   : Configuration management
#   - pairplan.cli      : Command-line interface
