"""
Funding ancestry package.

This package provides:
- Earliest-funder resolution across paginated transaction history
- Dead-end classification of large custodial wallets
- The ancestry forest and the walk that builds it
"""

from .forest import AncestryForest, Node
from .classifier import Classification, DeadEndClassifier, Verdict
from .resolver import ParentResolver, ResolutionError
from .builder import BuildReport, ForestBuilder

__all__ = [
    'AncestryForest',
    'Node',
    'Classification',
    'DeadEndClassifier',
    'Verdict',
    'ParentResolver',
    'ResolutionError',
    'BuildReport',
    'ForestBuilder',
]
