"""
A tree-walking evaluator for a small functional, array-oriented expression language.
"""
from .executive import interpret, interpret_sync, Outcome
from .diagnostics import Issue, Report
from .foreign import ERROR
