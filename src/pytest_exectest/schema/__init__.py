"""Immutable records flowing through the harness.

Defines the parsed test plan consumed by materialization and execution,
the captured execution result, and the assertion report.
"""

from .plans import EnvEntry, TestPlan
from .results import ExecutionResult, Report

__all__ = (
    'EnvEntry',
    'ExecutionResult',
    'Report',
    'TestPlan',
)
