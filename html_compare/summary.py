"""
Summary Calculator
==================
Counts additions and deletions in a classified unit sequence.
"""

from typing import Iterable

from .models import ClassifiedUnit, DiffSummary, OP_INSERT, OP_DELETE


def calculate_summary(units: Iterable[ClassifiedUnit]) -> DiffSummary:
    """Count inserted units as additions and deleted units as deletions."""
    summary = DiffSummary()
    for unit in units:
        if unit.operation == OP_INSERT:
            summary.additions += 1
        elif unit.operation == OP_DELETE:
            summary.deletions += 1
    return summary
