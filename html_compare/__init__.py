"""
HTML Comparison Module v1.0.0
=============================
Element-level comparison of two HTML documents, rendered as a single
modified document with inserted and removed content highlighted.

Features:
- Pre-order extraction of element and text units
- Character-level diff (diff-match-patch with semantic cleanup)
- Re-mapping of the edit script onto whole units
- Highlighted rendering and change summary
"""

from .routes import hc_blueprint
from .comparator import HtmlComparator, compare_html_documents
from .extractor import UnitExtractor, extract_units
from .text_diff import TextDiffEngine, join_units, UNIT_SEPARATOR
from .mapper import ElementDiffMapper, map_units
from .renderer import HighlightRenderer, Decoration, render_highlighted, render_html_differences
from .summary import calculate_summary
from .models import (
    ContentUnit,
    ClassifiedUnit,
    DiffSummary,
    RenderedDiff,
    ComparisonResult
)

__version__ = "1.0.0"
__all__ = [
    'hc_blueprint',
    'HtmlComparator',
    'compare_html_documents',
    'UnitExtractor',
    'extract_units',
    'TextDiffEngine',
    'join_units',
    'UNIT_SEPARATOR',
    'ElementDiffMapper',
    'map_units',
    'HighlightRenderer',
    'Decoration',
    'render_highlighted',
    'render_html_differences',
    'calculate_summary',
    'ContentUnit',
    'ClassifiedUnit',
    'DiffSummary',
    'RenderedDiff',
    'ComparisonResult'
]
