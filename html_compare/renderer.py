"""
Highlight Renderer v1.0.0
=========================
Turns a classified unit sequence into one HTML fragment.

Units are first decorated into immutable Decoration values; markup is
serialized once, in render(). Equal units are emitted verbatim, added
and removed units get a highlight class and inline style.
"""

import html
from dataclasses import dataclass
from typing import List, Optional, Sequence, Any

from bs4 import BeautifulSoup, Tag

from config_logging import get_logger

from .models import ClassifiedUnit, HIGHLIGHT_ADDED, HIGHLIGHT_REMOVED, KIND_ELEMENT

logger = get_logger('html_compare.renderer')

CLASS_PREFIX = 'hc-'

ELEMENT_STYLES = {
    HIGHLIGHT_ADDED: (
        'background-color: #fef3c7; border-left: 4px solid #f59e0b; '
        'padding: 4px 8px; margin: 2px 0; border-radius: 4px'
    ),
    HIGHLIGHT_REMOVED: (
        'background-color: #fecaca; border-left: 4px solid #ef4444; '
        'padding: 4px 8px; margin: 2px 0; border-radius: 4px; '
        'text-decoration: line-through; opacity: 0.7'
    ),
}

TEXT_STYLES = {
    HIGHLIGHT_ADDED: (
        'background-color: #fef3c7; color: #92400e; padding: 2px 4px; '
        'border-radius: 3px; font-weight: 600'
    ),
    HIGHLIGHT_REMOVED: (
        'background-color: #fecaca; color: #991b1b; padding: 2px 4px; '
        'border-radius: 3px; text-decoration: line-through; '
        'font-weight: 600; opacity: 0.7'
    ),
}


@dataclass(frozen=True)
class Decoration:
    """
    Rendering intent for one unit.

    Attributes:
        kind: 'added', 'removed', or None for unchanged content
        unit_kind: 'element' or 'text'
        markup: Outer HTML (elements) or raw text (text units)
    """
    kind: Optional[str]
    unit_kind: str
    markup: str


def _merge_style(existing: Optional[str], style: str) -> str:
    existing = (existing or '').strip().rstrip(';').strip()
    return f"{existing}; {style}" if existing else style


class HighlightRenderer:
    """Renders classified units as a single highlighted HTML fragment."""

    def decorate(self, units: Sequence[ClassifiedUnit]) -> List[Decoration]:
        """Map each classified unit to its Decoration."""
        return [
            Decoration(kind=unit.highlight_kind, unit_kind=unit.kind, markup=unit.markup)
            for unit in units
        ]

    def render(self, units: Sequence[ClassifiedUnit]) -> str:
        """
        Render the modified document.

        Args:
            units: Classified units in display order

        Returns:
            HTML fragment string (empty for no units)
        """
        parts = [self._serialize(decoration) for decoration in self.decorate(units)]
        return ''.join(parts)

    def _serialize(self, decoration: Decoration) -> str:
        if decoration.unit_kind == KIND_ELEMENT:
            if decoration.kind is None:
                return decoration.markup
            return self._serialize_element(decoration)

        text = html.escape(decoration.markup, quote=False)
        if decoration.kind is None:
            return text
        return (
            f'<span class="{CLASS_PREFIX}{decoration.kind}" '
            f'style="{TEXT_STYLES[decoration.kind]}">{text}</span>'
        )

    def _serialize_element(self, decoration: Decoration) -> str:
        # A private parse of the markup; the unit itself is never touched
        fragment = BeautifulSoup(decoration.markup, 'html.parser')
        root = next((child for child in fragment.contents if isinstance(child, Tag)), None)
        if root is None:
            logger.warning("Highlighted element has no root tag, skipping",
                           highlight=decoration.kind)
            return ''

        classes = root.get('class') or []
        if isinstance(classes, str):
            classes = classes.split()
        root['class'] = list(classes) + [f"{CLASS_PREFIX}{decoration.kind}"]
        root['style'] = _merge_style(root.get('style'), ELEMENT_STYLES[decoration.kind])
        return str(root)


def render_highlighted(units: Sequence[ClassifiedUnit]) -> str:
    """Convenience wrapper around HighlightRenderer.render."""
    return HighlightRenderer().render(units)


def render_html_differences(diffs: Optional[Sequence[Any]]) -> str:
    """
    Join the content of rendered diffs into one HTML string.

    Accepts RenderedDiff objects or plain dicts with a 'content' key.
    """
    if not diffs:
        return ''

    parts = []
    for diff in diffs:
        content = diff.get('content') if isinstance(diff, dict) else getattr(diff, 'content', None)
        parts.append(content or '')
    return ''.join(parts)
