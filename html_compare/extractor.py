"""
Unit Extractor v1.0.0
=====================
Decomposes an HTML document into an ordered sequence of content units.

The walk is a pre-order traversal of <body> in document order. Every
element becomes a unit, and so does every text node that is not
whitespace-only, so a <p> unit and the text units inside it coexist.
"""

from typing import List, Optional, Dict

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from config_logging import get_logger, get_config

from .models import ContentUnit, KIND_ELEMENT, KIND_TEXT

logger = get_logger('html_compare.extractor')


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return ' '.join(text.split())


def _is_text_node(node) -> bool:
    # Comments, CDATA, doctypes and processing instructions are not text
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _attributes(tag: Tag) -> Dict[str, str]:
    attrs = {}
    for name, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = ' '.join(value)
        attrs[name] = value
    return attrs


class UnitExtractor:
    """
    Extracts content units from HTML markup.

    Args:
        parser: BeautifulSoup tree builder ('lxml' or 'html.parser').
                Defaults to the configured parser.
    """

    def __init__(self, parser: Optional[str] = None):
        self.parser = parser or get_config().html_parser

    def extract(self, html: Optional[str]) -> List[ContentUnit]:
        """
        Extract units from a document.

        Args:
            html: Document markup; None or empty means no content

        Returns:
            List of ContentUnit in document pre-order
        """
        if not html:
            return []

        root = self._parse_root(html)
        if root is None:
            return []

        units = []
        for node in root.descendants:
            if isinstance(node, Tag):
                units.append(self._element_unit(node, len(units)))
            elif _is_text_node(node) and node.strip():
                units.append(self._text_unit(node, len(units)))

        logger.debug(f"Extracted {len(units)} units", unit_count=len(units), parser=self.parser)
        return units

    def _parse_root(self, html: str) -> Optional[Tag]:
        """Parse leniently and return the <body> (or root) to walk."""
        try:
            soup = BeautifulSoup(html, self.parser)
        except ParserRejectedMarkup as e:
            logger.warning(f"Markup rejected by parser, treating as empty: {e}", parser=self.parser)
            return None

        # html.parser does not synthesize <html>/<body> around fragments
        root = soup.body or soup.html or soup
        if not root.contents:
            return None
        return root

    def _element_unit(self, tag: Tag, index: int) -> ContentUnit:
        return ContentUnit(
            id=index,
            kind=KIND_ELEMENT,
            content=normalize_text(tag.get_text()),
            markup=str(tag),
            attributes=_attributes(tag),
            tag_name=tag.name.lower(),
            child_count=len(tag.find_all(True, recursive=False))
        )

    def _text_unit(self, node: NavigableString, index: int) -> ContentUnit:
        parent = node.parent
        parent_kind = parent.name.lower() if isinstance(parent, Tag) and parent.name else None
        # The BeautifulSoup object itself is named '[document]'
        if parent_kind == BeautifulSoup.ROOT_TAG_NAME:
            parent_kind = None
        return ContentUnit(
            id=index,
            kind=KIND_TEXT,
            content=normalize_text(str(node)),
            markup=str(node),
            parent_kind=parent_kind
        )


def extract_units(html: Optional[str], parser: Optional[str] = None) -> List[ContentUnit]:
    """Convenience wrapper around UnitExtractor.extract."""
    return UnitExtractor(parser=parser).extract(html)
