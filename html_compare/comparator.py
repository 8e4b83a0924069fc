"""
HTML Comparator v1.0.0
======================
Compares two HTML documents and renders the modified document with
inserted and removed content highlighted.

Pipeline: extract units (x2) -> join text -> diff-match-patch edit
script -> element mapping -> {highlight rendering, summary}.
"""

from typing import Optional

from config_logging import get_logger, get_config, CompareConfig, ComparisonError

from .extractor import UnitExtractor
from .text_diff import TextDiffEngine, join_units
from .mapper import ElementDiffMapper
from .renderer import HighlightRenderer
from .summary import calculate_summary
from .models import ComparisonResult, RenderedDiff

logger = get_logger('html_compare.comparator')


class HtmlComparator:
    """
    Element-level HTML comparison engine.
    """

    def __init__(self, config: Optional[CompareConfig] = None):
        """
        Initialize the comparator.

        Args:
            config: Comparison settings; defaults to the global config
        """
        self.config = config or get_config()
        self.extractor = UnitExtractor(parser=self.config.html_parser)
        self.engine = TextDiffEngine(
            timeout=self.config.diff_timeout,
            edit_cost=self.config.diff_edit_cost,
            semantic_cleanup=self.config.semantic_cleanup
        )
        self.mapper = ElementDiffMapper()
        self.renderer = HighlightRenderer()

    def compare(self, left_html: Optional[str], right_html: Optional[str]) -> ComparisonResult:
        """
        Compare two documents.

        Args:
            left_html: Original document markup (None/empty = no content)
            right_html: Modified document markup (None/empty = no content)

        Returns:
            ComparisonResult with the highlighted modified document

        Raises:
            ComparisonError: if any stage fails
        """
        try:
            with logger.log_operation('html_compare'):
                return self._compare(left_html, right_html)
        except Exception as e:
            raise ComparisonError(str(e)) from e

    def _compare(self, left_html: Optional[str], right_html: Optional[str]) -> ComparisonResult:
        left_units = self.extractor.extract(left_html)
        right_units = self.extractor.extract(right_html)
        logger.debug(f"Unit counts: left={len(left_units)}, right={len(right_units)}",
                     left_units=len(left_units), right_units=len(right_units))

        edit_script = self.engine.diff(join_units(left_units), join_units(right_units))
        classified = self.mapper.map(edit_script, left_units, right_units)

        summary = calculate_summary(classified)
        logger.info(f"Comparison complete: +{summary.additions}, -{summary.deletions}",
                    additions=summary.additions, deletions=summary.deletions)

        return ComparisonResult(
            right_diffs=[RenderedDiff(content=self.renderer.render(classified), type='modified')],
            left_diffs=[],
            summary=summary,
            units=classified
        )


def compare_html_documents(
    left_html: Optional[str],
    right_html: Optional[str],
    config: Optional[CompareConfig] = None
) -> ComparisonResult:
    """
    Compare two HTML documents.

    Args:
        left_html: Original document markup
        right_html: Modified document markup
        config: Optional settings overriding the global config

    Returns:
        ComparisonResult
    """
    return HtmlComparator(config=config).compare(left_html, right_html)


if __name__ == '__main__':
    old_html = """<h1>Release Notes</h1>
<p>This release improves the parser.</p>
<ul><li>Faster startup</li><li>Bug fixes</li></ul>"""

    new_html = """<h1>Release Notes</h1>
<p>This release improves the parser and the renderer.</p>
<ul><li>Faster startup</li><li>New export formats</li></ul>"""

    result = compare_html_documents(old_html, new_html)
    print(f"Summary: {result.summary.to_dict()}")
    for unit in result.units:
        if unit.highlighted:
            print(f"  [{unit.operation}] {unit.kind} {unit.content[:40]!r}")
