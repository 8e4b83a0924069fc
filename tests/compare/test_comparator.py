"""
Tests for the HTML Comparator
=============================
End-to-end comparison properties over real documents.
"""

import pytest

from config_logging import CompareConfig, ComparisonError
from html_compare.comparator import HtmlComparator, compare_html_documents
from html_compare.extractor import extract_units
from html_compare.summary import calculate_summary
from html_compare.models import (
    ClassifiedUnit, DiffSummary, OP_EQUAL, OP_INSERT, OP_DELETE
)


@pytest.fixture
def article() -> str:
    """A small article used as the original document."""
    return """
    <h1>Release Notes</h1>
    <p>This release improves the parser.</p>
    <ul><li>Faster startup</li><li>Bug fixes</li></ul>
    """


@pytest.fixture
def revised_article() -> str:
    """The article after an edit."""
    return """
    <h1>Release Notes</h1>
    <p>This release improves the parser and the renderer.</p>
    <ul><li>Faster startup</li><li>New export formats</li></ul>
    """


DOCUMENT_PAIRS = [
    ("", ""),
    ("<p>Hello world</p>", "<p>Hello brave world</p>"),
    ("<p>alpha</p><p>beta</p>", "<p>alpha</p><p>gamma</p>"),
    ("<p>Only left</p>", ""),
    ("", "<p>Only right</p>"),
    ("<div><p>A</p><p>B</p></div>", "<div><p>B</p><p>A</p></div>"),
    ("<p>Line<br>break</p>", "<p>Line<br>break</p><hr>"),
]


class TestEmptyDocuments:
    """Both sides empty or absent."""

    @pytest.mark.parametrize("left,right", [("", ""), (None, None), (None, "")])
    def test_no_content(self, left, right):
        result = compare_html_documents(left, right)

        assert result.summary.to_dict() == {'additions': 0, 'deletions': 0, 'changes': 0}
        assert len(result.right_diffs) == 1
        assert result.right_diffs[0].content == ""
        assert result.right_diffs[0].type == 'modified'
        assert result.left_diffs == []
        assert result.detailed == {'lines': [], 'tables': [], 'images': []}


class TestIdenticalDocuments:
    """left == right."""

    def test_only_equal_units(self, article):
        result = compare_html_documents(article, article)
        right_units = extract_units(article)

        assert all(u.operation == OP_EQUAL for u in result.units)
        assert result.summary.additions == 0
        assert result.summary.deletions == 0
        assert [u.id for u in result.units] == [u.id for u in right_units]

    def test_rendered_in_extraction_order(self):
        html = "<p>One</p><p>Two</p>"
        result = compare_html_documents(html, html)

        assert result.modified_html == "<p>One</p>One<p>Two</p>Two"

    def test_trailing_empty_element_kept(self):
        """An empty-content trailing element is still rendered."""
        html = "<p>Text</p><hr>"
        result = compare_html_documents(html, html)

        assert [u.tag_name for u in result.units if u.kind == 'element'] == ['p', 'hr']
        assert result.summary.changes == 0


class TestOneSidedDocuments:
    """Documents present on only one side."""

    def test_left_empty_everything_inserted(self, revised_article):
        result = compare_html_documents("", revised_article)
        right_units = extract_units(revised_article)

        assert len(result.units) == len(right_units)
        assert all(u.operation == OP_INSERT for u in result.units)
        assert result.summary.deletions == 0
        assert result.summary.additions == len(right_units)

    def test_right_empty_everything_deleted(self, article):
        result = compare_html_documents(article, None)
        left_units = extract_units(article)

        assert len(result.units) == len(left_units)
        assert all(u.operation == OP_DELETE for u in result.units)
        assert result.summary.additions == 0
        assert 'hc-removed' in result.modified_html
        assert 'hc-added' not in result.modified_html


class TestChangedDocuments:
    """Documents with edits on both sides."""

    def test_inserted_word(self):
        """An inserted word produces an added marker and no deletions."""
        result = compare_html_documents("<p>Hello world</p>", "<p>Hello brave world</p>")

        assert result.summary.changes > 0
        assert result.summary.additions >= 1
        assert result.summary.deletions == 0
        inserted = [u for u in result.units if u.operation == OP_INSERT]
        assert any('brave' in u.content for u in inserted)
        assert 'hc-added' in result.modified_html

    def test_replaced_paragraph(self):
        """A replaced paragraph shows both a removal and an addition."""
        result = compare_html_documents("<p>alpha</p><p>beta</p>", "<p>alpha</p><p>gamma</p>")

        assert result.summary.additions >= 1
        assert result.summary.deletions >= 1
        deleted = [u.content for u in result.units if u.operation == OP_DELETE]
        assert 'beta' in deleted
        assert 'alpha' not in deleted

    def test_article_revision(self, article, revised_article):
        result = compare_html_documents(article, revised_article)

        assert result.summary.changes > 0
        assert 'hc-added' in result.modified_html


class TestInvariants:
    """Properties that hold for every pair of documents."""

    @pytest.mark.parametrize("left,right", DOCUMENT_PAIRS)
    def test_changes_is_sum(self, left, right):
        summary = compare_html_documents(left, right).summary
        assert summary.changes == summary.additions + summary.deletions

    @pytest.mark.parametrize("left,right", DOCUMENT_PAIRS)
    def test_right_document_reproduced_in_order(self, left, right):
        """Equal and inserted units are exactly the right document's units."""
        result = compare_html_documents(left, right)
        right_side = [u.id for u in result.units if u.operation != OP_DELETE]

        assert right_side == [u.id for u in extract_units(right)]

    @pytest.mark.parametrize("left,right", DOCUMENT_PAIRS)
    def test_deleted_units_unique(self, left, right):
        """No left unit is reported as deleted twice."""
        result = compare_html_documents(left, right)
        deleted = [u.id for u in result.units if u.operation == OP_DELETE]

        assert len(deleted) == len(set(deleted))

    @pytest.mark.parametrize("left,right", DOCUMENT_PAIRS)
    def test_idempotent(self, left, right):
        first = compare_html_documents(left, right)
        second = compare_html_documents(left, right)

        assert first.modified_html == second.modified_html
        assert first.summary == second.summary

    @pytest.mark.parametrize("left,right", DOCUMENT_PAIRS)
    def test_summary_matches_units(self, left, right):
        result = compare_html_documents(left, right)
        assert calculate_summary(result.units) == result.summary


class TestConfiguration:
    """Comparator settings."""

    def test_html_parser_setting(self):
        config = CompareConfig(html_parser='html.parser', log_to_file=False)
        result = HtmlComparator(config=config).compare("<p>a</p>", "<p>a b</p>")

        assert result.summary.changes > 0
        assert HtmlComparator(config=config).extractor.parser == 'html.parser'

    def test_to_dict(self):
        result = compare_html_documents("<p>x</p>", "<p>y</p>")

        data = result.to_dict()
        assert set(data) == {'left_diffs', 'right_diffs', 'summary', 'detailed'}
        assert data['right_diffs'][0]['type'] == 'modified'
        assert 'units' in result.to_dict(include_units=True)


class TestErrorHandling:
    """Failures surface as a single ComparisonError."""

    def test_failure_wrapped(self, monkeypatch):
        comparator = HtmlComparator()

        def explode(html):
            raise RuntimeError("boom")

        monkeypatch.setattr(comparator.extractor, 'extract', explode)

        with pytest.raises(ComparisonError) as exc_info:
            comparator.compare("<p>a</p>", "<p>b</p>")

        assert str(exc_info.value) == "Failed to compare documents: boom"
        assert exc_info.value.cause_message == "boom"
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestSummaryCalculator:
    """Tests for calculate_summary."""

    def test_counts_operations(self):
        units = [
            ClassifiedUnit(id=i, kind='text', content=str(i), markup=str(i), operation=op)
            for i, op in enumerate([OP_EQUAL, OP_INSERT, OP_INSERT, OP_DELETE, OP_EQUAL])
        ]

        assert calculate_summary(units) == DiffSummary(additions=2, deletions=1)
        assert calculate_summary(units).changes == 3

    def test_empty(self):
        assert calculate_summary([]).to_dict() == {'additions': 0, 'deletions': 0, 'changes': 0}
