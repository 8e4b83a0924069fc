"""
HTML Comparison Models v1.0.0
=============================
Data classes for content units and comparison results.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any

# Unit kinds
KIND_ELEMENT = 'element'
KIND_TEXT = 'text'

# Diff operations
OP_EQUAL = 'equal'
OP_INSERT = 'insert'
OP_DELETE = 'delete'

# Highlight kinds
HIGHLIGHT_ADDED = 'added'
HIGHLIGHT_REMOVED = 'removed'

_HIGHLIGHT_BY_OPERATION = {
    OP_INSERT: HIGHLIGHT_ADDED,
    OP_DELETE: HIGHLIGHT_REMOVED,
}


@dataclass(frozen=True)
class ContentUnit:
    """
    An atomic comparable piece of a document: one element or one text run.

    Attributes:
        id: Pre-order position in the originating document (0-based)
        kind: 'element' or 'text'
        content: Whitespace-normalized, trimmed text used for diffing
        markup: Outer HTML for elements, raw text for text runs
        attributes: Element attributes (empty for text units)
        tag_name: Lowercased tag name (element units only)
        child_count: Number of direct element children (element units only)
        parent_kind: Tag name of the containing element (text units only)
    """
    id: int
    kind: str  # 'element', 'text'
    content: str
    markup: str
    attributes: Dict[str, str] = field(default_factory=dict)
    tag_name: Optional[str] = None
    child_count: int = 0
    parent_kind: Optional[str] = None

    @property
    def length(self) -> int:
        """Characters this unit contributes to the joined document text."""
        return len(self.content) + 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'kind': self.kind,
            'content': self.content,
            'markup': self.markup,
            'attributes': dict(self.attributes),
            'tag_name': self.tag_name,
            'child_count': self.child_count,
            'parent_kind': self.parent_kind
        }


@dataclass(frozen=True)
class ClassifiedUnit(ContentUnit):
    """
    A content unit tagged with its diff operation.

    highlighted and highlight_kind are derived from operation so they
    can never disagree with it.
    """
    operation: str = OP_EQUAL  # 'equal', 'insert', 'delete'

    @classmethod
    def from_unit(cls, unit: ContentUnit, operation: str) -> 'ClassifiedUnit':
        """Copy a content unit and tag it with an operation."""
        return cls(
            id=unit.id,
            kind=unit.kind,
            content=unit.content,
            markup=unit.markup,
            attributes=dict(unit.attributes),
            tag_name=unit.tag_name,
            child_count=unit.child_count,
            parent_kind=unit.parent_kind,
            operation=operation
        )

    @property
    def highlighted(self) -> bool:
        return self.operation in _HIGHLIGHT_BY_OPERATION

    @property
    def highlight_kind(self) -> Optional[str]:
        return _HIGHLIGHT_BY_OPERATION.get(self.operation)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'operation': self.operation,
            'highlighted': self.highlighted,
            'highlight_kind': self.highlight_kind
        })
        return data


@dataclass
class DiffSummary:
    """Aggregate change counts for a comparison."""
    additions: int = 0
    deletions: int = 0

    @property
    def changes(self) -> int:
        """Total number of changed units."""
        return self.additions + self.deletions

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            'additions': self.additions,
            'deletions': self.deletions,
            'changes': self.changes
        }


@dataclass
class RenderedDiff:
    """A rendered markup fragment for one side of the comparison."""
    content: str
    type: str = 'modified'

    def to_dict(self) -> Dict[str, str]:
        return {'content': self.content, 'type': self.type}


@dataclass
class ComparisonResult:
    """
    Complete result of comparing two HTML documents.

    Attributes:
        right_diffs: One 'modified' fragment reconstructing the right document
        left_diffs: Always empty; the original rendering is not annotated
        summary: Addition/deletion counts
        detailed: Reserved line/table/image breakdowns (always empty)
        units: The classified unit sequence behind the rendering
    """
    right_diffs: List[RenderedDiff] = field(default_factory=list)
    left_diffs: List[RenderedDiff] = field(default_factory=list)
    summary: DiffSummary = field(default_factory=DiffSummary)
    detailed: Dict[str, List[Any]] = field(default_factory=lambda: {
        'lines': [],
        'tables': [],
        'images': []
    })
    units: List[ClassifiedUnit] = field(default_factory=list)

    @property
    def modified_html(self) -> str:
        """The rendered modified document, or an empty string."""
        return self.right_diffs[0].content if self.right_diffs else ''

    def to_dict(self, include_units: bool = False) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            'left_diffs': [d.to_dict() for d in self.left_diffs],
            'right_diffs': [d.to_dict() for d in self.right_diffs],
            'summary': self.summary.to_dict(),
            'detailed': {k: list(v) for k, v in self.detailed.items()}
        }
        if include_units:
            data['units'] = [u.to_dict() for u in self.units]
        return data
