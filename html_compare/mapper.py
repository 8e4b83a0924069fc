"""
Element Diff Mapper v1.0.0
==========================
Re-maps a character-level edit script onto whole content units.

The edit script is computed over the newline-joined content of both
unit sequences. Each unit contributes len(content) + 1 characters to
that text. Walking the script in order:

- equal spans consume units from the right sequence (the right unit is
  the canonical unchanged representative) and advance the left offset
- insert spans consume right units as additions
- delete spans consume left units as removals, after passing over left
  units already covered by earlier equal spans

A unit is never split. Once a unit starts being consumed by a span the
whole unit takes that span's operation, and the overshoot is not
rewound: the next span starts at the next unit with a fresh count.
"""

from typing import List, Optional, Sequence, Tuple

from config_logging import get_logger

from .models import ContentUnit, ClassifiedUnit, OP_EQUAL, OP_INSERT, OP_DELETE

logger = get_logger('html_compare.mapper')


class _Cursor:
    """Position within one side's unit sequence and joined text."""

    def __init__(self, units: Sequence[ContentUnit]):
        self.units = units
        self.index = 0
        self.unit_offset = 0  # joined-text offset where units[index] starts
        self.text_offset = 0  # joined-text offset reached by the edit script

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self.units)

    def advance(self) -> ContentUnit:
        unit = self.units[self.index]
        self.index += 1
        self.unit_offset += unit.length
        return unit

    def consume(self, length: int) -> List[ContentUnit]:
        """Take whole units until their accumulated length reaches length."""
        taken = []
        accumulated = 0
        while accumulated < length and not self.exhausted:
            unit = self.advance()
            accumulated += unit.length
            taken.append(unit)
        return taken

    def skip_matched(self) -> int:
        """Pass over units lying entirely before the script's text offset."""
        skipped = 0
        while not self.exhausted:
            unit = self.units[self.index]
            # Empty-content units still occupy their separator character
            if self.unit_offset + max(len(unit.content), 1) > self.text_offset:
                break
            self.advance()
            skipped += 1
        return skipped

    def remaining(self) -> List[ContentUnit]:
        taken = []
        while not self.exhausted:
            taken.append(self.advance())
        return taken


class ElementDiffMapper:
    """
    Classifies content units against a character-level edit script.
    """

    def map(
        self,
        edit_script: Sequence[Tuple[str, str]],
        left_units: Sequence[ContentUnit],
        right_units: Sequence[ContentUnit]
    ) -> List[ClassifiedUnit]:
        """
        Produce the classified unit sequence for the modified document.

        Args:
            edit_script: (operation, text) pairs over the joined unit text
            left_units: Units of the original document
            right_units: Units of the modified document

        Returns:
            ClassifiedUnit list in edit-script order
        """
        left = _Cursor(left_units)
        right = _Cursor(right_units)
        classified = []
        last_left_op: Optional[str] = None
        last_right_op: Optional[str] = None

        for operation, text in edit_script:
            length = len(text)
            if not length:
                continue

            if operation == OP_EQUAL:
                self._emit(classified, right.consume(length), OP_EQUAL)
                left.text_offset += length
                right.text_offset += length
                last_left_op = last_right_op = OP_EQUAL

            elif operation == OP_INSERT:
                self._emit(classified, right.consume(length), OP_INSERT)
                right.text_offset += length
                last_right_op = OP_INSERT

            elif operation == OP_DELETE:
                left.skip_matched()
                self._emit(classified, left.consume(length), OP_DELETE)
                left.text_offset += length
                last_left_op = OP_DELETE

            else:
                raise ValueError(f"Unknown edit operation: {operation!r}")

        # Residue: units the script's accounting never reached. A left
        # residue with no left-side pair at all is made of empty-content
        # units, which only survive when the right side is empty too.
        left_unmatched = last_left_op is None and (last_right_op is not None or not right_units)
        if last_left_op == OP_DELETE or left_unmatched:
            self._emit(classified, left.remaining(), OP_DELETE)

        if last_right_op is None:
            last_right_op = OP_INSERT if not left_units else OP_EQUAL
        self._emit(classified, right.remaining(), last_right_op)

        logger.debug(
            f"Mapped {len(edit_script)} edit pairs onto {len(classified)} units",
            pair_count=len(edit_script), unit_count=len(classified),
            left_units=len(left_units), right_units=len(right_units)
        )
        return classified

    @staticmethod
    def _emit(classified: List[ClassifiedUnit], units: List[ContentUnit], operation: str):
        classified.extend(ClassifiedUnit.from_unit(unit, operation) for unit in units)


def map_units(
    edit_script: Sequence[Tuple[str, str]],
    left_units: Sequence[ContentUnit],
    right_units: Sequence[ContentUnit]
) -> List[ClassifiedUnit]:
    """Convenience wrapper around ElementDiffMapper.map."""
    return ElementDiffMapper().map(edit_script, left_units, right_units)
