"""
Text Diff Engine v1.0.0
=======================
Character-level edit scripts over joined unit text.

Uses diff-match-patch for the diff itself and its semantic cleanup
pass to merge trivial fragments into human-meaningful changes.
"""

from typing import List, Tuple, Iterable, Optional

import diff_match_patch as dmp_module

from config_logging import get_logger, get_config

from .models import ContentUnit, OP_EQUAL, OP_INSERT, OP_DELETE

logger = get_logger('html_compare.text_diff')

# Joins unit contents; never present inside normalized content
UNIT_SEPARATOR = '\n'

_OPERATIONS = {
    dmp_module.diff_match_patch.DIFF_EQUAL: OP_EQUAL,
    dmp_module.diff_match_patch.DIFF_INSERT: OP_INSERT,
    dmp_module.diff_match_patch.DIFF_DELETE: OP_DELETE,
}

EditScript = List[Tuple[str, str]]


def join_units(units: Iterable[ContentUnit]) -> str:
    """Join unit contents in order with the unit separator."""
    return UNIT_SEPARATOR.join(unit.content for unit in units)


class TextDiffEngine:
    """
    Thin wrapper over diff-match-patch producing (operation, text) pairs.

    Args:
        timeout: Max seconds per diff (0 = unlimited)
        edit_cost: Cost of an empty edit for efficiency cleanup
        semantic_cleanup: Apply diff_cleanupSemantic to the raw diff
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        edit_cost: Optional[int] = None,
        semantic_cleanup: Optional[bool] = None
    ):
        config = get_config()
        self.dmp = dmp_module.diff_match_patch()
        self.dmp.Diff_Timeout = config.diff_timeout if timeout is None else timeout
        self.dmp.Diff_EditCost = config.diff_edit_cost if edit_cost is None else edit_cost
        self.semantic_cleanup = config.semantic_cleanup if semantic_cleanup is None else semantic_cleanup

    def diff(self, left_text: str, right_text: str) -> EditScript:
        """
        Compute an edit script turning left_text into right_text.

        Args:
            left_text: Original text
            right_text: Modified text

        Returns:
            List of (operation, text) with operation in equal/insert/delete
        """
        diffs = self.dmp.diff_main(left_text, right_text)
        if self.semantic_cleanup:
            self.dmp.diff_cleanupSemantic(diffs)

        script = [(_OPERATIONS[op], text) for op, text in diffs if text]
        logger.debug(f"Computed edit script with {len(script)} pairs",
                     pair_count=len(script), left_length=len(left_text),
                     right_length=len(right_text))
        return script
