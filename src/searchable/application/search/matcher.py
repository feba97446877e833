"""Application search – script-aware matching detection."""
from __future__ import annotations

import re

__all__ = ["ARABIC_BLOCK", "needs_script_aware_match"]

ARABIC_BLOCK = re.compile(r"[\u0600-\u06FF]")


def needs_script_aware_match(term: str) -> bool:
    """True if *term* contains a code point from the Arabic block.

    Such terms are compared through a charset-normalizing expression because
    a byte-level LIKE against columns stored in another charset misses them.
    """
    return ARABIC_BLOCK.search(term) is not None
