"""
Pull action items out of a note so they can become tasks.
"""

from __future__ import annotations

import re
from typing import List

# "- [ ] buy milk", "* call Sam", "TODO: file taxes"; ticked boxes are skipped
_ITEM_RE = re.compile(
    r"^\s*(?:[-*]\s+\[\s\]\s+|[-*]\s+(?!\[)|todo:\s*)(?P<text>.+?)\s*$",
    re.IGNORECASE,
)


def extract_action_items(content: str) -> List[str]:
    items: List[str] = []
    for line in content.splitlines():
        match = _ITEM_RE.match(line)
        if match:
            items.append(match.group("text"))
    return items
