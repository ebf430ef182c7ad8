"""
Undo history for the amount field.
"""

from typing import List, Optional


class InputHistory:
    """
    LIFO stack of amount display texts taken before each mutation.

    There is no redo: an undone entry is discarded.
    """

    def __init__(self):
        self._entries: List[str] = []

    def record(self, text: str) -> None:
        """Push the display text as it was before the mutation."""
        self._entries.append(text)

    def undo(self) -> Optional[str]:
        """Pop the most recent text, or None when there is nothing to undo."""
        if not self._entries:
            return None
        return self._entries.pop()

    @property
    def can_undo(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
