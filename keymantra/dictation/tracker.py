# keymantra/dictation/tracker.py
from dataclasses import dataclass
from typing import List, Optional

from keymantra.dictation.tokens import count_separators, split_tokens


@dataclass
class InputTracker:
    """Live state of the single free-form answer field.

    Fed the full text on every change and the caret offset on every caret
    movement. The active slot is recomputed on each call, never deferred.
    """
    expected_count: int
    text: str = ""
    caret: int = 0

    def edit(self, text: str, caret: Optional[int] = None) -> None:
        """Replaces the field content. A missing caret means "at the end"."""
        self.text = text
        self.move_caret(len(text) if caret is None else caret)

    def move_caret(self, caret: int) -> None:
        self.caret = max(0, min(caret, len(self.text)))

    def clear(self) -> None:
        self.text = ""
        self.caret = 0

    @property
    def user_tokens(self) -> List[str]:
        return split_tokens(self.text)

    @property
    def active_slot(self) -> int:
        """Separators before the caret, clamped to [0, expected_count - 1]."""
        # Every whitespace run left of the caret counts, including the one
        # inside "My na", so that text sits in slot 1 and "My name " in slot 2.
        if self.expected_count <= 0:
            return 0
        slot = count_separators(self.text[:self.caret])
        return min(slot, self.expected_count - 1)
