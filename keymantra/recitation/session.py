# keymantra/recitation/session.py
from enum import Enum
from typing import Any, List, Optional, Sequence

from keymantra.dictation.scheduler import AsyncioScheduler
from keymantra.dictation.session import DictationItem, SessionPhase
from keymantra.utils.config import settings
from keymantra.utils.logger import logger


class RevealState(str, Enum):
    HIDDEN = "hidden"
    PRESSING = "pressing"
    REVEALED = "revealed"


class RecitationSession:
    """Walks a course as flashcards; holding a card long enough reveals its answer."""

    def __init__(self, items: Sequence[Any], scheduler=None, hold_delay: Optional[float] = None,
                 placeholder: Optional[str] = None):
        self.scheduler = scheduler or AsyncioScheduler()
        self.hold_delay = settings.reveal_hold_delay_s if hold_delay is None else hold_delay
        self.placeholder = settings.missing_answer_placeholder if placeholder is None else placeholder
        cards = [DictationItem.from_record(r) for r in items]
        self.items: List[DictationItem] = sorted(cards, key=lambda c: c.order_key)
        self.index = 0
        self.reveal = RevealState.HIDDEN
        self._pending = None

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase.ACTIVE if self.items else SessionPhase.NO_QUESTIONS

    @property
    def current(self) -> Optional[DictationItem]:
        return self.items[self.index] if self.items else None

    @property
    def unplayable(self) -> bool:
        """True when the current card has no answer text to reveal."""
        card = self.current
        return card is not None and not card.playable

    @property
    def visible_answer(self) -> Optional[str]:
        if self.reveal is not RevealState.REVEALED or not self.current:
            return None
        if self.unplayable:
            return self.placeholder
        return self.current.answer_content

    def press(self) -> None:
        if not self.items or self.reveal is not RevealState.HIDDEN:
            return
        self.reveal = RevealState.PRESSING
        self._pending = self.scheduler.call_later(self.hold_delay, self._on_hold_elapsed)

    def release(self) -> None:
        self._cancel_pending()
        if self.reveal is RevealState.PRESSING:
            self.reveal = RevealState.HIDDEN

    def next(self) -> None:
        if self.index < len(self.items) - 1:
            self.index += 1
            self._reset()

    def previous(self) -> None:
        if self.index > 0:
            self.index -= 1
            self._reset()

    def close(self) -> None:
        self._cancel_pending()

    def _on_hold_elapsed(self) -> None:
        self._pending = None
        if self.reveal is RevealState.PRESSING:
            self.reveal = RevealState.REVEALED
            logger.debug(f"Revealed answer for question {self.current.id}.")

    def _reset(self) -> None:
        self._cancel_pending()
        self.reveal = RevealState.HIDDEN

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
