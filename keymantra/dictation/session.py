# keymantra/dictation/session.py
"""Session controller for dictation mode.

The per-question answer state is a small tagged union (`Answering` or
`Submitted`) driven by the pure `transition` function. `DictationSession`
wraps it with the ordered question list, the live input tracker and the
cancellable auto-advance that follows a fully correct submission.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Union

from keymantra.dictation.matcher import MatchResult, check
from keymantra.dictation.scheduler import AsyncioScheduler
from keymantra.dictation.tokens import segment
from keymantra.dictation.tracker import InputTracker
from keymantra.utils.config import settings
from keymantra.utils.logger import logger


# --- Answer states ---
@dataclass(frozen=True)
class Answering:
    pass


@dataclass(frozen=True)
class Submitted:
    all_correct: bool


AnswerState = Union[Answering, Submitted]


# --- Events ---
@dataclass(frozen=True)
class Edit:
    text: str
    caret: Optional[int] = None


@dataclass(frozen=True)
class CaretMoved:
    caret: int


@dataclass(frozen=True)
class Submit:
    composing: bool = False  # Enter pressed to commit an IME composition


@dataclass(frozen=True)
class Navigate:
    offset: int


Event = Union[Edit, CaretMoved, Submit, Navigate]


def transition(state: AnswerState, event: Event, result: Optional[MatchResult] = None) -> AnswerState:
    """Returns the answer state that follows `event`.

    Edits and navigation always land in `Answering`; a caret move keeps the
    current state; a submission needs the match result of the full input.
    """
    if isinstance(event, (Edit, Navigate)):
        return Answering()
    if isinstance(event, Submit):
        if event.composing:
            return state
        if result is None:
            raise ValueError("A submission needs a match result")
        return Submitted(all_correct=result.all_correct)
    return state


class SessionPhase(str, Enum):
    LOADING = "loading"
    NO_QUESTIONS = "no_questions"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class DictationItem:
    """One question of a course as delivered by the data-access layer."""
    id: int
    sort_position: Optional[int]
    title: str
    answer_content: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "DictationItem":
        if isinstance(record, DictationItem):
            return record
        if isinstance(record, Mapping):
            get = record.get
        else:
            get = lambda name: getattr(record, name, None)  # noqa: E731
        return cls(
            id=get("id"),
            sort_position=get("sort_position"),
            title=get("title"),
            answer_content=get("answer_content"),
        )

    @property
    def order_key(self):
        """Sort order first, records without a position last, id breaks ties."""
        return (self.sort_position is None, self.sort_position or 0, self.id)

    @property
    def expected_tokens(self) -> List[str]:
        return segment(self.answer_content)

    @property
    def playable(self) -> bool:
        return bool(self.expected_tokens)


class DictationSession:
    def __init__(self, items: Optional[Sequence[Any]] = None, scheduler=None,
                 advance_delay: Optional[float] = None, punctuation: Optional[str] = None):
        self.scheduler = scheduler or AsyncioScheduler()
        self.advance_delay = settings.auto_advance_delay_s if advance_delay is None else advance_delay
        self.punctuation = settings.ignored_punctuation if punctuation is None else punctuation

        self.items: List[DictationItem] = []
        self.index = 0
        self.phase = SessionPhase.LOADING
        self.state: AnswerState = Answering()
        self.tracker = InputTracker(expected_count=0)
        self.last_result: Optional[MatchResult] = None

        self._pending = None
        self._advance_token = 0
        self._load_token = 0
        self._closed = False

        if items is not None:
            self.set_items(items)

    # --- Read-only views ---
    @property
    def current(self) -> Optional[DictationItem]:
        if self.phase is not SessionPhase.ACTIVE:
            return None
        return self.items[self.index]

    @property
    def expected_tokens(self) -> List[str]:
        item = self.current
        return item.expected_tokens if item else []

    @property
    def unplayable(self) -> bool:
        """True when the current question has no answer to dictate."""
        item = self.current
        return item is not None and not item.playable

    @property
    def active_slot(self) -> int:
        return self.tracker.active_slot

    @property
    def has_pending_advance(self) -> bool:
        return self._pending is not None

    # --- Loading ---
    def set_items(self, records: Sequence[Any]) -> None:
        self._cancel_pending()
        items = [DictationItem.from_record(r) for r in records]
        self.items = sorted(items, key=lambda item: item.order_key)
        if not self.items:
            logger.info("Dictation session has no questions.")
            self.phase = SessionPhase.NO_QUESTIONS
            self.index = 0
            self.state = Answering()
            self.tracker = InputTracker(expected_count=0)
            return
        self.phase = SessionPhase.ACTIVE
        self._enter(0)

    async def load(self, fetch: Callable[[int], Awaitable[Sequence[Any]]], course_id: int) -> bool:
        """Fetches the course's questions and installs them.

        If another load starts before this one finishes, this result is
        discarded and False is returned.
        """
        self._load_token += 1
        token = self._load_token
        self._cancel_pending()
        self.phase = SessionPhase.LOADING
        records = await fetch(course_id)
        if token != self._load_token or self._closed:
            logger.warning(f"Discarding stale question list for course {course_id}.")
            return False
        self.set_items(records)
        logger.info(f"Loaded {len(self.items)} questions for course {course_id}.")
        return True

    # --- Input events ---
    def edit(self, text: str, caret: Optional[int] = None) -> bool:
        if not self._accepts_input():
            return False
        self._cancel_pending()
        self.tracker.edit(text, caret)
        self.state = transition(self.state, Edit(text, caret))
        self.last_result = None
        return True

    def move_caret(self, caret: int) -> bool:
        if not self._accepts_input():
            return False
        self.tracker.move_caret(caret)
        self.state = transition(self.state, CaretMoved(caret))
        return True

    def submit(self, composing: bool = False) -> Optional[MatchResult]:
        """Checks the full input. Returns None when the submission is ignored."""
        if not self._accepts_input():
            return None
        if composing:
            logger.debug("Ignoring submit while a composition is in progress.")
            return None
        self._cancel_pending()
        result = check(self.expected_tokens, self.tracker.user_tokens, self.punctuation)
        self.state = transition(self.state, Submit(), result)
        self.last_result = result
        logger.debug(f"Question {self.current.id} submitted: {[v.value for v in result.verdicts]}")
        if result.all_correct:
            self._schedule_advance()
        return result

    # --- Navigation ---
    def next(self) -> None:
        if self.phase is not SessionPhase.ACTIVE:
            return
        self._cancel_pending()
        if self.index < len(self.items) - 1:
            self._enter(self.index + 1)
        else:
            self._complete()

    def previous(self) -> None:
        if self.phase is SessionPhase.COMPLETE and self.items:
            self._cancel_pending()
            self.phase = SessionPhase.ACTIVE
            self._enter(len(self.items) - 1)
            return
        if self.phase is not SessionPhase.ACTIVE or self.index == 0:
            return
        self._cancel_pending()
        self._enter(self.index - 1)

    def close(self) -> None:
        """Tears the session down; a pending auto-advance will not fire."""
        self._cancel_pending()
        self._closed = True

    # --- Internals ---
    def _accepts_input(self) -> bool:
        return not self._closed and self.phase is SessionPhase.ACTIVE and not self.unplayable

    def _enter(self, index: int) -> None:
        self.state = transition(self.state, Navigate(index - self.index))
        self.index = index
        item = self.items[index]
        self.tracker = InputTracker(expected_count=len(item.expected_tokens))
        self.last_result = None
        if not item.playable:
            logger.warning(f"Question {item.id} has no answer content and cannot be dictated.")

    def _complete(self) -> None:
        self.phase = SessionPhase.COMPLETE
        self.state = Answering()
        self.tracker = InputTracker(expected_count=0)
        self.last_result = None
        logger.info("Dictation session complete.")

    def _schedule_advance(self) -> None:
        token = self._advance_token
        self._pending = self.scheduler.call_later(self.advance_delay, lambda: self._auto_advance(token))

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._advance_token += 1

    def _auto_advance(self, token: int) -> None:
        if token != self._advance_token or self._closed or self.phase is not SessionPhase.ACTIVE:
            logger.debug("Stale auto-advance ignored.")
            return
        self._pending = None
        if self.index < len(self.items) - 1:
            logger.info(f"Advancing to question {self.index + 1} of {len(self.items)}.")
            self._enter(self.index + 1)
        else:
            self._complete()
