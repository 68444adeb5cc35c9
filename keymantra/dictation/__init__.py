"""Dictation engine: answer segmentation, live input tracking, word matching
and the question-by-question session controller."""

from keymantra.dictation.matcher import MatchResult, Verdict, check, compare, normalize
from keymantra.dictation.scheduler import AsyncioScheduler, ManualScheduler
from keymantra.dictation.session import (
    Answering,
    DictationItem,
    DictationSession,
    SessionPhase,
    Submitted,
    transition,
)
from keymantra.dictation.tokens import segment, split_tokens
from keymantra.dictation.tracker import InputTracker

__all__ = [
    "Answering",
    "AsyncioScheduler",
    "DictationItem",
    "DictationSession",
    "InputTracker",
    "ManualScheduler",
    "MatchResult",
    "SessionPhase",
    "Submitted",
    "Verdict",
    "check",
    "compare",
    "normalize",
    "segment",
    "split_tokens",
    "transition",
]
