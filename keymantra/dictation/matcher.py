# keymantra/dictation/matcher.py
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

IGNORED_PUNCTUATION = ".,?!"


class Verdict(str, Enum):
    """Per-slot outcome of comparing a typed word with the expected one."""
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class MatchResult:
    verdicts: List[Verdict]
    all_correct: bool
    extra_tokens: int = 0  # Non-empty typed words past the last expected slot


def normalize(token: str, punctuation: str = IGNORED_PUNCTUATION) -> str:
    """Lower-cases a token and drops the ignored punctuation marks."""
    return token.lower().translate(str.maketrans("", "", punctuation))


def compare(expected: Sequence[str], user_tokens: Sequence[str],
            punctuation: str = IGNORED_PUNCTUATION) -> List[Verdict]:
    """Classifies every expected slot.

    A slot the user has not reached yet is compared against an empty string.
    Typed tokens beyond the expected count do not affect any verdict.
    """
    verdicts = []
    for i, expected_token in enumerate(expected):
        typed = user_tokens[i] if i < len(user_tokens) else ""
        if normalize(typed, punctuation) == normalize(expected_token, punctuation):
            verdicts.append(Verdict.CORRECT)
        else:
            verdicts.append(Verdict.INCORRECT)
    return verdicts


def check(expected: Sequence[str], user_tokens: Sequence[str],
          punctuation: str = IGNORED_PUNCTUATION) -> MatchResult:
    """Compares a full submission. An empty expected sequence is vacuously correct."""
    verdicts = compare(expected, user_tokens, punctuation)
    extra = sum(1 for token in user_tokens[len(expected):] if token)
    return MatchResult(
        verdicts=verdicts,
        all_correct=all(v is Verdict.CORRECT for v in verdicts),
        extra_tokens=extra,
    )
