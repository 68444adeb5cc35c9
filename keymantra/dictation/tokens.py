# keymantra/dictation/tokens.py
import re
from typing import List, Optional

# Any run of Unicode whitespace separates two words. Both the answer and the
# live input go through this pattern so their slots line up.
WHITESPACE_RUN = re.compile(r"\s+")


def split_tokens(text: str) -> List[str]:
    """Splits on whitespace runs, keeping empty tokens.

    An empty token at position k means a separator has been typed but word k
    has not been started yet.
    """
    return WHITESPACE_RUN.split(text)


def count_separators(text: str) -> int:
    """Number of whitespace runs in `text`."""
    return len(WHITESPACE_RUN.findall(text))


def segment(answer: Optional[str]) -> List[str]:
    """Splits a reference answer into its expected word tokens.

    >>> segment("My name is apple")
    ['My', 'name', 'is', 'apple']
    >>> segment("  ")
    []
    """
    if not answer:
        return []
    return [token for token in split_tokens(answer) if token]
