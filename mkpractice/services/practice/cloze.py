"""
Cloze Sentence Splitting

Splits context sentences around the blank token so clients can render the
text before, between and after each gap.

Usage:
    from mkpractice.services.practice.cloze import split_cloze_sentence

    split = split_cloze_sentence("I say {{blank}} every morning.")
    split.segments   # ["I say ", " every morning."]
    split.has_blank  # True
"""

from typing import Optional

from mkpractice.config.settings import settings
from mkpractice.models.practice import ClozeSplit


def split_cloze_sentence(sentence: Optional[str], token: Optional[str] = None) -> ClozeSplit:
    """
    Split a sentence on every occurrence of the blank token.

    Args:
        sentence: Context sentence, possibly empty
        token: Blank placeholder (defaults to settings.CLOZE_BLANK_TOKEN)

    Returns:
        ClozeSplit with len(segments) == occurrences + 1. A sentence without
        the token comes back as a single segment with has_blank=False.
    """
    if not sentence:
        return ClozeSplit(segments=[""], has_blank=False)

    token = token or settings.CLOZE_BLANK_TOKEN
    if token not in sentence:
        return ClozeSplit(segments=[sentence], has_blank=False)

    return ClozeSplit(segments=sentence.split(token), has_blank=True)


def has_cloze_blank(sentence: Optional[str], token: Optional[str] = None) -> bool:
    """Check whether a sentence contains the blank token."""
    if not sentence:
        return False
    return (token or settings.CLOZE_BLANK_TOKEN) in sentence
