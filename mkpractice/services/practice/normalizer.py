"""
Answer Normalization

Canonicalizes free-text answers so learners are not penalized for case,
trailing punctuation, spacing or gloss hints such as "(formal)".

Normalization steps, in order:
1. Unicode NFKC (visually identical encodings compare equal)
2. Trim
3. Lowercase
4. Remove parenthetical asides, parentheses included
5. Strip ? ! . , ; :
6. Collapse whitespace runs to one space
7. Trim

NFKC alone does not fold accents (ќ stays distinct from к). Callers that
want accent-insensitive matching pass strip_diacritics=True, which removes
combining marks after decomposition.

Usage:
    from mkpractice.services.practice.normalizer import normalize_answer

    normalize_answer("  Здраво! ")            # "здраво"
    normalize_answer("makedonski (lang)")   # "makedonski"
"""

import re
import unicodedata
from typing import Optional

_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_PUNCTUATION_RE = re.compile(r"[?!.,;:]")
_WHITESPACE_RE = re.compile(r"\s+")


def fold_diacritics(text: str) -> str:
    """
    Remove combining accent marks from text.

    Decomposes to NFD, drops combining characters, then recomposes to NFC.

    Args:
        text: Text to fold

    Returns:
        Text without diacritics (e.g., "ќе" -> "ке", "café" -> "cafe")
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)


def normalize_answer(value: Optional[str], *, strip_diacritics: bool = False) -> str:
    """
    Normalize an answer for tolerant comparison.

    The function is total and idempotent:
    normalize_answer(normalize_answer(x)) == normalize_answer(x).

    Args:
        value: Raw answer text (None is treated as empty)
        strip_diacritics: Also fold accented letters to their base letter

    Returns:
        Canonical comparison string
    """
    if not value:
        return ""

    result = unicodedata.normalize("NFKC", value)
    result = result.strip().lower()
    result = _PARENTHETICAL_RE.sub("", result)
    result = _PUNCTUATION_RE.sub("", result)

    if strip_diacritics:
        result = fold_diacritics(result)

    result = _WHITESPACE_RE.sub(" ", result).strip()

    # Removing an aside can leave a base letter next to a combining mark
    return unicodedata.normalize("NFKC", result)
