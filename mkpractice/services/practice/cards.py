"""
Practice Card Builder

Materializes render-ready cards from catalog items for a direction and
card kind, and fingerprints decks so clients can cache per-deck assets.

Card kinds:
- typing: prompt shown, learner types the answer
- cloze: context sentence split around the blank
- listening: audio prompt, learner types the answer
- multipleChoice: answer plus up to three alternates, shuffled

Everything is deterministic except the multiple choice order, which uses
a Fisher-Yates shuffle driven by an injectable random source.

Usage:
    from mkpractice.services.practice.cards import build_practice_deck

    deck = build_practice_deck(items, PracticeDirection.MK_TO_EN, PracticeCardKind.TYPING)
    fingerprint = build_deck_fingerprint(deck, PracticeCardKind.TYPING,
                                         PracticeDirection.MK_TO_EN, "all")
"""

import logging
import random
import re
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from mkpractice.config.settings import settings
from mkpractice.enums.practice import PracticeCardKind, PracticeDirection
from mkpractice.models.practice import (
    ClozeCard,
    ListeningCard,
    MultipleChoiceCard,
    PracticeCardContent,
    PracticeItem,
    TypingCard,
)
from mkpractice.services.practice.cloze import split_cloze_sentence
from mkpractice.services.practice.session import (
    get_alternate_answers,
    get_cloze_context,
    get_expected_answer,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_WHITESPACE_RE = re.compile(r"\s+")


def shuffle(values: Iterable[T], random_source: Optional[Callable[[], float]] = None) -> list[T]:
    """
    Fisher-Yates shuffle returning a new list.

    Args:
        values: Values to shuffle (left untouched)
        random_source: Callable returning floats in [0, 1) (defaults to random.random)

    Returns:
        Shuffled copy
    """
    draw = random_source or random.random
    result = list(values)
    for i in range(len(result) - 1, 0, -1):
        j = min(int(draw() * (i + 1)), i)
        result[i], result[j] = result[j], result[i]
    return result


def build_card_id(item: PracticeItem, direction: PracticeDirection) -> str:
    """
    Stable card id for an item and direction.

    Uses item.id when present. Otherwise builds a slug from the direction
    and the prompt-side text (macedonian first for mkToEn, english first
    for enToMk). The slug is not guaranteed unique across a catalog.
    """
    if item.id:
        return item.id

    direction = PracticeDirection(direction)
    if direction == PracticeDirection.MK_TO_EN:
        text = item.macedonian or item.english
    else:
        text = item.english or item.macedonian

    return _WHITESPACE_RE.sub("-", f"{direction.value}-{text}".strip().lower())


def get_prompt_text(item: PracticeItem, direction: PracticeDirection) -> str:
    """Text shown to the learner for the direction."""
    if direction == PracticeDirection.MK_TO_EN:
        return item.macedonian
    return item.english


def build_multiple_choice_options(
    answer: str,
    alternates: Sequence[str],
    random_source: Optional[Callable[[], float]] = None,
    max_choices: Optional[int] = None,
) -> list[str]:
    """
    Build shuffled choices that always include the answer.

    Duplicates are dropped before capping, so fewer than max_choices values
    come back when there are not enough distinct options. Choices are never
    padded.
    """
    limit = max_choices or settings.MULTIPLE_CHOICE_MAX_CHOICES

    choices = [answer]
    for alternate in alternates:
        if len(choices) >= limit:
            break
        if alternate and alternate not in choices:
            choices.append(alternate)

    return shuffle(choices, random_source)


def build_practice_card(
    item: PracticeItem,
    direction: PracticeDirection,
    kind: PracticeCardKind = PracticeCardKind.TYPING,
    random_source: Optional[Callable[[], float]] = None,
) -> Optional[PracticeCardContent]:
    """
    Build one card for an item.

    Args:
        item: Catalog item
        direction: Practice direction
        kind: Card variant to build
        random_source: Random source for multiple choice shuffling

    Returns:
        The card, or None for a cloze card when the item has no context
        sentence with a blank in the answer language
    """
    direction = PracticeDirection(direction)
    kind = PracticeCardKind(kind)

    base = {
        "id": build_card_id(item, direction),
        "prompt": get_prompt_text(item, direction),
        "answer": get_expected_answer(item, direction),
        "direction": direction,
        "item": item,
        "audio_url": item.audio_url,
    }

    if kind == PracticeCardKind.CLOZE:
        context = get_cloze_context(item, direction)
        if context is None:
            return None
        split = split_cloze_sentence(context.sentence)
        if not split.has_blank:
            return None
        return ClozeCard(
            **base,
            cloze_segments=split.segments,
            translation=context.translation or None,
        )

    if kind == PracticeCardKind.MULTIPLE_CHOICE:
        return MultipleChoiceCard(
            **base,
            choices=build_multiple_choice_options(
                base["answer"],
                get_alternate_answers(item, direction),
                random_source,
            ),
        )

    if kind == PracticeCardKind.LISTENING:
        return ListeningCard(**base)

    return TypingCard(**base)


def build_practice_deck(
    items: Iterable[PracticeItem],
    direction: PracticeDirection,
    kind: PracticeCardKind = PracticeCardKind.TYPING,
    random_source: Optional[Callable[[], float]] = None,
) -> list[PracticeCardContent]:
    """
    Build cards for every item that supports the requested kind.

    Items that cannot produce the card (cloze without context) are skipped.
    """
    deck = []
    skipped = 0
    for item in items:
        card = build_practice_card(item, direction, kind, random_source)
        if card is None:
            skipped += 1
            continue
        deck.append(card)

    if skipped:
        logger.debug(f"Skipped {skipped} items without a {PracticeCardKind(kind).value} card")
    return deck


def _string_hash(value: str) -> int:
    """31-multiplier hash over UTF-16 code units, as a signed 32-bit int."""
    encoded = value.encode("utf-16-le")
    result = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        result = (result * 31 + unit) & 0xFFFFFFFF
    if result >= 0x80000000:
        result -= 0x100000000
    return result


def build_deck_fingerprint(
    deck: Sequence[PracticeCardContent],
    kind: PracticeCardKind,
    direction: PracticeDirection,
    category: str,
) -> str:
    """
    Identify a deck by its card ids, independent of card order.

    The hash matches the one computed by the web and mobile clients so
    cached audio and completion events line up across platforms.

    Returns:
        "{kind}:{direction}:{category}:{hash}", with "empty" as the hash
        for an empty deck
    """
    prefix = f"{PracticeCardKind(kind).value}:{PracticeDirection(direction).value}:{category}"
    if not deck:
        return f"{prefix}:empty"

    source = "|".join(sorted(card.id for card in deck))
    return f"{prefix}:{abs(_string_hash(source))}"
