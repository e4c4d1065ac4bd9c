"""
Practice Session Engine

Stateless helpers that drive a quick practice session: prompt filtering,
answer evaluation, accuracy/progress accounting and next-card selection.
The caller owns all session state (current index, counters, hearts) and
passes it in; nothing here reads or writes shared state.

Direction and cloze context:
    The learner answers in the target language of the direction, and the
    cloze sentence is written in that same language:
    - MK_TO_EN → context_en (blank filled with the English answer)
    - EN_TO_MK → context_mk (blank filled with the Macedonian answer)
    get_cloze_context() is the only place this mapping lives; prompt
    filtering and the card builder both call it.

Usage:
    from mkpractice.services.practice.session import (
        evaluate_practice_answer,
        get_practice_prompts_for_session,
        select_next_practice_index,
    )

    prompts = get_practice_prompts_for_session(items, category="food")
    result = evaluate_practice_answer("hello", prompts[0], PracticeDirection.MK_TO_EN)
    index = select_next_practice_index(0, len(prompts))
"""

from __future__ import annotations

import locale
import logging
import math
import random
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Sequence

from mkpractice.config.settings import settings
from mkpractice.enums.practice import (
    PracticeDifficulty,
    PracticeDirection,
    PracticeDrillMode,
)
from mkpractice.models.practice import (
    ClozeContext,
    DifficultyPreset,
    PracticeEvaluationResult,
    PracticeItem,
    PracticeSessionMeta,
    PracticeSessionSnapshot,
    SessionBonus,
    SessionBonusResult,
    SessionProgressSummary,
)
from mkpractice.services.practice.cloze import has_cloze_blank
from mkpractice.services.practice.normalizer import normalize_answer

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]

ALL_CATEGORIES = "all"

PRACTICE_DIFFICULTIES: dict[PracticeDifficulty, DifficultyPreset] = {
    PracticeDifficulty.CASUAL: DifficultyPreset(
        id=PracticeDifficulty.CASUAL,
        label="Casual",
        heart_penalty=1,
        timer_seconds=None,
        xp_multiplier=1.0,
    ),
    PracticeDifficulty.FOCUS: DifficultyPreset(
        id=PracticeDifficulty.FOCUS,
        label="Focus",
        heart_penalty=1,
        timer_seconds=30,
        xp_multiplier=1.25,
    ),
    PracticeDifficulty.BLITZ: DifficultyPreset(
        id=PracticeDifficulty.BLITZ,
        label="Blitz",
        heart_penalty=2,
        timer_seconds=15,
        xp_multiplier=1.5,
    ),
}

PERFECT_RUN_BONUS = SessionBonus(
    id="perfect",
    title="Flawless Run",
    description="Maintain 100% accuracy for the full deck.",
    xp_multiplier=1.25,
)

STREAK_BONUS = SessionBonus(
    id="streak",
    title="Streak Master",
    description="Answer 10 cards in a row without mistakes.",
    xp_multiplier=1.15,
)


def round_half_up(value: float) -> int:
    """Round halves up (2.5 -> 3), the same as the web and mobile clients."""
    return math.floor(value + 0.5)



# ===========================================
# Prompt Selection
# ===========================================


def get_practice_categories(items: Iterable[PracticeItem]) -> list[str]:
    """
    Collect the distinct categories present in a catalog.

    Items without a category are skipped. Ordering follows the active
    locale's collation, case-insensitively, with the raw string as a
    tie-break so the result is stable.

    Args:
        items: Catalog items

    Returns:
        Sorted list of unique category labels
    """
    unique = {item.category for item in items if item.category}
    return sorted(unique, key=lambda c: (locale.strxfrm(c.casefold()), c))


def get_cloze_context(
    item: Optional[PracticeItem], direction: PracticeDirection
) -> Optional[ClozeContext]:
    """Return the context sentence written in the language being answered."""
    if item is None:
        return None
    if direction == PracticeDirection.MK_TO_EN:
        return item.context_en
    return item.context_mk


def get_practice_prompts_for_session(
    items: Sequence[PracticeItem],
    category: str = ALL_CATEGORIES,
    mode: PracticeDrillMode = PracticeDrillMode.FLASHCARD,
    direction: PracticeDirection = PracticeDirection.MK_TO_EN,
    cloze_token: Optional[str] = None,
) -> list[PracticeItem]:
    """
    Filter catalog items for a session.

    Args:
        items: Full catalog
        category: Category label, or ALL_CATEGORIES for no filter
        mode: Drill mode; CLOZE keeps only items whose context sentence has a blank
        direction: Practice direction (picks the context sentence for cloze)
        cloze_token: Blank placeholder (defaults to settings.CLOZE_BLANK_TOKEN)

    Returns:
        Matching items in catalog order; empty when nothing matches
    """
    mode = PracticeDrillMode(mode)
    direction = PracticeDirection(direction)
    prompts = list(items)

    if category != ALL_CATEGORIES:
        prompts = [item for item in prompts if item.category == category]

    if mode == PracticeDrillMode.CLOZE:
        prompts = [
            item
            for item in prompts
            if (context := get_cloze_context(item, direction)) is not None
            and has_cloze_blank(context.sentence, cloze_token)
        ]

    logger.debug(
        f"Selected {len(prompts)}/{len(items)} prompts "
        f"(category={category}, mode={mode.value}, direction={direction.value})"
    )
    return prompts


# ===========================================
# Answer Evaluation
# ===========================================


def get_expected_answer(item: Optional[PracticeItem], direction: PracticeDirection) -> str:
    """Primary answer for the direction; empty string when there is no item."""
    if item is None:
        return ""
    if direction == PracticeDirection.MK_TO_EN:
        return item.english
    return item.macedonian


def get_alternate_answers(
    item: Optional[PracticeItem], direction: PracticeDirection
) -> list[str]:
    """Alternate answers accepted for the direction."""
    if item is None:
        return []
    if direction == PracticeDirection.MK_TO_EN:
        return list(item.english_alternates)
    return list(item.macedonian_alternates)


def evaluate_practice_answer(
    raw_answer: Optional[str],
    item: Optional[PracticeItem],
    direction: PracticeDirection,
) -> Optional[PracticeEvaluationResult]:
    """
    Check a typed answer against the expected answer and its alternates.

    Returns None for a missing item or a blank answer; callers must not
    score a None result.

    Args:
        raw_answer: What the learner typed
        item: The prompt being answered
        direction: Practice direction

    Returns:
        PracticeEvaluationResult, or None when there is nothing to evaluate
    """
    if item is None or not raw_answer or not raw_answer.strip():
        return None

    expected = get_expected_answer(item, direction)
    normalized_expected = normalize_answer(expected)
    normalized_input = normalize_answer(raw_answer)
    normalized_alternates = {
        normalize_answer(alternate) for alternate in get_alternate_answers(item, direction)
    }

    matches_primary = normalized_input == normalized_expected
    matched_alternate = not matches_primary and normalized_input in normalized_alternates

    return PracticeEvaluationResult(
        expected_answer=expected,
        normalized_expected=normalized_expected,
        normalized_input=normalized_input,
        is_correct=matches_primary or matched_alternate,
        matched_alternate=matched_alternate,
    )


# ===========================================
# Progress Accounting
# ===========================================


def calculate_accuracy(correct_count: int, total_attempts: int) -> int:
    """Percent of attempts answered correctly, rounded; 0 with no attempts."""
    if total_attempts <= 0:
        return 0
    return round_half_up(correct_count / total_attempts * 100)


def calculate_session_progress(correct_count: int, target: Optional[int] = None) -> int:
    """
    Session completion percentage for display.

    Args:
        correct_count: Correct answers so far (may exceed the target)
        target: Correct answers needed (defaults to settings.SESSION_TARGET)

    Returns:
        Percent in [0, 100]; 0 when the target is not positive
    """
    if target is None:
        target = settings.SESSION_TARGET
    if target <= 0:
        return 0
    return max(0, min(100, round_half_up(correct_count / target * 100)))


def summarize_session_progress(responses: Iterable[bool]) -> SessionProgressSummary:
    """
    Summarize a list of graded responses.

    Args:
        responses: One bool per answered card (True = correct)

    Returns:
        SessionProgressSummary with totals and rounded accuracy
    """
    results = list(responses)
    correct = sum(1 for result in results if result)
    return SessionProgressSummary(
        total_answered=len(results),
        correct=correct,
        accuracy=calculate_accuracy(correct, len(results)),
    )


def select_next_practice_index(
    current_index: int,
    total: int,
    random_source: Optional[RandomSource] = None,
) -> int:
    """
    Pick a random next card index that differs from the current one.

    Draws up to 2 * total uniform indices and returns the first one that is
    not current_index. If every draw collides, current_index is returned;
    this keeps the call bounded instead of guaranteeing a distinct index.

    Args:
        current_index: Index of the card on screen
        total: Deck size
        random_source: Callable returning floats in [0, 1) (defaults to random.random)

    Returns:
        Next index in [0, total), or the clamped current index when total <= 1
    """
    if total <= 1:
        return max(0, min(current_index, total - 1))

    draw = random_source or random.random
    for _ in range(total * 2):
        candidate = min(int(draw() * total), total - 1)
        if candidate != current_index:
            return candidate

    logger.debug(f"No distinct index after {total * 2} draws; staying at {current_index}")
    return current_index


# ===========================================
# Session Snapshots and Difficulty
# ===========================================


def create_session_snapshot(
    prompts: Sequence[PracticeItem],
    session_length: Optional[int] = None,
    difficulty: str = "beginner",
    generated_at: Optional[datetime] = None,
) -> PracticeSessionSnapshot:
    """
    Bundle the prompts chosen for a session with descriptive metadata.

    Args:
        prompts: Prompts in the session deck
        session_length: Planned number of cards (defaults to settings.SESSION_DEFAULT_LENGTH)
        difficulty: Content difficulty label
        generated_at: Snapshot time (defaults to now, UTC)

    Returns:
        PracticeSessionSnapshot
    """
    return PracticeSessionSnapshot(
        prompts=list(prompts),
        meta=PracticeSessionMeta(
            session_length=session_length or settings.SESSION_DEFAULT_LENGTH,
            deck_size=len(prompts),
            difficulty=difficulty,
            generated_at=generated_at or datetime.now(timezone.utc),
        ),
    )


def get_difficulty_preset(difficulty: PracticeDifficulty | str) -> DifficultyPreset:
    """Look up a difficulty preset; unknown ids fall back to casual."""
    try:
        return PRACTICE_DIFFICULTIES[PracticeDifficulty(difficulty)]
    except ValueError:
        logger.warning(f"Unknown practice difficulty '{difficulty}', using casual")
        return PRACTICE_DIFFICULTIES[PracticeDifficulty.CASUAL]


@dataclass(frozen=True)
class SessionTally:
    """
    Running score for a quick practice session.

    Immutable: apply_result() returns a new tally, so hosts can keep the
    previous value for undo or comparison.

    Attributes:
        correct_count: Correct answers, capped at the session target
        total_attempts: Graded answers (skips are not counted)
        hearts: Remaining hearts
        completed: Target reached
        game_over: Hearts exhausted
        current_streak: Correct answers in a row, reset by a mistake
        best_streak: Longest streak so far
        perfect_eligible: No mistake made yet
        xp_earned: XP from answers, before completion bonuses
    """

    correct_count: int = 0
    total_attempts: int = 0
    hearts: int = 0
    completed: bool = False
    game_over: bool = False
    current_streak: int = 0
    best_streak: int = 0
    perfect_eligible: bool = True
    xp_earned: int = 0

    @property
    def accuracy(self) -> int:
        """Rounded accuracy percentage."""
        return calculate_accuracy(self.correct_count, self.total_attempts)

    def progress(self, target: Optional[int] = None) -> int:
        """Completion percentage towards the target."""
        return calculate_session_progress(self.correct_count, target)


def new_tally(hearts: Optional[int] = None) -> SessionTally:
    """Start a tally with the configured number of hearts."""
    return SessionTally(hearts=settings.INITIAL_HEARTS if hearts is None else hearts)


def calculate_answer_xp(correct: bool, preset: Optional[DifficultyPreset] = None) -> int:
    """
    XP for one graded answer.

    Correct answers earn SESSION_XP_CORRECT scaled by the preset multiplier.
    Wrong answers earn SESSION_XP_INCORRECT scaled the same way, never less
    than SESSION_XP_INCORRECT_MIN.
    """
    preset = preset or PRACTICE_DIFFICULTIES[PracticeDifficulty.CASUAL]
    if correct:
        return round_half_up(settings.SESSION_XP_CORRECT * preset.xp_multiplier)
    return max(
        settings.SESSION_XP_INCORRECT_MIN,
        round_half_up(settings.SESSION_XP_INCORRECT * preset.xp_multiplier),
    )


def apply_result(
    tally: SessionTally,
    correct: bool,
    preset: Optional[DifficultyPreset] = None,
    target: Optional[int] = None,
) -> SessionTally:
    """
    Score one graded answer.

    Correct answers count up to the target, extend the streak and mark the
    session complete when the target is reached. Wrong answers reset the
    streak, end the perfect run and cost the preset's heart penalty; the
    session is over when hearts reach zero. Both earn XP.

    Args:
        tally: Current tally
        correct: Whether the answer was correct
        preset: Difficulty preset (defaults to casual)
        target: Correct answers needed (defaults to settings.SESSION_TARGET)

    Returns:
        Updated tally
    """
    preset = preset or PRACTICE_DIFFICULTIES[PracticeDifficulty.CASUAL]
    if target is None:
        target = settings.SESSION_TARGET

    total_attempts = tally.total_attempts + 1
    xp_earned = tally.xp_earned + calculate_answer_xp(correct, preset)

    if correct:
        correct_count = min(tally.correct_count + 1, target)
        current_streak = tally.current_streak + 1
        return replace(
            tally,
            correct_count=correct_count,
            total_attempts=total_attempts,
            completed=tally.completed or correct_count >= target,
            current_streak=current_streak,
            best_streak=max(tally.best_streak, current_streak),
            xp_earned=xp_earned,
        )

    hearts = max(tally.hearts - preset.heart_penalty, 0)
    return replace(
        tally,
        total_attempts=total_attempts,
        hearts=hearts,
        game_over=tally.game_over or hearts == 0,
        current_streak=0,
        perfect_eligible=False,
        xp_earned=xp_earned,
    )


def finalize_session_bonuses(tally: SessionTally) -> SessionBonusResult:
    """
    Work out the completion bonuses a session earned.

    - Flawless run: no mistakes and every attempt correct
    - Streak: best streak reached SESSION_STREAK_BONUS_THRESHOLD

    Multipliers stack; bonus XP is a 10 XP base scaled by the combined
    multiplier minus one.

    Args:
        tally: Tally at the end of the session

    Returns:
        SessionBonusResult with the bonuses, combined multiplier and extra XP
    """
    bonuses = []
    if (
        tally.perfect_eligible
        and tally.correct_count > 0
        and tally.correct_count == tally.total_attempts
    ):
        bonuses.append(PERFECT_RUN_BONUS)
    if tally.best_streak >= settings.SESSION_STREAK_BONUS_THRESHOLD:
        bonuses.append(STREAK_BONUS)

    multiplier = 1.0
    for bonus in bonuses:
        multiplier *= bonus.xp_multiplier

    bonus_xp = round_half_up(settings.SESSION_XP_CORRECT * (multiplier - 1)) if bonuses else 0

    if bonuses:
        logger.debug(
            f"Session bonuses: {[b.id for b in bonuses]} "
            f"(x{multiplier:.4f}, +{bonus_xp} XP)"
        )
    return SessionBonusResult(bonuses=bonuses, multiplier=multiplier, bonus_xp=bonus_xp)
