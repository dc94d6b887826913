"""
Word validation and guess evaluation for Wordle Solo.
"""
import re
from enum import Enum
from typing import Sequence, Tuple

WORD_LENGTH = 5
WORD_PATTERN = re.compile(r"[A-Z]{%d}" % WORD_LENGTH)
VALIDATION_MESSAGE = "Word must contain exactly 5 letters without accents or numbers."
WIN_MESSAGE = "🎉 Congratulations! You guessed the word correctly. 🎉"
HIDDEN_LETTER = "_"


class ValidationError(ValueError):
    """Raised when a secret word or guess is not five ASCII letters."""


class Verdict(Enum):
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


GLYPHS = {
    Verdict.CORRECT: "🟩",
    Verdict.PRESENT: "🟨",
    Verdict.ABSENT: "⬛",
}


# Normalize a word to uppercase and check it is exactly five letters A-Z.
def validate_word(word: str) -> str:
    if not isinstance(word, str):
        raise ValidationError(VALIDATION_MESSAGE)
    upper = word.upper()
    if not WORD_PATTERN.fullmatch(upper):
        raise ValidationError(VALIDATION_MESSAGE)
    return upper


# Evaluate a guess against the secret word.
def evaluate_guess(secret: str, guess: str) -> Tuple[Verdict, ...]:
    secret = validate_word(secret)
    guess = validate_word(guess)
    result = [None] * WORD_LENGTH

    remaining = [0] * 26
    for letter in secret:
        remaining[ord(letter) - ord("A")] += 1

    # First pass: exact matches consume their letter before anything else
    for i, (s, g) in enumerate(zip(secret, guess)):
        if g == s:
            result[i] = Verdict.CORRECT
            remaining[ord(g) - ord("A")] -= 1

    # Second pass: present only while unconsumed copies are left
    for i, g in enumerate(guess):
        if result[i] is not None:
            continue
        slot = ord(g) - ord("A")
        if remaining[slot] > 0:
            result[i] = Verdict.PRESENT
            remaining[slot] -= 1
        else:
            result[i] = Verdict.ABSENT

    return tuple(result)


def is_solved(verdicts: Sequence[Verdict]) -> bool:
    return len(verdicts) == WORD_LENGTH and all(v is Verdict.CORRECT for v in verdicts)


def render_glyphs(verdicts: Sequence[Verdict]) -> str:
    """Render a verdict row as coloured squares, e.g. 🟩🟨⬛🟩⬛."""
    return "".join(GLYPHS[v] for v in verdicts)


def verdict_names(verdicts: Sequence[Verdict]) -> list:
    return [v.value for v in verdicts]


def reveal_pattern(pattern: str, guess: str, verdicts: Sequence[Verdict]) -> str:
    """
    Merge a guess into the revealed-letters pattern.

    Positions judged correct show the guessed letter; every other position
    keeps whatever the pattern already held.

    Args:
        pattern: Current pattern, e.g. "_____" or "H__L_"
        guess: Validated guess
        verdicts: Result of evaluate_guess for that guess

    Returns:
        The updated pattern string
    """
    return "".join(
        g if v is Verdict.CORRECT else p
        for p, g, v in zip(pattern, guess, verdicts)
    )


def blank_pattern() -> str:
    return HIDDEN_LETTER * WORD_LENGTH
