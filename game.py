"""
Round state for a single Wordle Solo player.

A GameSession owns the secret word, the attempt counter and the won/lost
tally. Front ends create one per round and hand the tally to the next round
with next_round().
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from game_logic import (
    Verdict,
    blank_pattern,
    evaluate_guess,
    is_solved,
    render_glyphs,
    reveal_pattern,
    validate_word,
    verdict_names,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 7

IN_PROGRESS = "in_progress"
WON = "won"
LOST = "lost"


class GameOverError(RuntimeError):
    """Raised when a guess is submitted to a round that already ended."""


@dataclass
class Tally:
    """Cumulative won/lost counters."""
    won: int = 0
    lost: int = 0

    @property
    def total_games(self) -> int:
        return self.won + self.lost

    @property
    def win_rate(self) -> float:
        if not self.total_games:
            return 0.0
        return self.won * 100.0 / self.total_games

    def __repr__(self):
        return f"<Tally(won={self.won}, lost={self.lost})>"


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one evaluated guess."""
    guess: str
    verdicts: Tuple[Verdict, ...]
    glyphs: str
    status: str
    attempts_left: int
    pattern: str

    @property
    def won(self) -> bool:
        return self.status == WON

    @property
    def over(self) -> bool:
        return self.status != IN_PROGRESS

    def to_dict(self) -> dict:
        return {
            "guess": self.guess,
            "feedback": verdict_names(self.verdicts),
            "glyphs": self.glyphs,
            "status": self.status,
            "attempts_left": self.attempts_left,
            "pattern": self.pattern,
        }


@dataclass
class GameSession:
    secret: str
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    attempts: int = 1
    status: str = IN_PROGRESS
    pattern: str = field(default_factory=blank_pattern)
    tally: Tally = field(default_factory=Tally)

    def __post_init__(self):
        self.secret = validate_word(self.secret)
        if self.max_attempts < 2:
            raise ValueError("max_attempts must be at least 2")

    @classmethod
    def start(cls, secret: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
              tally: Optional[Tally] = None) -> "GameSession":
        """Validate the secret word and open a new round."""
        session = cls(secret=secret, max_attempts=max_attempts,
                      tally=tally if tally is not None else Tally())
        logger.info("Round started (max_attempts=%d)", session.max_attempts)
        logger.debug("Secret word is %s", session.secret)
        return session

    @property
    def attempts_left(self) -> int:
        return self.max_attempts - self.attempts

    @property
    def in_progress(self) -> bool:
        return self.status == IN_PROGRESS

    def submit_guess(self, raw_guess: str) -> TurnResult:
        """
        Evaluate one guess and advance the round.

        Args:
            raw_guess: Player input, any case

        Returns:
            TurnResult for the evaluated guess

        Raises:
            ValidationError: guess is not five letters A-Z; nothing is counted
            GameOverError: the round already ended
        """
        if not self.in_progress:
            raise GameOverError(f"Round is already {self.status}")

        guess = validate_word(raw_guess)
        verdicts = evaluate_guess(self.secret, guess)
        self.attempts += 1
        self.pattern = reveal_pattern(self.pattern, guess, verdicts)

        if is_solved(verdicts):
            self.status = WON
            self.tally.won += 1
            logger.info("Round won after %d guesses", self.attempts - 1)
        elif self.attempts >= self.max_attempts:
            self.status = LOST
            self.tally.lost += 1
            logger.info("Round lost after %d guesses", self.attempts - 1)
            logger.debug("Unguessed word was %s", self.secret)

        return TurnResult(
            guess=guess,
            verdicts=verdicts,
            glyphs=render_glyphs(verdicts),
            status=self.status,
            attempts_left=self.attempts_left,
            pattern=self.pattern,
        )

    def next_round(self, secret: str) -> "GameSession":
        """Start a fresh round that keeps this session's tally."""
        return GameSession.start(secret, self.max_attempts, self.tally)

    def to_dict(self) -> dict:
        return {
            "secret": self.secret,
            "max_attempts": self.max_attempts,
            "attempts": self.attempts,
            "status": self.status,
            "pattern": self.pattern,
            "won": self.tally.won,
            "lost": self.tally.lost,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameSession":
        return cls(
            secret=data["secret"],
            max_attempts=int(data["max_attempts"]),
            attempts=int(data["attempts"]),
            status=data["status"],
            pattern=data["pattern"],
            tally=Tally(won=int(data["won"]), lost=int(data["lost"])),
        )
