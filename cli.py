"""
Console front end: prompt, evaluate, repeat until the round ends.
"""
import argparse
import getpass
import logging

from config import get_default_secret, get_max_attempts, setup_logging
from game import GameSession
from game_logic import WIN_MESSAGE, ValidationError, validate_word

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def read_secret(prompt="Enter the secret word (hidden): ", reader=getpass.getpass):
    """Ask until a valid secret word is entered; returns None on EOF or exit."""
    while True:
        try:
            raw = reader(prompt).strip()
        except EOFError:
            return None
        if raw.lower() == EXIT_COMMAND:
            return None
        try:
            return validate_word(raw)
        except ValidationError as e:
            print(f"Error: {e}")


def play_round(session: GameSession, reader=input) -> bool:
    """
    Run the prompt loop for one round.

    Returns False when the player typed "exit" (or input ended) before the
    round finished, True otherwise.
    """
    while session.in_progress:
        prompt = (f'Enter your guess (or type "{EXIT_COMMAND}" to quit). '
                  f"Attempts left: {session.attempts_left}: ")
        try:
            raw = reader(prompt).strip()
        except EOFError:
            return False
        if raw.lower() == EXIT_COMMAND:
            return False

        try:
            turn = session.submit_guess(raw)
        except ValidationError as e:
            logger.debug("Rejected guess %r", raw)
            print(f"Error: {e}")
            continue

        print(turn.glyphs)
        if turn.won:
            print(WIN_MESSAGE)
        elif turn.over:
            print(f"You've used all your attempts. The word was: {session.secret}")
        else:
            print(f"Suggested word: {turn.pattern}")
    return True


def ask_play_again(reader=input) -> bool:
    try:
        answer = reader("Play another round? [y/N]: ").strip().lower()
    except EOFError:
        return False
    return answer in ("y", "yes")


def run(secret=None, max_attempts=None, reader=None, secret_reader=None):
    """Play rounds until the player stops; returns the final tally."""
    reader = reader or input
    secret_reader = secret_reader or getpass.getpass
    if max_attempts is None:
        max_attempts = get_max_attempts()
    secret = secret or get_default_secret() or read_secret(reader=secret_reader)
    if secret is None:
        return None

    session = GameSession.start(secret, max_attempts)
    while True:
        finished = play_round(session, reader)
        if not finished or not ask_play_again(reader):
            break
        secret = read_secret(reader=secret_reader)
        if secret is None:
            break
        session = session.next_round(secret)

    tally = session.tally
    print(f"Games won: {tally.won} | Games lost: {tally.lost}")
    return tally


def main(argv=None):
    ap = argparse.ArgumentParser(description="Guess the 5-letter word.")
    ap.add_argument("--word", help="secret word for the first round")
    ap.add_argument("--max-attempts", type=int, default=None,
                    help="attempt limit (default: WORDLE_MAX_ATTEMPTS or 7)")
    ap.add_argument("--log-level", default=None, help="logging level, e.g. DEBUG")
    args = ap.parse_args(argv)

    setup_logging(args.log_level)

    print("=" * 60)
    print("WORDLE SOLO")
    print("=" * 60)
    try:
        run(secret=args.word, max_attempts=args.max_attempts)
    except ValueError as e:
        ap.error(str(e))
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
