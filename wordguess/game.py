from dataclasses import dataclass
from typing import Union

from .errors import InvalidLength


HIT = "+"
PRESENT = "*"
MISS = "-"


@dataclass(frozen=True)
class Inactive:
    pass


@dataclass(frozen=True)
class Active:
    secret: str
    tries_remaining: int


GameState = Union[Inactive, Active]


def evaluate(secret: str, guess: str) -> str:
    if len(guess) != len(secret):
        raise InvalidLength(f"Word must be {len(secret)} letters long.")
    # presence is checked per position against the whole secret, so a
    # repeated guess letter can be marked more times than it occurs
    marks = []
    for i, ch in enumerate(guess):
        if ch == secret[i]:
            marks.append(HIT)
        elif ch in secret:
            marks.append(PRESENT)
        else:
            marks.append(MISS)
    return "".join(marks)


def is_win(secret: str, guess: str) -> bool:
    return guess == secret


def spaced(text: str) -> str:
    return " ".join(text)


def guess_report(guess: str, feedback: str, outcome: str = "") -> str:
    return f"\n{spaced(guess.upper())}\n{spaced(feedback)}\n{outcome}"


def won_message() -> str:
    return "You won."


def lost_message(secret: str) -> str:
    return f'You lost, generated word was "{secret}".'


def length_message(min_len: int, max_len: int) -> str:
    return f"Select length of word from {min_len} to {max_len}"


def start_message(word_length: int, tries: int) -> str:
    plural = "try" if tries == 1 else "tries"
    return (
        f"Word with length {word_length} was generated, "
        f"you have {tries} {plural}, execute guess method next."
    )
