from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, Literal

Move = str
Outcome = Literal["win", "lose", "draw"]

MIN_MOVES = 3


class InvalidMoveSet(ValueError):
    """The supplied moves cannot form a game: too few, even count, or duplicates."""


class InvalidUserMove(ValueError):
    pass


@dataclass(frozen=True)
class MoveSet:
    """Ordered, odd-length collection of distinct move names.

    Order matters: each move beats the ``len // 2`` moves before it in cyclic
    order and loses to the ``len // 2`` moves after it.
    """

    moves: tuple[Move, ...]

    def __post_init__(self) -> None:
        _validate(self.moves)

    @classmethod
    def parse(cls, values: Iterable[str]) -> "MoveSet":
        # Surrounding whitespace is not part of a move name.
        return cls(moves=tuple(value.strip() for value in values))

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def __getitem__(self, index: int) -> Move:
        return self.moves[index]

    def __contains__(self, move: object) -> bool:
        return move in self.moves

    def index(self, move: Move) -> int:
        try:
            return self.moves.index(move)
        except ValueError:
            raise ValueError(f"Unknown move: {move!r}") from None


def _validate(moves: tuple[str, ...]) -> None:
    if len(moves) < MIN_MOVES:
        raise InvalidMoveSet(
            f"Please enter an odd number of moves starting from {MIN_MOVES} (got {len(moves)})."
        )
    if len(moves) % 2 == 0:
        raise InvalidMoveSet(f"Please enter an odd number of moves (got {len(moves)}).")

    duplicates = sorted(move for move, count in Counter(moves).items() if count > 1)
    if duplicates:
        raise InvalidMoveSet(
            "Please enter unique moves without repetition (repeated: " + ", ".join(duplicates) + ")."
        )


def resolve(move_set: MoveSet, move_a: Move, move_b: Move) -> int:
    """Return 0 on a draw, 1 when move_a wins, -1 when move_b wins."""

    n = len(move_set)
    half = n // 2
    raw = ((move_set.index(move_a) - move_set.index(move_b) + half + n) % n) - half
    return (raw > 0) - (raw < 0)


def determine_outcome(move_set: MoveSet, move_a: Move, move_b: Move) -> Outcome:
    sign = resolve(move_set, move_a, move_b)
    if sign == 0:
        return "draw"
    return "win" if sign > 0 else "lose"


def parse_move_index(value: str, move_count: int) -> int:
    """Turn a 1-based menu entry into a 0-based index into the move set."""

    try:
        number = int(value.strip())
    except ValueError:
        raise InvalidUserMove(f"Invalid move {value!r}. Please enter a number between 1 and {move_count}.") from None
    if not 1 <= number <= move_count:
        raise InvalidUserMove(f"Invalid move {value!r}. Please enter a number between 1 and {move_count}.")
    return number - 1
