from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Literal

from fair_rps.commit_reveal import compute_commitment, generate_key
from fair_rps.help_table import render_help_table
from fair_rps.protocol import InvalidUserMove, Move, MoveSet, Outcome, determine_outcome, parse_move_index

logger = logging.getLogger("fair_rps.game")

EXIT_WORDS = ("0", "exit")
HELP_WORD = "?"

OUTCOME_TEXT: dict[Outcome, str] = {
    "win": "You win!",
    "lose": "You lose!",
    "draw": "Draw",
}

CommandKind = Literal["play", "exit", "help", "invalid"]


@dataclass(frozen=True)
class Round:
    # Lives for one loop iteration only; the key is never reused.
    move_set: MoveSet
    computer_move: Move
    key: str
    commitment: str


@dataclass(frozen=True)
class RoundResult:
    user_move: Move
    computer_move: Move
    outcome: Outcome
    key: str
    commitment: str


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    index: int | None = None
    error: str | None = None


def select_move(move_set: MoveSet, rng: random.Random | None = None) -> Move:
    # Non-cryptographic on purpose; only the key needs a CSPRNG.
    source = rng if rng is not None else random
    return move_set[source.randrange(len(move_set))]


def new_round(move_set: MoveSet, rng: random.Random | None = None) -> Round:
    computer_move = select_move(move_set, rng)
    key = generate_key()
    commitment = compute_commitment(computer_move, key)
    logger.debug("new round committed: hmac=%s", commitment)
    return Round(move_set=move_set, computer_move=computer_move, key=key, commitment=commitment)


def parse_command(line: str, move_count: int) -> Command:
    value = line.strip()
    if value.lower() in EXIT_WORDS:
        return Command(kind="exit")
    if value == HELP_WORD:
        return Command(kind="help")
    try:
        return Command(kind="play", index=parse_move_index(value, move_count))
    except InvalidUserMove as exc:
        return Command(kind="invalid", error=str(exc))


def finish_round(current: Round, user_move: Move) -> RoundResult:
    return RoundResult(
        user_move=user_move,
        computer_move=current.computer_move,
        outcome=determine_outcome(current.move_set, user_move, current.computer_move),
        key=current.key,
        commitment=current.commitment,
    )


def format_menu(move_set: MoveSet) -> list[str]:
    lines = ["Available moves:"]
    lines.extend(f"{i} - {move}" for i, move in enumerate(move_set, start=1))
    lines.append("0 - exit")
    lines.append("? - help")
    return lines


def format_result(result: RoundResult) -> list[str]:
    return [
        f"Your move: {result.user_move}",
        f"Computer move: {result.computer_move}",
        f"Outcome: {OUTCOME_TEXT[result.outcome]}",
        f"HMAC key: {result.key}",
    ]


class GameSession:
    """Plays rounds against the computer over injected line I/O.

    ``read_line`` is called with a prompt and returns one line (``input`` in
    the CLI); ``write`` receives one line of output at a time (``print``).
    """

    def __init__(
        self,
        move_set: MoveSet,
        *,
        read_line: Callable[[str], str] | None = None,
        write: Callable[[str], None] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.move_set = move_set
        self._read_line = read_line or input
        self._write = write or print
        self._rng = rng

    def run(self) -> int:
        rounds = 0
        while True:
            result = self.play_round()
            if result is None:
                logger.info("player exited after %d round(s)", rounds)
                return 0
            rounds += 1

    def play_round(self) -> RoundResult | None:
        """Play one round; ``None`` means the player asked to exit."""

        current = new_round(self.move_set, self._rng)
        self._show_commitment(current)

        prompt = f"Enter your move from 1 to {len(self.move_set)} (0 for exit, ? for help): "
        while True:
            try:
                line = self._read_line(prompt)
            except EOFError:
                logger.debug("input closed, treating as exit")
                return None

            command = parse_command(line, len(self.move_set))
            if command.kind == "exit":
                return None
            if command.kind == "help":
                self._write(render_help_table(self.move_set))
                self._show_commitment(current)
                continue
            if command.kind == "invalid" or command.index is None:
                logger.debug("rejected player input %r", line)
                self._write(command.error or "Invalid move.")
                self._show_commitment(current)
                continue

            result = finish_round(current, self.move_set[command.index])
            for text in format_result(result):
                self._write(text)
            logger.debug("round resolved: outcome=%s", result.outcome)
            return result

    def _show_commitment(self, current: Round) -> None:
        self._write(f"HMAC: {current.commitment}")
        for text in format_menu(current.move_set):
            self._write(text)
