from __future__ import annotations

import argparse
import logging
import os
import sys

from fair_rps.commit_reveal import EntropySourceFailure, verify_commitment
from fair_rps.game import GameSession
from fair_rps.help_table import render_help_table
from fair_rps.protocol import InvalidMoveSet, MoveSet

logger = logging.getLogger("fair_rps.cli")

LOG_LEVEL_ENV = "FAIR_RPS_LOG_LEVEL"


def main(argv: list[str] | None = None) -> int:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default=_default_log_level(),
        help=f"Diagnostic log level on stderr (default from ${LOG_LEVEL_ENV}, else WARNING)",
    )
    parser = argparse.ArgumentParser(prog="fair-rps")
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", parents=[common], help="Play against the computer with a committed move each round")
    play.add_argument("moves", nargs="*", help="Odd number (>= 3) of unique moves, in cyclic order")

    table = sub.add_parser("table", parents=[common], help="Print the outcome table for a move set")
    table.add_argument("moves", nargs="*", help="Odd number (>= 3) of unique moves, in cyclic order")

    verify = sub.add_parser("verify", parents=[common], help="Check a revealed move and key against the published HMAC")
    verify.add_argument("--move", required=True, help="Computer move shown after the round")
    verify.add_argument("--key", required=True, help="HMAC key shown after the round")
    verify.add_argument("--hmac", required=True, help="HMAC shown before you chose your move")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if args.cmd == "verify":
        if verify_commitment(expected_commitment=args.hmac, message=args.move, key=args.key):
            print("OK: the HMAC matches the revealed move and key.")
            return 0
        print("MISMATCH: the revealed move and key do not produce this HMAC.")
        return 1

    # Move sets come from the command line once; a bad set ends the process.
    try:
        move_set = MoveSet.parse(args.moves)
    except InvalidMoveSet as exc:
        print(str(exc), file=sys.stderr)
        print("Example: fair-rps play rock paper scissors", file=sys.stderr)
        return 1

    if args.cmd == "table":
        print(render_help_table(move_set))
        return 0

    if args.cmd == "play":
        print("Welcome!")
        try:
            return GameSession(move_set).run()
        except EntropySourceFailure as exc:
            logger.error("cannot generate a secret key: %s", exc.__cause__ or exc)
            print("Fatal: no secure random source is available; refusing to play.", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print()
            return 0

    raise SystemExit("unhandled command")


def _default_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        raise SystemExit(f"--log-level: unknown level {level_name!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


if __name__ == "__main__":
    raise SystemExit(main())
