from __future__ import annotations

import builtins
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from fair_rps import cli  # noqa: E402
from fair_rps.commit_reveal import EntropySourceFailure, compute_commitment, generate_key  # noqa: E402


@pytest.mark.parametrize(
    "moves",
    [
        ["rock", "paper"],
        ["rock"],
        [],
        ["rock", "paper", "rock"],
    ],
)
def test_bad_move_set_exits_before_any_round(
    moves: list[str], monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def no_input(_prompt: str = "") -> str:
        raise AssertionError("no round should start")

    monkeypatch.setattr(builtins, "input", no_input)
    assert cli.main(["play", *moves]) == 1
    captured = capsys.readouterr()
    assert "Please enter" in captured.err
    assert "HMAC" not in captured.out


def test_play_then_exit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    answers = iter(["1", "0"])
    monkeypatch.setattr(builtins, "input", lambda _prompt="": next(answers))

    assert cli.main(["play", "rock", "paper", "scissors"]) == 0
    out = capsys.readouterr().out
    assert "Welcome!" in out
    assert "Your move: rock" in out
    assert out.count("HMAC key: ") == 1


def test_entropy_failure_is_fatal(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def broken_round(*_args: object, **_kwargs: object) -> None:
        raise EntropySourceFailure("boom")

    monkeypatch.setattr("fair_rps.game.new_round", broken_round)
    assert cli.main(["play", "rock", "paper", "scissors"]) == 1
    assert "secure random" in capsys.readouterr().err


def test_table_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["table", "rock", "paper", "scissors"]) == 0
    out = capsys.readouterr().out
    assert sum(1 for line in out.splitlines() if line.startswith("|")) == 4


def test_verify_command(capsys: pytest.CaptureFixture[str]) -> None:
    key = generate_key()
    commitment = compute_commitment("lizard", key)

    assert cli.main(["verify", "--move", "lizard", "--key", key, "--hmac", commitment]) == 0
    assert capsys.readouterr().out.startswith("OK")

    assert cli.main(["verify", "--move", "spock", "--key", key, "--hmac", commitment]) == 1
    assert capsys.readouterr().out.startswith("MISMATCH")


def test_unknown_log_level() -> None:
    with pytest.raises(SystemExit):
        cli.main(["table", "a", "b", "c", "--log-level", "chatty"])


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(cli.LOG_LEVEL_ENV, "debug")
    assert cli._default_log_level() == "debug"


def test_log_level_after_the_moves(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    answers = iter(["exit"])
    monkeypatch.setattr(builtins, "input", lambda _prompt="": next(answers))

    assert cli.main(["play", "rock", "paper", "scissors", "--log-level", "DEBUG"]) == 0
    assert "Welcome!" in capsys.readouterr().out


def test_log_level_before_the_moves(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["table", "--log-level", "info", "rock", "paper", "scissors"]) == 0
    assert "rock" in capsys.readouterr().out
