from __future__ import annotations

import tabulate as tabulate_lib

from fair_rps.protocol import MoveSet, determine_outcome

CORNER_LABEL = "v User \\ PC >"
OUTCOME_LABELS = ("Win", "Lose", "Draw")


def cell_width(move_set: MoveSet) -> int:
    """Shared width of every outcome column: the longest move name or outcome label."""

    return max(len(label) for label in (*move_set, *OUTCOME_LABELS))


def outcome_rows(move_set: MoveSet) -> list[list[str]]:
    rows: list[list[str]] = []
    for user_move in move_set:
        row = [user_move]
        for pc_move in move_set:
            row.append(determine_outcome(move_set, user_move, pc_move).title())
        rows.append(row)
    return rows


def render_help_table(move_set: MoveSet) -> str:
    """Render the full outcome matrix, one row per user move.

    Each cell reads from the row's side: "Win" means the user's move (row)
    beats the computer's move (column). All outcome columns share one width.
    """

    width = cell_width(move_set)
    label_width = max(len(CORNER_LABEL), *(len(move) for move in move_set))
    headers = [CORNER_LABEL.ljust(label_width), *(move.ljust(width) for move in move_set)]
    rows = [
        [row[0].ljust(label_width), *(cell.ljust(width) for cell in row[1:])]
        for row in outcome_rows(move_set)
    ]

    # tabulate strips cell padding unless told otherwise.
    saved = tabulate_lib.PRESERVE_WHITESPACE
    tabulate_lib.PRESERVE_WHITESPACE = True
    try:
        table = tabulate_lib.tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True)
    finally:
        tabulate_lib.PRESERVE_WHITESPACE = saved
    return "Results are from the user's point of view.\n" + table
