"""Win detection with protection against scoring one run of marks twice."""

import logging
from collections.abc import Sequence

from cascading_tic_tac_toe.board import CellState, Grid, PlayerSymbol
from cascading_tic_tac_toe.exception import SizeMismatchError
from cascading_tic_tac_toe.lines import Line, generate_lines, same_line, shared_cells

logger = logging.getLogger(__name__)


def has_two_shared_cells(claimed: Sequence[Line], line: Line) -> bool:
    """Return True when some claimed line already covers two of the line's cells.

    This is what stops a 4-in-a-row from being scored as two overlapping
    triples. It only counts shared coordinates and must stay that way.
    """
    return any(shared_cells(combination, line) >= 2 for combination in claimed)


def is_claimable(line: Line, claimed: Sequence[Line]) -> bool:
    if any(same_line(line, combination) for combination in claimed):
        return False
    return not has_two_shared_cells(claimed, line)


def find_winning_line(
    grid: Grid,
    round_count: int,
    player: PlayerSymbol,
    claimed: Sequence[Line],
) -> Line | None:
    """Find the first unclaimed line fully held by the player.

    Lines are checked in generation order, which is the tie-break when a move
    completes more than one line. The claimed lines are not modified; the
    caller records the returned line.
    """
    if round_count != grid.round_count:
        msg = f"Round {round_count} does not match a grid sized for round {grid.round_count}."
        raise SizeMismatchError(msg)

    state = CellState.filled(player)
    for line in generate_lines(round_count):
        if not is_claimable(line, claimed):
            continue
        if all(grid.get(coord) is state for coord in line):
            logger.debug("Player %s completed line %s", player, line)
            return line
    return None
