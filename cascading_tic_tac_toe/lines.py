from typing import TypeAlias

from cascading_tic_tac_toe.board import Coord

Line: TypeAlias = tuple[Coord, Coord, Coord]


def line_count(round_count: int) -> int:
    return 8 * (round_count + 1) + 6 * round_count


def generate_lines(round_count: int) -> list[Line]:
    """Every candidate 3-cell winning line for the given round.

    Lines are produced per sub-round k in ascending order: horizontals,
    verticals, the two diagonals, then (for k > 0) the reach-back lines joining
    ring k to ring k - 1. The order is the tie-break used by win detection.
    """
    if round_count < 0:
        msg = f"Round count must be non-negative, got {round_count}."
        raise ValueError(msg)

    lines: list[Line] = []
    for k in range(round_count + 1):
        top, middle, bottom = 2 * k, 2 * k + 1, 2 * k + 2
        left, centre, right = k, k + 1, k + 2

        lines.extend(((row, left), (row, centre), (row, right)) for row in (top, middle, bottom))  # Horizontal lines
        lines.extend(((top, col), (middle, col), (bottom, col)) for col in (left, centre, right))  # Vertical lines
        lines.append(((top, left), (middle, centre), (bottom, right)))  # First diagonal
        lines.append(((top, right), (middle, centre), (bottom, left)))  # Second diagonal

        if k > 0:  # Reach-back lines into the previous ring
            lines.extend(
                [
                    ((2 * k - 2, k), (2 * k - 1, k + 1), (2 * k, k + 2)),
                    ((2 * k - 1, k), (2 * k, k + 1), (2 * k + 1, k + 2)),
                    ((2 * k - 1, k - 1), (2 * k, k), (2 * k + 1, k + 1)),
                    ((2 * k, k - 1), (2 * k + 1, k), (2 * k + 2, k + 1)),
                    ((2 * k - 1, k), (2 * k, k), (2 * k + 1, k)),
                    ((2 * k - 1, k + 1), (2 * k, k + 1), (2 * k + 1, k + 1)),
                ],
            )
    return lines


def same_line(first: Line, second: Line) -> bool:
    return frozenset(first) == frozenset(second)


def shared_cells(first: Line, second: Line) -> int:
    return len(set(first) & set(second))
