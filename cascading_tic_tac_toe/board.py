from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Literal, TypeAlias

from cascading_tic_tac_toe.exception import OutOfBoundsError

PlayerSymbol: TypeAlias = Literal["X", "O"]
Coord: TypeAlias = tuple[int, int]

PLAYERS: Final[tuple[PlayerSymbol, PlayerSymbol]] = ("X", "O")


class CellState(StrEnum):
    VALID = "valid"
    INVALID = "invalid"
    X = "X"
    O = "O"

    @classmethod
    def filled(cls, player: PlayerSymbol) -> "CellState":
        return cls.X if player == "X" else cls.O

    @property
    def player(self) -> PlayerSymbol | None:
        match self:
            case CellState.X:
                return "X"
            case CellState.O:
                return "O"
            case _:
                return None

    @property
    def is_filled(self) -> bool:
        return self.player is not None


@dataclass(frozen=True, slots=True)
class Move:
    player: PlayerSymbol
    row: int
    col: int

    @property
    def coord(self) -> Coord:
        return self.row, self.col


def grid_size(round_count: int) -> tuple[int, int]:
    """Return (rows, cols) of the grid for the given round."""
    return 2 * round_count + 3, round_count + 3


def invalid_cells(round_count: int) -> frozenset[Coord]:
    """Cells lying outside the playable region for the given round.

    Each round carves an upper-right vertical wedge and a lower-left
    horizontal wedge out of the rectangular backing array. The result only
    depends on the round number and grows monotonically with it.
    """
    invalid: set[Coord] = set()
    for current in range(1, round_count + 1):
        invalid.update((i, current + 2) for i in range(2 * current))
        for i in range(current):
            invalid.add((2 * current + 1, i))
            invalid.add((2 * current + 2, i))
    return frozenset(invalid)


class Grid:
    def __init__(self, round_count: int = 0) -> None:
        if round_count < 0:
            msg = f"Round count must be non-negative, got {round_count}."
            raise ValueError(msg)
        self._round_count = round_count
        self._rows, self._cols = grid_size(round_count)
        self._cells = self._layout(round_count, self._rows, self._cols, {})

    @property
    def round_count(self) -> int:
        return self._round_count

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> tuple[int, int]:
        return self._rows, self._cols

    @property
    def board(self) -> list[list[CellState]]:
        return [self._cells[r * self._cols : (r + 1) * self._cols] for r in range(self._rows)]

    def get(self, coord: Coord) -> CellState:
        return self._cells[self._index(coord)]

    def set(self, coord: Coord, state: CellState) -> None:
        self._cells[self._index(coord)] = state

    def grow(self) -> dict[Coord, CellState]:
        """Extend the grid by one round.

        Filled cells keep their coordinates. Every other cell takes the state
        the geometry of the new round gives it. Returns the newly exposed
        coordinates mapped to their state.
        """
        filled = {
            divmod(index, self._cols): state for index, state in enumerate(self._cells) if state.is_filled
        }
        old_rows, old_cols = self._rows, self._cols

        self._round_count += 1
        self._rows, self._cols = grid_size(self._round_count)
        self._cells = self._layout(self._round_count, self._rows, self._cols, filled)

        return {
            (r, c): self._cells[r * self._cols + c]
            for r in range(self._rows)
            for c in range(self._cols)
            if r >= old_rows or c >= old_cols
        }

    def get_available_positions(self) -> list[Coord]:
        return [divmod(index, self._cols) for index, state in enumerate(self._cells) if state is CellState.VALID]

    def is_full(self) -> bool:
        return CellState.VALID not in self._cells

    def _index(self, coord: Coord) -> int:
        row, col = coord
        if not (0 <= row < self._rows) or not (0 <= col < self._cols):
            msg = f"Coordinate {coord} out of bounds for a {self._rows}x{self._cols} grid."
            raise OutOfBoundsError(msg)
        return row * self._cols + col

    @staticmethod
    def _layout(round_count: int, rows: int, cols: int, filled: dict[Coord, CellState]) -> list[CellState]:
        invalid = invalid_cells(round_count)
        cells: list[CellState] = []
        for r in range(rows):
            for c in range(cols):
                if (r, c) in filled:
                    cells.append(filled[(r, c)])
                elif (r, c) in invalid:
                    cells.append(CellState.INVALID)
                else:
                    cells.append(CellState.VALID)
        return cells
