import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from cascading_tic_tac_toe.board import PLAYERS, CellState, Coord, Grid, Move, PlayerSymbol
from cascading_tic_tac_toe.exception import InvalidMoveError
from cascading_tic_tac_toe.lines import Line
from cascading_tic_tac_toe.states import GameState, RoundState
from cascading_tic_tac_toe.win_detector import find_winning_line

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SCORE: Final = 3


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    move: Move
    changed_cells: Mapping[Coord, CellState]
    rows: int
    cols: int
    round_count: int
    scores: Mapping[PlayerSymbol, int]
    claimed_lines: tuple[Line, ...]
    game_state: GameState
    round_state: RoundState


@dataclass(frozen=True, slots=True)
class Snapshot:
    rows: int
    cols: int
    round_count: int
    cells: tuple[tuple[CellState, ...], ...]
    scores: Mapping[PlayerSymbol, int]
    target_score: int
    game_state: GameState


class RoundEngine:
    """Applies moves, awards lines and grows the grid.

    A move runs to completion before returning: every line it completes is
    claimed and scored, each claim grows the grid by one round, and a move
    that fills the last playable cell without scoring grows it once as well.
    """

    def __init__(self, target_score: int = DEFAULT_TARGET_SCORE) -> None:
        if target_score < 1:
            msg = f"Target score must be at least 1, got {target_score}."
            raise ValueError(msg)
        self._target_score = target_score
        self._grid = Grid()
        self._claimed: list[Line] = []
        self._scores: dict[PlayerSymbol, int] = dict.fromkeys(PLAYERS, 0)
        self._game_state = GameState.GAME_ONGOING

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def round_count(self) -> int:
        return self._grid.round_count

    @property
    def target_score(self) -> int:
        return self._target_score

    @property
    def scores(self) -> dict[PlayerSymbol, int]:
        return dict(self._scores)

    @property
    def claimed_lines(self) -> tuple[Line, ...]:
        return tuple(self._claimed)

    @property
    def game_state(self) -> GameState:
        return self._game_state

    def apply_move(self, move: Move) -> MoveOutcome:
        self._validate(move)

        state = CellState.filled(move.player)
        self._grid.set(move.coord, state)
        logger.debug("Player %s took %s", move.player, move.coord)

        changed: dict[Coord, CellState] = {move.coord: state}
        awarded: list[Line] = []
        game_state = GameState.GAME_ONGOING
        round_state = RoundState.NOT_UPDATING

        for player in PLAYERS:
            while (line := find_winning_line(self._grid, self._grid.round_count, player, self._claimed)) is not None:
                self._claimed.append(line)
                awarded.append(line)
                self._scores[player] += 1
                logger.info("Player %s claimed %s, score %d", player, line, self._scores[player])
                changed.update(self._grow())
                game_state = GameState.UPDATING
                round_state = RoundState.UPDATING_ROUND

        if not awarded and self._grid.is_full():
            logger.info("Stalemate at round %d", self._grid.round_count)
            changed.update(self._grow())
            round_state = RoundState.UPDATING_ROUND

        if awarded:
            for player in PLAYERS:
                if self._scores[player] >= self._target_score:
                    round_state = RoundState.NOT_UPDATING
                    game_state = GameState.won(player)

        if game_state.is_over:
            self._game_state = game_state
            logger.info("Player %s won %d to %d", game_state.winner, self._scores["X"], self._scores["O"])

        return MoveOutcome(
            move=move,
            changed_cells=changed,
            rows=self._grid.rows,
            cols=self._grid.cols,
            round_count=self._grid.round_count,
            scores=self.scores,
            claimed_lines=tuple(awarded),
            game_state=game_state,
            round_state=round_state,
        )

    def snapshot(self) -> Snapshot:
        return Snapshot(
            rows=self._grid.rows,
            cols=self._grid.cols,
            round_count=self._grid.round_count,
            cells=tuple(tuple(row) for row in self._grid.board),
            scores=self.scores,
            target_score=self._target_score,
            game_state=self._game_state,
        )

    def _validate(self, move: Move) -> None:
        if self._game_state is not GameState.GAME_ONGOING:
            raise InvalidMoveError("Game over.")

        if move.player not in PLAYERS:
            msg = f"Unknown player {move.player!r}."
            raise InvalidMoveError(msg)

        cell = self._grid.get(move.coord)
        if cell.is_filled:
            logger.debug("Rejected %s: cell %s occupied", move.player, move.coord)
            raise InvalidMoveError("Cell occupied.")
        if cell is CellState.INVALID:
            logger.debug("Rejected %s: cell %s outside the playable region", move.player, move.coord)
            raise InvalidMoveError("Cell not playable.")

    def _grow(self) -> dict[Coord, CellState]:
        added = self._grid.grow()
        logger.info("Grid grown to round %d (%dx%d)", self._grid.round_count, self._grid.rows, self._grid.cols)
        return added


def new_game(target_score: int = DEFAULT_TARGET_SCORE) -> RoundEngine:
    return RoundEngine(target_score)
