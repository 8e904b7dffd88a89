import pytest

from cascading_tic_tac_toe.board import CellState, Coord, Move, PlayerSymbol
from cascading_tic_tac_toe.exception import InvalidMoveError, OutOfBoundsError
from cascading_tic_tac_toe.round_engine import DEFAULT_TARGET_SCORE, MoveOutcome, RoundEngine, new_game
from cascading_tic_tac_toe.states import GameState, RoundState


def play(engine: RoundEngine, player: PlayerSymbol, *coords: Coord) -> MoveOutcome:
    outcome = None
    for row, col in coords:
        outcome = engine.apply_move(Move(player, row, col))
    assert outcome is not None
    return outcome


# Classic drawn position:
#   X O X
#   X O O
#   O X X
DRAW_MOVES: list[tuple[PlayerSymbol, Coord]] = [
    ("X", (0, 0)),
    ("O", (0, 1)),
    ("X", (0, 2)),
    ("O", (1, 1)),
    ("X", (1, 0)),
    ("O", (1, 2)),
    ("X", (2, 1)),
    ("O", (2, 0)),
    ("X", (2, 2)),
]


# ============================================================================
# NEW GAME
# ============================================================================


class TestNewGame:
    """Test the initial engine state."""

    def test_initial_snapshot(self) -> None:
        engine = new_game(5)
        snapshot = engine.snapshot()

        assert (snapshot.rows, snapshot.cols) == (3, 3)
        assert snapshot.round_count == 0
        assert snapshot.scores == {"X": 0, "O": 0}
        assert snapshot.target_score == 5
        assert snapshot.game_state is GameState.GAME_ONGOING
        assert all(cell is CellState.VALID for row in snapshot.cells for cell in row)
        assert engine.claimed_lines == ()

    def test_default_target(self) -> None:
        assert new_game().target_score == DEFAULT_TARGET_SCORE

    @pytest.mark.parametrize("target", [0, -1])
    def test_target_must_be_positive(self, target: int) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            new_game(target)


# ============================================================================
# HAPPY PATH
# ============================================================================


class TestScoring:
    """Test scoring and growth after a completed line."""

    def test_move_without_line(self) -> None:
        engine = new_game(3)
        outcome = engine.apply_move(Move("X", 1, 1))

        assert outcome.changed_cells == {(1, 1): CellState.X}
        assert outcome.round_count == 0
        assert outcome.scores == {"X": 0, "O": 0}
        assert outcome.claimed_lines == ()
        assert outcome.game_state is GameState.GAME_ONGOING
        assert outcome.round_state is RoundState.NOT_UPDATING

    def test_horizontal_win_grows_grid(self) -> None:
        engine = new_game(3)
        outcome = play(engine, "X", (0, 0), (0, 1), (0, 2))

        assert outcome.claimed_lines == (((0, 0), (0, 1), (0, 2)),)
        assert outcome.scores == {"X": 1, "O": 0}
        assert outcome.round_count == 1
        assert (outcome.rows, outcome.cols) == (5, 4)
        assert outcome.game_state is GameState.UPDATING
        assert outcome.round_state is RoundState.UPDATING_ROUND
        assert engine.claimed_lines == (((0, 0), (0, 1), (0, 2)),)

    def test_growth_keeps_marks_and_reports_new_cells(self) -> None:
        engine = new_game(3)
        outcome = play(engine, "X", (0, 0), (0, 1), (0, 2))
        grid = engine.grid

        assert [grid.get((0, col)) for col in range(3)] == [CellState.X] * 3
        assert grid.get((0, 3)) is CellState.INVALID
        assert grid.get((4, 0)) is CellState.INVALID
        assert grid.get((3, 1)) is CellState.VALID

        assert len(outcome.changed_cells) == 1 + 11
        assert outcome.changed_cells[(0, 2)] is CellState.X
        assert outcome.changed_cells[(1, 3)] is CellState.INVALID
        assert outcome.changed_cells[(4, 3)] is CellState.VALID

    def test_game_continues_after_round_win(self) -> None:
        engine = new_game(3)
        play(engine, "X", (0, 0), (0, 1), (0, 2))

        assert engine.game_state is GameState.GAME_ONGOING
        outcome = engine.apply_move(Move("O", 3, 3))
        assert outcome.game_state is GameState.GAME_ONGOING
        assert outcome.round_state is RoundState.NOT_UPDATING

    def test_two_lines_in_one_move(self) -> None:
        engine = new_game(3)
        play(engine, "X", (0, 1), (0, 2), (1, 0), (2, 0))
        outcome = engine.apply_move(Move("X", 0, 0))

        assert outcome.claimed_lines == (((0, 0), (0, 1), (0, 2)), ((0, 0), (1, 0), (2, 0)))
        assert outcome.scores == {"X": 2, "O": 0}
        assert outcome.round_count == 2
        assert (outcome.rows, outcome.cols) == (7, 5)
        assert outcome.game_state is GameState.UPDATING

    def test_four_in_a_row_scores_once(self) -> None:
        engine = new_game(5)
        play(engine, "X", (0, 0), (0, 1), (0, 2))
        play(engine, "O", (2, 0), (2, 1), (2, 2))
        assert engine.scores == {"X": 1, "O": 1}

        outcome = engine.apply_move(Move("O", 2, 3))

        assert outcome.scores == {"X": 1, "O": 1}
        assert outcome.claimed_lines == ()
        assert outcome.round_count == 2

    def test_reach_back_line_scores(self) -> None:
        engine = new_game(5)
        play(engine, "X", (0, 0), (0, 1), (0, 2))
        outcome = play(engine, "O", (1, 0), (2, 1), (3, 2))

        assert outcome.claimed_lines == (((1, 0), (2, 1), (3, 2)),)
        assert outcome.scores == {"X": 1, "O": 1}


# ============================================================================
# STALEMATE
# ============================================================================


class TestStalemate:
    """Test growth when the playable cells run out without a line."""

    def test_draw_grows_grid_without_points(self) -> None:
        engine = new_game(3)
        outcome = None
        for player, (row, col) in DRAW_MOVES:
            outcome = engine.apply_move(Move(player, row, col))
        assert outcome is not None

        assert outcome.round_count == 1
        assert outcome.round_state is RoundState.UPDATING_ROUND
        assert outcome.game_state is GameState.GAME_ONGOING
        assert outcome.scores == {"X": 0, "O": 0}
        assert outcome.claimed_lines == ()
        assert len(engine.grid.get_available_positions()) == 7

    def test_no_growth_before_last_cell(self) -> None:
        engine = new_game(3)
        outcome = None
        for player, (row, col) in DRAW_MOVES[:-1]:
            outcome = engine.apply_move(Move(player, row, col))
        assert outcome is not None
        assert outcome.round_count == 0
        assert outcome.round_state is RoundState.NOT_UPDATING


# ============================================================================
# GAME OVER
# ============================================================================


class TestGameOver:
    """Test the target score ending the game."""

    def test_reaching_target_wins(self) -> None:
        engine = new_game(1)
        outcome = play(engine, "X", (0, 0), (0, 1), (0, 2))

        assert outcome.game_state is GameState.X_WON
        assert outcome.game_state.winner == "X"
        assert outcome.round_state is RoundState.NOT_UPDATING
        assert engine.game_state is GameState.X_WON
        assert engine.snapshot().game_state is GameState.X_WON

    def test_o_can_win(self) -> None:
        engine = new_game(1)
        outcome = play(engine, "O", (0, 2), (1, 1), (2, 0))
        assert outcome.game_state is GameState.O_WON

    def test_cascade_reaching_target_wins(self) -> None:
        engine = new_game(2)
        play(engine, "X", (0, 1), (0, 2), (1, 0), (2, 0))
        outcome = engine.apply_move(Move("X", 0, 0))
        assert outcome.game_state is GameState.X_WON

    @pytest.mark.parametrize(("player", "coord"), [("O", (1, 0)), ("X", (2, 2)), ("O", (0, 0))])
    def test_moves_rejected_after_win(self, player: PlayerSymbol, coord: Coord) -> None:
        engine = new_game(1)
        play(engine, "X", (0, 0), (0, 1), (0, 2))
        before = engine.snapshot()

        with pytest.raises(InvalidMoveError, match="Game over"):
            engine.apply_move(Move(player, *coord))
        assert engine.snapshot() == before


# ============================================================================
# ERROR HANDLING
# ============================================================================


class TestInvalidMoves:
    """Test that rejected moves leave the engine untouched."""

    def test_occupied_cell(self) -> None:
        engine = new_game(3)
        engine.apply_move(Move("X", 0, 0))
        before = engine.snapshot()

        with pytest.raises(InvalidMoveError, match="Cell occupied"):
            engine.apply_move(Move("O", 0, 0))
        assert engine.snapshot() == before

    def test_invalid_cell(self) -> None:
        engine = new_game(3)
        play(engine, "X", (0, 0), (0, 1), (0, 2))
        before = engine.snapshot()

        with pytest.raises(InvalidMoveError, match="not playable"):
            engine.apply_move(Move("O", 0, 3))
        assert engine.snapshot() == before

    def test_unknown_player(self) -> None:
        engine = new_game(3)
        with pytest.raises(InvalidMoveError, match="Unknown player"):
            engine.apply_move(Move("Z", 0, 0))  # type: ignore[arg-type]

    @pytest.mark.parametrize("coord", [(5, 5), (3, 0), (-1, 1)])
    def test_out_of_bounds(self, coord: Coord) -> None:
        engine = new_game(3)
        with pytest.raises(OutOfBoundsError, match="out of bounds"):
            engine.apply_move(Move("X", *coord))
        assert engine.snapshot() == new_game(3).snapshot()
