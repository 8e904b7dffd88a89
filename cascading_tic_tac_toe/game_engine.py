import logging
from collections.abc import Callable

from cascading_tic_tac_toe.board import Move, PlayerSymbol
from cascading_tic_tac_toe.exception import InvalidMoveError, LogicError
from cascading_tic_tac_toe.player import Player
from cascading_tic_tac_toe.round_engine import DEFAULT_TARGET_SCORE, MoveOutcome, RoundEngine, new_game
from cascading_tic_tac_toe.states import GameState, RoundState

logger = logging.getLogger(__name__)


class GameEngine:
    def __init__(self, target_score: int = DEFAULT_TARGET_SCORE) -> None:
        self._round_engine = new_game(target_score)
        self._current_player_symbol: PlayerSymbol = "X"
        self._round_state = RoundState.NOT_UPDATING
        self._game_state = GameState.GAME_ONGOING
        self._players: dict[PlayerSymbol, Player] = {}
        self._board_updated_cbs: list[Callable[[], None]] = []
        self._round_updated_cbs: list[Callable[[MoveOutcome], None]] = []
        self._on_error_cbs: list[Callable[[Exception], None]] = []

    @property
    def round_engine(self) -> RoundEngine:
        return self._round_engine

    @property
    def current_player_symbol(self) -> PlayerSymbol:
        return self._current_player_symbol

    @property
    def current_player(self) -> Player:
        try:
            return self._players[self._current_player_symbol]
        except KeyError as e:
            raise LogicError("Players have not been set.") from e

    @property
    def round_state(self) -> RoundState:
        return self._round_state

    @property
    def game_state(self) -> GameState:
        return self._game_state

    def is_game_over(self) -> bool:
        return self._round_engine.game_state.is_over

    def set_players(self, player1: Player, player2: Player) -> None:
        if {player1.symbol, player2.symbol} != {"X", "O"}:
            raise LogicError("Players must be X and O.")
        self._players = {player1.symbol: player1, player2.symbol: player2}

    def add_board_updated_cb(self, callback: Callable[[], None]) -> None:
        self._board_updated_cbs.append(callback)

    def add_round_updated_cb(self, callback: Callable[[MoveOutcome], None]) -> None:
        self._round_updated_cbs.append(callback)

    def add_on_error_cb(self, callback: Callable[[Exception], None]) -> None:
        self._on_error_cbs.append(callback)

    def start(self) -> None:
        """Start the game. The caller must call tick() to advance it."""
        self._notify_board_updated()
        self.current_player.start_turn()

    def new_game(self) -> None:
        """Discard the current game and start over with the same target score."""
        logger.info("Starting a new game to %d", self._round_engine.target_score)
        self._round_engine = new_game(self._round_engine.target_score)
        self._current_player_symbol = "X"
        self._round_state = RoundState.NOT_UPDATING
        self._game_state = GameState.GAME_ONGOING
        if self._players:
            self.start()

    def tick(self) -> MoveOutcome | None:
        """Process one pending move of the current player, if there is one.

        Rejected moves are reported to the error callbacks and the same player
        keeps the turn.
        """
        if self.is_game_over():
            return None

        move = self.current_player.take_pending_move()
        if move is None:
            return None

        try:
            outcome = self._apply(move)
        except InvalidMoveError as e:
            self._notify_on_error(e)
            self.current_player.start_turn()
            return None

        if not self.is_game_over():
            self.current_player.start_turn()
        return outcome

    def queue_move(self, row: int, col: int) -> Move:
        """Submit a move for the current player, processed by the next tick()."""
        return self.current_player.queue_move(row, col)

    def apply_move(self, row: int, col: int) -> MoveOutcome:
        return self._apply(Move(self._current_player_symbol, row, col))

    def _apply(self, move: Move) -> MoveOutcome:
        outcome = self._round_engine.apply_move(move)

        self._round_state = outcome.round_state
        self._game_state = outcome.game_state
        self._current_player_symbol = "O" if self._current_player_symbol == "X" else "X"

        self._notify_board_updated()
        for callback in list(self._round_updated_cbs):
            callback(outcome)
        return outcome

    def _notify_board_updated(self) -> None:
        for callback in list(self._board_updated_cbs):
            callback()

    def _notify_on_error(self, exception: Exception) -> None:
        for callback in list(self._on_error_cbs):
            callback(exception)
