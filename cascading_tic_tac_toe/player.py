from abc import ABC, abstractmethod
from queue import Empty, Full, Queue

from cascading_tic_tac_toe.board import Move, PlayerSymbol
from cascading_tic_tac_toe.exception import LogicError


class Player(ABC):
    """One side of the game, holding at most one move waiting to be played."""

    def __init__(self, symbol: PlayerSymbol) -> None:
        self._symbol = symbol
        self._pending: Queue[Move] = Queue(maxsize=1)

    @property
    def symbol(self) -> PlayerSymbol:
        return self._symbol

    @abstractmethod
    def start_turn(self) -> None:
        pass

    def queue_move(self, row: int, col: int) -> Move:
        """Mark the cell as this player's next move."""
        move = Move(self._symbol, row, col)
        try:
            self._pending.put_nowait(move)
        except Full as e:
            msg = f"Player {self._symbol} already has a move waiting."
            raise LogicError(msg) from e
        return move

    def take_pending_move(self) -> Move | None:
        try:
            return self._pending.get_nowait()
        except Empty:
            return None
