from enum import StrEnum

from cascading_tic_tac_toe.board import PlayerSymbol


class RoundState(StrEnum):
    NOT_UPDATING = "not_updating"
    UPDATING_ROUND = "updating_round"


class GameState(StrEnum):
    GAME_ONGOING = "game_ongoing"
    UPDATING = "updating"
    X_WON = "x_won"
    O_WON = "o_won"

    @classmethod
    def won(cls, player: PlayerSymbol) -> "GameState":
        return cls.X_WON if player == "X" else cls.O_WON

    @property
    def winner(self) -> PlayerSymbol | None:
        match self:
            case GameState.X_WON:
                return "X"
            case GameState.O_WON:
                return "O"
            case _:
                return None

    @property
    def is_over(self) -> bool:
        return self.winner is not None
