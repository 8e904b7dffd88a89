class GameError(Exception):
    pass


class LogicError(GameError):
    pass


class InvalidMoveError(GameError):
    pass


class OutOfBoundsError(LogicError, IndexError):
    pass


class SizeMismatchError(LogicError):
    pass
