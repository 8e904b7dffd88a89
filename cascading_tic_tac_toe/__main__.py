# ruff: noqa: T201

import argparse
import logging

from cascading_tic_tac_toe.board import Coord
from cascading_tic_tac_toe.exception import InvalidMoveError
from cascading_tic_tac_toe.game_engine import GameEngine
from cascading_tic_tac_toe.player_local import LocalPlayer
from cascading_tic_tac_toe.round_engine import DEFAULT_TARGET_SCORE, MoveOutcome


def main() -> None:
    parser, args = _parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        moves = [_parse_coord(token) for token in args.moves]
    except ValueError as e:
        parser.error(str(e))

    game_engine = GameEngine(args.target)
    game_engine.set_players(LocalPlayer("X"), LocalPlayer("O"))
    game_engine.add_round_updated_cb(_print_outcome)
    game_engine.add_on_error_cb(lambda e: print(f"Rejected: {e}", flush=True))
    game_engine.start()

    for row, col in moves:
        rows, cols = game_engine.round_engine.grid.size
        if not (0 <= row < rows and 0 <= col < cols):
            parser.error(f"Move ({row}, {col}) is off the {rows}x{cols} grid")
        if game_engine.is_game_over():
            try:
                game_engine.apply_move(row, col)
            except InvalidMoveError as e:
                print(f"Rejected ({row}, {col}): {e}", flush=True)
            continue
        game_engine.queue_move(row, col)
        game_engine.tick()

    snapshot = game_engine.round_engine.snapshot()
    scores = snapshot.scores
    print(
        f"Final: X {scores['X']} - O {scores['O']}, round {snapshot.round_count} "
        f"({snapshot.rows}x{snapshot.cols}), {snapshot.game_state}",
        flush=True,
    )


def _print_outcome(outcome: MoveOutcome) -> None:
    move = outcome.move
    print(
        f"{move.player} -> ({move.row}, {move.col}): X {outcome.scores['X']} - O {outcome.scores['O']}, "
        f"round {outcome.round_count}, {outcome.game_state}, {outcome.round_state}",
        flush=True,
    )


def _parse_coord(token: str) -> Coord:
    try:
        row, col = (int(part) for part in token.split(","))
    except ValueError as e:
        msg = f"Invalid move {token!r}, expected ROW,COL"
        raise ValueError(msg) from e
    return row, col


def _parse_args() -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(prog="cascading_tic_tac_toe")

    parser.add_argument("--target", type=int, default=DEFAULT_TARGET_SCORE)
    parser.add_argument("--moves", nargs="*", default=[], metavar="ROW,COL")
    parser.add_argument("--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR"), default="WARNING")

    args = parser.parse_args()
    if args.target < 1:
        parser.error("--target must be at least 1")
    return parser, args


if __name__ == "__main__":
    main()
