"""
Replay a recorded move list and optionally save the final snapshot.
Usage: python -m uttt.replay MOVES.json [--out SNAPSHOT.json] [--verbose]
MOVES.json is a list of [board, tile] pairs, or a replay record
{"moves": [...], ...}. Each move is played by whoever is to move.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from uttt.game import GameState, PlayEvent, apply, new_game, winning_boards
from uttt.snapshot import dumps


def load_moves(path: Path) -> list[tuple[int, int]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("moves")
    if not isinstance(data, list):
        raise ValueError("expected a list of [board, tile] pairs")
    moves = []
    for k, pair in enumerate(data):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ValueError(f"move {k}: expected [board, tile], got {pair!r}")
        moves.append((pair[0], pair[1]))
    return moves


def replay(moves: list[tuple[int, int]]) -> tuple[GameState, int, int]:
    """Return (final_state, accepted, rejected)."""
    state = new_game()
    accepted = rejected = 0
    for board_index, tile_index in moves:
        nxt = apply(state, PlayEvent(state.current_player, board_index, tile_index))
        if nxt is state:
            rejected += 1
            print(f"Rejected: {state.current_player.value} at ({board_index}, {tile_index})")
        else:
            accepted += 1
        state = nxt
    return state, accepted, rejected


def summary(state: GameState, accepted: int, rejected: int) -> list[str]:
    lines = [
        f"Result: {state.board.result.value or 'open'} | to move: {state.current_player.value}",
        f"Accepted: {accepted} | rejected: {rejected}",
    ]
    line = winning_boards(state)
    if line is not None:
        lines.append("Winning boards: " + ", ".join(str(i) for i in line))
    return lines


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Replay an Ultimate Tic-Tac-Toe move list")
    ap.add_argument("moves", type=Path, help="JSON file with [board, tile] pairs")
    ap.add_argument("--out", type=Path, default=None, help="Write the final snapshot JSON here")
    ap.add_argument("--verbose", action="store_true", help="Show engine debug logging")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        moves = load_moves(args.moves)
        state, accepted, rejected = replay(moves)
    except FileNotFoundError:
        print("Not found:", args.moves)
        return 1
    except OSError as e:
        print(f"Cannot read {args.moves}: {e}")
        return 1
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        print(f"Bad moves file {args.moves}: {e}")
        return 1

    for line in summary(state, accepted, rejected):
        print(line)

    if args.out is not None:
        try:
            args.out.parent.mkdir(parents=True, exist_ok=True)
            args.out.write_text(dumps(state), encoding="utf-8")
        except OSError as e:
            print(f"Cannot write {args.out}: {e}")
            return 1
        print("Saved:", args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
