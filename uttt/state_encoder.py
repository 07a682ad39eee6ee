"""
Encode a GameState to a fixed-size vector.
State: outer results (9), tiles (9x9), side to move, enabled boards (9).
Values: 0 empty, +1 / -1 from the side to move's view (+1 me, -1 opponent).
"""

import numpy as np

from uttt.game import GameState, LocalResult, Mark, Player, legal_moves

# State vector: outer 9 + tiles 81 + current_player 1 + enabled 9 = 100
STATE_DIM = 9 + 81 + 1 + 9
MOVE_DIM = 81  # move index = board_idx * 9 + tile_idx


def move_to_index(move: tuple[int, int]) -> int:
    """Convert (board_idx, tile_idx) to index 0..80."""
    i, j = move
    return i * 9 + j


def index_to_move(idx: int) -> tuple[int, int]:
    """Convert index 0..80 to (board_idx, tile_idx)."""
    return idx // 9, idx % 9


def encode_state(state: GameState) -> np.ndarray:
    """
    Encode state to vector of shape (STATE_DIM,).
    Drawn boards count as 0 in the outer section, like empty ones.
    """
    out = np.zeros(STATE_DIM, dtype=np.float32)
    me = 1.0 if state.current_player is Player.X else -1.0
    opp = -me

    for i, inner in enumerate(state.board.boards):
        # Outer board (9)
        if inner.result is LocalResult.X:
            out[i] = me
        elif inner.result is LocalResult.O:
            out[i] = opp

        # Tiles (81)
        for j, tile in enumerate(inner.tiles):
            idx = 9 + i * 9 + j
            if tile is Mark.X:
                out[idx] = me
            elif tile is Mark.O:
                out[idx] = opp

        # Enabled boards (9)
        out[91 + i] = 1.0 if inner.enabled else 0.0

    # Current player: +1 X, -1 O
    out[90] = me
    return out


def legal_mask(state: GameState) -> np.ndarray:
    """Return array of shape (81,): 1.0 where the move is legal."""
    mask = np.zeros(MOVE_DIM, dtype=np.float32)
    for move in legal_moves(state):
        mask[move_to_index(move)] = 1.0
    return mask
