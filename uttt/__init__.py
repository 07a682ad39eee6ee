"""
Ultimate Tic-Tac-Toe rules engine.
new_game() and apply() are the whole public state machine; everything
else reads the immutable GameState they return.
"""

from uttt.game import (
    GameState,
    InnerBoardState,
    LocalResult,
    Mark,
    OuterBoardState,
    PlayEvent,
    Player,
    apply,
    enabled_boards,
    forced_board,
    is_terminal,
    legal_moves,
    new_game,
    play,
    winner,
    winning_boards,
)

__version__ = "1.0.0"
