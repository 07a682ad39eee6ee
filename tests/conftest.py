"""Shared builders for hand-made positions."""

import pytest

from uttt.game import GameState, InnerBoardState, LocalResult, Mark, OuterBoardState, Player

_CHARS = {".": Mark.EMPTY, "X": Mark.X, "O": Mark.O}


@pytest.fixture
def make_inner():
    """make_inner("XO.......", result=LocalResult.OPEN, enabled=True)"""

    def build(tiles: str = ".........", result: LocalResult = LocalResult.OPEN, enabled: bool = True):
        return InnerBoardState(result=result, tiles=tuple(_CHARS[c] for c in tiles), enabled=enabled)

    return build


@pytest.fixture
def make_state():
    """make_state({0: inner, ...}, player=Player.X); unlisted boards are fresh and enabled."""

    def build(boards=None, player: Player = Player.X, result: LocalResult = LocalResult.OPEN):
        boards = boards or {}
        inner = tuple(boards.get(i, InnerBoardState()) for i in range(9))
        return GameState(current_player=player, board=OuterBoardState(result=result, boards=inner))

    return build
