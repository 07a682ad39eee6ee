"""
Ultimate Tic-Tac-Toe game core.
Rules: https://en.wikipedia.org/wiki/Ultimate_tic-tac-toe

State is immutable. new_game() builds the starting position and apply()
is the only transition: it returns a new GameState for an accepted move
and the very same object for a rejected one, so callers can detect a
no-op with `is`.

Indices: board_index picks one of the 9 inner boards, tile_index one of
its 9 tiles, both row * 3 + col. The tile just played names the inner
board the opponent is forced into next.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from uttt.lines import DD, LineOutcome, line_result, winning_line

logger = logging.getLogger(__name__)

# Move = (board_idx, tile_idx), each 0..8
Move = tuple[int, int]


class Mark(str, Enum):
    """Content of a single tile."""

    EMPTY = ""
    X = "X"
    O = "O"


class LocalResult(str, Enum):
    """Outcome of an inner board, or of the outer board one scale up."""

    OPEN = ""
    X = "X"
    O = "O"
    DRAW = "draw"


class Player(str, Enum):
    """X moves first."""

    X = "X"
    O = "O"

    def next(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    @property
    def mark(self) -> Mark:
        return Mark.X if self is Player.X else Mark.O

    @property
    def result(self) -> LocalResult:
        return LocalResult.X if self is Player.X else LocalResult.O


def _check_index(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < DD:
        raise ValueError(f"{name} must be an int in 0..{DD - 1}, got {value!r}")


@dataclass(frozen=True)
class InnerBoardState:
    """One local 3x3 grid. A closed board (result not OPEN) is never enabled."""

    result: LocalResult = LocalResult.OPEN
    tiles: tuple[Mark, ...] = (Mark.EMPTY,) * DD
    enabled: bool = True

    def __post_init__(self) -> None:
        tiles = tuple(Mark(t) for t in self.tiles)
        if len(tiles) != DD:
            raise ValueError(f"inner board needs {DD} tiles, got {len(tiles)}")
        result = LocalResult(self.result)
        object.__setattr__(self, "tiles", tiles)
        object.__setattr__(self, "result", result)
        object.__setattr__(self, "enabled", bool(self.enabled) and result is LocalResult.OPEN)


@dataclass(frozen=True)
class OuterBoardState:
    """The 3x3 grid of inner boards. Once decided, no inner board is enabled."""

    result: LocalResult = LocalResult.OPEN
    boards: tuple[InnerBoardState, ...] = tuple(InnerBoardState() for _ in range(DD))

    def __post_init__(self) -> None:
        boards = tuple(self.boards)
        if len(boards) != DD:
            raise ValueError(f"outer board needs {DD} inner boards, got {len(boards)}")
        if not all(isinstance(b, InnerBoardState) for b in boards):
            raise ValueError("outer board cells must be InnerBoardState values")
        result = LocalResult(self.result)
        if result is not LocalResult.OPEN:
            boards = tuple(replace(b, enabled=False) if b.enabled else b for b in boards)
        object.__setattr__(self, "boards", boards)
        object.__setattr__(self, "result", result)


@dataclass(frozen=True)
class PlayEvent:
    """A candidate move: `player` wants tile `tile_index` of board `board_index`."""

    player: Player
    board_index: int
    tile_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "player", Player(self.player))
        _check_index("board_index", self.board_index)
        _check_index("tile_index", self.tile_index)


@dataclass(frozen=True)
class GameState:
    """Root snapshot: whose turn it is plus the whole board."""

    current_player: Player = Player.X
    board: OuterBoardState = OuterBoardState()

    def __post_init__(self) -> None:
        object.__setattr__(self, "current_player", Player(self.current_player))
        if not isinstance(self.board, OuterBoardState):
            raise ValueError("board must be an OuterBoardState")


def new_game() -> GameState:
    return GameState(current_player=Player.X, board=OuterBoardState())


def _result_for(outcome: LineOutcome, player: Player) -> LocalResult:
    if outcome is LineOutcome.WIN:
        return player.result
    if outcome is LineOutcome.DRAW:
        return LocalResult.DRAW
    return LocalResult.OPEN


def apply_inner_move(board: InnerBoardState, player: Player, tile_index: int) -> InnerBoardState:
    """
    Place `player`'s mark and recompute the board result.
    Assumes the move is legal (checked by apply_outer_move). Enablement is
    carried over unchanged; the outer board decides it.
    """
    tiles = list(board.tiles)
    tiles[tile_index] = player.mark
    result = _result_for(line_result(tiles, player.mark, Mark.EMPTY), player)
    return InnerBoardState(result=result, tiles=tuple(tiles), enabled=board.enabled)


def _rejection(outer: OuterBoardState, event: PlayEvent) -> str | None:
    inner = outer.boards[event.board_index]
    if outer.result is not LocalResult.OPEN:
        return "game already decided"
    if not inner.enabled:
        return "board not enabled"
    if inner.result is not LocalResult.OPEN:
        return "board closed"
    if inner.tiles[event.tile_index] is not Mark.EMPTY:
        return "tile occupied"
    return None


def apply_outer_move(outer: OuterBoardState, event: PlayEvent) -> OuterBoardState:
    """Return the board after `event`, or `outer` itself if the move is illegal."""
    reason = _rejection(outer, event)
    if reason is not None:
        logger.debug("rejected %s at (%d, %d): %s", event.player.value, event.board_index, event.tile_index, reason)
        return outer

    boards = list(outer.boards)
    boards[event.board_index] = apply_inner_move(boards[event.board_index], event.player, event.tile_index)

    # boards[tile_index] is the updated board when play is sent back into it
    target = boards[event.tile_index]
    forced = event.tile_index if target.result is LocalResult.OPEN else None

    outcome = line_result([b.result for b in boards], event.player.result, LocalResult.OPEN)
    result = _result_for(outcome, event.player)
    decided = result is not LocalResult.OPEN

    next_boards = tuple(
        replace(
            b,
            enabled=not decided
            and b.result is LocalResult.OPEN
            and (forced is None or i == forced),
        )
        for i, b in enumerate(boards)
    )
    if decided:
        logger.debug("game decided: %s", result.value)
    return OuterBoardState(result=result, boards=next_boards)


def apply(state: GameState, event: PlayEvent) -> GameState:
    """
    Play `event` on `state`. Never raises for rule violations: an
    out-of-turn or illegal move returns `state` unchanged (same object).
    The turn passes only while the game stays open.
    """
    if event.player is not state.current_player:
        logger.debug("rejected %s: not their turn", event.player.value)
        return state
    board = apply_outer_move(state.board, event)
    if board is state.board:
        return state
    next_player = state.current_player.next() if board.result is LocalResult.OPEN else state.current_player
    return GameState(current_player=next_player, board=board)


def play(state: GameState, moves: Iterable[Move]) -> GameState:
    """Apply each (board_idx, tile_idx) for whoever is to move. Illegal ones are skipped."""
    for board_index, tile_index in moves:
        state = apply(state, PlayEvent(state.current_player, board_index, tile_index))
    return state


def enabled_boards(state: GameState) -> list[int]:
    return [i for i, b in enumerate(state.board.boards) if b.enabled]


def forced_board(state: GameState) -> int | None:
    """The single board the next move must go to, or None for free choice / game over."""
    enabled = enabled_boards(state)
    if len(enabled) != 1:
        return None
    # A lone open board left in free play is indistinguishable from a forced one
    return enabled[0]


def legal_moves(state: GameState) -> list[Move]:
    """Return list of (board_idx, tile_idx) the current player may play."""
    if state.board.result is not LocalResult.OPEN:
        return []
    moves: list[Move] = []
    for i, inner in enumerate(state.board.boards):
        if not inner.enabled:
            continue
        for j, tile in enumerate(inner.tiles):
            if tile is Mark.EMPTY:
                moves.append((i, j))
    return moves


def is_terminal(state: GameState) -> bool:
    return state.board.result is not LocalResult.OPEN


def winner(state: GameState) -> Player | None:
    result = state.board.result
    if result is LocalResult.X:
        return Player.X
    if result is LocalResult.O:
        return Player.O
    return None


def winning_boards(state: GameState) -> tuple[int, int, int] | None:
    """The three inner boards forming the winner's line, or None without a winner."""
    player = winner(state)
    if player is None:
        return None
    return winning_line([b.result for b in state.board.boards], player.result)


if __name__ == "__main__":
    import random

    state = new_game()
    while not is_terminal(state):
        board_index, tile_index = random.choice(legal_moves(state))
        state = apply(state, PlayEvent(state.current_player, board_index, tile_index))
    print("Result:", state.board.result.value)
    print("Legal moves count at start:", len(legal_moves(new_game())))
