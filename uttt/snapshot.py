"""
Snapshot: GameState <-> JSON-safe plain data.

Invariants:
    - to_dict produces only dicts, lists, str and bool (no Enums)
    - from_dict(to_dict(s)) == s for every state reachable through apply()
    - Malformed input raises SnapshotError naming the offending field
"""

import json
from typing import Any

from uttt.game import GameState, InnerBoardState, OuterBoardState


class SnapshotError(ValueError):
    """Raised when plain data does not describe a valid GameState."""


def _inner_to_dict(inner: InnerBoardState) -> dict:
    return {
        "result": inner.result.value,
        "tiles": [t.value for t in inner.tiles],
        "enabled": inner.enabled,
    }


def to_dict(state: GameState) -> dict:
    return {
        "current_player": state.current_player.value,
        "result": state.board.result.value,
        "boards": [_inner_to_dict(b) for b in state.board.boards],
    }


def _require(data: Any, key: str, kind: type, where: str) -> Any:
    if not isinstance(data, dict):
        raise SnapshotError(f"{where}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise SnapshotError(f"{where}: missing '{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise SnapshotError(f"{where}.{key}: expected {kind.__name__}, got {type(value).__name__}")
    return value


def _inner_from_dict(data: Any, where: str) -> InnerBoardState:
    result = _require(data, "result", str, where)
    tiles = _require(data, "tiles", list, where)
    enabled = _require(data, "enabled", bool, where)
    try:
        return InnerBoardState(result=result, tiles=tuple(tiles), enabled=enabled)
    except ValueError as e:
        raise SnapshotError(f"{where}: {e}") from e


def from_dict(data: Any) -> GameState:
    player = _require(data, "current_player", str, "state")
    result = _require(data, "result", str, "state")
    boards = _require(data, "boards", list, "state")
    inner = tuple(_inner_from_dict(b, f"state.boards[{i}]") for i, b in enumerate(boards))
    try:
        return GameState(current_player=player, board=OuterBoardState(result=result, boards=inner))
    except ValueError as e:
        raise SnapshotError(f"state: {e}") from e


def dumps(state: GameState) -> str:
    return json.dumps(to_dict(state), indent=2)


def loads(text: str) -> GameState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"invalid JSON: {e}") from e
    return from_dict(data)
