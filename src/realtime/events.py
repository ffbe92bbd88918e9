"""
Jackpot Dice - Realtime Event Definitions

Event types and payloads for game state changes, plus classifiers that
turn table change records into events and a helper that pulls the
game-level fields out of a changed row.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.dice import DiceEngine


class GameEvent(Enum):
    """Events that can occur during a game."""

    SESSION_CREATED = auto()
    PAYMENT_RECEIVED = auto()
    DICE_ROLLED = auto()
    CATEGORY_SCORED = auto()
    GAME_OVER = auto()
    NEW_HIGH_SCORE = auto()
    LEADERBOARD_UPDATED = auto()
    JACKPOT_WITHDRAWN = auto()
    ROUND_ADVANCED = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for realtime event data."""

    event: GameEvent
    player_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


def classify_session_change(
    change_type: str, record: dict[str, Any], old_record: dict[str, Any]
) -> GameEvent | None:
    """Determine the game event from a game_sessions table change."""
    if change_type == "INSERT":
        return GameEvent.SESSION_CREATED
    if change_type != "UPDATE":
        return None

    credit, old_credit = record.get("credit", 0), old_record.get("credit", 0)
    can_roll, old_can_roll = record.get("can_roll", False), old_record.get("can_roll", False)

    if credit == 1 and old_credit == 0:
        return GameEvent.PAYMENT_RECEIVED
    if credit == 0 and old_credit == 1:
        return GameEvent.GAME_OVER
    if can_roll and not old_can_roll:
        return GameEvent.DICE_ROLLED
    if old_can_roll and not can_roll:
        return GameEvent.CATEGORY_SCORED

    return GameEvent.STATE_UPDATED


def classify_ledger_change(
    change_type: str, record: dict[str, Any], old_record: dict[str, Any]
) -> GameEvent | None:
    """Determine the game event from a global_ledger table change."""
    if change_type != "UPDATE":
        return None

    if record.get("round") != old_record.get("round"):
        return GameEvent.ROUND_ADVANCED
    if record.get("highest_score", 0) > old_record.get("highest_score", 0):
        return GameEvent.NEW_HIGH_SCORE

    return GameEvent.STATE_UPDATED


def classify_leaderboard_change(
    change_type: str, record: dict[str, Any], old_record: dict[str, Any]
) -> GameEvent | None:
    """Any write to the leaderboard table is a leaderboard update."""
    if change_type in ("INSERT", "UPDATE", "DELETE"):
        return GameEvent.LEADERBOARD_UPDATED
    return None


def describe_record(table: str, record: dict[str, Any]) -> dict[str, Any]:
    """Game-level fields of a changed row, in the shape GameHost emits them."""
    if table == "game_sessions":
        packed = record.get("packed_dice", 0)
        return {
            "dice": list(DiceEngine.unpack(packed)) if packed else [],
            "upper_score": record.get("upper_score", 0),
            "credit": record.get("credit", 0),
        }
    if table == "global_ledger":
        return {
            "round": record.get("round"),
            "highest_score": record.get("highest_score", 0),
            "current_winner": record.get("current_winner"),
            "jackpot_pool": record.get("jackpot_pool"),
        }
    if table == "leaderboard":
        return {"rank": record.get("rank"), "score": record.get("score")}
    return {}
