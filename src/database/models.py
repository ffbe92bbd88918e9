"""
Jackpot Dice - Database Models

Pydantic models that mirror the Supabase table schemas. Addresses are
stored as lowercase hex strings.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.engine.base import (
    Custody,
    GlobalLedger,
    Leaderboard,
    LeaderboardEntry,
    PlayerSession,
)


class LedgerRecord(BaseModel):
    """Mirrors the `global_ledger` table."""

    id: int = 1
    operator_address: str = Field(min_length=64, max_length=64)
    price_to_play: int = Field(ge=0)
    round: int = 1
    rounds_until_jackpot: int = 0
    round_start_time: int = 0
    highest_score: int = 0
    current_winner: str = "00" * 32
    current_jackpot: int = 0
    games_played: int = 0
    jackpot_pool: int | None = Field(default=None, ge=0)
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    def to_engine(self) -> GlobalLedger:
        return GlobalLedger(
            operator_address=bytes.fromhex(self.operator_address),
            price_to_play=self.price_to_play,
            round=self.round,
            rounds_until_jackpot=self.rounds_until_jackpot,
            round_start_time=self.round_start_time,
            highest_score=self.highest_score,
            current_winner=bytes.fromhex(self.current_winner),
            current_jackpot=self.current_jackpot,
            games_played=self.games_played,
        )

    def to_custody(self) -> Custody:
        return Custody(jackpot_pool=self.jackpot_pool or 0)

    @classmethod
    def from_engine(
        cls,
        ledger: GlobalLedger,
        custody: Custody | None = None,
    ) -> "LedgerRecord":
        return cls(
            operator_address=ledger.operator_address.hex(),
            price_to_play=ledger.price_to_play,
            round=ledger.round,
            rounds_until_jackpot=ledger.rounds_until_jackpot,
            round_start_time=ledger.round_start_time,
            highest_score=ledger.highest_score,
            current_winner=ledger.current_winner.hex(),
            current_jackpot=ledger.current_jackpot,
            games_played=ledger.games_played,
            jackpot_pool=custody.jackpot_pool if custody is not None else None,
        )

    def db_row(self) -> dict:
        """Column values to write. A missing jackpot_pool leaves the column alone."""
        return self.model_dump(exclude={"updated_at"}, exclude_none=True)


class SessionRecord(BaseModel):
    """Mirrors the `game_sessions` table."""

    owner: str = Field(min_length=64, max_length=64)
    credit: int = Field(default=0, ge=0, le=1)
    can_roll: bool = False
    upper_score: int = 0
    lower_score: int = 0
    packed_dice: int = Field(default=0, ge=0, lt=2 ** 16)
    last_roll_time: int = 0
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    def to_engine(self) -> PlayerSession:
        return PlayerSession(
            owner=bytes.fromhex(self.owner),
            credit=self.credit,
            can_roll=self.can_roll,
            upper_score=self.upper_score,
            lower_score=self.lower_score,
            packed_dice=self.packed_dice,
            last_roll_time=self.last_roll_time,
        )

    @classmethod
    def from_engine(cls, session: PlayerSession) -> "SessionRecord":
        return cls(
            owner=session.owner.hex(),
            credit=session.credit,
            can_roll=session.can_roll,
            upper_score=session.upper_score,
            lower_score=session.lower_score,
            packed_dice=session.packed_dice,
            last_roll_time=session.last_roll_time,
        )

    def db_row(self) -> dict:
        """Column values to write, without server-managed fields."""
        return self.model_dump(exclude={"updated_at"})


class LeaderboardEntryRecord(BaseModel):
    """Mirrors the `leaderboard` table. One row per rank."""

    rank: int = Field(ge=1)
    player: str = Field(min_length=64, max_length=64)
    score: int = Field(ge=0)

    model_config = {"from_attributes": True}


def leaderboard_to_records(board: Leaderboard) -> list[LeaderboardEntryRecord]:
    """Flatten a leaderboard into ranked rows."""
    return [
        LeaderboardEntryRecord(rank=i + 1, player=entry.player.hex(), score=entry.score)
        for i, entry in enumerate(board.entries)
    ]


def leaderboard_from_records(
    records: list[LeaderboardEntryRecord],
    capacity: int,
) -> Leaderboard:
    """Rebuild a leaderboard from ranked rows."""
    ordered = sorted(records, key=lambda record: record.rank)
    return Leaderboard(
        entries=tuple(
            LeaderboardEntry(player=bytes.fromhex(record.player), score=record.score)
            for record in ordered[:capacity]
        ),
        capacity=capacity,
    )
