"""
Jackpot Dice - Leaderboard Manager

CRUD operations for the `leaderboard` table, one row per rank.
"""

from supabase import Client

from src.database.models import (
    LeaderboardEntryRecord,
    leaderboard_from_records,
    leaderboard_to_records,
)
from src.engine.base import LEADERBOARD_CAPACITY, Leaderboard


class LeaderboardManager:
    """Manages the ranked leaderboard rows in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("leaderboard")

    def load(self, capacity: int = LEADERBOARD_CAPACITY) -> Leaderboard:
        """Load the leaderboard, best rank first."""
        data = (
            self.table
            .select("*")
            .order("rank")
            .limit(capacity)
            .execute()
        )
        records = [LeaderboardEntryRecord.model_validate(row) for row in data.data]
        return leaderboard_from_records(records, capacity)

    def save(self, board: Leaderboard) -> Leaderboard:
        """Replace the stored ranks with the given leaderboard."""
        rows = [record.model_dump() for record in leaderboard_to_records(board)]
        if rows:
            self.table.upsert(rows).execute()
        # Drop ranks past the end of the board
        self.table.delete().gt("rank", len(rows)).execute()
        return board
