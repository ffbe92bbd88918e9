"""
Jackpot Dice - Session Manager

CRUD operations for the `game_sessions` table.
"""

from supabase import Client

from src.database.models import SessionRecord
from src.engine.base import PlayerSession


class SessionManager:
    """Manages per-player sessions in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("game_sessions")

    def create(self, session: PlayerSession) -> PlayerSession:
        """Insert a new session row."""
        data = (
            self.table
            .insert(SessionRecord.from_engine(session).db_row())
            .execute()
        )
        return SessionRecord.model_validate(data.data[0]).to_engine()

    def get(self, owner: bytes) -> PlayerSession | None:
        """Get the session owned by a player."""
        data = (
            self.table
            .select("*")
            .eq("owner", owner.hex())
            .execute()
        )
        if data.data:
            return SessionRecord.model_validate(data.data[0]).to_engine()
        return None

    def save(self, session: PlayerSession) -> PlayerSession:
        """Write every field of an existing session."""
        record = SessionRecord.from_engine(session)
        data = (
            self.table
            .update(record.db_row())
            .eq("owner", record.owner)
            .execute()
        )
        return SessionRecord.model_validate(data.data[0]).to_engine()

    def delete(self, owner: bytes) -> None:
        """Delete a player's session."""
        self.table.delete().eq("owner", owner.hex()).execute()
