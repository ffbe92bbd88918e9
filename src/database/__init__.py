"""
Jackpot Dice Database Layer.

Supabase integration for the ledger, player sessions, and leaderboard.
"""

from src.database.client import get_supabase_client
from src.database.ledger import LedgerManager
from src.database.leaderboard import LeaderboardManager
from src.database.models import LeaderboardEntryRecord, LedgerRecord, SessionRecord
from src.database.session import SessionManager
from src.database.store import GameStore

__all__ = [
    "GameStore",
    "get_supabase_client",
    "LeaderboardEntryRecord",
    "LeaderboardManager",
    "LedgerManager",
    "LedgerRecord",
    "SessionManager",
    "SessionRecord",
]
