"""
Jackpot Dice - Game Store

Write-through persistence for GameHost. Bundles the three table managers
behind the handful of calls the host makes when it loads or commits.
Player balances are not stored here; they belong to whatever funds the
players.
"""

from __future__ import annotations

from supabase import Client

from src.database.client import get_supabase_client
from src.database.leaderboard import LeaderboardManager
from src.database.ledger import LedgerManager
from src.database.session import SessionManager
from src.engine.base import Custody, GlobalLedger, Leaderboard, PlayerSession


class GameStore:
    """Supabase-backed copy of the ledger, leaderboard and sessions."""

    def __init__(self, client: Client) -> None:
        self.ledgers = LedgerManager(client)
        self.sessions = SessionManager(client)
        self.leaderboards = LeaderboardManager(client)

    @classmethod
    def from_settings(cls) -> GameStore:
        """Store over the cached client built from SUPABASE_URL/SUPABASE_ANON_KEY."""
        return cls(get_supabase_client())

    def load_ledger(self) -> tuple[GlobalLedger, Custody] | None:
        return self.ledgers.load()

    def save_ledger(self, ledger: GlobalLedger, custody: Custody) -> None:
        self.ledgers.save(ledger, custody)

    def load_leaderboard(self, capacity: int) -> Leaderboard:
        return self.leaderboards.load(capacity)

    def save_leaderboard(self, board: Leaderboard) -> None:
        self.leaderboards.save(board)

    def load_session(self, owner: bytes) -> PlayerSession | None:
        return self.sessions.get(owner)

    def create_session(self, session: PlayerSession) -> None:
        self.sessions.create(session)

    def save_session(self, session: PlayerSession) -> None:
        self.sessions.save(session)
