"""
Jackpot Dice - Ledger Manager

CRUD operations for the `global_ledger` table (a single row). The row also
carries the jackpot pool balance, so custody survives a restart.
"""

from supabase import Client

from src.database.models import LedgerRecord
from src.engine.base import Custody, GlobalLedger

LEDGER_ROW_ID = 1


class LedgerManager:
    """Manages the shared ledger row in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("global_ledger")

    def _fetch(self) -> LedgerRecord | None:
        data = (
            self.table
            .select("*")
            .eq("id", LEDGER_ROW_ID)
            .execute()
        )
        if data.data:
            return LedgerRecord.model_validate(data.data[0])
        return None

    def get(self) -> GlobalLedger | None:
        """Load the ledger, or None if the game was never initialized."""
        record = self._fetch()
        return record.to_engine() if record else None

    def load(self) -> tuple[GlobalLedger, Custody] | None:
        """Load the ledger together with the jackpot pool it records."""
        record = self._fetch()
        if record is None:
            return None
        return record.to_engine(), record.to_custody()

    def save(self, ledger: GlobalLedger, custody: Custody | None = None) -> GlobalLedger:
        """Insert or replace the ledger row, and the pool balance if given."""
        record = LedgerRecord.from_engine(ledger, custody)
        data = (
            self.table
            .upsert(record.db_row())
            .execute()
        )
        return LedgerRecord.model_validate(data.data[0]).to_engine()
