"""
Jackpot Dice - Round Rotation

Optional extension that splits play into rounds of a fixed number of
games. When a round's last game ends, the round number advances, the high
score is cleared, and whatever is left in the jackpot pool is carried into
the next round as current_jackpot.

The closing round's winner stays current_winner, so they can still claim
the carried pool. The first positive score of the new round replaces them.

Rotation is disabled when rounds_until_jackpot is 0.
"""

from dataclasses import replace

from src.engine.base import Custody, GlobalLedger
from src.engine.validators import validate_timestamp


class RoundRotation:
    """
    Stateless round bookkeeping.

    All methods are class methods operating on immutable data.
    """

    @classmethod
    def is_enabled(cls, ledger: GlobalLedger) -> bool:
        return ledger.rounds_until_jackpot > 0

    @classmethod
    def record_game(cls, ledger: GlobalLedger) -> GlobalLedger:
        """Count one finished game against the current round."""
        return replace(ledger, games_played=ledger.games_played + 1)

    @classmethod
    def should_advance(cls, ledger: GlobalLedger) -> bool:
        return cls.is_enabled(ledger) and ledger.games_played >= ledger.rounds_until_jackpot

    @classmethod
    def advance_round(
        cls,
        ledger: GlobalLedger,
        custody: Custody,
        now: int,
    ) -> GlobalLedger:
        """
        Start the next round.

        Args:
            ledger: Ledger at the end of the current round
            custody: Jackpot pool; its balance rolls over
            now: Start time of the new round

        Returns:
            Ledger for the new round
        """
        return replace(
            ledger,
            round=ledger.round + 1,
            round_start_time=validate_timestamp(now),
            highest_score=0,
            current_jackpot=custody.jackpot_pool,
            games_played=0,
        )

    @classmethod
    def after_game(
        cls,
        ledger: GlobalLedger,
        custody: Custody,
        now: int,
    ) -> tuple[GlobalLedger, bool]:
        """
        Count a finished game and advance the round if it was the last.

        Returns:
            (ledger, advanced). With rotation disabled the ledger is
            returned unchanged.
        """
        if not cls.is_enabled(ledger):
            return ledger, False

        ledger = cls.record_game(ledger)
        if cls.should_advance(ledger):
            return cls.advance_round(ledger, custody, now), True
        return ledger, False
