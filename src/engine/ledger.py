"""
Jackpot Dice - Global Ledger & Fund Custody

The ledger tracks the price of a game, the best score so far and the
address that set it. Custody holds the pooled jackpot: it grows with
every payment and is paid out in full to the current winner.
"""

from dataclasses import replace

from src.engine.base import Custody, GlobalLedger, Payout
from src.engine.errors import NoJackpot, NotWinner
from src.engine.validators import validate_address, validate_amount, validate_timestamp


class LedgerEngine:
    """
    Stateless ledger and custody operations.

    All methods are class methods operating on immutable data.
    """

    OPERATOR_SHARE_DIVISOR = 4

    @classmethod
    def initialize_ledger(
        cls,
        operator_address: bytes,
        price_to_play: int,
        rounds_until_jackpot: int = 0,
        now: int = 0,
    ) -> GlobalLedger:
        """
        Create the shared ledger for a new game.

        Args:
            operator_address: Address receiving the operator share
            price_to_play: Cost of one game
            rounds_until_jackpot: Games per round (0 disables rotation)
            now: Clock reading used as the first round's start time

        Returns:
            A round-1 ledger with no high score and no winner
        """
        return GlobalLedger(
            operator_address=validate_address(operator_address),
            price_to_play=validate_amount(price_to_play),
            rounds_until_jackpot=validate_amount(rounds_until_jackpot),
            round_start_time=validate_timestamp(now),
        )

    @classmethod
    def split_payment(cls, price: int) -> tuple[int, int]:
        """Split a price into (operator_share, jackpot_share)."""
        operator_share = price // cls.OPERATOR_SHARE_DIVISOR
        return operator_share, price - operator_share

    @classmethod
    def deposit(cls, custody: Custody, amount: int) -> Custody:
        """Add an amount to the jackpot pool."""
        return replace(custody, jackpot_pool=custody.jackpot_pool + validate_amount(amount))

    @classmethod
    def record_final_score(
        cls,
        ledger: GlobalLedger,
        player: bytes,
        final_score: int,
    ) -> tuple[GlobalLedger, bool]:
        """
        Record a finished game's score against the current best.

        Returns:
            (ledger, is_new_high_score). The ledger is unchanged unless
            the score strictly beats highest_score.
        """
        if final_score > ledger.highest_score:
            return replace(ledger, highest_score=final_score, current_winner=player), True
        return ledger, False

    @classmethod
    def withdraw_jackpot(
        cls,
        ledger: GlobalLedger,
        custody: Custody,
        caller: bytes,
    ) -> Payout:
        """
        Pay the whole jackpot pool to the current winner.

        Raises:
            NotWinner: If caller is not the ledger's current winner
            NoJackpot: If the pool is empty
        """
        if not ledger.has_winner or caller != ledger.current_winner:
            raise NotWinner()
        if custody.jackpot_pool <= 0:
            raise NoJackpot()

        return Payout(
            custody=replace(custody, jackpot_pool=0),
            winner=caller,
            amount=custody.jackpot_pool,
        )
