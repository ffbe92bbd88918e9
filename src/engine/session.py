"""
Jackpot Dice - Player Session State Machine

A session moves IDLE -> PAID on payment, PAID -> ROLLED on a roll,
ROLLED -> PAID when a category is scored, and back to IDLE at game over.
One payment buys any number of roll/score cycles; scores accumulate in
upper_score until the game ends.

All methods are stateless class methods: they validate preconditions,
then return replacement records. Nothing is replaced when a precondition
fails, so a rejected operation leaves every record as it was.
"""

from dataclasses import replace

from src.engine.base import (
    ROLL_COOLDOWN_SECONDS,
    Custody,
    GameOverResult,
    GlobalLedger,
    Leaderboard,
    PaymentReceipt,
    PlayerSession,
)
from src.engine.dice import DiceEngine
from src.engine.errors import (
    AlreadyInGame,
    AlreadyRolled,
    CooldownActive,
    InsufficientFunds,
    NotPaid,
    NotRolled,
)
from src.engine.leaderboard import LeaderboardEngine
from src.engine.ledger import LedgerEngine
from src.engine.scoring import ScoringEngine
from src.engine.validators import validate_address, validate_amount, validate_timestamp


class SessionEngine:
    """
    Stateless engine for the per-player session lifecycle.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    @classmethod
    def create_session(cls, owner: bytes) -> PlayerSession:
        """Create a zeroed session for a player."""
        return PlayerSession(owner=validate_address(owner))

    @classmethod
    def pay(
        cls,
        session: PlayerSession,
        ledger: GlobalLedger,
        custody: Custody,
        payer_balance: int,
    ) -> PaymentReceipt:
        """
        Pay for a game.

        A quarter of the price (rounded down) goes to the operator and
        the rest to the jackpot pool.

        Args:
            session: The payer's session
            ledger: Shared ledger (read for price_to_play)
            custody: Jackpot pool before the payment
            payer_balance: The payer's spendable balance

        Returns:
            PaymentReceipt with the paid session, the grown pool and
            both shares

        Raises:
            AlreadyInGame: If the session already holds a credit
            InsufficientFunds: If payer_balance < price_to_play
        """
        if session.credit != 0:
            raise AlreadyInGame()
        if validate_amount(payer_balance) < ledger.price_to_play:
            raise InsufficientFunds()

        operator_share, jackpot_share = LedgerEngine.split_payment(ledger.price_to_play)

        return PaymentReceipt(
            session=replace(session, credit=1),
            custody=LedgerEngine.deposit(custody, jackpot_share),
            operator_share=operator_share,
            jackpot_share=jackpot_share,
        )

    @classmethod
    def roll(
        cls,
        session: PlayerSession,
        now: int,
        cooldown: int = ROLL_COOLDOWN_SECONDS,
    ) -> PlayerSession:
        """
        Roll five dice for a paid session.

        The cooldown is measured from the previous roll, not the payment.

        Raises:
            NotPaid: If the session holds no credit
            AlreadyRolled: If the current roll has not been scored
            CooldownActive: If now <= last_roll_time + cooldown
        """
        now = validate_timestamp(now)

        if session.credit != 1:
            raise NotPaid()
        if session.can_roll:
            raise AlreadyRolled()
        if now <= session.last_roll_time + cooldown:
            raise CooldownActive()

        return replace(
            session,
            packed_dice=DiceEngine.roll_packed(session.owner, now),
            can_roll=True,
            last_roll_time=now,
        )

    @classmethod
    def score(cls, session: PlayerSession, category: int) -> PlayerSession:
        """
        Score the current roll in a category and add it to upper_score.

        Raises:
            NotRolled: If there is no unscored roll
            InvalidCategory: If category is outside 1-6
        """
        if not session.can_roll:
            raise NotRolled()

        points = ScoringEngine.score(DiceEngine.unpack(session.packed_dice), category)

        return replace(
            session,
            upper_score=session.upper_score + points,
            can_roll=False,
        )

    @classmethod
    def end_game(
        cls,
        session: PlayerSession,
        ledger: GlobalLedger,
        leaderboard: Leaderboard,
        require_credit: bool = False,
        unique_players: bool = False,
    ) -> GameOverResult:
        """
        Finish the game: record the final score and reset the session.

        The final score always goes to the leaderboard; the ledger only
        changes when it beats highest_score.

        Args:
            session: The player's session
            ledger: Shared ledger
            leaderboard: Shared leaderboard
            require_credit: Reject sessions that never paid
            unique_players: Keep one leaderboard entry per player

        Raises:
            NotPaid: If require_credit is set and the session has no credit
        """
        if require_credit and session.credit != 1:
            raise NotPaid()

        final_score = session.final_score
        new_ledger, is_new_high = LedgerEngine.record_final_score(
            ledger, session.owner, final_score
        )
        new_board = LeaderboardEngine.submit(
            leaderboard, session.owner, final_score, unique_players=unique_players
        )

        return GameOverResult(
            session=cls.reset(session),
            ledger=new_ledger,
            leaderboard=new_board,
            final_score=final_score,
            is_new_high_score=is_new_high,
        )

    @classmethod
    def reset(cls, session: PlayerSession) -> PlayerSession:
        """Return the session to IDLE. last_roll_time is kept for the cooldown."""
        return replace(
            session,
            credit=0,
            can_roll=False,
            upper_score=0,
            lower_score=0,
            packed_dice=0,
        )
