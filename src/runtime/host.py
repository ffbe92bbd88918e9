"""
Jackpot Dice - In-Memory Game Host

Supplies what the stateless engine expects from its hosting runtime:
caller identity, keyed records (ledger, leaderboard, sessions), balances
with an all-or-nothing transfer, a clock, and event fan-out.

Each public operation reads the records it needs, asks the engine for
replacements and commits them together while holding the commit lock.
If the engine rejects the operation nothing is committed. Event callbacks
run after the commit, outside the lock.

With a store attached the host loads the ledger, pool and leaderboard from
it on start, fetches sessions on first use, and writes every changed
record through before committing it in memory. A failed write leaves the
in-memory records untouched and propagates. A ChannelManager can be
watched so changes committed elsewhere reach the same event callback.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from src.config.settings import Settings, get_settings
from src.engine.base import (
    Custody,
    DiceRoll,
    GameOverResult,
    GlobalLedger,
    Leaderboard,
    PlayerSession,
)
from src.engine.dice import DiceEngine
from src.engine.errors import DiceGameError, UnknownSession
from src.engine.leaderboard import LeaderboardEngine
from src.engine.ledger import LedgerEngine
from src.engine.rounds import RoundRotation
from src.engine.session import SessionEngine
from src.engine.validators import validate_address, validate_amount
from src.realtime.events import EventPayload, GameEvent

if TYPE_CHECKING:
    from src.database.store import GameStore
    from src.realtime.subscriptions import ChannelManager

logger = logging.getLogger(__name__)


def _default_clock() -> int:
    return int(time.time())


class GameHost:
    """Owns the game records and applies engine operations atomically."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        ledger: GlobalLedger | None = None,
        clock: Callable[[], int] | None = None,
        on_event: Callable[[EventPayload], None] | None = None,
        store: GameStore | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._clock = clock or _default_clock
        self._on_event = on_event
        self._store = store
        self._lock = threading.Lock()

        capacity = self._settings.leaderboard_capacity
        self._custody = Custody()
        self._leaderboard = Leaderboard(capacity=capacity)

        stored = store.load_ledger() if store is not None and ledger is None else None
        if stored is not None:
            ledger, self._custody = stored
        self._ledger = ledger or LedgerEngine.initialize_ledger(
            self._settings.operator_address_bytes,
            self._settings.price_to_play,
            self._settings.rounds_until_jackpot,
            now=self._clock(),
        )
        if store is not None:
            if stored is None:
                store.save_ledger(self._ledger, self._custody)
            self._leaderboard = store.load_leaderboard(capacity)
            logger.info("Loaded round %d from store", self._ledger.round)
        self._sessions: dict[bytes, PlayerSession] = {}
        self._balances: dict[bytes, int] = {}

    # -- Read access ------------------------------------------------------

    @property
    def ledger(self) -> GlobalLedger:
        return self._ledger

    @property
    def leaderboard(self) -> Leaderboard:
        return self._leaderboard

    @property
    def custody(self) -> Custody:
        return self._custody

    def session_of(self, player: bytes) -> PlayerSession:
        session = self._find_session(player)
        if session is None:
            raise UnknownSession()
        return session

    def balance_of(self, address: bytes) -> int:
        return self._balances.get(address, 0)

    def dice_of(self, player: bytes) -> tuple[int, ...]:
        """Unpacked dice currently held by the player's session."""
        return DiceEngine.unpack(self.session_of(player).packed_dice)

    # -- Balances -----------------------------------------------------------

    def fund(self, address: bytes, amount: int) -> int:
        """Credit an external deposit to an address. Returns the new balance."""
        address = validate_address(address)
        amount = validate_amount(amount)
        with self._lock:
            self._balances[address] = self._balances.get(address, 0) + amount
            return self._balances[address]

    # -- Game operations ------------------------------------------------------

    def create_session(self, player: bytes) -> PlayerSession:
        """Create the player's session. Each player gets exactly one."""
        player = validate_address(player)
        with self._lock:
            if self._find_session(player) is not None:
                raise ValueError(f"Session already exists for {player.hex()}.")
            session = SessionEngine.create_session(player)
            if self._store is not None:
                self._write("create_session", lambda: self._store.create_session(session))
            self._sessions[player] = session

        logger.info("Created session for %s", player.hex())
        self._emit(GameEvent.SESSION_CREATED, player)
        return session

    def pay(self, player: bytes) -> PlayerSession:
        """Pay price_to_play from the player's balance for one game."""
        with self._lock:
            session = self.session_of(player)
            ledger = self._ledger
            receipt = self._attempt(
                "pay", player,
                lambda: SessionEngine.pay(session, ledger, self._custody, self.balance_of(player)),
            )
            self._persist("pay", session=receipt.session, ledger=ledger, custody=receipt.custody)

            operator = ledger.operator_address
            self._balances[player] = self.balance_of(player) - ledger.price_to_play
            self._balances[operator] = self.balance_of(operator) + receipt.operator_share
            self._custody = receipt.custody
            self._sessions[player] = receipt.session

        logger.info(
            "Payment from %s: %d to operator, %d to jackpot",
            player.hex(), receipt.operator_share, receipt.jackpot_share,
        )
        self._emit(
            GameEvent.PAYMENT_RECEIVED, player,
            operator_share=receipt.operator_share,
            jackpot_share=receipt.jackpot_share,
            jackpot_pool=receipt.custody.jackpot_pool,
        )
        return receipt.session

    def roll(self, player: bytes) -> DiceRoll:
        """Roll the player's dice. Returns the faces rolled."""
        now = self._clock()
        with self._lock:
            session = self.session_of(player)
            session = self._attempt(
                "roll", player,
                lambda: SessionEngine.roll(session, now, self._settings.roll_cooldown_seconds),
            )
            self._persist("roll", session=session)
            self._sessions[player] = session

        dice = DiceRoll(values=DiceEngine.unpack(session.packed_dice))
        logger.debug("Roll for %s at %d: %s", player.hex(), now, dice.values)
        self._emit(GameEvent.DICE_ROLLED, player, dice=list(dice.values), rolled_at=now)
        return dice

    def score(self, player: bytes, category: int) -> int:
        """Score the current roll in a category. Returns the points awarded."""
        with self._lock:
            before = self.session_of(player)
            after = self._attempt("score", player, lambda: SessionEngine.score(before, category))
            self._persist("score", session=after)
            self._sessions[player] = after

        points = after.upper_score - before.upper_score
        logger.debug("Scored %d in category %d for %s", points, category, player.hex())
        self._emit(
            GameEvent.CATEGORY_SCORED, player,
            category=category, points=points, upper_score=after.upper_score,
        )
        return points

    def end_game(self, player: bytes) -> GameOverResult:
        """End the player's game, update ledger and leaderboard, reset the session."""
        now = self._clock()
        with self._lock:
            session = self.session_of(player)
            ledger, board = self._ledger, self._leaderboard
            result = self._attempt(
                "end_game", player,
                lambda: SessionEngine.end_game(
                    session, ledger, board,
                    require_credit=self._settings.strict_end_game,
                    unique_players=self._settings.unique_leaderboard,
                ),
            )
            new_ledger, advanced = RoundRotation.after_game(result.ledger, self._custody, now)
            self._persist(
                "end_game",
                session=result.session,
                ledger=new_ledger,
                leaderboard=result.leaderboard if result.leaderboard is not board else None,
            )

            self._sessions[player] = result.session
            self._ledger = new_ledger
            self._leaderboard = result.leaderboard

        logger.info("Game over for %s with final score %d", player.hex(), result.final_score)
        self._emit(GameEvent.GAME_OVER, player, final_score=result.final_score)

        if result.is_new_high_score:
            logger.info("New high score %d by %s", result.final_score, player.hex())
            self._emit(GameEvent.NEW_HIGH_SCORE, player, highest_score=result.final_score)

        if result.leaderboard is not board:
            self._emit(
                GameEvent.LEADERBOARD_UPDATED, player,
                rank=LeaderboardEngine.rank_of(result.leaderboard, player),
            )

        if advanced:
            logger.info(
                "Round %d started, %d carried over", new_ledger.round, new_ledger.current_jackpot,
            )
            self._emit(
                GameEvent.ROUND_ADVANCED, None,
                round=new_ledger.round, current_jackpot=new_ledger.current_jackpot,
            )
        return result

    def withdraw_jackpot(self, player: bytes) -> int:
        """Pay the whole jackpot pool to the current winner. Returns the amount."""
        player = validate_address(player)
        with self._lock:
            ledger, custody = self._ledger, self._custody
            payout = self._attempt(
                "withdraw_jackpot", player,
                lambda: LedgerEngine.withdraw_jackpot(ledger, custody, player),
            )
            self._persist("withdraw_jackpot", ledger=ledger, custody=payout.custody)
            self._custody = payout.custody
            self._balances[player] = self.balance_of(player) + payout.amount

        logger.info("Jackpot of %d paid to %s", payout.amount, player.hex())
        self._emit(GameEvent.JACKPOT_WITHDRAWN, player, amount=payout.amount)
        return payout.amount

    # -- Remote changes -------------------------------------------------------

    def watch(self, channels: ChannelManager, player: bytes) -> None:
        """Deliver changes to the player's stored records through on_event."""
        channels.follow(validate_address(player).hex(), self._deliver)

    # -- Internals --------------------------------------------------------

    def _find_session(self, player: bytes) -> PlayerSession | None:
        session = self._sessions.get(player)
        if session is None and self._store is not None:
            session = self._store.load_session(player)
            if session is not None:
                self._sessions[player] = session
        return session

    def _persist(
        self,
        operation: str,
        *,
        session: PlayerSession | None = None,
        ledger: GlobalLedger | None = None,
        custody: Custody | None = None,
        leaderboard: Leaderboard | None = None,
    ) -> None:
        """Write the records an operation is about to commit."""
        if self._store is None:
            return
        store = self._store
        if session is not None:
            self._write(operation, lambda: store.save_session(session))
        if ledger is not None:
            pool = custody if custody is not None else self._custody
            self._write(operation, lambda: store.save_ledger(ledger, pool))
        if leaderboard is not None:
            self._write(operation, lambda: store.save_leaderboard(leaderboard))

    def _write(self, operation: str, step: Callable) -> None:
        try:
            step()
        except Exception:
            logger.exception("Store write failed during %s", operation)
            raise

    def _attempt(self, operation: str, player: bytes, step: Callable):
        """Run an engine step, logging rejections before re-raising."""
        try:
            return step()
        except DiceGameError as exc:
            logger.debug("%s rejected for %s: %s", operation, player.hex(), exc)
            raise

    def _emit(self, event: GameEvent, player: bytes | None, **data) -> None:
        """Deliver an event to the subscriber, if any."""
        self._deliver(EventPayload(
            event=event,
            player_id=player.hex() if player is not None else None,
            data=data,
        ))

    def _deliver(self, payload: EventPayload) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(payload)
        except Exception:
            logger.exception("Error in event callback for %s", payload.event.name)
