"""
Jackpot Dice - Game Engine Base Classes

This module defines the foundational records and enums used throughout
the game engine. All records are immutable (frozen dataclasses): every
operation reads the records it needs and returns replacements, which the
hosting runtime commits together as one atomic step.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Sequence


ADDRESS_LENGTH = 32
NULL_ADDRESS = bytes(ADDRESS_LENGTH)

NUM_DICE = 5
DIE_FACES = 6
LEADERBOARD_CAPACITY = 10
ROLL_COOLDOWN_SECONDS = 10


class SessionPhase(Enum):
    """Lifecycle phase of a player session, derived from its flags."""
    IDLE = auto()      # credit = 0
    PAID = auto()      # credit = 1, can_roll = False
    ROLLED = auto()    # credit = 1, can_roll = True


@dataclass(frozen=True)
class DiceRoll:
    """
    Immutable representation of a five-dice roll.

    Attributes:
        values: Tuple of dice face values (1-6)
    """
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate dice values are within valid range."""
        for value in self.values:
            if not (1 <= value <= DIE_FACES):
                raise ValueError(
                    f"Invalid die value {value}. "
                    f"Must be between 1 and {DIE_FACES}."
                )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "DiceRoll":
        """Create a DiceRoll from any sequence type."""
        return cls(values=tuple(values))


@dataclass(frozen=True)
class PlayerSession:
    """
    Per-player game state.

    Attributes:
        owner: 32-byte address of the player
        credit: 1 once the player has paid for the current game, else 0
        can_roll: True while a roll is waiting to be scored
        upper_score: Accumulated category score for the current game
        lower_score: Reserved second score column (never written)
        packed_dice: Current dice, 3 bits per face
        last_roll_time: Timestamp of the previous roll (seconds)
    """
    owner: bytes
    credit: int = 0
    can_roll: bool = False
    upper_score: int = 0
    lower_score: int = 0
    packed_dice: int = 0
    last_roll_time: int = 0

    @property
    def phase(self) -> SessionPhase:
        if self.credit == 0:
            return SessionPhase.IDLE
        if self.can_roll:
            return SessionPhase.ROLLED
        return SessionPhase.PAID

    @property
    def final_score(self) -> int:
        return self.upper_score + self.lower_score


@dataclass(frozen=True)
class GlobalLedger:
    """
    Shared record of configuration, the current best score and its holder.

    Attributes:
        operator_address: Address receiving the operator share of payments
        price_to_play: Cost of one game in base currency units
        round: Current round number (starts at 1)
        rounds_until_jackpot: Games per round; 0 disables round rotation
        round_start_time: Timestamp the current round began
        highest_score: Best final score of the current round
        current_winner: Address that set highest_score, or NULL_ADDRESS
        current_jackpot: Jackpot carried into the current round
        games_played: Games ended during the current round
    """
    operator_address: bytes
    price_to_play: int
    round: int = 1
    rounds_until_jackpot: int = 0
    round_start_time: int = 0
    highest_score: int = 0
    current_winner: bytes = NULL_ADDRESS
    current_jackpot: int = 0
    games_played: int = 0

    @property
    def has_winner(self) -> bool:
        return self.current_winner != NULL_ADDRESS


@dataclass(frozen=True)
class LeaderboardEntry:
    """A single ranked (player, score) pair."""
    player: bytes
    score: int


@dataclass(frozen=True)
class Leaderboard:
    """
    Bounded, score-descending list of the best final scores.

    Attributes:
        entries: Ranked entries, best first
        capacity: Maximum number of entries kept
    """
    entries: tuple[LeaderboardEntry, ...] = field(default_factory=tuple)
    capacity: int = LEADERBOARD_CAPACITY

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_full(self) -> bool:
        return len(self.entries) >= self.capacity

    @property
    def scores(self) -> tuple[int, ...]:
        return tuple(entry.score for entry in self.entries)


@dataclass(frozen=True)
class Custody:
    """
    Pooled jackpot balance held on behalf of no single player.

    Attributes:
        jackpot_pool: Balance claimable in full by the current winner
    """
    jackpot_pool: int = 0


@dataclass(frozen=True)
class PaymentReceipt:
    """Outcome of a successful payment."""
    session: PlayerSession
    custody: Custody
    operator_share: int
    jackpot_share: int


@dataclass(frozen=True)
class GameOverResult:
    """Outcome of ending a game."""
    session: PlayerSession
    ledger: GlobalLedger
    leaderboard: Leaderboard
    final_score: int
    is_new_high_score: bool


@dataclass(frozen=True)
class Payout:
    """Outcome of a jackpot withdrawal."""
    custody: Custody
    winner: bytes
    amount: int
