"""
Jackpot Dice Game Engine.

Pure Python game logic with zero database dependencies.
Handles dice rolling, scoring, the session state machine, the
leaderboard, the shared ledger and jackpot custody.
"""

from src.engine.base import (
    NULL_ADDRESS,
    Custody,
    DiceRoll,
    GameOverResult,
    GlobalLedger,
    Leaderboard,
    LeaderboardEntry,
    PaymentReceipt,
    Payout,
    PlayerSession,
    SessionPhase,
)
from src.engine.dice import DiceEngine
from src.engine.errors import (
    AlreadyInGame,
    AlreadyRolled,
    CooldownActive,
    DiceGameError,
    InsufficientFunds,
    InvalidCategory,
    NoJackpot,
    NotPaid,
    NotRolled,
    NotWinner,
    UnknownSession,
)
from src.engine.leaderboard import LeaderboardEngine
from src.engine.ledger import LedgerEngine
from src.engine.rounds import RoundRotation
from src.engine.scoring import ScoringEngine
from src.engine.session import SessionEngine

__all__ = [
    # Records
    "Custody",
    "DiceRoll",
    "GameOverResult",
    "GlobalLedger",
    "Leaderboard",
    "LeaderboardEntry",
    "PaymentReceipt",
    "Payout",
    "PlayerSession",
    # Enums & constants
    "NULL_ADDRESS",
    "SessionPhase",
    # Engines
    "DiceEngine",
    "LeaderboardEngine",
    "LedgerEngine",
    "RoundRotation",
    "ScoringEngine",
    "SessionEngine",
    # Errors
    "AlreadyInGame",
    "AlreadyRolled",
    "CooldownActive",
    "DiceGameError",
    "InsufficientFunds",
    "InvalidCategory",
    "NoJackpot",
    "NotPaid",
    "NotRolled",
    "NotWinner",
    "UnknownSession",
]
