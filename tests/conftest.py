"""
Jackpot Dice - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from src.config.settings import Settings
from src.engine.base import Custody, GlobalLedger, Leaderboard, PlayerSession
from src.engine.dice import DiceEngine


def make_address(n: int) -> bytes:
    """Deterministic 32-byte address for test player n."""
    return n.to_bytes(32, "big")


# =============================================================================
# ADDRESSES
# =============================================================================

@pytest.fixture
def operator() -> bytes:
    return b"\xee" * 32


@pytest.fixture
def alice() -> bytes:
    return make_address(1)


@pytest.fixture
def bob() -> bytes:
    return make_address(2)


# =============================================================================
# ENGINE RECORDS
# =============================================================================

@pytest.fixture
def ledger(operator) -> GlobalLedger:
    """Fresh ledger with a price of 100."""
    return GlobalLedger(operator_address=operator, price_to_play=100)


@pytest.fixture
def empty_board() -> Leaderboard:
    return Leaderboard()


@pytest.fixture
def custody() -> Custody:
    return Custody()


@pytest.fixture
def paid_session(alice) -> PlayerSession:
    """Session that has paid and not yet rolled."""
    return PlayerSession(owner=alice, credit=1)


@pytest.fixture
def rolled_session(alice) -> PlayerSession:
    """Paid session holding the dice (3, 3, 5, 3, 1), rolled at t=1000."""
    return PlayerSession(
        owner=alice,
        credit=1,
        can_roll=True,
        packed_dice=DiceEngine.pack((3, 3, 5, 3, 1)),
        last_roll_time=1000,
    )


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def category_scores() -> dict[str, tuple[tuple[int, ...], int, int]]:
    """
    Dice patterns with expected category scores.

    Returns:
        Dict mapping name to (dice_values, category, expected_points)
    """
    return {
        "no_match": ((2, 3, 4, 5, 6), 1, 0),
        "single_one": ((1, 2, 3, 4, 5), 1, 1000),
        "two_twos": ((2, 2, 3, 4, 5), 2, 4000),
        "three_threes": ((3, 3, 3, 1, 2), 3, 9000),
        "four_fours": ((4, 4, 4, 4, 6), 4, 16000),
        "five_fives": ((5, 5, 5, 5, 5), 5, 25000),
        "five_sixes": ((6, 6, 6, 6, 6), 6, 30000),
        "sixes_scattered": ((6, 1, 6, 2, 6), 6, 18000),
    }


# =============================================================================
# SETTINGS
# =============================================================================

@pytest.fixture
def settings(operator) -> Settings:
    """Settings built in code so tests never read the environment."""
    return Settings(
        _env_file=None,
        operator_address=operator.hex(),
        price_to_play=100,
    )
