"""
Jackpot Dice - Ledger, Custody and Round Rotation Tests
"""

from dataclasses import replace

import pytest

from src.engine.base import NULL_ADDRESS, Custody, GlobalLedger
from src.engine.errors import NoJackpot, NotWinner
from src.engine.ledger import LedgerEngine
from src.engine.rounds import RoundRotation


class TestInitializeLedger:
    def test_defaults(self, operator):
        ledger = LedgerEngine.initialize_ledger(operator, 500, rounds_until_jackpot=3, now=1234)
        assert ledger.operator_address == operator
        assert ledger.price_to_play == 500
        assert ledger.round == 1
        assert ledger.rounds_until_jackpot == 3
        assert ledger.round_start_time == 1234
        assert ledger.highest_score == 0
        assert ledger.current_winner == NULL_ADDRESS
        assert ledger.current_jackpot == 0
        assert ledger.has_winner is False

    def test_rejects_negative_price(self, operator):
        with pytest.raises(ValueError, match="negative"):
            LedgerEngine.initialize_ledger(operator, -1)


class TestCustody:
    def test_split_payment(self):
        assert LedgerEngine.split_payment(100) == (25, 75)
        assert LedgerEngine.split_payment(1) == (0, 1)
        assert LedgerEngine.split_payment(0) == (0, 0)

    def test_deposit(self):
        assert LedgerEngine.deposit(Custody(jackpot_pool=10), 5).jackpot_pool == 15

    def test_record_final_score_only_when_higher(self, ledger, alice, bob):
        ledger, is_new = LedgerEngine.record_final_score(ledger, alice, 100)
        assert is_new and ledger.current_winner == alice

        same, is_new = LedgerEngine.record_final_score(ledger, bob, 100)
        assert not is_new and same is ledger

        ledger, is_new = LedgerEngine.record_final_score(ledger, bob, 101)
        assert is_new and ledger.current_winner == bob and ledger.highest_score == 101


class TestWithdrawJackpot:
    def test_winner_takes_all(self, ledger, alice):
        ledger = replace(ledger, highest_score=9000, current_winner=alice)
        payout = LedgerEngine.withdraw_jackpot(ledger, Custody(jackpot_pool=750), alice)
        assert payout.amount == 750
        assert payout.winner == alice
        assert payout.custody.jackpot_pool == 0

    def test_not_winner(self, ledger, alice, bob):
        ledger = replace(ledger, current_winner=alice)
        with pytest.raises(NotWinner):
            LedgerEngine.withdraw_jackpot(ledger, Custody(jackpot_pool=750), bob)

    def test_no_winner_yet(self, ledger):
        with pytest.raises(NotWinner):
            LedgerEngine.withdraw_jackpot(ledger, Custody(jackpot_pool=750), NULL_ADDRESS)

    def test_empty_pool(self, ledger, alice):
        ledger = replace(ledger, current_winner=alice)
        with pytest.raises(NoJackpot):
            LedgerEngine.withdraw_jackpot(ledger, Custody(), alice)

    def test_winner_check_comes_first(self, ledger, alice, bob):
        ledger = replace(ledger, current_winner=alice)
        with pytest.raises(NotWinner):
            LedgerEngine.withdraw_jackpot(ledger, Custody(), bob)


class TestRoundRotation:
    def test_disabled_when_zero(self, ledger):
        assert not RoundRotation.is_enabled(ledger)
        after, advanced = RoundRotation.after_game(ledger, Custody(), now=50)
        assert after is ledger
        assert advanced is False

    def test_counts_games(self, ledger):
        ledger = replace(ledger, rounds_until_jackpot=3)
        after, advanced = RoundRotation.after_game(ledger, Custody(), now=50)
        assert after.games_played == 1
        assert advanced is False

    def test_advances_on_last_game(self, ledger, alice):
        ledger = replace(
            ledger,
            rounds_until_jackpot=2,
            games_played=1,
            highest_score=8000,
            current_winner=alice,
        )
        after, advanced = RoundRotation.after_game(ledger, Custody(jackpot_pool=300), now=999)
        assert advanced is True
        assert after.round == 2
        assert after.round_start_time == 999
        assert after.highest_score == 0
        assert after.current_winner == alice
        assert after.current_jackpot == 300
        assert after.games_played == 0

    def test_config_survives_rotation(self, ledger):
        ledger = replace(ledger, rounds_until_jackpot=1)
        after, _ = RoundRotation.after_game(ledger, Custody(), now=1)
        assert after.price_to_play == ledger.price_to_play
        assert after.operator_address == ledger.operator_address
        assert after.rounds_until_jackpot == 1

    def test_should_advance(self, operator):
        ledger = GlobalLedger(operator_address=operator, price_to_play=1, rounds_until_jackpot=2)
        assert not RoundRotation.should_advance(ledger)
        assert RoundRotation.should_advance(replace(ledger, games_played=2))
