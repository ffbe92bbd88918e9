"""
Jackpot Dice - Leaderboard Tests
"""

import pytest

from src.engine.base import Leaderboard, LeaderboardEntry
from src.engine.leaderboard import LeaderboardEngine


def addr(n: int) -> bytes:
    return n.to_bytes(32, "big")


def submit_all(board: Leaderboard, scores, **kwargs) -> Leaderboard:
    for n, score in enumerate(scores, start=1):
        board = LeaderboardEngine.submit(board, addr(n), score, **kwargs)
    return board


def full_board() -> Leaderboard:
    """Ten entries scoring 100, 90, ..., 10."""
    return submit_all(Leaderboard(), [100 - 10 * i for i in range(10)])


class TestSubmit:
    """Tests for LeaderboardEngine.submit()."""

    def test_sorted_insertion(self, empty_board):
        board = submit_all(empty_board, [50, 30, 80, 10, 99])
        assert board.scores == (99, 80, 50, 30, 10)

    def test_players_follow_their_scores(self, empty_board):
        board = submit_all(empty_board, [50, 30, 80])
        assert [e.player for e in board.entries] == [addr(3), addr(1), addr(2)]

    def test_tie_does_not_displace(self, empty_board):
        board = LeaderboardEngine.submit(empty_board, addr(1), 50)
        board = LeaderboardEngine.submit(board, addr(2), 50)
        assert board.entries[0].player == addr(1)
        assert board.entries[1].player == addr(2)

    def test_tie_on_full_board_is_not_inserted(self):
        board = full_board()
        after = LeaderboardEngine.submit(board, addr(99), 10)
        assert after is board

    def test_below_last_on_full_board_is_not_inserted(self):
        board = full_board()
        assert LeaderboardEngine.submit(board, addr(99), 5) is board

    def test_full_board_evicts_last(self):
        board = LeaderboardEngine.submit(full_board(), addr(99), 55)
        assert len(board) == 10
        assert board.scores == (100, 90, 80, 70, 60, 55, 50, 40, 30, 20)
        assert board.entries[5].player == addr(99)

    def test_new_best_goes_first(self):
        board = LeaderboardEngine.submit(full_board(), addr(99), 1000)
        assert board.entries[0] == LeaderboardEntry(player=addr(99), score=1000)
        assert board.scores[-1] == 20

    def test_zero_score_never_lands(self, empty_board):
        assert LeaderboardEngine.submit(empty_board, addr(1), 0) is empty_board

    def test_capacity_respected(self, empty_board):
        board = submit_all(empty_board, range(1, 30))
        assert len(board) == 10
        assert board.scores == tuple(range(29, 19, -1))

    def test_descending_invariant(self, empty_board):
        board = submit_all(empty_board, [5, 17, 3, 17, 99, 1, 42, 42, 8, 60, 2, 77])
        scores = board.scores
        assert all(scores[i] >= scores[i + 1] for i in range(len(scores) - 1))

    def test_custom_capacity(self):
        board = submit_all(Leaderboard(capacity=3), [10, 20, 30, 40])
        assert board.scores == (40, 30, 20)

    def test_original_board_unchanged(self, empty_board):
        LeaderboardEngine.submit(empty_board, addr(1), 10)
        assert len(empty_board) == 0

    def test_duplicates_allowed_by_default(self, empty_board):
        board = LeaderboardEngine.submit(empty_board, addr(1), 10)
        board = LeaderboardEngine.submit(board, addr(1), 20)
        assert [e.player for e in board.entries] == [addr(1), addr(1)]

    def test_rejects_negative_score(self, empty_board):
        with pytest.raises(ValueError, match="negative"):
            LeaderboardEngine.submit(empty_board, addr(1), -5)


class TestUniquePlayers:
    """Tests for submit(..., unique_players=True)."""

    def test_better_score_replaces_entry(self, empty_board):
        board = submit_all(empty_board, [50, 30])
        board = LeaderboardEngine.submit(board, addr(2), 80, unique_players=True)
        assert board.scores == (80, 50)
        assert board.entries[0].player == addr(2)

    def test_worse_score_keeps_entry(self, empty_board):
        board = LeaderboardEngine.submit(empty_board, addr(1), 50)
        after = LeaderboardEngine.submit(board, addr(1), 20, unique_players=True)
        assert after is board

    def test_collapses_earlier_duplicates(self, empty_board):
        board = empty_board
        for score in (60, 40, 20):
            board = LeaderboardEngine.submit(board, addr(1), score)
        board = LeaderboardEngine.submit(board, addr(2), 30)

        board = LeaderboardEngine.submit(board, addr(1), 70, unique_players=True)

        assert [e.player for e in board.entries] == [addr(1), addr(2)]
        assert board.scores == (70, 30)

    def test_frees_slot_on_full_board(self):
        board = LeaderboardEngine.submit(full_board(), addr(10), 95, unique_players=True)
        assert len(board) == 10
        assert [e.player for e in board.entries].count(addr(10)) == 1
        assert board.scores == (100, 95, 90, 80, 70, 60, 50, 40, 30, 20)


class TestQueries:
    def test_rank_of(self, empty_board):
        board = submit_all(empty_board, [50, 30, 80])
        assert LeaderboardEngine.rank_of(board, addr(3)) == 1
        assert LeaderboardEngine.rank_of(board, addr(2)) == 3
        assert LeaderboardEngine.rank_of(board, addr(9)) is None

    def test_top(self, empty_board):
        board = submit_all(empty_board, [50, 30, 80])
        assert [e.score for e in LeaderboardEngine.top(board, 2)] == [80, 50]

    def test_top_negative(self, empty_board):
        with pytest.raises(ValueError):
            LeaderboardEngine.top(empty_board, -1)
