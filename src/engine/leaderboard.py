"""
Jackpot Dice - Leaderboard

Top final scores of all time, best first. A submitted score is inserted
ahead of the first entry it strictly beats; equal scores never displace
an existing entry, and the lowest entry falls off once the board is full.

The same player may hold several ranks at once unless the caller asks
for unique players.
"""

from dataclasses import replace

from src.engine.base import Leaderboard, LeaderboardEntry
from src.engine.validators import validate_address, validate_amount


class LeaderboardEngine:
    """
    Stateless leaderboard operations.

    All methods are class methods operating on immutable data.
    """

    @classmethod
    def submit(
        cls,
        board: Leaderboard,
        player: bytes,
        score: int,
        unique_players: bool = False,
    ) -> Leaderboard:
        """
        Offer a final score to the leaderboard.

        Args:
            board: Current leaderboard
            player: Address of the player
            score: Final score
            unique_players: Keep at most one entry per player (the best)

        Returns:
            The updated leaderboard, or the same board if the score
            did not qualify
        """
        player = validate_address(player)
        score = validate_amount(score)
        entries = list(board.entries)

        if unique_players:
            # Entries are best first, so the first match is the player's best
            best = next((e for e in entries if e.player == player), None)
            if best is not None:
                if score <= best.score:
                    return board
                entries = [e for e in entries if e.player != player]

        position = cls._insert_position(entries, score, board.capacity)
        if position is None:
            return board

        entries.insert(position, LeaderboardEntry(player=player, score=score))
        return replace(board, entries=tuple(entries[: board.capacity]))

    @classmethod
    def _insert_position(
        cls,
        entries: list[LeaderboardEntry],
        score: int,
        capacity: int,
    ) -> int | None:
        """First rank the score strictly beats, or None if it does not qualify."""
        for i, entry in enumerate(entries):
            if score > entry.score:
                return i

        # Unused slots hold a zero score, so only a positive score claims one.
        if len(entries) < capacity and score > 0:
            return len(entries)

        return None

    @classmethod
    def rank_of(cls, board: Leaderboard, player: bytes) -> int | None:
        """1-based best rank held by the player, or None."""
        for i, entry in enumerate(board.entries):
            if entry.player == player:
                return i + 1
        return None

    @classmethod
    def top(cls, board: Leaderboard, n: int) -> tuple[LeaderboardEntry, ...]:
        """The first n entries."""
        if n < 0:
            raise ValueError(f"n cannot be negative, got {n}.")
        return board.entries[:n]
