"""
Jackpot Dice - Scoring Engine

Upper-section scoring: choosing category N (1-6) awards N x 1,000 points
for every die showing N.

    Category 1: 1,000 per one
    Category 2: 2,000 per two
    ...
    Category 6: 6,000 per six
"""

from collections import Counter
from typing import Sequence

from src.engine.base import DIE_FACES, DiceRoll
from src.engine.validators import validate_category


class ScoringEngine:
    """
    Stateless scoring calculator.

    All methods are class methods operating on immutable data.
    """

    POINTS_PER_PIP = 1000

    @classmethod
    def score(cls, dice: Sequence[int] | DiceRoll, category: int) -> int:
        """
        Score a set of dice against a category.

        Args:
            dice: Dice values (sequence or DiceRoll)
            category: Face value being scored, 1-6

        Returns:
            category * 1000 * (number of dice showing category)

        Raises:
            InvalidCategory: If category is outside 1-6
        """
        category = validate_category(category)
        values = dice.values if isinstance(dice, DiceRoll) else tuple(dice)
        return sum(1 for value in values if value == category) * category * cls.POINTS_PER_PIP

    @classmethod
    def score_breakdown(cls, dice: Sequence[int] | DiceRoll) -> dict[int, int]:
        """Return the score every category would award for these dice."""
        values = dice.values if isinstance(dice, DiceRoll) else tuple(dice)
        counts = Counter(values)
        return {
            category: counts[category] * category * cls.POINTS_PER_PIP
            for category in range(1, DIE_FACES + 1)
        }

    @classmethod
    def best_category(cls, dice: Sequence[int] | DiceRoll) -> int:
        """Category with the highest score; ties go to the higher face."""
        breakdown = cls.score_breakdown(dice)
        return max(breakdown, key=lambda category: (breakdown[category], category))
