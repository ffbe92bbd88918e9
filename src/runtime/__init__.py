"""
Jackpot Dice Runtime.

In-memory host that commits engine operations atomically.
"""

from src.runtime.host import GameHost

__all__ = ["GameHost"]
