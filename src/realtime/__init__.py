"""
Jackpot Dice Real-time Sync.

Game event definitions and Supabase Realtime subscriptions.
"""

from src.realtime.events import EventPayload, GameEvent
from src.realtime.subscriptions import ChannelManager

__all__ = [
    "ChannelManager",
    "EventPayload",
    "GameEvent",
]
