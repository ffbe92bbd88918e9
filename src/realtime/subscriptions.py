"""
Jackpot Dice - Realtime Channels

Turns Supabase Realtime postgres changes into the same EventPayload stream
GameHost emits locally, so a process can follow games committed by other
hosts sharing the database.

The ledger and leaderboard are shared: they get one channel each however
many players are followed, and their events go to every listener. Each
followed player adds one channel filtered to their own game_sessions row.

The Realtime client is async-only, so channels live on an asyncio loop in
a daemon thread. Listeners are called from that thread.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable, Coroutine

from supabase import Client

from src.realtime.events import (
    EventPayload,
    classify_leaderboard_change,
    classify_ledger_change,
    classify_session_change,
    describe_record,
)

logger = logging.getLogger(__name__)

Listener = Callable[[EventPayload], None]

SESSION_TABLE = "game_sessions"
SHARED_TABLES = ("global_ledger", "leaderboard")
CALL_TIMEOUT_SECONDS = 10

_CLASSIFIERS: dict[str, Callable] = {
    SESSION_TABLE: classify_session_change,
    "global_ledger": classify_ledger_change,
    "leaderboard": classify_leaderboard_change,
}


def parse_change(payload: dict[str, Any]) -> tuple[str, dict[str, Any], dict[str, Any]]:
    """Split a postgres_changes payload into (change_type, record, old_record)."""
    data = payload.get("data", payload)
    change_type = data.get("type", data.get("eventType", ""))
    return change_type, data.get("record") or {}, data.get("old_record") or {}


class ChannelManager:
    """Follows players' sessions and the shared tables over Realtime."""

    def __init__(self, client: Client) -> None:
        self._client = client
        self._listeners: dict[str, Listener] = {}
        self._session_channels: dict[str, Any] = {}
        self._shared_channels: list[Any] = []
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def followed(self) -> list[str]:
        """Hex addresses of the players currently followed."""
        with self._lock:
            return list(self._session_channels)

    # -- Following --------------------------------------------------------

    def follow(self, player_id: str, listener: Listener) -> None:
        """Start delivering a player's session changes, and shared changes, to listener."""
        with self._lock:
            if player_id in self._session_channels:
                logger.warning("Already following player %s", player_id)
                return

        channel = self._call(self._open(f"session:{player_id}", SESSION_TABLE, player_id))
        with self._lock:
            self._session_channels[player_id] = channel
            self._listeners[player_id] = listener
            open_shared = not self._shared_channels

        if open_shared:
            shared = [self._call(self._open(f"shared:{table}", table)) for table in SHARED_TABLES]
            with self._lock:
                self._shared_channels = shared
        logger.info("Following player %s", player_id)

    def unfollow(self, player_id: str) -> None:
        """Stop following a player. Shared channels close with the last player."""
        with self._lock:
            channel = self._session_channels.pop(player_id, None)
            self._listeners.pop(player_id, None)
            closing = [channel] if channel is not None else []
            if not self._session_channels and self._shared_channels:
                closing.extend(self._shared_channels)
                self._shared_channels = []

        if not closing:
            return
        try:
            self._call(self._close(closing))
        except Exception:
            logger.exception("Error closing channels for player %s", player_id)
        logger.info("Stopped following player %s", player_id)

    def shutdown(self) -> None:
        """Unfollow everyone and stop the background loop."""
        for player_id in self.followed:
            self.unfollow(player_id)
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._loop.stop)
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
        self._loop = None
        self._thread = None

    # -- Change handling ----------------------------------------------------

    def _dispatch(self, table: str, player_id: str | None, payload: dict[str, Any]) -> None:
        """Classify one change and hand the event to the interested listeners."""
        try:
            change_type, record, old_record = parse_change(payload)
            event = _CLASSIFIERS[table](change_type, record, old_record)
            if event is None:
                return

            event_payload = EventPayload(
                event=event,
                player_id=player_id,
                data={"table": table, "change_type": change_type, **describe_record(table, record)},
            )
            with self._lock:
                if player_id is None:
                    listeners = list(self._listeners.values())
                else:
                    listeners = [self._listeners[player_id]] if player_id in self._listeners else []
            for listener in listeners:
                listener(event_payload)
        except Exception:
            logger.exception("Error handling %s change", table)

    # -- Async plumbing -------------------------------------------------------

    async def _open(self, name: str, table: str, player_id: str | None = None) -> Any:
        channel = self._client.realtime.channel(name)
        options: dict[str, Any] = {"schema": "public", "table": table}
        if player_id is not None:
            options["filter"] = f"owner=eq.{player_id}"
        channel.on_postgres_changes(
            event="*",
            callback=lambda payload: self._dispatch(table, player_id, payload),
            **options,
        )
        await channel.subscribe(
            callback=lambda state, err: self._log_state(name, state, err)
        )
        return channel

    async def _close(self, channels: list[Any]) -> None:
        for channel in channels:
            try:
                await channel.unsubscribe()
                await self._client.realtime.remove_channel(channel)
            except Exception:
                logger.exception("Error removing channel")

    def _log_state(self, name: str, state: str, error: Exception | None) -> None:
        if error:
            logger.error("Channel %s failed: %s", name, error)
        else:
            logger.debug("Channel %s state: %s", name, state)

    def _call(self, coro: Coroutine) -> Any:
        """Run a coroutine on the background loop and wait for its result."""
        future = asyncio.run_coroutine_threadsafe(coro, self._ensure_loop())
        return future.result(timeout=CALL_TIMEOUT_SECONDS)

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._run_loop, args=(self._loop,), daemon=True, name="realtime-loop"
                )
                self._thread.start()
            return self._loop

    @staticmethod
    def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        loop.run_forever()
