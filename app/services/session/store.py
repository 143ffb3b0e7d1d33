"""In-memory session store with per-identity locking and expiry sweep."""
import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, Callable, Dict, List, Optional

from app.services.session.models import Session

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _IdentityLock:
    """Lock plus the number of tasks holding or waiting for it."""

    def __init__(self):
        self.lock = asyncio.Lock()
        self.users = 0


class SessionStore:
    """Maps customer identities to sessions.

    A dialogue turn must hold ``lock(identity)`` for its whole duration. The
    expiry sweep takes the same lock before deleting, so it never removes a
    session in the middle of a turn.
    """

    def __init__(
        self,
        expiry: timedelta = timedelta(minutes=30),
        sweep_interval: float = 300,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.expiry = expiry
        self.sweep_interval = sweep_interval
        self.clock = clock
        self._sessions: Dict[str, Session] = {}
        self._locks: Dict[str, _IdentityLock] = {}
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, identity: str) -> bool:
        return identity in self._sessions

    @asynccontextmanager
    async def lock(self, identity: str) -> AsyncIterator[None]:
        """Hold exclusive access to one identity's session."""
        entry = self._locks.get(identity)
        if entry is None:
            entry = self._locks[identity] = _IdentityLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                self._locks.pop(identity, None)

    def get(self, identity: str) -> Optional[Session]:
        return self._sessions.get(identity)

    def get_or_create(self, identity: str) -> Session:
        """Get the identity's session, creating a fresh START session if absent.

        A session past the expiry window counts as absent even when the
        sweep has not evicted it yet.
        """
        session = self._sessions.get(identity)
        now = self.clock()
        if session is not None and session.is_expired(now, self.expiry.total_seconds()):
            logger.info(f"[SESSION STORE] Replacing expired session - Identity: {identity}")
            del self._sessions[identity]
            session = None
        if session is None:
            session = Session(identity=identity, created_at=now, last_active_at=now)
            self._sessions[identity] = session
            logger.info(f"[SESSION STORE] Created session - Identity: {identity}")
        return session

    def reset(self, identity: str, restaurant_id: Optional[int] = None) -> Session:
        """Replace the identity's session with a fresh one."""
        self._sessions.pop(identity, None)
        session = self.get_or_create(identity)
        session.restaurant_id = restaurant_id
        return session

    def touch(self, identity: str) -> None:
        """Refresh last activity time."""
        session = self._sessions.get(identity)
        if session is not None:
            session.last_active_at = self.clock()

    def delete(self, identity: str) -> bool:
        """Remove a session. Returns whether one existed."""
        removed = self._sessions.pop(identity, None) is not None
        if removed:
            logger.info(f"[SESSION STORE] Deleted session - Identity: {identity}")
        return removed

    def _expired_identities(self) -> List[str]:
        now = self.clock()
        expiry_seconds = self.expiry.total_seconds()
        return [
            identity
            for identity, session in self._sessions.items()
            if session.is_expired(now, expiry_seconds)
        ]

    async def sweep(self) -> int:
        """Evict sessions idle longer than the expiry window.

        Returns:
            Number of sessions evicted
        """
        evicted = 0
        expiry_seconds = self.expiry.total_seconds()
        for identity in self._expired_identities():
            async with self.lock(identity):
                # A turn may have touched the session while we waited
                session = self._sessions.get(identity)
                if session is not None and session.is_expired(self.clock(), expiry_seconds):
                    del self._sessions[identity]
                    evicted += 1
        if evicted:
            logger.info(
                f"[SESSION STORE] Sweep evicted {evicted} session(s), {len(self._sessions)} active"
            )
        return evicted

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            try:
                await self.sweep()
            except Exception as e:
                logger.error(
                    f"[SESSION STORE] Sweep failed - Error: {type(e).__name__}: {str(e)}",
                    exc_info=True,
                )

    def start(self) -> None:
        """Start the background expiry sweep."""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._sweep_forever())
            logger.info(
                f"[SESSION STORE] Sweeper started - Expiry: {self.expiry}, "
                f"Interval: {self.sweep_interval}s"
            )

    async def stop(self) -> None:
        """Stop the sweeper and drop all sessions."""
        if self._sweeper is not None:
            self._sweeper.cancel()
            try:
                await self._sweeper
            except asyncio.CancelledError:
                pass
            self._sweeper = None
        dropped = len(self._sessions)
        self._sessions.clear()
        logger.info(f"[SESSION STORE] Stopped, dropped {dropped} session(s)")
