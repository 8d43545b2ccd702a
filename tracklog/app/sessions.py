"""Per-user sync sessions held by the API process.

Each signed-in user gets a SessionContext, a MirrorStore and a SyncEngine.
Read endpoints answer from the mirror; writes go to the store and come back
through the user's subscriptions.
"""

import logging

from tracklog.db.store import DocumentStore
from tracklog.errors import SyncError
from tracklog.sync.engine import CollectionReplaced, SyncEngine
from tracklog.sync.mirror import MirrorStore
from tracklog.sync.session import SessionContext

logger = logging.getLogger(__name__)

DEFAULT_LIVE_TIMEOUT = 10.0


class UserSession:
    def __init__(self, store: DocumentStore) -> None:
        self.context = SessionContext()
        self.mirror = MirrorStore()
        self.engine = SyncEngine(store, self.mirror, self.context)
        self.engine.on_refresh(self._log_refresh)

    @property
    def user_id(self) -> str | None:
        return self.context.user_id

    def _log_refresh(self, event: CollectionReplaced) -> None:
        logger.debug(
            f"Refresh view '{event.view}' for user {self.user_id}: "
            f"{event.collection} now has {event.count} entries"
        )


class SessionManager:
    """Starts, looks up and ends user sessions against one store."""

    def __init__(
        self, store: DocumentStore, live_timeout: float = DEFAULT_LIVE_TIMEOUT
    ) -> None:
        self.store = store
        self.live_timeout = live_timeout
        self._sessions: dict[str, UserSession] = {}

    async def session_for(self, user_id: str) -> UserSession:
        """Get the user's session, subscribing first if there is none.

        A session whose subscriptions reported errors is started again.

        Raises:
            SyncError: If subscribing fails or the mirror doesn't fill in
                time. A session that times out is ended.
        """
        session = self._sessions.get(user_id)
        if session is not None and session.engine.errors:
            logger.warning(
                f"Restarting session for user {user_id} after "
                f"{len(session.engine.errors)} sync errors"
            )
            self.end(user_id)
            session = None
        if session is None or session.engine.state == "detached":
            session = UserSession(self.store)
            session.engine.start(user_id)
            self._sessions[user_id] = session
        try:
            await session.engine.wait_live(self.live_timeout)
        except TimeoutError as e:
            self.end(user_id)
            raise SyncError("*", f"timed out after {self.live_timeout}s") from e
        return session

    def end(self, user_id: str) -> bool:
        """Unsubscribe the user's session. Returns True if there was one."""
        session = self._sessions.pop(user_id, None)
        if session is None:
            return False
        session.engine.stop()
        return True

    def end_all(self) -> None:
        for user_id in list(self._sessions):
            self.end(user_id)
