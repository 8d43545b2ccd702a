"""Keeps a MirrorStore in step with the remote document store.

State machine per session:

    detached --start()--> subscribing --(every collection delivered)--> live
       ^                                                                  |
       +------------------ stop() / replace_store() ----------------------+

`start` opens exactly one subscription per collection. Every snapshot
replaces its collection in the mirror and is then announced to refresh
listeners as a `CollectionReplaced` event carrying the view the user is
currently looking at. `stop` cancels every open subscription before
anything else happens, so a later `start` always begins from zero.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Literal

from pydantic import ValidationError as ModelValidationError

from tracklog.db.store import Document, DocumentStore, Unsubscribe
from tracklog.errors import SyncError
from tracklog.models import Collection, COLLECTIONS, Entity, parse_document
from .mirror import MirrorStore
from .session import SessionContext

logger = logging.getLogger(__name__)

SyncState = Literal["detached", "subscribing", "live"]


@dataclass(frozen=True)
class CollectionReplaced:
    """Emitted after a snapshot has been applied to the mirror."""

    collection: Collection
    view: str
    count: int


RefreshListener = Callable[[CollectionReplaced], None]
ErrorListener = Callable[[SyncError], None]


class SyncEngine:
    def __init__(
        self,
        store: DocumentStore,
        mirror: MirrorStore,
        context: SessionContext,
    ) -> None:
        self.store = store
        self.mirror = mirror
        self.context = context
        self.state: SyncState = "detached"
        self.errors: list[SyncError] = []
        self._unsubscribes: dict[Collection, Unsubscribe] = {}
        self._pending: set[Collection] = set()
        # Bumped on every start/stop; callbacks from older generations are stale.
        self._generation = 0
        self._live = asyncio.Event()
        self._refresh_listeners: list[RefreshListener] = []
        self._error_listeners: list[ErrorListener] = []

    @property
    def open_subscriptions(self) -> int:
        return len(self._unsubscribes)

    def on_refresh(self, listener: RefreshListener) -> Callable[[], None]:
        """Register a refresh listener. Returns a function that removes it."""
        self._refresh_listeners.append(listener)
        return lambda: self._refresh_listeners.remove(listener)

    def on_error(self, listener: ErrorListener) -> Callable[[], None]:
        """Register a sync error listener. Returns a function that removes it."""
        self._error_listeners.append(listener)
        return lambda: self._error_listeners.remove(listener)

    def start(self, user_id: str) -> None:
        """Subscribe to every collection in `user_id`'s namespace.

        Any existing session is torn down first.

        Raises:
            SyncError: If a subscription cannot be attached. Subscriptions
                opened before the failure are cancelled and the engine is
                left detached.
        """
        if self.state != "detached":
            self.stop()

        self.context.user_id = user_id
        self._generation += 1
        generation = self._generation
        self._pending = set(COLLECTIONS)
        self.errors = []
        self.state = "subscribing"
        logger.info(f"Subscribing to {len(COLLECTIONS)} collections for user {user_id}")

        for name in COLLECTIONS:
            try:
                unsubscribe = self.store.subscribe(
                    user_id,
                    name,
                    self._snapshot_handler(generation, name),
                    self._error_handler(generation, name),
                )
            except Exception as e:
                logger.error(f"Could not subscribe to {name} for user {user_id}: {e}")
                self.stop()
                raise SyncError(name, str(e)) from e
            self._unsubscribes[name] = unsubscribe

    def stop(self) -> None:
        """Cancel every open subscription and forget the mirrored data."""
        for name, unsubscribe in list(self._unsubscribes.items()):
            unsubscribe()
            logger.debug(f"Unsubscribed from {name}")
        self._unsubscribes.clear()
        self._generation += 1
        self._pending = set()
        self._live.clear()
        self.mirror.clear()
        if self.state != "detached":
            logger.info(f"Detached session for user {self.context.user_id}")
        self.state = "detached"
        self.context.user_id = None

    def replace_store(self, store: DocumentStore) -> None:
        """Detach, then point the engine at a different store."""
        self.stop()
        self.store = store

    def set_active_view(self, view: str) -> None:
        self.context.active_view = view

    async def wait_live(self, timeout: float | None = None) -> None:
        """Wait until every collection has delivered its first snapshot.

        Raises:
            SyncError: If the engine is detached.
            TimeoutError: If `timeout` elapses first.
        """
        if self.state == "detached":
            raise SyncError("*", "session is not subscribed")
        await asyncio.wait_for(self._live.wait(), timeout)

    def _snapshot_handler(
        self, generation: int, name: Collection
    ) -> Callable[[list[Document]], None]:
        def handle(documents: list[Document]) -> None:
            if generation != self._generation:
                logger.debug(f"Discarding stale {name} snapshot")
                return
            self._apply_snapshot(name, documents)

        return handle

    def _error_handler(
        self, generation: int, name: Collection
    ) -> Callable[[SyncError], None]:
        def handle(error: SyncError) -> None:
            if generation != self._generation:
                return
            logger.error(str(error))
            self.errors.append(error)
            for listener in list(self._error_listeners):
                listener(error)

        return handle

    def _apply_snapshot(self, name: Collection, documents: list[Document]) -> None:
        entities: list[Entity] = []
        for document in documents:
            try:
                entities.append(parse_document(name, document))
            except ModelValidationError as e:
                logger.warning(
                    f"Skipping malformed {name} document {document.get('id')}: {e}"
                )
        self.mirror.replace_collection(name, entities)

        self._pending.discard(name)
        if self.state == "subscribing" and not self._pending:
            self.state = "live"
            self._live.set()
            logger.info(f"Session for user {self.context.user_id} is live")

        event = CollectionReplaced(
            collection=name, view=self.context.active_view, count=len(entities)
        )
        for listener in list(self._refresh_listeners):
            listener(event)
