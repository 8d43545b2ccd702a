import logging
from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from tracklog.db.memory import InMemoryStore
from tracklog.db.postgres import PostgresStore
from tracklog.db.store import DocumentStore
from tracklog.errors import SyncError
from .env_loader import get_store_backend
from .sessions import SessionManager, UserSession

logger = logging.getLogger(__name__)


def build_store() -> DocumentStore:
    """Create the document store selected by TRACKLOG_STORE."""
    backend = get_store_backend()
    logger.info(f"Using {backend} document store")
    if backend == "postgres":
        return PostgresStore()
    return InMemoryStore()


@lru_cache
def get_session_manager() -> SessionManager:
    return SessionManager(build_store())


def get_store(manager: SessionManager = Depends(get_session_manager)) -> DocumentStore:
    return manager.store


def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """The opaque user scope, passed by the front end in X-User-Id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


async def user_session(
    user_id: str = Depends(current_user_id),
    manager: SessionManager = Depends(get_session_manager),
) -> UserSession:
    try:
        return await manager.session_for(user_id)
    except SyncError as e:
        raise HTTPException(status_code=503, detail=str(e))
