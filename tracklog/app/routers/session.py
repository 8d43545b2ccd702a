"""Routes for the caller's sync session."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tracklog.app.dependencies import current_user_id, get_session_manager, user_session
from tracklog.app.models import ActiveViewRequest
from tracklog.app.sessions import SessionManager, UserSession

router = APIRouter(prefix="/session", tags=["session"])


class SessionStatusResponse(BaseModel):
    user_id: str
    state: str
    active_view: str
    open_subscriptions: int
    errors: list[str]


def _status(session: UserSession) -> SessionStatusResponse:
    return SessionStatusResponse(
        user_id=session.user_id or "",
        state=session.engine.state,
        active_view=session.context.active_view,
        open_subscriptions=session.engine.open_subscriptions,
        errors=[str(e) for e in session.engine.errors],
    )


@router.get("", response_model=SessionStatusResponse)
async def read_session(session: UserSession = Depends(user_session)) -> SessionStatusResponse:
    """Subscribe (if needed) and report the session's sync state."""
    return _status(session)


@router.put("/view", response_model=SessionStatusResponse)
async def set_view(
    request: ActiveViewRequest,
    session: UserSession = Depends(user_session),
) -> SessionStatusResponse:
    """Record which view the user is looking at, for refresh events."""
    session.engine.set_active_view(request.view)
    return _status(session)


@router.delete("")
async def end_session(
    user_id: str = Depends(current_user_id),
    manager: SessionManager = Depends(get_session_manager),
) -> dict[str, str]:
    """Sign out: cancel every subscription of the caller's session."""
    ended = manager.end(user_id)
    return {"status": "ended" if ended else "not_subscribed"}
