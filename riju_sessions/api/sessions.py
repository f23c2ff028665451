"""User session endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status
from kubernetes_asyncio.client.exceptions import ApiException
from pydantic import BaseModel, Field

from riju_sessions.api.middleware import limiter, session_create_limit
from riju_sessions.k8s.client import get_k8s_client
from riju_sessions.k8s.pods import InvalidSessionIDError
from riju_sessions.models import LangConfig, Revisions
from riju_sessions.services.session_manager import UserSessionManager

logger = structlog.get_logger()
router = APIRouter()


class LangConfigModel(BaseModel):
    """Language of the session."""

    id: str = Field(..., description="Language ID, e.g. 'python'")


class RevisionsModel(BaseModel):
    """Revisions of the artifacts a session is built from."""

    agent: str = Field(..., description="Object-storage revision of the agent binary")
    ptyify: str = Field(..., description="Object-storage revision of the ptyify binary")
    lang_image: str = Field(..., description="Tag suffix of the language image")


class CreateSessionRequest(BaseModel):
    """Request body for creating a session."""

    session_id: str
    lang_config: LangConfigModel
    revisions: RevisionsModel


class SessionResponse(BaseModel):
    """A user session pod."""

    pod_name: str
    session_id: str | None


async def get_session_manager() -> UserSessionManager:
    """Build a session manager bound to the cluster client singleton."""
    return UserSessionManager(await get_k8s_client())


def _api_error(e: ApiException) -> HTTPException:
    return HTTPException(status_code=e.status or 502, detail=e.reason or "Kubernetes API error")


@router.get("/sessions", response_model=list[SessionResponse])
async def list_sessions(
    manager: UserSessionManager = Depends(get_session_manager),
) -> list[SessionResponse]:
    """List the user session pods currently in the cluster."""
    try:
        sessions = await manager.list_user_sessions()
    except ApiException as e:
        logger.error("list_sessions_failed", status=e.status, reason=e.reason)
        raise _api_error(e) from e
    return [SessionResponse(**s.to_dict()) for s in sessions]


@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(session_create_limit)
async def create_session(
    request: Request,
    body: CreateSessionRequest,
    manager: UserSessionManager = Depends(get_session_manager),
) -> SessionResponse:
    """Create the pod for a new user session."""
    try:
        session = await manager.create_user_session(
            session_id=body.session_id,
            lang_config=LangConfig(id=body.lang_config.id),
            revisions=Revisions(**body.revisions.model_dump()),
        )
    except InvalidSessionIDError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ApiException as e:
        raise _api_error(e) from e
    return SessionResponse(**session.to_dict())
