"""User session provisioning on top of the Kubernetes client."""

from typing import TYPE_CHECKING

import structlog

from riju_sessions.config import get_settings
from riju_sessions.k8s.pods import SessionPodBuilder
from riju_sessions.models import LangConfig, Revisions, UserSession

if TYPE_CHECKING:
    from riju_sessions.k8s.client import KubernetesClient

logger = structlog.get_logger()


class UserSessionManager:
    """Lists and creates user session pods in the user namespace."""

    def __init__(self, k8s: "KubernetesClient", builder: SessionPodBuilder | None = None):
        self.k8s = k8s
        self.builder = builder or SessionPodBuilder()
        self.namespace = get_settings().user_namespace

    async def list_user_sessions(self) -> list[UserSession]:
        """List every pod in the user namespace with its session ID."""
        pods = await self.k8s.list_pods(namespace=self.namespace)
        sessions = [self.builder.session_from_pod(pod) for pod in pods]
        logger.debug("user_sessions_listed", namespace=self.namespace, count=len(sessions))
        return sessions

    async def create_user_session(
        self, session_id: str, lang_config: LangConfig, revisions: Revisions
    ) -> UserSession:
        """Create the pod for a new session.

        Raises InvalidSessionIDError before contacting the cluster if the ID
        is unusable; cluster API errors are re-raised as they are.
        """
        pod = self.builder.build_pod(session_id, lang_config, revisions)

        try:
            created = await self.k8s.create_pod(namespace=self.namespace, pod=pod)
        except Exception as e:
            logger.error(
                "user_session_create_failed",
                session_id=session_id,
                lang=lang_config.id,
                error=str(e),
            )
            raise

        logger.info(
            "user_session_created",
            session_id=session_id,
            pod_name=created.metadata.name,
            lang=lang_config.id,
            image=self.builder.lang_image(lang_config, revisions),
        )
        return self.builder.session_from_pod(created)
