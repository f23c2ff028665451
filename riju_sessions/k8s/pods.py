"""Construction of Kubernetes objects for user session pods."""

import re
import shlex
from typing import Any

from kubernetes_asyncio.client import (
    V1Container,
    V1EmptyDirVolumeSource,
    V1HTTPGetAction,
    V1LocalObjectReference,
    V1ObjectMeta,
    V1Pod,
    V1PodSpec,
    V1Probe,
    V1ResourceRequirements,
    V1SecretVolumeSource,
    V1Volume,
    V1VolumeMount,
)

from riju_sessions.config import Settings, get_settings
from riju_sessions.models import LangConfig, Revisions, UserSession

__all__ = [
    "InvalidSessionIDError",
    "SessionPodBuilder",
    "validate_session_id",
]

MINIO_CONFIG_VOLUME = "minio-config"
BIN_VOLUME = "riju-bin"
BIN_DIR = "/riju-bin"
MC_CONFIG_DIR = "/root/.mc"
HEALTH_PATH = "/health"

# Kubernetes label values are capped at 63 characters.
MAX_SESSION_ID_LENGTH = 63
# Label values must also start and end with an alphanumeric character.
_SESSION_ID_RE = re.compile(r"[a-z0-9]([a-z0-9-]*[a-z0-9])?")


class InvalidSessionIDError(ValueError):
    """Raised when a session ID cannot name a pod or label it."""


def validate_session_id(session_id: str) -> str:
    """Check that a session ID is a valid label value of lowercase letters, digits and dashes."""
    if not session_id or not _SESSION_ID_RE.fullmatch(session_id):
        raise InvalidSessionIDError(f"illegal session ID: {session_id!r}")
    if len(session_id) > MAX_SESSION_ID_LENGTH:
        raise InvalidSessionIDError(
            f"session ID longer than {MAX_SESSION_ID_LENGTH} characters: {session_id!r}"
        )
    return session_id


class SessionPodBuilder:
    """Construct the pod that backs a user session.

    The pod has an init container that copies the ``agent`` and ``ptyify``
    binaries out of object storage into an ``emptyDir`` volume, and a
    ``session`` container running the language image, which mounts that
    volume read-only and is probed over the agent's health endpoint.

    Parameters
    ----------
    settings
        Application settings. Defaults to the cached global settings.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def pod_name(self, session_id: str) -> str:
        return f"{self._settings.pod_name_prefix}{session_id}"

    def lang_image(self, lang_config: LangConfig, revisions: Revisions) -> str:
        return (
            f"{self._settings.lang_image_registry}/riju-lang:"
            f"{lang_config.id}-{revisions.lang_image}"
        )

    def build_pod(self, session_id: str, lang_config: LangConfig, revisions: Revisions) -> V1Pod:
        """Build the pod for a new user session.

        Parameters
        ----------
        session_id
            Session ID, used in the pod name and label.
        lang_config
            Language the session runs.
        revisions
            Revisions of the binaries and of the language image.

        Returns
        -------
        V1Pod
            Pod ready to submit to the user namespace.

        Raises
        ------
        InvalidSessionIDError
            If the session ID is not usable in a pod name or label.
        """
        validate_session_id(session_id)
        return V1Pod(
            metadata=V1ObjectMeta(
                name=self.pod_name(session_id),
                labels={self._settings.session_label: session_id},
            ),
            spec=V1PodSpec(
                volumes=self._build_volumes(),
                image_pull_secrets=[
                    V1LocalObjectReference(name=self._settings.registry_secret_name)
                ],
                init_containers=[self._build_download_container(revisions)],
                containers=[self._build_session_container(lang_config, revisions)],
                restart_policy="Never",
            ),
        )

    def session_from_pod(self, pod: Any) -> UserSession:
        """Map a listed pod to its session, whether or not it is labelled."""
        labels = pod.metadata.labels or {}
        return UserSession(
            pod_name=pod.metadata.name,
            session_id=labels.get(self._settings.session_label),
        )

    def _build_volumes(self) -> list[V1Volume]:
        return [
            V1Volume(
                name=MINIO_CONFIG_VOLUME,
                secret=V1SecretVolumeSource(secret_name=self._settings.minio_secret_name),
            ),
            V1Volume(name=BIN_VOLUME, empty_dir=V1EmptyDirVolumeSource()),
        ]

    def _build_download_container(self, revisions: Revisions) -> V1Container:
        alias = self._settings.object_store_alias
        script = " && ".join(
            f"mc cp {shlex.quote(f'{alias}/{binary}/{revision}')} {BIN_DIR}/{binary}"
            for binary, revision in (("agent", revisions.agent), ("ptyify", revisions.ptyify))
        )
        return V1Container(
            name="download",
            image=self._settings.download_image,
            resources=V1ResourceRequirements(),
            args=["sh", "-c", script],
            volume_mounts=[
                V1VolumeMount(name=MINIO_CONFIG_VOLUME, mount_path=MC_CONFIG_DIR, read_only=True),
                V1VolumeMount(name=BIN_VOLUME, mount_path=BIN_DIR),
            ],
        )

    def _build_session_container(self, lang_config: LangConfig, revisions: Revisions) -> V1Container:
        return V1Container(
            name="session",
            image=self.lang_image(lang_config, revisions),
            resources=V1ResourceRequirements(
                limits={
                    "cpu": self._settings.session_cpu_limit,
                    "memory": self._settings.session_memory_limit,
                }
            ),
            # The agent needs up to 30s to come up, then must stay healthy.
            startup_probe=self._build_health_probe(failure_threshold=30, initial_delay=0, period=1),
            readiness_probe=self._build_health_probe(failure_threshold=1, initial_delay=2, period=10),
            liveness_probe=self._build_health_probe(failure_threshold=3, initial_delay=2, period=10),
            volume_mounts=[
                V1VolumeMount(name=BIN_VOLUME, mount_path=BIN_DIR, read_only=True),
            ],
        )

    def _build_health_probe(self, *, failure_threshold: int, initial_delay: int, period: int) -> V1Probe:
        return V1Probe(
            http_get=V1HTTPGetAction(
                path=HEALTH_PATH,
                port=self._settings.agent_port,
                scheme="HTTP",
            ),
            failure_threshold=failure_threshold,
            initial_delay_seconds=initial_delay,
            period_seconds=period,
            success_threshold=1,
            timeout_seconds=2,
        )
