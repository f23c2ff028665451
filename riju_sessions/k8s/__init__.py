"""Async Kubernetes client layer for user session pods."""

from riju_sessions.k8s.client import KubernetesClient, get_k8s_client
from riju_sessions.k8s.pods import InvalidSessionIDError, SessionPodBuilder, validate_session_id

__all__ = [
    "InvalidSessionIDError",
    "KubernetesClient",
    "SessionPodBuilder",
    "get_k8s_client",
    "validate_session_id",
]
