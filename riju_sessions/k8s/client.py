"""
Async Kubernetes client wrapping kubernetes-asyncio.

Provides a singleton client with lazy initialization, supporting both
in-cluster config (production) and kubeconfig file (local/dev).
"""

import asyncio
import os
from typing import Any

import structlog

from riju_sessions.config import get_settings

logger = structlog.get_logger()

SERVICE_ACCOUNT_TOKEN = "/var/run/secrets/kubernetes.io/serviceaccount/token"


class KubernetesClient:
    """
    Singleton async Kubernetes client.

    Wraps the kubernetes-asyncio CoreV1Api for the pod operations that
    session provisioning needs.

    Usage:
        client = await KubernetesClient.get_instance()
        pods = await client.list_pods(namespace="riju-user")
    """

    _instance: "KubernetesClient | None" = None
    _lock = asyncio.Lock()

    def __init__(self) -> None:
        self._api_client = None
        self._core_v1 = None
        self._initialized = False

    @classmethod
    async def get_instance(cls) -> "KubernetesClient":
        """Get or create the singleton client instance."""
        async with cls._lock:
            if cls._instance is None or not cls._instance._initialized:
                instance = cls()
                await instance._initialize()
                cls._instance = instance
            return cls._instance

    @classmethod
    async def close_instance(cls) -> None:
        """Close the singleton's HTTP session and forget it."""
        async with cls._lock:
            if cls._instance is not None:
                await cls._instance.close()
                cls._instance = None

    async def _initialize(self) -> None:
        """Initialize the Kubernetes API clients."""
        try:
            from kubernetes_asyncio import client as k8s_client
            from kubernetes_asyncio import config as k8s_config

            if self._is_in_cluster():
                k8s_config.load_incluster_config()
                logger.info("k8s_client_initialized", mode="in-cluster")
            else:
                kubeconfig = get_settings().kubeconfig or os.environ.get(
                    "KUBECONFIG", os.path.expanduser("~/.kube/config")
                )
                await k8s_config.load_kube_config(config_file=kubeconfig)
                logger.info("k8s_client_initialized", mode="kubeconfig", path=kubeconfig)

            self._api_client = k8s_client.ApiClient()
            self._core_v1 = k8s_client.CoreV1Api(self._api_client)
            self._initialized = True

        except Exception as e:
            logger.warning("k8s_client_init_failed", error=str(e))
            self._initialized = False
            raise

    @staticmethod
    def _is_in_cluster() -> bool:
        """Detect if running inside a Kubernetes pod."""
        return os.path.exists(SERVICE_ACCOUNT_TOKEN)

    @property
    def is_available(self) -> bool:
        return self._initialized

    async def close(self) -> None:
        if self._api_client is not None:
            await self._api_client.close()
        self._api_client = None
        self._core_v1 = None
        self._initialized = False
        logger.info("k8s_client_closed")

    # ── Pod Operations ─────────────────────────────────────────────────────────

    async def list_pods(self, namespace: str, label_selector: str | None = None) -> list[Any]:
        """List pods in a namespace as V1Pod objects."""
        resp = await self._core_v1.list_namespaced_pod(
            namespace=namespace,
            label_selector=label_selector or "",
        )
        return list(resp.items)

    async def create_pod(self, namespace: str, pod: Any) -> Any:
        """Submit a pod to the cluster and return the created object."""
        return await self._core_v1.create_namespaced_pod(namespace=namespace, body=pod)

    # ── Namespace Operations ──────────────────────────────────────────────────

    async def list_namespaces(self) -> list[str]:
        """List namespace names."""
        resp = await self._core_v1.list_namespace()
        return [ns.metadata.name for ns in resp.items]


async def get_k8s_client() -> KubernetesClient:
    """Get the global K8s async client singleton."""
    return await KubernetesClient.get_instance()
