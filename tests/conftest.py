"""Test configuration and fixtures."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from riju_sessions.config import Settings
from riju_sessions.k8s.pods import SessionPodBuilder
from riju_sessions.models import LangConfig, Revisions


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio backend for pytest-asyncio."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def builder(settings) -> SessionPodBuilder:
    return SessionPodBuilder(settings)


@pytest.fixture
def lang_config() -> LangConfig:
    return LangConfig(id="python")


@pytest.fixture
def revisions() -> Revisions:
    return Revisions(agent="a1b2c3", ptyify="d4e5f6", lang_image="0123abcd")


def make_pod(name: str, labels: dict | None = None) -> SimpleNamespace:
    """Minimal stand-in for a V1Pod returned by the API."""
    return SimpleNamespace(metadata=SimpleNamespace(name=name, labels=labels))


@pytest.fixture
def mock_k8s() -> MagicMock:
    """KubernetesClient double with async pod operations."""
    k8s = MagicMock()
    k8s.list_pods = AsyncMock(return_value=[])
    k8s.create_pod = AsyncMock(side_effect=lambda namespace, pod: pod)
    k8s.list_namespaces = AsyncMock(return_value=["default", "riju-user"])
    return k8s
