"""Tests for the HTTP API."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from kubernetes_asyncio.client.exceptions import ApiException

from riju_sessions.api import limiter
from riju_sessions.api.sessions import get_session_manager
from riju_sessions.main import app
from riju_sessions.models import UserSession
from riju_sessions.services.session_manager import UserSessionManager
from tests.conftest import make_pod


CREATE_BODY = {
    "session_id": "abc-123",
    "lang_config": {"id": "python"},
    "revisions": {"agent": "a1b2c3", "ptyify": "d4e5f6", "lang_image": "0123abcd"},
}


@pytest.fixture
def manager(mock_k8s, builder) -> UserSessionManager:
    return UserSessionManager(mock_k8s, builder)


@pytest.fixture
def client(manager):
    limiter.reset()
    app.dependency_overrides[get_session_manager] = lambda: manager
    # No context manager: the lifespan would try to reach a real cluster.
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestListSessions:
    def test_list(self, client, mock_k8s):
        mock_k8s.list_pods.return_value = [
            make_pod("riju-user-session-one", {"riju.codes/user-session-id": "one"}),
            make_pod("stray"),
        ]

        response = client.get("/sessions")

        assert response.status_code == 200
        assert response.json() == [
            {"pod_name": "riju-user-session-one", "session_id": "one"},
            {"pod_name": "stray", "session_id": None},
        ]

    def test_api_error_status_is_passed_through(self, client, mock_k8s):
        mock_k8s.list_pods.side_effect = ApiException(status=403, reason="Forbidden")

        response = client.get("/sessions")

        assert response.status_code == 403
        assert response.json()["detail"] == "Forbidden"


class TestCreateSession:
    def test_create(self, client, mock_k8s):
        response = client.post("/sessions", json=CREATE_BODY)

        assert response.status_code == 201
        assert response.json() == {"pod_name": "riju-user-session-abc-123", "session_id": "abc-123"}
        pod = mock_k8s.create_pod.await_args.kwargs["pod"]
        assert pod.spec.containers[0].image == "localhost:30999/riju-lang:python-0123abcd"

    @pytest.mark.parametrize("session_id", ["Not Valid", "abc\n", "-abc", "abc-"])
    def test_invalid_session_id(self, client, mock_k8s, session_id):
        response = client.post("/sessions", json={**CREATE_BODY, "session_id": session_id})

        assert response.status_code == 400
        mock_k8s.create_pod.assert_not_awaited()

    def test_missing_fields(self, client):
        response = client.post("/sessions", json={"session_id": "abc"})

        assert response.status_code == 422

    def test_conflict_is_passed_through(self, client, mock_k8s):
        mock_k8s.create_pod.side_effect = ApiException(status=409, reason="Conflict")

        response = client.post("/sessions", json=CREATE_BODY)

        assert response.status_code == 409
        assert response.json()["detail"] == "Conflict"

    def test_manager_receives_typed_arguments(self, client, manager):
        manager.create_user_session = AsyncMock(
            return_value=UserSession(pod_name="riju-user-session-abc-123", session_id="abc-123")
        )

        client.post("/sessions", json=CREATE_BODY)

        kwargs = manager.create_user_session.await_args.kwargs
        assert kwargs["session_id"] == "abc-123"
        assert kwargs["lang_config"].id == "python"
        assert kwargs["revisions"].lang_image == "0123abcd"


class TestHealth:
    def test_healthy(self, client, monkeypatch, mock_k8s):
        monkeypatch.setattr("riju_sessions.api.health.get_k8s_client", AsyncMock(return_value=mock_k8s))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "kubernetes": "healthy (2 namespaces)"}

    def test_unreachable_cluster(self, client, monkeypatch):
        k8s = MagicMock()
        k8s.list_namespaces = AsyncMock(side_effect=ConnectionError("refused"))
        monkeypatch.setattr("riju_sessions.api.health.get_k8s_client", AsyncMock(return_value=k8s))

        response = client.get("/health")

        assert response.status_code == 503

    def test_ready(self, client):
        assert client.get("/ready").json() == {"ready": True}

    def test_root(self, client):
        body = client.get("/").json()
        assert body["status"] == "running"


class TestRateLimits:
    def test_session_creation_is_limited_per_client(self, client):
        statuses = [client.post("/sessions", json=CREATE_BODY).status_code for _ in range(11)]

        assert statuses == [201] * 10 + [429]

    def test_default_limit_applies_to_listing(self, client):
        statuses = [client.get("/sessions").status_code for _ in range(61)]

        assert statuses[:60] == [200] * 60
        assert statuses[60] == 429

    def test_probes_are_exempt(self, client):
        statuses = {client.get("/ready").status_code for _ in range(70)}

        assert statuses == {200}
