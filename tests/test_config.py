"""Tests for settings."""

from riju_sessions.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.user_namespace == "riju-user"
    assert settings.session_label == "riju.codes/user-session-id"
    assert settings.minio_secret_name == "minio-user-login"
    assert settings.registry_secret_name == "registry-user-login"
    assert settings.download_image == "minio/mc:RELEASE.2022-12-13T00-23-28Z"
    assert settings.agent_port == 869


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("USER_NAMESPACE", "sessions")
    monkeypatch.setenv("SESSION_MEMORY_LIMIT", "2Gi")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = Settings(_env_file=None)

    assert settings.user_namespace == "sessions"
    assert settings.session_memory_limit == "2Gi"
    assert settings.environment == "production"
