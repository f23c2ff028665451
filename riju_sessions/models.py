"""Session data structures shared by the service and the API layer."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class LangConfig:
    """Language a session runs. Only the ID is needed to pick an image."""

    id: str


@dataclass(frozen=True)
class Revisions:
    """Object-storage revisions of the binaries and image a session uses."""

    agent: str
    ptyify: str
    lang_image: str


@dataclass(frozen=True)
class UserSession:
    """A session pod as seen in the cluster."""

    pod_name: str
    session_id: str | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
