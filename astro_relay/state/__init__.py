from .runtime import RuntimeDeps
from .settings import AppSettings
from .session import SubjectIdentity, SessionConfiguration
from .downstream import DownstreamState, DownstreamConnection

__all__ = [
    "AppSettings",
    "DownstreamConnection",
    "DownstreamState",
    "RuntimeDeps",
    "SessionConfiguration",
    "SubjectIdentity",
]
