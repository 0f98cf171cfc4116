from .state import UpstreamState
from .reconnect import ReconnectPolicy
from .session import BroadcastFn, UpstreamSessionManager
from .voices import is_valid_voice, resolve_voice

__all__ = [
    "BroadcastFn",
    "ReconnectPolicy",
    "UpstreamSessionManager",
    "UpstreamState",
    "is_valid_voice",
    "resolve_voice",
]
