from .config import EnvSettings, ServerConfig, SettingsSource, StaticSettings
from .errors import CodeIntelError, MalformedResponse, MalformedUri, TransportFailure

__all__ = [
    "EnvSettings",
    "ServerConfig",
    "SettingsSource",
    "StaticSettings",
    "CodeIntelError",
    "MalformedResponse",
    "MalformedUri",
    "TransportFailure",
]
