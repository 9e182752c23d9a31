"""Configuration sources for the code intelligence backends."""

import os
from typing import Any, Dict, Mapping, Optional, Protocol

from dotenv import load_dotenv

load_dotenv()

FILE_LOCAL = "fileLocal"
TRACE_SEARCH = "basicCodeIntel.debug.traceSearch"


class SettingsSource(Protocol):
    """Read-only key-value settings, looked up on every use."""

    def get(self, key: str, default: Any = None) -> Any:
        ...


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class EnvSettings:
    """Settings read from environment variables.

    Values are read from the environment on each lookup so changes made
    while the process runs are picked up.
    """

    ENV_KEYS: Dict[str, str] = {
        FILE_LOCAL: "CODEINTEL_FILE_LOCAL",
        TRACE_SEARCH: "CODEINTEL_TRACE_SEARCH",
    }
    BOOL_KEYS = (FILE_LOCAL, TRACE_SEARCH)

    def get(self, key: str, default: Any = None) -> Any:
        env_key = self.ENV_KEYS.get(key)
        if env_key is None:
            return default
        value = os.getenv(env_key)
        if value is None:
            return default
        if key in self.BOOL_KEYS:
            return _parse_bool(value)
        return value


class StaticSettings:
    """Settings backed by a fixed mapping."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)


class ServerConfig:
    """Server configuration."""

    def __init__(self) -> None:
        """Initialize server configuration from environment variables."""
        self.sse_port = int(os.getenv("MCP_SSE_PORT", "8000"))
        self.streamable_http_port = int(os.getenv("MCP_STREAMABLE_HTTP_PORT", "8080"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.otel_enabled = os.getenv("OTEL_ENABLED", "false").lower() == "true"

        self.sourcegraph_endpoint = self._get_required_env("SRC_ENDPOINT")
        self.sourcegraph_token = os.getenv("SRC_ACCESS_TOKEN", "")  # it may not always be mandatory
        self.request_timeout = float(os.getenv("SRC_TIMEOUT", "30"))

    @staticmethod
    def _get_required_env(key: str) -> str:
        """Get required environment variable or raise descriptive error."""
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Required environment variable {key} is not set")
        return value
