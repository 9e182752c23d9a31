"""Memoized GraphQL client shared by search and content fetching."""

import asyncio
import json
from typing import Any, Dict

from backends.memoize import AsyncMemoizer
from backends.transport import RemoteCall


def request_key(query: str, variables: Dict[str, Any]) -> str:
    """Canonical cache key for a GraphQL request."""
    return json.dumps({"query": query, "vars": variables}, sort_keys=True)


class GraphQLClient:
    """Runs GraphQL requests through a per-instance single-flight cache."""

    def __init__(self, remote_call: RemoteCall) -> None:
        """Initialize the client.

        Args:
            remote_call: Coroutine function taking (query, variables)
        """
        self._memo = AsyncMemoizer(remote_call, request_key)

    async def query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        # A cancelled caller must not cancel the task other callers share.
        return await asyncio.shield(self._memo(query, variables))

    def clear_cache(self) -> None:
        """Forget every cached response."""
        self._memo.clear()

    @property
    def cache_size(self) -> int:
        return len(self._memo)
