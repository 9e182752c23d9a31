"""HTTP transport for the Sourcegraph GraphQL API."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import requests

from core.errors import TransportFailure

logger = logging.getLogger(__name__)

RemoteCall = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]


class GraphQLTransport:
    """Posts GraphQL documents to a Sourcegraph instance."""

    def __init__(
        self,
        endpoint: str,
        token: str = "",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the transport.

        Args:
            endpoint: Sourcegraph base URL
            token: Optional API token
            timeout: Request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.endpoint = endpoint.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.endpoint}/.api/graphql"

    async def __call__(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a GraphQL document.

        Raises:
            TransportFailure: On connection or HTTP errors, a non-JSON body,
                or a response carrying GraphQL errors
        """
        return await asyncio.to_thread(self._post, query, variables)

    def _post(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"token {self.token}"

        try:
            response = self._session.post(
                self.url,
                json={"query": query, "variables": variables},
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as exc:
            logger.error(f"GraphQL request to {self.url} failed: {exc}")
            raise TransportFailure(str(exc)) from exc
        except ValueError as exc:
            raise TransportFailure(f"invalid JSON in GraphQL response: {exc}") from exc

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(str(e.get("message", e)) for e in errors)
            logger.error(f"GraphQL errors: {messages}")
            raise TransportFailure(messages)
        return body
