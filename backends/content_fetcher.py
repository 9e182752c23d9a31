"""Fetches file content at an exact repository revision."""

import logging
from typing import Optional

from pydantic import ValidationError

from backends.graphql import GraphQLClient
from backends.schema import FileContentResponse
from backends.uri import parse_uri
from core.errors import MalformedResponse

logger = logging.getLogger(__name__)

FILE_CONTENT_QUERY = """query GetContextLines($repo: String!, $rev: String!, $path: String!) {
  repository(name: $repo) {
    commit(rev: $rev) {
      file(path: $path) {
        content
      }
    }
  }
}"""


class ContentFetcher:
    """Sourcegraph content fetcher implementation."""

    def __init__(self, graphql: GraphQLClient) -> None:
        self.graphql = graphql

    async def get_file_content(self, uri: str) -> Optional[str]:
        """Get the text content of the file a location token points at.

        Args:
            uri: Location token, git://repo?rev#path

        Returns:
            File content, or None if the repository, commit or file is not found

        Raises:
            MalformedUri: If the token cannot be parsed
            TransportFailure: If the remote call fails
            MalformedResponse: If the file is found but has no content field
        """
        location = parse_uri(uri)
        response = await self.graphql.query(
            FILE_CONTENT_QUERY,
            {"repo": location.repo, "rev": location.rev, "path": location.path},
        )

        try:
            parsed = FileContentResponse.model_validate(response or {})
        except ValidationError as exc:
            raise MalformedResponse(f"invalid file content response: {exc}") from exc

        if parsed.data is None or parsed.data.repository is None:
            logger.debug(f"Repository not found for {uri}")
            return None
        commit = parsed.data.repository.commit
        if commit is None:
            logger.debug(f"Revision not found for {uri}")
            return None
        if commit.file is None:
            logger.debug(f"File not found for {uri}")
            return None
        if commit.file.content is None:
            raise MalformedResponse(f"file content missing for {uri}")
        return commit.file.content
