"""Symbol and text search against the Sourcegraph GraphQL API."""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from backends.graphql import GraphQLClient
from backends.models import Position, SearchResult, SymbolMatch, TextMatch
from backends.schema import FileMatchNode, SearchResponse
from core.config import FILE_LOCAL, TRACE_SEARCH, SettingsSource
from core.errors import MalformedResponse

logger = logging.getLogger(__name__)

SEARCH_QUERY = """query Search($query: String!) {
  search(query: $query) {
    results {
      __typename
      limitHit
      results {
        ... on FileMatch {
          __typename
          file {
            path
            url
            commit {
              oid
            }
          }
          repository {
            name
            url
          }
          limitHit
          symbols {
            name
            containerName
            %(file_local)s
            url
            kind
            location {
              resource {
                path
              }
              range {
                start {
                  line
                  character
                }
                end {
                  line
                  character
                }
              }
            }
          }
          lineMatches {
            preview
            lineNumber
            offsetAndLengths
          }
        }
      }
    }
  }
}"""


def build_search_query(file_local: bool) -> str:
    """Return the search document, selecting fileLocal on symbols if asked."""
    return SEARCH_QUERY % {"file_local": "fileLocal" if file_local else ""}


class SearchClient:
    """Sourcegraph search client implementation."""

    def __init__(self, graphql: GraphQLClient, settings: SettingsSource) -> None:
        """Initialize the search client.

        Args:
            graphql: Memoized GraphQL client
            settings: Settings source, consulted on every search
        """
        self.graphql = graphql
        self.settings = settings

    async def search(self, query: str) -> List[SearchResult]:
        """Search for symbols and text matching a Sourcegraph query.

        Args:
            query: Sourcegraph search query

        Returns:
            Flattened results in response order

        Raises:
            TransportFailure: If the remote call fails
            MalformedResponse: If the response lacks selected fields
        """
        file_local = bool(self.settings.get(FILE_LOCAL, False))
        if self.settings.get(TRACE_SEARCH, False):
            logger.info(f"Search: {query!r} (fileLocal={file_local})")

        response = await self.graphql.query(build_search_query(file_local), {"query": query})
        return self.format_results(response)

    def format_results(self, response: Dict[str, Any]) -> List[SearchResult]:
        """Flatten a raw search response into results."""
        try:
            parsed = SearchResponse.model_validate(response)
        except ValidationError as exc:
            raise MalformedResponse(f"invalid search response: {exc}") from exc

        if parsed.data.search.results.limit_hit:
            logger.warning("Search result limit hit; results are incomplete")

        results: List[SearchResult] = []
        for group in parsed.data.search.results.results:
            results.extend(self._flatten_group(group))
        return results

    @staticmethod
    def _flatten_group(group: FileMatchNode) -> List[SearchResult]:
        if not group.symbols and not group.line_matches:
            return []
        if group.file is None or group.repository is None:
            raise MalformedResponse("file match is missing its file or repository")

        repo = group.repository.name
        rev = group.file.commit.oid
        results: List[SearchResult] = []
        for sym in group.symbols or []:
            rng = sym.location.range
            results.append(
                SymbolMatch(
                    repo=repo,
                    rev=rev,
                    file=sym.location.resource.path,
                    start=Position(rng.start.line, rng.start.character),
                    end=Position(rng.end.line, rng.end.character),
                    symbol_name=sym.name,
                    symbol_kind=sym.kind,
                    container_name=sym.container_name,
                    file_local=sym.file_local,
                )
            )
        for line_match in group.line_matches or []:
            line = line_match.line_number
            for offset, length in line_match.offset_and_lengths:
                results.append(
                    TextMatch(
                        repo=repo,
                        rev=rev,
                        file=group.file.path,
                        start=Position(line, offset),
                        end=Position(line, offset + length),
                        preview=line_match.preview,
                    )
                )
        return results
