"""Backend implementations for search and content fetching."""

from .content_fetcher import ContentFetcher
from .graphql import GraphQLClient
from .handler import CodeIntelHandler
from .memoize import AsyncMemoizer, memoize_async
from .models import Position, SearchResult, SymbolMatch, TextMatch, as_dict
from .search import SearchClient
from .transport import GraphQLTransport
from .uri import FileLocation, parse_uri, serialize_uri

__all__ = [
    "AsyncMemoizer",
    "memoize_async",
    "GraphQLTransport",
    "GraphQLClient",
    "SearchClient",
    "ContentFetcher",
    "CodeIntelHandler",
    "Position",
    "SearchResult",
    "SymbolMatch",
    "TextMatch",
    "as_dict",
    "FileLocation",
    "parse_uri",
    "serialize_uri",
]
