"""Definition and references lookups built on search."""

import logging
import posixpath
import re
from typing import List, Optional

from backends.content_fetcher import ContentFetcher
from backends.models import SearchResult
from backends.search import SearchClient
from backends.uri import parse_uri

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w+")


def word_at(text: str, line: int, character: int) -> Optional[str]:
    """Return the identifier touching a position, if any.

    Lines are numbered by "\\n" only, with a trailing "\\r" dropped.
    """
    lines = text.split("\n")
    if line < 0 or line >= len(lines):
        return None
    for match in _WORD.finditer(lines[line].rstrip("\r")):
        if match.start() <= character <= match.end():
            return match.group(0)
    return None


def _file_filter(path: str) -> str:
    ext = posixpath.splitext(path)[1]
    if not ext:
        return ""
    return f" file:{re.escape(ext)}$"


def definition_query(word: str, path: str) -> str:
    """Symbol search for an exact name in files of the same type."""
    return f"^{re.escape(word)}$ type:symbol patternType:regexp case:yes{_file_filter(path)}"


def references_query(word: str, path: str) -> str:
    """Text search for whole-word occurrences in files of the same type."""
    return f"\\b{re.escape(word)}\\b type:file patternType:regexp case:yes{_file_filter(path)}"


def dedupe(results: List[SearchResult]) -> List[SearchResult]:
    """Drop results covering an already seen range, keeping the first."""
    seen = set()
    unique = []
    for result in results:
        key = (result.repo, result.rev, result.file, result.start, result.end)
        if key in seen:
            continue
        seen.add(key)
        unique.append(result)
    return unique


class CodeIntelHandler:
    """Answers definition and references requests for a position in a file."""

    def __init__(self, search_client: SearchClient, content_fetcher: ContentFetcher) -> None:
        self.search_client = search_client
        self.content_fetcher = content_fetcher

    async def definition(self, uri: str, line: int, character: int) -> List[SearchResult]:
        return await self._lookup(uri, line, character, definition_query)

    async def references(self, uri: str, line: int, character: int) -> List[SearchResult]:
        return await self._lookup(uri, line, character, references_query)

    async def fetch_content(self, uri: str) -> str:
        """File content for a location token, or "" when it cannot be found.

        A missing file and an empty file both give "".
        """
        content = await self.content_fetcher.get_file_content(uri)
        if content is None:
            logger.info(f"File not found for {uri}")
            return ""
        return content

    async def _lookup(self, uri, line, character, build_query) -> List[SearchResult]:
        location = parse_uri(uri)
        text = await self.content_fetcher.get_file_content(uri)
        if text is None:
            logger.info(f"No content for {uri}")
            return []
        word = word_at(text, line, character)
        if not word:
            return []
        results = await self.search_client.search(build_query(word, location.path))
        return dedupe(results)
