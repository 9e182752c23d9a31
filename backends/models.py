"""Backend models for search results."""

from dataclasses import asdict, dataclass
from typing import Optional, Union

from backends.uri import serialize_uri


@dataclass(frozen=True)
class Position:
    """Zero-based line and character offset in a file."""

    line: int
    character: int


@dataclass(frozen=True)
class SymbolMatch:
    """A search hit on a named symbol."""

    repo: str
    rev: str
    file: str
    start: Position
    end: Position
    symbol_name: str
    symbol_kind: str
    container_name: Optional[str] = None
    file_local: Optional[bool] = None

    kind = "symbol"

    @property
    def uri(self) -> str:
        return serialize_uri(self.repo, self.rev, self.file)


@dataclass(frozen=True)
class TextMatch:
    """A search hit on a substring of a line."""

    repo: str
    rev: str
    file: str
    start: Position
    end: Position
    preview: str

    kind = "text"

    @property
    def uri(self) -> str:
        return serialize_uri(self.repo, self.rev, self.file)


SearchResult = Union[SymbolMatch, TextMatch]


def as_dict(result: SearchResult) -> dict:
    """Plain JSON-ready form of a result, tagged with its kind and uri."""
    data = asdict(result)
    data["kind"] = result.kind
    data["uri"] = result.uri
    return data
