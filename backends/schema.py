"""Typed views of the GraphQL responses the backends consume."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PositionNode(_Node):
    line: int = Field(..., ge=0)
    character: int = Field(..., ge=0)


class RangeNode(_Node):
    start: PositionNode
    end: PositionNode


class ResourceNode(_Node):
    path: str


class LocationNode(_Node):
    resource: ResourceNode
    range: RangeNode


class SymbolNode(_Node):
    name: str
    container_name: Optional[str] = Field(None, alias="containerName")
    kind: str
    file_local: Optional[bool] = Field(None, alias="fileLocal")
    location: LocationNode


class LineMatchNode(_Node):
    preview: str
    line_number: int = Field(..., alias="lineNumber", ge=0)
    offset_and_lengths: List[Tuple[int, int]] = Field(..., alias="offsetAndLengths")


class CommitNode(_Node):
    oid: str


class FileNode(_Node):
    path: str
    commit: CommitNode


class RepositoryNode(_Node):
    name: str


class FileMatchNode(_Node):
    """One match group. Non-file results decode with every field unset."""

    file: Optional[FileNode] = None
    repository: Optional[RepositoryNode] = None
    symbols: Optional[List[SymbolNode]] = None
    line_matches: Optional[List[LineMatchNode]] = Field(None, alias="lineMatches")


class SearchResultsNode(_Node):
    limit_hit: Optional[bool] = Field(None, alias="limitHit")
    results: List[FileMatchNode]


class SearchNode(_Node):
    results: SearchResultsNode


class SearchData(_Node):
    search: SearchNode


class SearchResponse(_Node):
    data: SearchData


class FileContentNode(_Node):
    content: Optional[str] = None


class FileCommitNode(_Node):
    file: Optional[FileContentNode] = None


class FileRepositoryNode(_Node):
    commit: Optional[FileCommitNode] = None


class FileContentData(_Node):
    repository: Optional[FileRepositoryNode] = None


class FileContentResponse(_Node):
    data: Optional[FileContentData] = None
