"""Location tokens of the form git://repo?rev#path."""

from typing import NamedTuple

from core.errors import MalformedUri

SCHEME = "git://"


class FileLocation(NamedTuple):
    """A file at an exact repository revision."""

    repo: str
    rev: str
    path: str


def parse_uri(uri: str) -> FileLocation:
    """Split a location token into repository, revision and path.

    The parts are returned verbatim; no percent-decoding is applied.

    Raises:
        MalformedUri: If the scheme or either separator is missing
    """
    if not uri.startswith(SCHEME):
        raise MalformedUri(uri)
    repo_rev_path = uri[len(SCHEME):]
    repo, sep, rev_path = repo_rev_path.partition("?")
    if not sep:
        raise MalformedUri(uri)
    rev, sep, path = rev_path.partition("#")
    if not sep:
        raise MalformedUri(uri)
    return FileLocation(repo=repo, rev=rev, path=path)


def serialize_uri(repo: str, rev: str, path: str) -> str:
    """Build the location token for a file at a revision."""
    return f"{SCHEME}{repo}?{rev}#{path}"
