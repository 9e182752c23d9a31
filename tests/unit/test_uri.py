import pytest

from backends.uri import FileLocation, parse_uri, serialize_uri
from core.errors import MalformedUri


class TestParseUri:
    def test_parses_repo_rev_and_path(self):
        loc = parse_uri("git://github.com/foo/bar?abc123#src/main.go")
        assert loc == FileLocation(repo="github.com/foo/bar", rev="abc123", path="src/main.go")

    def test_parts_are_returned_verbatim(self):
        loc = parse_uri("git://my%20repo?v1.0#dir/a%2Fb.py")
        assert loc.repo == "my%20repo"
        assert loc.path == "dir/a%2Fb.py"

    def test_empty_parts_are_allowed(self):
        assert parse_uri("git://?#") == FileLocation("", "", "")

    def test_path_keeps_later_hash(self):
        assert parse_uri("git://r?v#a#b").path == "a#b"

    @pytest.mark.parametrize(
        "uri",
        ["not-a-uri", "git://repo-no-separator", "git://repo?rev-no-hash", "http://r?v#p"],
    )
    def test_malformed_uri_raises(self, uri):
        with pytest.raises(MalformedUri) as exc_info:
            parse_uri(uri)
        assert uri in str(exc_info.value)

    def test_malformed_uri_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_uri("nope")


class TestSerializeUri:
    def test_format(self):
        assert serialize_uri("r", "v", "p/q.go") == "git://r?v#p/q.go"

    @pytest.mark.parametrize(
        "repo,rev,path",
        [
            ("github.com/a/b", "0123abcd", "cmd/main.go"),
            ("", "", ""),
            ("repo with spaces", "HEAD", "dir/file name.txt"),
        ],
    )
    def test_round_trip(self, repo, rev, path):
        assert parse_uri(serialize_uri(repo, rev, path)) == (repo, rev, path)
