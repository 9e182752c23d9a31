from backends.models import Position, SymbolMatch, TextMatch, as_dict


def test_symbol_match_as_dict():
    result = SymbolMatch("r", "abc", "a.go", Position(1, 2), Position(1, 5), "Foo", "function")

    assert as_dict(result) == {
        "repo": "r",
        "rev": "abc",
        "file": "a.go",
        "start": {"line": 1, "character": 2},
        "end": {"line": 1, "character": 5},
        "symbol_name": "Foo",
        "symbol_kind": "function",
        "container_name": None,
        "file_local": None,
        "kind": "symbol",
        "uri": "git://r?abc#a.go",
    }


def test_text_match_as_dict_has_no_symbol_fields():
    data = as_dict(TextMatch("r", "abc", "x.py", Position(4, 0), Position(4, 2), "ab"))

    assert data["kind"] == "text"
    assert data["preview"] == "ab"
    assert "symbol_name" not in data
