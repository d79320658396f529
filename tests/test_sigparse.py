"""Tests for textual signature parsing."""

from __future__ import annotations

import pytest

from pylinkgen.bindgen.sigparse import (
    parse_signature,
    param_name,
    split_top_level,
    strip_parens,
)


def names(parsed):
    return [p.name for p in parsed.params]


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

class TestMarkers:
    def test_positional_only_marker(self):
        parsed = parse_signature("(a, b, /)")
        assert names(parsed) == ["a", "b"]
        assert not parsed.variadic
        assert all(p.positional_only for p in parsed.params)

    def test_positional_only_marker_affects_only_preceding(self):
        parsed = parse_signature("(a, /, b)")
        assert names(parsed) == ["a", "b"]
        assert parsed.params[0].positional_only
        assert not parsed.params[1].positional_only

    def test_bare_star_drops_keyword_only(self):
        parsed = parse_signature("(a, *, b)")
        assert names(parsed) == ["a"]
        assert not parsed.variadic
        assert parsed.dropped == ("b",)

    def test_escaped_star(self):
        parsed = parse_signature(r"(a, \*, b=1)")
        assert names(parsed) == ["a"]
        assert parsed.dropped == ("b",)

    def test_var_positional_terminates(self):
        parsed = parse_signature("(a, *args, b, c)")
        assert names(parsed) == ["a", "args"]
        assert parsed.variadic
        assert parsed.params[1].variadic_positional
        assert [p.name for p in parsed.ordinary] == ["a"]

    def test_escaped_var_positional(self):
        parsed = parse_signature(r"(x, \*args)")
        assert parsed.variadic
        assert [p.name for p in parsed.ordinary] == ["x"]

    def test_var_keyword_dropped(self):
        parsed = parse_signature("(a, **kw)")
        assert names(parsed) == ["a"]
        assert not parsed.variadic
        assert parsed.dropped == ("**kw",)

    def test_full_notation(self):
        parsed = parse_signature("(a, b, /, *, c=None, **kw)")
        assert names(parsed) == ["a", "b"]
        assert not parsed.variadic
        assert parsed.dropped == ("c", "**kw")

    @pytest.mark.parametrize("sig", [
        "(a, b, /)", "(/, a)", "(a, /, *, b)", "(x, /, *args)", "(a, b, /, c, /)",
    ])
    def test_slash_never_becomes_parameter(self, sig):
        assert "/" not in names(parse_signature(sig))


# ---------------------------------------------------------------------------
# Empty and malformed input
# ---------------------------------------------------------------------------

class TestEdgeCases:
    @pytest.mark.parametrize("sig", [None, "", "   ", "()", "( )"])
    def test_empty(self, sig):
        parsed = parse_signature(sig)
        assert parsed.params == ()
        assert not parsed.variadic

    def test_defaults_and_annotations_stripped(self):
        parsed = parse_signature("(x: int = 3, y: Dict[str, int] = {'a': 1, 'b': 2}, z='a,b')")
        assert names(parsed) == ["x", "y", "z"]

    def test_return_annotation_ignored(self):
        parsed = parse_signature("(a, b) -> Tuple[int, int]")
        assert names(parsed) == ["a", "b"]

    def test_malformed_token_is_ordinary_name(self):
        parsed = parse_signature("(a, , b)")
        assert names(parsed) == ["a", "", "b"]

    def test_trailing_comma(self):
        assert names(parse_signature("(a, b,)")) == ["a", "b"]

    def test_unbalanced_parenthesis(self):
        assert names(parse_signature("(a, b")) == ["a", "b"]

    def test_without_parentheses(self):
        assert names(parse_signature("a, b=2")) == ["a", "b"]


class TestHelpers:
    def test_split_top_level_respects_nesting(self):
        assert split_top_level("a, f(b, c), [d, e], 'x, y'") == ["a", " f(b, c)", " [d, e]", " 'x, y'"]

    def test_strip_parens(self):
        assert strip_parens("(a, (b, c)) -> int") == "a, (b, c)"

    def test_param_name(self):
        assert param_name(" x: Optional[int] = None ") == "x"
        assert param_name(r"\*\*kwargs") == "**kwargs"
