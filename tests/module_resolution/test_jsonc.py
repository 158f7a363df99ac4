"""Tests for JSON-with-comments parsing."""

import json

import pytest

from mpkg_cli.module_resolution import ParseError
from mpkg_cli.module_resolution import parse_jsonc
from mpkg_cli.module_resolution import strip_comments


@pytest.mark.parametrize(
    "text",
    [
        '{"name": "demo", "version": "1.0.0", "dependencies": {"left-pad": "^1.0"}}',
        "[1, 2.5, true, null, \"x\"]",
        '"just a string"',
        '{"nested": {"a": [1, {"b": "c"}]}}',
    ],
)
def test_comment_free_json_matches_stdlib(text):
    assert parse_jsonc(text) == json.loads(text)


def test_line_comments_removed():
    text = """{
        // project name
        "name": "demo", // trailing
        "version": "1.0.0"
    }"""
    assert parse_jsonc(text) == {"name": "demo", "version": "1.0.0"}


def test_line_comment_keeps_newline():
    assert strip_comments('1 // c\n') == "1 \n"


def test_block_comments_removed():
    text = '{/* leading */"a": /* inline */ 1 /* multi\nline */}'
    assert parse_jsonc(text) == {"a": 1}


def test_line_comment_marker_inside_string_preserved():
    assert parse_jsonc('{"note": "a // b"}') == {"note": "a // b"}


def test_block_comment_marker_inside_string_preserved():
    assert parse_jsonc('{"glob": "src/*.js", "c": "/* not a comment */"}') == {
        "glob": "src/*.js",
        "c": "/* not a comment */",
    }


def test_escaped_quote_does_not_end_string():
    text = r'{"q": "say \"hi\" // still string"} // comment'
    assert parse_jsonc(text) == {"q": 'say "hi" // still string'}


def test_escaped_backslash_before_closing_quote():
    text = r'{"path": "C:\\"} // comment'
    assert parse_jsonc(text) == {"path": "C:\\"}


def test_unterminated_block_comment_runs_to_end():
    assert strip_comments('{"a": 1} /* never closed') == '{"a": 1} '
    assert parse_jsonc('{"a": 1} /* never closed') == {"a": 1}


def test_trailing_slash_copied():
    assert strip_comments("1 /") == "1 /"


def test_single_slash_in_value_position_kept():
    assert strip_comments('{"a": 1 / 2}') == '{"a": 1 / 2}'


def test_line_comment_at_end_of_input():
    assert parse_jsonc('{"a": 1} // done') == {"a": 1}


def test_malformed_json_raises_parse_error_with_position():
    with pytest.raises(ParseError) as exc_info:
        parse_jsonc('{\n  // comment\n  "a": 1,,\n}')

    error = exc_info.value
    assert error.text == '{\n  \n  "a": 1,,\n}'
    assert error.position == error.text.index(",,") + 1
    assert error.lineno == 3
    assert error.colno is not None


def test_parse_error_message_mentions_location():
    with pytest.raises(ParseError, match="line 1"):
        parse_jsonc("{oops}")


def test_empty_after_stripping_is_error():
    with pytest.raises(ParseError):
        parse_jsonc("// nothing here")
