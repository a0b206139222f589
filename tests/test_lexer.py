"""Tests for the settings file lexer."""

import io

import pytest

from termcfg.lib.lexer import ConfigEntry, SettingsLexer, iter_entries, parse


def lex(text, **kwargs):
    """Lex text, returning (entries, errors)."""
    errors = []

    def on_error(line, message):
        errors.append((line, message))
        return kwargs.get("abort", False)

    entries = list(iter_entries(text, on_error=on_error))
    return entries, errors


# =============================================================================
# Plain entries
# =============================================================================


class TestPlainEntries:
    def test_single_entry(self):
        entries, errors = lex("rows = 24\n")
        assert entries == [ConfigEntry("rows", "24", 1)]
        assert errors == []

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("term = xterm-256color", "xterm-256color"),
            ("title=Wayst", "Wayst"),
            ("title   =   My  Terminal   ", "My  Terminal"),
            ("title =\tTabbed\t", "Tabbed"),
            ("font = Noto Sans Mono", "Noto Sans Mono"),
            ("expr = a=b", "a=b"),
        ],
    )
    def test_value_is_trimmed_middle_text(self, line, expected):
        entries, errors = lex(line + "\n")
        assert len(entries) == 1
        assert entries[0].value == expected
        assert errors == []

    def test_entries_keep_file_order_and_lines(self):
        text = "a = 1\n\nb = 2\n# comment\nc = 3\n"
        entries, _ = lex(text)
        assert entries == [
            ConfigEntry("a", "1", 1),
            ConfigEntry("b", "2", 3),
            ConfigEntry("c", "3", 5),
        ]

    def test_whitespace_never_enters_key(self):
        entries, _ = lex("  font size  = 10\n")
        assert entries[0].key == "fontsize"

    def test_empty_value(self):
        entries, _ = lex("title =\n")
        assert entries == [ConfigEntry("title", "", 1)]

    def test_empty_value_at_end_of_file(self):
        entries, _ = lex("title =")
        assert entries == [ConfigEntry("title", "", 1)]

    def test_crlf_line_endings(self):
        entries, _ = lex("a = 1\r\nb = 2\r\n")
        assert entries == [ConfigEntry("a", "1", 1), ConfigEntry("b", "2", 2)]


class TestFlagKeys:
    def test_flag_key_has_no_value(self):
        entries, _ = lex("no-flash\n")
        assert entries == [ConfigEntry("no-flash", None, 1)]

    def test_flag_key_line_number(self):
        entries, _ = lex("\n\nxorg-only\n")
        assert entries == [ConfigEntry("xorg-only", None, 3)]

    def test_flag_key_with_trailing_comment(self):
        entries, _ = lex("no-flash # disable bell\n")
        assert entries == [ConfigEntry("no-flash", None, 1)]

    def test_flag_key_at_end_of_file(self):
        entries, _ = lex("rows = 1\nno-flash")
        assert entries[-1] == ConfigEntry("no-flash", None, 2)


# =============================================================================
# Comments and quoting
# =============================================================================


class TestComments:
    def test_full_line_comment(self):
        entries, _ = lex("# rows = 99\nrows = 1\n")
        assert entries == [ConfigEntry("rows", "1", 2)]

    def test_trailing_comment_after_value(self):
        entries, _ = lex("rows = 30 # thirty\n")
        assert entries == [ConfigEntry("rows", "30", 1)]

    def test_quote_inside_comment_is_ignored(self):
        entries, errors = lex('rows = 30 # "quoted"\n')
        assert entries == [ConfigEntry("rows", "30", 1)]
        assert errors == []


class TestQuoting:
    def test_comment_marker_inert_inside_quotes(self):
        entries, errors = lex('key = "hello # not a comment"\n')
        assert entries[0].value == "hello # not a comment"
        assert errors == []

    def test_quotes_preserve_blanks(self):
        entries, _ = lex('title = "  padded  "\n')
        assert entries[0].value == "  padded  "

    def test_escaped_quote_inside_string(self):
        entries, errors = lex('title = "say \\"hi\\""\n')
        assert entries[0].value == 'say "hi"'
        assert errors == []

    def test_newline_escape(self):
        entries, _ = lex("title = two\\nlines\n")
        assert entries[0].value == "two\nlines"

    def test_quoted_brackets_are_escaped_for_lists(self):
        entries, _ = lex('title = "[x]"\n')
        assert entries[0].value == "\\[x\\]"

    def test_text_before_quote_is_an_error(self):
        entries, errors = lex('title = abc "def"\n')
        assert errors == [(1, "unexpected token 'abc' before '\"'")]
        assert entries[0].value == "def"

    def test_unterminated_quote_before_end_of_line(self):
        entries, errors = lex('title = "open\nrows = 2\n')
        assert entries == [
            ConfigEntry("title", "open", 1),
            ConfigEntry("rows", "2", 2),
        ]
        assert errors == [(1, "'\"' expected before end of line")]

    def test_unterminated_quote_at_eof_reports_once(self):
        entries, errors = lex('rows = 1\ntitle = "open')
        assert len(errors) == 1
        assert errors[0] == (2, "'\"' expected before end of file")
        assert entries[0] == ConfigEntry("rows", "1", 1)
        assert entries[1] == ConfigEntry("title", "open", 2)

    def test_invalid_escape(self):
        entries, errors = lex("title = a\\qb\n")
        assert errors == [(1, "escape character 'q' invalid in this context")]
        assert entries[0].value == "ab"


# =============================================================================
# Lists
# =============================================================================


class TestLists:
    def test_inline_list_kept_verbatim(self):
        entries, errors = lex("font = [a, b, c]\n")
        assert entries[0].value == "[a, b, c]"
        assert errors == []

    def test_multi_line_list(self):
        entries, errors = lex("font = [\n  a,\n  b\n]\nrows = 1\n")
        assert entries[0].key == "font"
        assert entries[0].line == 1
        assert entries[0].value.replace(" ", "") == "[a,b]"
        assert entries[1] == ConfigEntry("rows", "1", 5)
        assert errors == []

    def test_escapes_kept_inside_list(self):
        entries, errors = lex("font = [a\\,b, c]\n")
        assert entries[0].value == "[a\\,b, c]"
        assert errors == []

    def test_quotes_kept_inside_list(self):
        entries, _ = lex('font = ["a, b", c]\n')
        assert entries[0].value == '["a, b", c]'

    def test_nested_list_is_an_error(self):
        _, errors = lex("font = [a, [b]]\n")
        assert errors[0] == (1, "list element cannot be a list, did you mean '\\[' ?")

    def test_closing_bracket_without_list(self):
        _, errors = lex("font = a]\n")
        assert errors == [(1, "'[' expected before ']' did you mean '\\]' ?")]

    def test_unterminated_list_at_eof(self):
        entries, errors = lex("font = [a, b\n")
        assert errors == [(2, "']' expected before end of file")]
        assert entries == [ConfigEntry("font", "[a, b", 1)]


# =============================================================================
# Abort and callback surface
# =============================================================================


class TestAbort:
    def test_abort_stops_further_entries(self):
        text = 'a = 1\nb = x "y"\nc = 3\n'
        entries, errors = lex(text, abort=True)
        assert entries == [ConfigEntry("a", "1", 1)]
        assert len(errors) == 1

    def test_entry_emitted_before_end_of_line_error_survives_abort(self):
        entries, errors = lex('a = "open\nb = 2\n', abort=True)
        assert entries == [ConfigEntry("a", "open", 1)]
        assert len(errors) == 1

    def test_parse_reports_abort(self):
        seen = []
        ok = parse(
            'a = 1\nb = x "y"\n',
            lambda key, value, line: seen.append(key),
            lambda line, message: True,
        )
        assert ok is False
        assert seen == ["a"]

    def test_parse_without_errors(self):
        seen = []
        ok = parse("a = 1\nflag\n", lambda *entry: seen.append(entry))
        assert ok is True
        assert seen == [("a", "1", 1), ("flag", None, 2)]

    def test_errors_without_callback_are_logged(self, caplog):
        entries = list(iter_entries('title = "open'))
        assert entries == [ConfigEntry("title", "open", 1)]
        assert "expected before end of file" in caplog.text


# =============================================================================
# Sources
# =============================================================================


class TestSources:
    def test_bytes_source(self):
        entries = list(iter_entries("title = Café\n".encode("utf-8")))
        assert entries[0].value == "Café"

    def test_binary_stream_source(self):
        stream = io.BytesIO(b"rows = 10\ncolumns = 20\n")
        entries = list(iter_entries(stream))
        assert [e.key for e in entries] == ["rows", "columns"]

    def test_text_stream_source(self):
        stream = io.StringIO("rows = 10\n")
        assert list(iter_entries(stream)) == [ConfigEntry("rows", "10", 1)]

    def test_path_source(self, tmp_path):
        cfg = tmp_path / "config"
        cfg.write_text("font-size = 12\n")
        assert list(iter_entries(cfg)) == [ConfigEntry("font-size", "12", 1)]

    def test_multibyte_character_split_across_chunks(self, monkeypatch):
        import termcfg.lib.lexer as lexer_module

        monkeypatch.setattr(lexer_module, "CHUNK_SIZE", 1)
        stream = io.BytesIO("title = été\n".encode("utf-8"))
        entries = list(iter_entries(stream))
        assert entries[0].value == "été"

    def test_lexer_instance_is_reusable(self):
        lexer = SettingsLexer()
        first = list(lexer.entries("a = 1\n"))
        second = list(lexer.entries("b = 2\n"))
        assert first == [ConfigEntry("a", "1", 1)]
        assert second == [ConfigEntry("b", "2", 1)]
