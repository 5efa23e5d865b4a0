# -*- coding: utf-8 -*-
"""
Unit Tests for the Logical Line Assembler

Comments, continuation, strings, tabs and input decoding.
"""

import pytest

from models.source import LogicalLine, SourceLine
from parser.logical_lines import assemble_logical_lines, decode_source, split_source_lines
from renparse_enums import ErrorKind
from renparse_exceptions import ScriptEncodingError


def _assemble(text, **kwargs):
    return assemble_logical_lines(text, "test.rpy", **kwargs)


class TestBasicAssembly:
    """Plain statements, comments and blank lines."""

    def test_one_logical_line_per_statement(self):
        lines, errors = _assemble('label a:\n    jump b\n')

        assert errors == []
        assert lines == [
            LogicalLine(1, 0, 'label a:'),
            LogicalLine(2, 4, 'jump b'),
        ]

    def test_comments_and_blank_lines_are_dropped_but_counted(self):
        text = '# header\n\n   # indented comment\nshow x  # trailing\n'
        lines, errors = _assemble(text)

        assert errors == []
        assert lines == [LogicalLine(4, 0, 'show x')]

    def test_hash_inside_string_is_not_a_comment(self):
        lines, _ = _assemble('e "colour #ffffff" # real comment\n')
        assert lines[0].text == 'e "colour #ffffff"'

    def test_last_line_without_newline(self):
        lines, errors = _assemble('return')
        assert errors == []
        assert lines == [LogicalLine(1, 0, 'return')]

    def test_opens_block(self):
        lines, _ = _assemble('label a:\nshow b\n')
        assert lines[0].opens_block
        assert not lines[1].opens_block


class TestContinuation:
    """Backslash, bracket and multi-line string continuation."""

    def test_trailing_backslash_joins_lines(self):
        lines, errors = _assemble('show eileen \\\n    happy\nreturn\n')

        assert errors == []
        assert lines[0] == LogicalLine(1, 0, 'show eileen \n    happy')
        assert lines[1] == LogicalLine(3, 0, 'return')

    def test_open_bracket_continues(self):
        text = 'define x = [\n    1,  # first\n    2]\nreturn\n'
        lines, errors = _assemble(text)

        assert errors == []
        assert lines[0].line_number == 1
        assert lines[0].text == 'define x = [\n    1,  \n    2]'
        assert lines[1] == LogicalLine(4, 0, 'return')

    def test_multiline_string(self):
        lines, errors = _assemble('e "first\nsecond"\nreturn\n')

        assert errors == []
        assert lines[0] == LogicalLine(1, 0, 'e "first\nsecond"')
        assert lines[1].line_number == 3

    def test_escaped_quote_does_not_close_string(self):
        lines, errors = _assemble('e "say \\"hi\\""\nreturn\n')

        assert errors == []
        assert len(lines) == 2
        assert lines[0].text == 'e "say \\"hi\\""'

    def test_single_quote_inside_double_quoted_string(self):
        lines, errors = _assemble('"I\'ve always loved visual novels"\n')
        assert errors == []
        assert len(lines) == 1

    def test_stray_closer_is_ignored(self):
        lines, errors = _assemble('show x)\nreturn\n')
        assert errors == []
        assert [l.text for l in lines] == ['show x)', 'return']


class TestRecovery:
    """Unterminated strings and unbalanced brackets."""

    def test_unterminated_string_reported_where_it_opened(self):
        text = 'label a:\n    e "oops\n    return\n'
        lines, errors = _assemble(text)

        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.UNTERMINATED_STRING
        assert errors[0].line == 2
        assert lines == [
            LogicalLine(1, 0, 'label a:'),
            LogicalLine(3, 4, 'return'),
        ]

    def test_unbalanced_bracket_at_end_of_file(self):
        lines, errors = _assemble('define x = (1,\nshow y\n')

        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.UNBALANCED_BRACKET
        assert errors[0].line == 1
        assert lines == [LogicalLine(2, 0, 'show y')]

    def test_error_carries_source_name(self):
        _, errors = _assemble('e "oops\n')
        assert errors[0].filename == "test.rpy"


class TestTabs:
    """Tab policy for indentation."""

    def test_reject_policy_drops_line(self):
        lines, errors = _assemble('label a:\n\tjump b\n    return\n', tab_policy='reject')

        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.TAB_CHARACTER
        assert errors[0].line == 2
        assert lines == [
            LogicalLine(1, 0, 'label a:'),
            LogicalLine(3, 4, 'return'),
        ]

    def test_expand_policy_uses_tab_width(self):
        lines, errors = _assemble('label a:\n\tjump b\n', tab_policy='expand', tab_width=4)

        assert errors == []
        assert lines[1] == LogicalLine(2, 4, 'jump b')

    def test_expand_mixed_spaces_and_tabs(self):
        lines, _ = _assemble('label a:\n \tjump b\n', tab_policy='expand', tab_width=8)
        assert lines[1].indent == 8

    def test_tab_after_indentation_is_whitespace(self):
        lines, errors = _assemble('show\teileen\n', tab_policy='reject')
        assert errors == []
        assert lines[0].text == 'show\teileen'

    def test_whitespace_only_line_with_tab_is_blank(self):
        lines, errors = _assemble('return\n\t\nreturn\n')
        assert errors == []
        assert len(lines) == 2


class TestDecoding:
    """Input decoding and newline normalisation."""

    def test_bom_and_crlf(self):
        lines, errors = _assemble('\ufefflabel a:\r\n    return\r\n')

        assert errors == []
        assert lines == [
            LogicalLine(1, 0, 'label a:'),
            LogicalLine(2, 4, 'return'),
        ]

    def test_utf8_bytes(self):
        lines, _ = _assemble('e "héllo"\n'.encode('utf-8'))
        assert lines[0].text == 'e "héllo"'

    def test_invalid_utf8_is_fatal(self):
        with pytest.raises(ScriptEncodingError) as exc_info:
            decode_source(b'show x\n\xff\xfe', "bad.rpy")
        assert exc_info.value.source_name == "bad.rpy"

    def test_nul_is_fatal(self):
        with pytest.raises(ScriptEncodingError):
            _assemble('show x\x00\n')

    def test_split_source_lines(self):
        assert split_source_lines('a\n\nb\n') == [
            SourceLine(1, 'a'),
            SourceLine(2, ''),
            SourceLine(3, 'b'),
        ]
