# -*- coding: utf-8 -*-
"""
Logical Line Assembler

Turns raw script text into logical lines: strips comments, joins lines
continued by a trailing backslash, an open bracket or a multi-line string,
and measures the indentation of each statement.
"""

from typing import List, Optional, Tuple, Union

import renparse_config as config
from renparse_enums import ErrorKind, TabPolicy
from renparse_exceptions import ScriptEncodingError
from renparse_logger import get_logger
from models.source import SourceLine, LogicalLine
from models.diagnostics import ParseError

logger = get_logger("parser.logical_lines")

OPENERS = '([{'
CLOSERS = ')]}'
QUOTES = '"\''


def decode_source(data: Union[str, bytes], source_name: str = config.DEFAULT_SOURCE_NAME) -> str:
    """
    Return the script as text with a normalised newline convention.

    Args:
        data: Script contents, either already decoded or raw UTF-8 bytes
        source_name: Name used in the error message

    Returns:
        Text without BOM, using '\\n' line endings

    Raises:
        ScriptEncodingError: if bytes are not UTF-8 or the text contains NUL
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode('utf-8')
        except UnicodeDecodeError as e:
            raise ScriptEncodingError(
                f"{source_name} is not valid UTF-8 text",
                source_name=source_name,
                position=e.start,
            ) from e
    else:
        text = data

    nul = text.find('\x00')
    if nul != -1:
        raise ScriptEncodingError(
            f"{source_name} contains NUL characters (binary data?)",
            source_name=source_name,
            position=nul,
        )

    if text.startswith('\ufeff'):
        text = text[1:]

    return text.replace('\r\n', '\n').replace('\r', '\n')


def split_source_lines(text: str) -> List[SourceLine]:
    """Split decoded text into numbered physical lines."""
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return [SourceLine(number=i, text=line) for i, line in enumerate(lines, start=1)]


class LogicalLineAssembler:
    """
    Assembles physical lines into logical lines.

    One instance per parse; all state lives in local variables of assemble()
    except the error list.
    """

    def __init__(
        self,
        source_name: str = config.DEFAULT_SOURCE_NAME,
        tab_policy: Optional[str] = None,
        tab_width: Optional[int] = None,
    ):
        self.source_name = source_name
        self.tab_policy = TabPolicy(tab_policy or config.TAB_POLICY)
        self.tab_width = tab_width or config.TAB_WIDTH
        self.errors: List[ParseError] = []

    def _error(self, line: int, message: str, kind: ErrorKind, text: str = None, column: int = None):
        self.errors.append(ParseError(
            line=line,
            message=message,
            kind=kind,
            filename=self.source_name,
            text=text,
            column=column,
        ))

    def _measure_indent(self, physical: SourceLine) -> Tuple[int, int, bool]:
        """
        Measure the indentation of a statement's first physical line.

        Returns:
            Tuple of (indent in columns, characters consumed, contains tab)
        """
        stripped = physical.text.lstrip(' \t')
        leading = physical.text[:len(physical.text) - len(stripped)]
        has_tab = '\t' in leading
        if has_tab and self.tab_policy == TabPolicy.EXPAND:
            return len(leading.expandtabs(self.tab_width)), len(leading), True
        return len(leading), len(leading), has_tab

    def assemble(self, lines: List[SourceLine]) -> List[LogicalLine]:
        """
        Build logical lines from physical lines.

        Args:
            lines: Physical lines, in order

        Returns:
            Logical lines; problems are collected on self.errors
        """
        result: List[LogicalLine] = []
        index = 0

        while index < len(lines):
            first = lines[index]
            indent, skip, has_tab = self._measure_indent(first)

            parts: List[str] = []
            depth = 0
            bracket_line = None   # line of the outermost unclosed bracket
            delim = None          # quote character of the open string
            string_line = None
            escape = False
            current = index
            column = skip
            resume = None         # set when the statement is abandoned

            while True:
                text = lines[current].text
                continued = False

                while column < len(text):
                    c = text[column]

                    if delim is not None:
                        parts.append(c)
                        if escape:
                            escape = False
                        elif c == '\\':
                            escape = True
                        elif c == delim:
                            delim = None
                        column += 1
                        continue

                    if c == '#':
                        break

                    if c == '\\' and column == len(text) - 1:
                        continued = True
                        break

                    if c in QUOTES:
                        delim = c
                        string_line = lines[current].number
                        escape = False
                    elif c in OPENERS:
                        if depth == 0:
                            bracket_line = lines[current].number
                        depth += 1
                    elif c in CLOSERS and depth > 0:
                        depth -= 1

                    parts.append(c)
                    column += 1

                if delim is None and depth == 0 and not continued:
                    break

                if current + 1 >= len(lines):
                    if delim is not None:
                        self._error(string_line, "unterminated string literal",
                                    ErrorKind.UNTERMINATED_STRING, text=lines[string_line - 1].text)
                        resume = string_line
                    elif depth > 0:
                        self._error(bracket_line, "unbalanced bracket: opened but never closed",
                                    ErrorKind.UNBALANCED_BRACKET, text=lines[bracket_line - 1].text)
                        resume = first.number
                    break

                # an escape pending at end of line consumes the newline
                escape = False
                parts.append('\n')
                current += 1
                column = 0

            if resume is not None:
                # Physical line numbers are 1-based, so the next line's index is the number itself
                index = max(resume, index + 1)
                continue

            index = current + 1
            statement = ''.join(parts).rstrip()
            if not statement.strip():
                continue

            if has_tab and self.tab_policy == TabPolicy.REJECT:
                self._error(first.number, "tab characters are not allowed in indentation",
                            ErrorKind.TAB_CHARACTER, text=first.text, column=first.text.index('\t'))
                continue

            result.append(LogicalLine(line_number=first.number, indent=indent, text=statement))

        logger.debug(f"{self.source_name}: {len(lines)} physical lines -> {len(result)} logical lines, "
                     f"{len(self.errors)} errors")
        return result


def assemble_logical_lines(
    text: Union[str, bytes],
    source_name: str = config.DEFAULT_SOURCE_NAME,
    tab_policy: Optional[str] = None,
    tab_width: Optional[int] = None,
) -> Tuple[List[LogicalLine], List[ParseError]]:
    """
    Decode text and assemble it into logical lines.

    Returns:
        Tuple of (logical lines, recoverable errors)

    Raises:
        ScriptEncodingError: if the input is not text
    """
    physical = split_source_lines(decode_source(text, source_name))
    assembler = LogicalLineAssembler(source_name, tab_policy, tab_width)
    lines = assembler.assemble(physical)
    return lines, assembler.errors
