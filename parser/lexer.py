# -*- coding: utf-8 -*-
"""
Statement Lexer

Lazy tokenizer over the text of one logical line, with the lookahead and
block helpers the statement grammar needs.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import renparse_config as config
from renparse_enums import TokenKind
from renparse_exceptions import StatementSyntaxError
from models.source import Block
from parser.patterns import ScriptPatterns


@dataclass(frozen=True)
class Token:
    """One word, string or operator of a statement."""
    kind: TokenKind
    value: str
    column: int

    def is_word(self, value: Optional[str] = None) -> bool:
        return self.kind == TokenKind.WORD and (value is None or self.value == value)


class StatementLexer:
    """
    Cursor over one block's logical line.

    Tokens are produced on demand from the current position, so rest() can
    hand back the untokenized remainder verbatim. A lexer never outlives the
    statement it was created for; nested bodies get their own lexers.
    """

    def __init__(self, block: Block, source_name: str = config.DEFAULT_SOURCE_NAME):
        self.block = block
        self.source_name = source_name
        self.text = block.text
        self.pos = 0
        self._peeked: Optional[Tuple[int, Token, int]] = None

    @property
    def line_number(self) -> int:
        return self.block.line_number

    @property
    def children(self) -> Tuple[Block, ...]:
        """Blocks nested under this statement."""
        return self.block.children

    # =========================================================================
    # TOKENS
    # =========================================================================

    def _skip_whitespace(self, pos: int) -> int:
        match = ScriptPatterns.WHITESPACE.match(self.text, pos)
        return match.end() if match else pos

    def _scan(self, pos: int) -> Tuple[Optional[Token], int]:
        """Scan one token starting at pos. Returns (token, end position)."""
        pos = self._skip_whitespace(pos)
        if pos >= len(self.text):
            return None, pos

        match = ScriptPatterns.STRING.match(self.text, pos)
        if match:
            raw, _, double_body, single_body = match.groups()
            body = double_body if double_body is not None else single_body
            value = body if raw else ScriptPatterns.unescape(body)
            return Token(TokenKind.STRING, value, pos), match.end()

        if self.text[pos] in '"\'':
            raise self.error("unterminated string literal", pos)

        match = ScriptPatterns.OPERATOR.match(self.text, pos)
        if match:
            return Token(TokenKind.OPERATOR, match.group(), pos), match.end()

        match = ScriptPatterns.WORD.match(self.text, pos)
        return Token(TokenKind.WORD, match.group(), pos), match.end()

    def peek(self) -> Optional[Token]:
        """Return the next token without consuming it (None at end of line)."""
        if self._peeked is None or self._peeked[0] != self.pos:
            token, end = self._scan(self.pos)
            self._peeked = (self.pos, token, end)
        return self._peeked[1]

    def advance(self) -> Optional[Token]:
        """Consume and return the next token (None at end of line)."""
        token = self.peek()
        self.pos = self._peeked[2]
        return token

    def match(self, kind: TokenKind, value: Optional[str] = None) -> Optional[Token]:
        """Consume the next token if it has the given kind (and value)."""
        token = self.peek()
        if token is None or token.kind != kind:
            return None
        if value is not None and token.value != value:
            return None
        return self.advance()

    def expect(self, kind: TokenKind, value: Optional[str] = None, what: Optional[str] = None) -> Token:
        """Like match(), but a mismatch is a syntax error."""
        token = self.match(kind, value)
        if token is None:
            if what is None:
                what = f"'{value}'" if value is not None else kind.value
            raise self.error(f"expected {what}")
        return token

    def keyword(self, word: str) -> bool:
        """Consume the word if it is next."""
        return self.match(TokenKind.WORD, word) is not None

    def name(self) -> Optional[str]:
        """Consume a name (not a reserved keyword) if one is next."""
        token = self.peek()
        if token is None or not token.is_word():
            return None
        if token.value in config.KEYWORDS or not ScriptPatterns.is_name(token.value):
            return None
        self.advance()
        return token.value

    def string(self) -> Optional[str]:
        token = self.match(TokenKind.STRING)
        return token.value if token else None

    def rest(self) -> str:
        """Consume and return the remainder of the line, stripped."""
        remainder = self.text[self.pos:].strip()
        self.pos = len(self.text)
        return remainder

    # =========================================================================
    # LINE AND BLOCK CHECKS
    # =========================================================================

    def eol(self) -> bool:
        return self.peek() is None

    def expect_eol(self):
        token = self.peek()
        if token is not None:
            raise self.error(f"end of line expected, found '{token.value}'", token.column)

    def expect_block(self, stmt: str):
        if not self.children:
            raise self.error(f"{stmt} expects a non-empty block.")

    def expect_noblock(self, stmt: str):
        if self.children:
            raise self.error(
                f"{stmt} does not expect a block. "
                "Please check the indentation of the line after this one."
            )

    def checkpoint(self) -> int:
        return self.pos

    def revert(self, state: int):
        self.pos = state

    def error(self, message: str, column: Optional[int] = None) -> StatementSyntaxError:
        """Build (not raise) a syntax error located at the current position."""
        if column is None:
            column = self._skip_whitespace(self.pos)
        return StatementSyntaxError(message, line_number=self.line_number, column=column)
