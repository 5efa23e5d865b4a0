# -*- coding: utf-8 -*-
"""
Script Regex Patterns

Centralized regex patterns for tokenizing and validating statements.
"""

import re


class ScriptPatterns:
    """
    Collection of regex patterns for the script grammar.

    Organized by category:
    - Token shapes (words, strings, operators)
    - Value validation (names, numbers)
    - String escape handling
    """

    # =========================================================================
    # TOKEN PATTERNS
    # =========================================================================

    WHITESPACE = re.compile(r'\s+')

    # Longest operators first so '**' wins over '*'
    OPERATOR = re.compile(r'\*\*|[:=(),*]')

    # Optional raw prefix, then a quoted string with backslash escapes.
    # The string may contain newlines (multi-line strings).
    STRING = re.compile(r'''(r?)("((?:\\.|[^"\\])*)"|'((?:\\.|[^'\\])*)')''', re.DOTALL)

    # Anything up to whitespace, a quote or an operator character
    WORD = re.compile(r'''[^\s"':=(),*]+''')

    # =========================================================================
    # VALUE PATTERNS
    # =========================================================================

    # label / speaker / channel names; dotted forms allow local labels
    NAME = re.compile(r'^(?:[A-Za-z_][A-Za-z0-9_]*)?(?:\.[A-Za-z_][A-Za-z0-9_]*)*$')
    IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

    # Decimal numbers only; rejects 'nan', 'inf', hex and friends
    FLOAT = re.compile(r'^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$')

    # =========================================================================
    # STRING ESCAPES
    # =========================================================================

    # \uXXXX or a backslash followed by any single character
    ESCAPE = re.compile(r'\\(u[0-9a-fA-F]{1,4}|.)', re.DOTALL)

    # =========================================================================
    # UTILITY
    # =========================================================================

    @classmethod
    def is_name(cls, value: str) -> bool:
        """Check if value is a usable label name (plain or dotted)."""
        return bool(value) and bool(cls.NAME.match(value))

    @classmethod
    def is_identifier(cls, value: str) -> bool:
        return bool(cls.IDENTIFIER.match(value))

    @classmethod
    def is_float(cls, value: str) -> bool:
        return bool(cls.FLOAT.match(value))

    @classmethod
    def unescape(cls, body: str) -> str:
        """
        Resolve the body of a non-raw string literal.

        Whitespace runs (including newlines from multi-line strings) collapse
        to one space first, then escapes are resolved, so an explicit \\n
        survives as a newline.
        """
        body = cls.WHITESPACE.sub(' ', body)

        def _escape(match):
            char = match.group(1)
            if char == 'n':
                return '\n'
            if len(char) > 1:
                return chr(int(char[1:], 16))
            return char

        return cls.ESCAPE.sub(_escape, body)
