# -*- coding: utf-8 -*-
"""
RenParse Parser Package

Pipeline for visual-novel scripts:
physical lines -> logical lines -> blocks -> tokens -> AST + errors.
"""

from parser.patterns import ScriptPatterns
from parser.logical_lines import (
    LogicalLineAssembler,
    assemble_logical_lines,
    decode_source,
    split_source_lines,
)
from parser.blocks import BlockGrouper, group_logical_lines
from parser.lexer import StatementLexer, Token
from parser.statements import StatementParser, parse_blocks
from parser.core import parse_script, parse_file, elide_path

__all__ = [
    'ScriptPatterns',
    'LogicalLineAssembler',
    'assemble_logical_lines',
    'decode_source',
    'split_source_lines',
    'BlockGrouper',
    'group_logical_lines',
    'StatementLexer',
    'Token',
    'StatementParser',
    'parse_blocks',
    'parse_script',
    'parse_file',
    'elide_path',
]
