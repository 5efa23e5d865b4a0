# -*- coding: utf-8 -*-
"""
RenParse Models Package

Immutable data produced by the parsing pipeline: source lines, blocks,
AST nodes and diagnostics.
"""

from models.source import SourceLine, LogicalLine, Block
from models.ast_nodes import (
    AstNode, ParameterInfo, AudioModifiers,
    Define, Label, Jump, Return, Scene, Show, Hide,
    Play, Stop, GameMechanic, LLMGenerate, Say,
)
from models.diagnostics import ParseError, ParseResult

__all__ = [
    'SourceLine', 'LogicalLine', 'Block',
    'AstNode', 'ParameterInfo', 'AudioModifiers',
    'Define', 'Label', 'Jump', 'Return', 'Scene', 'Show', 'Hide',
    'Play', 'Stop', 'GameMechanic', 'LLMGenerate', 'Say',
    'ParseError', 'ParseResult',
]
