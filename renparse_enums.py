# -*- coding: utf-8 -*-
"""
RenParse Enum Definitions

Type-safe enums for tokens, diagnostics and AST node kinds.
"""

from enum import Enum


class TokenKind(str, Enum):
    """Token kinds produced by the statement lexer"""
    WORD = 'word'
    STRING = 'string'
    OPERATOR = 'operator'


class ErrorKind(str, Enum):
    """Recoverable diagnostic categories"""
    INDENTATION = 'indentation_error'
    UNTERMINATED_STRING = 'unterminated_string'
    UNBALANCED_BRACKET = 'unbalanced_bracket'
    TAB_CHARACTER = 'tab_character'
    SYNTAX = 'syntax_error'
    INVALID_NUMBER = 'invalid_number'


class NodeKind(str, Enum):
    """AST statement kinds"""
    DEFINE = 'define'
    LABEL = 'label'
    JUMP = 'jump'
    RETURN = 'return'
    SCENE = 'scene'
    SHOW = 'show'
    HIDE = 'hide'
    PLAY = 'play'
    STOP = 'stop'
    GAME_MECHANIC = 'game_mechanic'
    LLM_GENERATE = 'llm_generate'
    SAY = 'say'


class TabPolicy(str, Enum):
    """How tabs in indentation are treated"""
    REJECT = 'reject'
    EXPAND = 'expand'
