# -*- coding: utf-8 -*-
"""
Statement Parser

Recursive-descent grammar over blocks. Each statement is parsed by the rule
its first word selects; a rule that fails raises StatementSyntaxError, which
is recorded as a ParseError and the statement (with its nested block) is
skipped so the next sibling can still be parsed.
"""

import math
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

import renparse_config as config
from renparse_enums import ErrorKind, TokenKind
from renparse_exceptions import StatementSyntaxError
from renparse_logger import get_logger
from models.source import Block
from models.ast_nodes import (
    AstNode, AudioModifiers, ParameterInfo,
    Define, Label, Jump, Return, Scene, Show, Hide,
    Play, Stop, GameMechanic, LLMGenerate, Say,
)
from models.diagnostics import ParseError
from parser.lexer import StatementLexer
from parser.patterns import ScriptPatterns

logger = get_logger("parser.statements")

# words that may follow the fadein numeral of a play statement
PLAY_CLAUSES = frozenset({'loop', 'noloop', 'fadein'})


class StatementParser:
    """
    Parses blocks into AST nodes, collecting errors instead of aborting.

    Usage:
        parser = StatementParser("script.rpy")
        nodes = parser.parse_block(root.children)
        errors = parser.errors
    """

    # keyword -> rule; adding a statement means adding an entry and a node class
    RULES: Dict[str, str] = {
        'define': '_parse_define',
        'label': '_parse_label',
        'jump': '_parse_jump',
        'return': '_parse_return',
        'scene': '_parse_scene',
        'show': '_parse_show',
        'hide': '_parse_hide',
        'play': '_parse_play',
        'stop': '_parse_stop',
        'game_mechanic': '_parse_game_mechanic',
        'llm_generate': '_parse_llm_generate',
    }

    def __init__(self, source_name: str = config.DEFAULT_SOURCE_NAME):
        self.source_name = source_name
        self.errors: List[ParseError] = []
        self._depth = 0

    # =========================================================================
    # DRIVER
    # =========================================================================

    def parse_block(self, blocks: Sequence[Block]) -> List[AstNode]:
        """
        Parse sibling blocks in order, skipping the ones that fail.

        Blocks nested deeper than config.MAX_NESTING are reported once and
        skipped with everything under them.
        """
        if blocks and self._depth >= config.MAX_NESTING:
            self._record(blocks[0], f"too deeply nested (more than {config.MAX_NESTING} levels)",
                         ErrorKind.SYNTAX)
            logger.debug(f"{self.source_name}:{blocks[0].line_number}: skipped block past nesting limit")
            return []

        self._depth += 1
        try:
            nodes = []
            for block in blocks:
                node = self.parse_statement(block)
                if node is not None:
                    nodes.append(node)
            return nodes
        finally:
            self._depth -= 1

    def parse_statement(self, block: Block) -> Optional[AstNode]:
        """
        Parse one block into a node.

        Returns:
            The node, or None if the statement was malformed (the error is
            recorded and the block's children are not parsed)
        """
        lexer = StatementLexer(block, self.source_name)
        try:
            return self._dispatch(lexer)
        except StatementSyntaxError as e:
            self._record(block, e.message, ErrorKind.SYNTAX, e.column)
            if block.children:
                logger.debug(f"{self.source_name}:{block.line_number}: skipped statement "
                             f"and {sum(1 for _ in block.walk())} nested lines")
            return None

    def _dispatch(self, lexer: StatementLexer) -> AstNode:
        first = lexer.peek()

        if first is not None and first.is_word() and first.value in self.RULES:
            lexer.advance()
            rule: Callable[[StatementLexer], AstNode] = getattr(self, self.RULES[first.value])
            return rule(lexer)

        node = self._parse_say(lexer)
        if node is not None:
            return node

        raise lexer.error("could not parse statement", 0)

    def _record(self, block: Block, message: str, kind: ErrorKind, column: Optional[int] = None):
        self.errors.append(ParseError(
            line=block.line_number,
            message=message,
            kind=kind,
            filename=self.source_name,
            text=block.text,
            column=column,
        ))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _number(self, lexer: StatementLexer, clause: str, follow: FrozenSet[str] = frozenset()) -> Optional[float]:
        """
        Parse the numeral following a clause keyword.

        A missing, malformed or non-finite numeral is recorded as
        invalid_number and yields None; the statement itself is still
        produced. The bad token is consumed unless it is one of the
        follow words, which the caller parses next.
        """
        token = lexer.peek()
        if token is not None and token.is_word() and ScriptPatterns.is_float(token.value):
            value = float(token.value)
            if math.isfinite(value):
                lexer.advance()
                return value

        column = None
        if token is not None and not (token.is_word() and token.value in follow):
            lexer.advance()
            column = token.column
        self._record(lexer.block, f"invalid number after '{clause}'", ErrorKind.INVALID_NUMBER, column)
        return None

    def _channel(self, lexer: StatementLexer) -> str:
        token = lexer.peek()
        if token is None or not token.is_word() or not ScriptPatterns.is_identifier(token.value):
            raise lexer.error("expected audio channel name")
        lexer.advance()
        return token.value

    def _model_name(self, lexer: StatementLexer) -> str:
        """
        Model name: a word plus any tokens glued to it without whitespace,
        so tag-style names such as llama3:8b stay whole.
        """
        first = lexer.peek()
        if first is None or not first.is_word():
            raise lexer.error("expected model name")

        lexer.advance()
        end = lexer.pos
        token = lexer.peek()
        while token is not None and token.kind != TokenKind.STRING and token.column == end:
            lexer.advance()
            end = lexer.pos
            token = lexer.peek()
        return lexer.text[first.column:end]

    # =========================================================================
    # STATEMENT RULES
    # =========================================================================

    def _parse_define(self, lexer: StatementLexer) -> Define:
        lexer.expect_noblock("define statement")
        raw = lexer.rest()
        if not raw:
            raise lexer.error("expected definition after 'define'")
        return Define(lexer.line_number, raw)

    def _parse_label(self, lexer: StatementLexer) -> Label:
        name = lexer.name()
        if name is None:
            raise lexer.error("expected label name")

        parameters = self._parse_parameters(lexer)

        lexer.expect(TokenKind.OPERATOR, ':')
        lexer.expect_eol()

        body = self.parse_block(lexer.children)
        return Label(lexer.line_number, name, tuple(body), parameters)

    def _parse_parameters(self, lexer: StatementLexer) -> Optional[ParameterInfo]:
        """label name(a, b, *args, **kwargs)"""
        if lexer.match(TokenKind.OPERATOR, '(') is None:
            return None

        parameters = []
        positional = []
        extrapos = None
        extrakw = None
        add_positional = True
        names = set()

        def take_name() -> str:
            name = lexer.name()
            if name is None or not ScriptPatterns.is_identifier(name):
                raise lexer.error("expected parameter name")
            if name in names:
                raise lexer.error(f"parameter {name} appears twice.")
            names.add(name)
            return name

        while lexer.match(TokenKind.OPERATOR, ')') is None:
            if lexer.match(TokenKind.OPERATOR, '**'):
                if extrakw is not None:
                    raise lexer.error("a label may have only one ** parameter")
                extrakw = take_name()
            elif lexer.match(TokenKind.OPERATOR, '*'):
                if not add_positional:
                    raise lexer.error("a label may have only one * parameter")
                add_positional = False
                if lexer.peek() is not None and lexer.peek().is_word():
                    extrapos = take_name()
            else:
                name = take_name()
                parameters.append(name)
                if add_positional:
                    positional.append(name)

            if lexer.match(TokenKind.OPERATOR, ')'):
                break
            lexer.expect(TokenKind.OPERATOR, ',', what="',' or ')'")

        return ParameterInfo(tuple(parameters), tuple(positional), extrapos, extrakw)

    def _parse_jump(self, lexer: StatementLexer) -> Jump:
        lexer.expect_noblock("jump statement")

        if lexer.keyword('expression'):
            target = lexer.rest()
            if not target:
                raise lexer.error("expected expression after 'jump expression'")
            return Jump(lexer.line_number, target, True)

        target = lexer.name()
        if target is None:
            raise lexer.error("expected label name")
        lexer.expect_eol()
        return Jump(lexer.line_number, target, False)

    def _parse_return(self, lexer: StatementLexer) -> Return:
        lexer.expect_noblock("return statement")
        value = lexer.rest()
        return Return(lexer.line_number, value or None)

    def _parse_scene(self, lexer: StatementLexer) -> Scene:
        lexer.expect_noblock("scene statement")

        words = []
        layer = config.DEFAULT_LAYER
        tag = None
        in_clauses = False

        while not lexer.eol():
            if lexer.keyword('onlayer'):
                layer = lexer.name()
                if layer is None:
                    raise lexer.error("expected layer name after 'onlayer'")
                in_clauses = True
            elif lexer.keyword('as'):
                tag = lexer.name()
                if tag is None:
                    raise lexer.error("expected tag name after 'as'")
                in_clauses = True
            else:
                token = lexer.peek()
                if in_clauses or not token.is_word():
                    raise lexer.error(f"unexpected '{token.value}' in scene statement", token.column)
                words.append(lexer.advance().value)

        image = ' '.join(words) if words else None
        if image is None and tag is not None:
            raise lexer.error("'as' requires an image name")
        return Scene(lexer.line_number, image, layer, tag)

    def _parse_show(self, lexer: StatementLexer) -> Show:
        lexer.expect_noblock("show statement")
        imagespec = lexer.rest()
        if not imagespec:
            raise lexer.error("expected image specification")
        return Show(lexer.line_number, imagespec)

    def _parse_hide(self, lexer: StatementLexer) -> Hide:
        lexer.expect_noblock("hide statement")
        imagespec = lexer.rest()
        if not imagespec:
            raise lexer.error("expected image specification")
        return Hide(lexer.line_number, imagespec)

    def _parse_play(self, lexer: StatementLexer) -> Play:
        lexer.expect_noblock("play statement")
        channel = self._channel(lexer)
        filename = lexer.expect(TokenKind.STRING, what="quoted audio file name").value

        loop = None
        fadein = None
        seen = set()

        while not lexer.eol():
            token = lexer.expect(TokenKind.WORD, what="'loop', 'noloop' or 'fadein'")
            if token.value in seen or (token.value in ('loop', 'noloop') and loop is not None):
                raise lexer.error(f"'{token.value}' clause given twice", token.column)
            seen.add(token.value)

            if token.value == 'loop':
                loop = True
            elif token.value == 'noloop':
                loop = False
            elif token.value == 'fadein':
                fadein = self._number(lexer, 'fadein', PLAY_CLAUSES)
            else:
                raise lexer.error(f"unknown play clause '{token.value}'", token.column)

        return Play(lexer.line_number, channel, filename, AudioModifiers(loop=loop, fadein=fadein))

    def _parse_stop(self, lexer: StatementLexer) -> Stop:
        lexer.expect_noblock("stop statement")
        channel = self._channel(lexer)

        fade_kind = None
        fade_seconds = None
        if lexer.keyword('fadeout'):
            fade_kind = 'fadeout'
            fade_seconds = self._number(lexer, 'fadeout')

        lexer.expect_eol()
        return Stop(lexer.line_number, channel, fade_kind, fade_seconds)

    def _parse_game_mechanic(self, lexer: StatementLexer) -> GameMechanic:
        lexer.expect_noblock("game_mechanic statement")
        text = lexer.expect(TokenKind.STRING, what="quoted text").value
        lexer.expect_eol()
        return GameMechanic(lexer.line_number, text)

    def _parse_llm_generate(self, lexer: StatementLexer) -> LLMGenerate:
        lexer.expect_noblock("llm_generate statement")
        model = self._model_name(lexer)
        prompt = lexer.string()
        lexer.expect_eol()
        return LLMGenerate(lexer.line_number, model, prompt)

    def _parse_say(self, lexer: StatementLexer) -> Optional[Say]:
        """
        Narration ("text") or dialogue (speaker "text").

        Returns None if the line has neither shape.
        """
        state = lexer.checkpoint()

        what = lexer.string()
        if what is not None:
            lexer.expect_eol()
            lexer.expect_noblock("say statement")
            return Say(lexer.line_number, None, what)

        lexer.revert(state)
        who = lexer.peek()
        if who is None or not who.is_word() or not ScriptPatterns.is_identifier(who.value):
            return None
        lexer.advance()

        what = lexer.string()
        if what is None:
            lexer.revert(state)
            return None

        lexer.expect_eol()
        lexer.expect_noblock("say statement")
        return Say(lexer.line_number, who.value, what)


def parse_blocks(root: Block, source_name: str = config.DEFAULT_SOURCE_NAME):
    """
    Parse every top-level block of a tree.

    Returns:
        Tuple of (nodes, errors)
    """
    parser = StatementParser(source_name)
    nodes = parser.parse_block(root.children)
    return nodes, parser.errors
