# -*- coding: utf-8 -*-
"""
Block Grouper

Applies the off-side rule: nests logical lines into a tree of blocks
according to their indentation.
"""

from typing import List, Tuple

import renparse_config as config
from renparse_enums import ErrorKind
from renparse_logger import get_logger
from models.source import Block, LogicalLine, ROOT_LINE
from models.diagnostics import ParseError

logger = get_logger("parser.blocks")


class _OpenBlock:
    """Mutable block used while grouping; frozen into a Block at the end."""

    __slots__ = ('line', 'children')

    def __init__(self, line: LogicalLine):
        self.line = line
        self.children: List['_OpenBlock'] = []

    @property
    def indent(self) -> int:
        return self.line.indent

    def freeze(self) -> Block:
        """Build the immutable tree bottom-up with an explicit stack."""
        frozen = {}
        stack = [(self, False)]
        while stack:
            block, children_done = stack.pop()
            if children_done:
                children = tuple(frozen.pop(id(child)) for child in block.children)
                frozen[id(block)] = Block(block.line, children)
            else:
                stack.append((block, True))
                stack.extend((child, False) for child in block.children)
        return frozen[id(self)]


class BlockGrouper:
    """
    Builds the block tree with a stack of open ancestors.

    The root sits at indent -1, so every top-level statement is one of its
    children. A badly indented line is reported and attached as a sibling of
    the nearest enclosing block, re-indented to that block's level.
    """

    def __init__(self, source_name: str = config.DEFAULT_SOURCE_NAME):
        self.source_name = source_name
        self.errors: List[ParseError] = []

    def _error(self, line: LogicalLine, message: str):
        self.errors.append(ParseError(
            line=line.line_number,
            message=message,
            kind=ErrorKind.INDENTATION,
            filename=self.source_name,
            text=line.text,
        ))

    def group(self, lines: List[LogicalLine]) -> Block:
        """
        Group logical lines into a tree.

        Args:
            lines: Logical lines in source order

        Returns:
            The root block; problems are collected on self.errors
        """
        root = _OpenBlock(ROOT_LINE)
        stack: List[_OpenBlock] = [root]

        for line in lines:
            while line.indent <= stack[-1].indent:
                stack.pop()

            parent = stack[-1]

            if parent is root:
                # top-level statements always start in column 0
                if line.indent != 0:
                    self._error(line, "unexpected indent")
                    line = line.reindented(0)
            elif not parent.children:
                if not parent.line.opens_block:
                    self._error(line, "unexpected indent")
                    stack.pop()
                    parent = stack[-1]
                    line = line.reindented(parent.children[-1].indent)
            elif line.indent != parent.children[0].indent:
                self._error(line, "unindent does not match any outer indentation level")
                stack.pop()
                parent = stack[-1]
                line = line.reindented(parent.children[-1].indent)

            block = _OpenBlock(line)
            parent.children.append(block)
            stack.append(block)

        tree = root.freeze()
        logger.debug(f"{self.source_name}: grouped {len(lines)} lines into {len(tree.children)} "
                     f"top-level blocks, depth {tree.depth()}")
        return tree


def group_logical_lines(
    lines: List[LogicalLine],
    source_name: str = config.DEFAULT_SOURCE_NAME,
) -> Tuple[Block, List[ParseError]]:
    """
    Group logical lines into blocks.

    Returns:
        Tuple of (root block, indentation errors)
    """
    grouper = BlockGrouper(source_name)
    root = grouper.group(lines)
    return root, grouper.errors
