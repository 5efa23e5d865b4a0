# -*- coding: utf-8 -*-
"""
Source Models

Physical lines, logical lines and the indentation block tree.
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, Tuple


@dataclass(frozen=True)
class SourceLine:
    """One physical line of input (1-based number, no trailing newline)."""
    number: int
    text: str


@dataclass(frozen=True)
class LogicalLine:
    """
    One statement's assembled text.

    Attributes:
        line_number (int): First physical line the statement started on.
        indent (int): Column of the first non-whitespace character of that line.
        text (str): Statement text with indentation and comments removed.
            May contain newlines when it was merged from several physical lines.
    """
    line_number: int
    indent: int
    text: str

    @property
    def opens_block(self) -> bool:
        """True if the line may own a nested block (ends with ':')."""
        return self.text.rstrip().endswith(':')

    def reindented(self, indent: int) -> 'LogicalLine':
        return replace(self, indent=indent)


ROOT_LINE = LogicalLine(line_number=0, indent=-1, text='')


@dataclass(frozen=True)
class Block:
    """A logical line and the blocks nested under it."""
    line: LogicalLine
    children: Tuple['Block', ...] = field(default_factory=tuple)

    @property
    def indent(self) -> int:
        return self.line.indent

    @property
    def line_number(self) -> int:
        return self.line.line_number

    @property
    def text(self) -> str:
        return self.line.text

    @property
    def is_root(self) -> bool:
        return self.line.indent < 0

    def depth(self) -> int:
        """Nesting depth below this block (0 for a leaf)."""
        deepest = 0
        stack = [(self, 0)]
        while stack:
            block, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in block.children)
        return deepest

    def walk(self) -> Iterator['Block']:
        """Yield every descendant block in source order (excluding self)."""
        stack = list(reversed(self.children))
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.children))
