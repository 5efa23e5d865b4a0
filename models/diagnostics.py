# -*- coding: utf-8 -*-
"""
Diagnostics Model

ParseError records and the ParseResult returned by the pipeline.
Errors are plain values: they are accumulated, never raised.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from renparse_enums import ErrorKind
from models.ast_nodes import AstNode, Label


@dataclass(frozen=True)
class ParseError:
    """
    A recoverable problem found while parsing.

    Attributes:
        line (int): 1-based line number the problem is reported at.
        message (str): Human-readable description.
        kind (ErrorKind): Category of the problem.
        filename (str): Source name used for diagnostics.
        text (Optional[str]): Logical line text, when available.
        column (Optional[int]): 0-based column within text, when known.
    """
    line: int
    message: str
    kind: ErrorKind = ErrorKind.SYNTAX
    filename: str = "<script>"
    text: Optional[str] = field(default=None, compare=False)
    column: Optional[int] = field(default=None, compare=False)

    def format(self, show_source: bool = False) -> str:
        """Render as 'On line N of FILE: message', optionally with the line and a caret."""
        message = f"On line {self.line} of {self.filename}: {self.message}"

        if show_source and self.text is not None:
            message += f"\n{self.text}"
            if self.column is not None:
                message += "\n" + " " * self.column + "^"

        return message

    def __str__(self):
        return self.format()


@dataclass(frozen=True)
class ParseResult:
    """Best-effort AST plus every recoverable error, in line order."""
    nodes: Tuple[AstNode, ...]
    errors: Tuple[ParseError, ...]
    source_name: str = "<script>"

    @property
    def ok(self) -> bool:
        return not self.errors

    def labels(self) -> List[str]:
        """Names of all labels in the AST, in source order."""
        names = []
        stack = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            if isinstance(node, Label):
                names.append(node.name)
                stack.extend(reversed(node.body))
        return names

    def to_dict(self) -> dict:
        return {
            'source': self.source_name,
            'nodes': [node.to_dict() for node in self.nodes],
            'errors': [
                {'line': e.line, 'kind': e.kind.value, 'message': e.message}
                for e in self.errors
            ],
        }
