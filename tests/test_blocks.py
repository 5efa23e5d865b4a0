# -*- coding: utf-8 -*-
"""
Unit Tests for the Block Grouper

Off-side rule nesting and indentation error recovery.
"""

from models.source import Block, LogicalLine
from parser.blocks import group_logical_lines
from parser.logical_lines import assemble_logical_lines
from renparse_enums import ErrorKind


def _group(text):
    lines, _ = assemble_logical_lines(text, "test.rpy")
    return group_logical_lines(lines, "test.rpy")


def _assert_tree_invariants(block: Block):
    """Children are deeper than their parent and siblings share one indent."""
    indents = {child.indent for child in block.children}
    assert len(indents) <= 1
    for child in block.children:
        assert child.indent > block.indent
        _assert_tree_invariants(child)


class TestNesting:
    """Well-formed scripts."""

    def test_root_is_implicit(self):
        root, errors = _group('show a\nshow b\n')

        assert errors == []
        assert root.is_root
        assert root.indent == -1
        assert [child.text for child in root.children] == ['show a', 'show b']

    def test_nested_labels(self, nested_script):
        root, errors = _group(nested_script)

        assert errors == []
        _assert_tree_invariants(root)

        outer, other = root.children
        assert outer.text == 'label outer:'
        assert [c.text for c in outer.children] == ['"outer text"', 'label .inner:', 'return']
        inner = outer.children[1]
        assert [c.text for c in inner.children] == ['"inner text"', 'label .deepest:']
        assert other.children[0].text == 'jump outer'

    def test_depth_matches_label_nesting(self, nested_script):
        root, _ = _group(nested_script)
        # root -> outer -> .inner -> .deepest -> "deep text"
        assert root.depth() == 4

    def test_walk_visits_every_line_in_order(self, nested_script):
        root, _ = _group(nested_script)
        numbers = [block.line_number for block in root.walk()]
        assert numbers == sorted(numbers)
        assert len(numbers) == 9

    def test_empty_input(self):
        root, errors = _group('# nothing here\n')
        assert root.children == ()
        assert errors == []

    def test_dedent_by_several_levels(self):
        root, errors = _group('label a:\n    label b:\n        "x"\nreturn\n')

        assert errors == []
        assert [c.text for c in root.children] == ['label a:', 'return']


class TestIndentationErrors:
    """Recovery from bad indentation."""

    def test_unexpected_indent(self, unexpected_indent_script):
        root, errors = _group(unexpected_indent_script)

        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.INDENTATION
        assert errors[0].line == 3
        assert "unexpected indent" in errors[0].message

        label = root.children[0]
        assert [c.line_number for c in label.children] == [2, 3, 4, 5]
        _assert_tree_invariants(root)

    def test_recovered_line_is_reindented(self, unexpected_indent_script):
        root, _ = _group(unexpected_indent_script)
        too_deep = root.children[0].children[1]
        assert too_deep.text == 'e "too deep"'
        assert too_deep.indent == 4

    def test_dedent_between_levels(self):
        root, errors = _group('label a:\n    "x"\n  "y"\n')

        assert len(errors) == 1
        assert errors[0].line == 3
        assert "does not match" in errors[0].message
        assert [c.text for c in root.children] == ['label a:', '"y"']
        _assert_tree_invariants(root)

    def test_dedent_between_nested_levels(self):
        root, errors = _group('label a:\n        "deep"\n    "shallower"\n')

        assert [e.line for e in errors] == [3]
        assert [c.line_number for c in root.children] == [1, 3]

    def test_indented_first_line(self):
        text = '  define x = 1\nlabel a:\n    "x"\nlabel b:\n    "y"\nlabel c:\n    "z"\n'
        root, errors = _group(text)

        assert [(e.line, e.message) for e in errors] == [(1, "unexpected indent")]
        assert [c.indent for c in root.children] == [0, 0, 0, 0]
        assert [c.line_number for c in root.children] == [1, 2, 4, 6]
        _assert_tree_invariants(root)

    def test_every_indented_top_level_line_is_reported(self):
        root, errors = _group('    show a\n    show b\nshow c\n')

        assert [e.line for e in errors] == [1, 2]
        assert [c.text for c in root.children] == ['show a', 'show b', 'show c']

    def test_grouping_continues_after_error(self):
        text = 'show a\n    show b\nlabel c:\n    return\n'
        root, errors = _group(text)

        assert [e.line for e in errors] == [2]
        assert [c.text for c in root.children] == ['show a', 'show b', 'label c:']
        assert root.children[2].children[0].text == 'return'

    def test_input_lines_are_not_modified(self):
        lines = [LogicalLine(1, 0, 'show a'), LogicalLine(2, 4, 'show b')]
        group_logical_lines(lines)
        assert lines[1].indent == 4


class TestDeepNesting:
    """Very deep trees are built without recursion."""

    def test_thousands_of_levels(self):
        lines = [LogicalLine(i + 1, i, f'label l{i}:') for i in range(3000)]
        root, errors = group_logical_lines(lines)

        assert errors == []
        assert root.depth() == 3000
        assert sum(1 for _ in root.walk()) == 3000
