# -*- coding: utf-8 -*-
"""
Parser Core Functions

Main entry points: run the whole pipeline over script text or a file.
"""

import os
from pathlib import Path
from typing import Optional, Union

import renparse_config as config
from renparse_exceptions import FileOperationError
from renparse_logger import get_logger
from models.diagnostics import ParseResult
from parser.logical_lines import assemble_logical_lines
from parser.blocks import group_logical_lines
from parser.statements import parse_blocks

logger = get_logger("parser.core")


def parse_script(
    text: Union[str, bytes],
    source_name: str = config.DEFAULT_SOURCE_NAME,
    tab_policy: Optional[str] = None,
    tab_width: Optional[int] = None,
) -> ParseResult:
    """
    Parse script text into an AST.

    Pure function: no I/O and no state shared between calls, so separate
    scripts may be parsed concurrently.

    Args:
        text: Script contents (str, or UTF-8 bytes)
        source_name: Name used in diagnostics
        tab_policy: 'reject' or 'expand' (defaults to config.TAB_POLICY)
        tab_width: Tab stop used by the 'expand' policy

    Returns:
        ParseResult with the best-effort nodes and every recoverable error

    Raises:
        ScriptEncodingError: if the input is not valid text
    """
    lines, line_errors = assemble_logical_lines(text, source_name, tab_policy, tab_width)
    root, block_errors = group_logical_lines(lines, source_name)
    nodes, statement_errors = parse_blocks(root, source_name)

    # stable sort keeps stage order for errors on the same line
    errors = sorted(line_errors + block_errors + statement_errors, key=lambda e: e.line)

    logger.debug(f"Parsed {source_name}: {len(nodes)} top-level nodes, {len(errors)} errors")
    return ParseResult(nodes=tuple(nodes), errors=tuple(errors), source_name=source_name)


def elide_path(filename: str) -> str:
    """
    Rewrite a file name for diagnostics.

    If RENPY_PATH_ELIDE is set to 'old:new', occurrences of 'old' are
    replaced by 'new'. Any other value is ignored.
    """
    path_elide = os.environ.get(config.PATH_ELIDE_ENV)
    if not path_elide:
        return filename

    parts = path_elide.split(':')
    if len(parts) != 2:
        logger.warning(f"Ignoring malformed {config.PATH_ELIDE_ENV} value: {path_elide!r}")
        return filename

    return filename.replace(parts[0], parts[1])


def parse_file(
    path: Union[str, Path],
    tab_policy: Optional[str] = None,
    tab_width: Optional[int] = None,
) -> ParseResult:
    """
    Read a script file and parse it.

    Args:
        path: Path to the script

    Returns:
        ParseResult named after the (elided) path

    Raises:
        FileOperationError: if the file cannot be read
        ScriptEncodingError: if it is not valid UTF-8 text
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileOperationError(f"Cannot read script: {e}", file_path=str(path), operation='read') from e

    logger.info(f"Parsing {path.name} ({len(data)} bytes)")
    return parse_script(data, elide_path(str(path)), tab_policy, tab_width)
