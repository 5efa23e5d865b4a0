# -*- coding: utf-8 -*-
"""
RenParse Configuration

Module-level constants shared by the parser pipeline, the settings loader
and the command line entry point.
"""

from pathlib import Path

VERSION = "0.4.0"

# Statement keywords recognised at the start of a logical line.
# A keyword is never accepted as a label name or a dialogue speaker.
KEYWORDS = frozenset({
    "define",
    "label",
    "jump",
    "return",
    "scene",
    "show",
    "hide",
    "play",
    "stop",
    "game_mechanic",
    "llm_generate",
})

DEFAULT_LAYER = "master"
DEFAULT_SOURCE_NAME = "<script>"

# Deepest block nesting the statement parser descends into
MAX_NESTING = 100

# Tabs in indentation: "reject" reports a tab_character error and drops the
# logical line, "expand" replaces them up to the next multiple of TAB_WIDTH.
TAB_POLICY = "reject"
TAB_WIDTH = 8

# RENPY_PATH_ELIDE="old:new" rewrites diagnostic file names
PATH_ELIDE_ENV = "RENPY_PATH_ELIDE"

SETTINGS_DIR = Path.home() / ".renparse"
SETTINGS_FILE_PATH = SETTINGS_DIR / "settings.json"

__all__ = [
    "VERSION", "KEYWORDS", "DEFAULT_LAYER", "DEFAULT_SOURCE_NAME", "MAX_NESTING",
    "TAB_POLICY", "TAB_WIDTH", "PATH_ELIDE_ENV",
    "SETTINGS_DIR", "SETTINGS_FILE_PATH",
]

# Import logger at the end to avoid circular imports
from renparse_logger import get_logger
_logger = get_logger("config")
_logger.debug("renparse_config.py loaded")
