# -*- coding: utf-8 -*-
"""
RenParse Test Fixtures

Shared fixtures for all tests.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

DATA_DIR = Path(__file__).parent / "data"


# =============================================================================
# SCRIPT FIXTURES
# =============================================================================

@pytest.fixture
def canonical_script_path() -> Path:
    """Path of the demo script (two labels, audio, dialogue)."""
    return DATA_DIR / "script.rpy"


@pytest.fixture
def canonical_script(canonical_script_path) -> str:
    """Contents of the demo script."""
    return canonical_script_path.read_text(encoding='utf-8')


@pytest.fixture
def nested_script() -> str:
    """Script with three levels of nesting and a local label."""
    return '\n'.join([
        'label outer:',
        '    "outer text"',
        '    label .inner:',
        '        "inner text"',
        '        label .deepest:',
        '            "deep text"',
        '    return',
        'label other:',
        '    jump outer',
        '',
    ])


@pytest.fixture
def unexpected_indent_script() -> str:
    """A dialogue line indented under a statement that does not open a block."""
    return '\n'.join([
        'label start:',
        '    e "first"',
        '        e "too deep"',
        '    e "third"',
        '    return',
        '',
    ])


# =============================================================================
# TEMP FILE FIXTURES
# =============================================================================

@pytest.fixture
def temp_script_file(tmp_path, canonical_script) -> Path:
    """Copy of the demo script in a temporary directory."""
    file_path = tmp_path / "game" / "script.rpy"
    file_path.parent.mkdir()
    file_path.write_text(canonical_script, encoding='utf-8')
    return file_path


@pytest.fixture
def settings_file(tmp_path) -> Path:
    """Location for a throwaway settings file."""
    return tmp_path / ".renparse" / "settings.json"
