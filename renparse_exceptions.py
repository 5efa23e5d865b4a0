# -*- coding: utf-8 -*-
"""
RenParse Exceptions Module
Custom exception classes for structured error handling across the package.

Recoverable syntax problems are NOT raised to callers; they are returned as
ParseError records (see models.diagnostics). Only fatal conditions surface
as exceptions.
"""


class RenParseError(Exception):
    """
    Base exception class for all RenParse-related errors.

    Attributes:
        message: Human-readable error message
        details: Optional additional details (dict, string, etc.)
    """

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Parser Exceptions
# =============================================================================

class ParserError(RenParseError):
    """Base exception for parser-related errors."""
    pass


class ScriptEncodingError(ParserError):
    """Raised when the input is not valid UTF-8 text. Fatal: no AST is produced."""

    def __init__(self, message: str, source_name: str = None, position: int = None):
        super().__init__(message, details={'source': source_name, 'position': position})
        self.source_name = source_name
        self.position = position


class StatementSyntaxError(ParserError):
    """
    Raised by grammar rules while parsing a single statement.

    Never escapes the statement parser: it is converted to a ParseError
    record and the statement is skipped.
    """

    def __init__(self, message: str, line_number: int = None, column: int = None):
        super().__init__(message, details={'line_number': line_number, 'column': column})
        self.line_number = line_number
        self.column = column


# =============================================================================
# Core/File Exceptions
# =============================================================================

class CoreError(RenParseError):
    """Base exception for core module errors."""
    pass


class FileOperationError(CoreError):
    """Raised when a file operation (read/write) fails."""

    def __init__(self, message: str, file_path: str = None, operation: str = None):
        super().__init__(message, details={'file_path': file_path, 'operation': operation})
        self.file_path = file_path
        self.operation = operation
