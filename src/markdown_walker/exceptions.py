#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the markdown_walker library.

This module defines the exception classes raised while parsing Markdown
into a node tree and walking that tree.

Exception Hierarchy
-------------------
- MarkdownWalkerError (base exception)

  - ValidationError (argument validation)

  - FileError (input file access, CLI only)

  - ParsingError (Markdown parser failures)

  - WalkError (handler failures during traversal)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from markdown_walker.ast.arena import Node


class MarkdownWalkerError(Exception):
    """Base exception class for all markdown_walker-specific errors.

    Catching this will catch every error raised by the library itself. Errors
    raised by user-defined handlers propagate unchanged and are only caught
    here when they derive from this class (see ``WalkError``).

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MarkdownWalkerError):
    """Exception raised for invalid arguments.

    Raised for non-string Markdown input, a payload that does not match its
    node kind, or a parent node that belongs to another arena.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FileError(MarkdownWalkerError):
    """Exception raised when an input file cannot be read.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class ParsingError(MarkdownWalkerError):
    """Exception raised when the Markdown parser fails.

    Parameters
    ----------
    message : str
        Description of the parsing error
    parsing_stage : str, optional
        Stage of parsing where the error occurred (e.g., "front_matter", "markdown")
    original_error : Exception, optional
        The original exception raised by the parser

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with stage information."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class WalkError(MarkdownWalkerError):
    """Exception raised by a handler to abort a traversal.

    Any exception raised from a ``visit_*`` handler stops the walk and
    propagates to the caller unchanged. ``WalkError`` is the conventional
    type for handler failures: it carries the underlying cause and,
    optionally, the node being visited when the failure happened.

    Parameters
    ----------
    message : str
        Description of the failure
    node : Node, optional
        Node whose handler failed
    original_error : Exception, optional
        The underlying cause

    Examples
    --------
        >>> class NoRawHtml(MarkdownWalker):
        ...     def visit_html_inline(self, node, html):
        ...         raise WalkError(f"raw HTML not allowed: {html}", node=node)

    """

    def __init__(self, message: str, node: Node | None = None, original_error: Exception | None = None):
        """Initialize the walk error with the failing node."""
        super().__init__(message, original_error=original_error)
        self.node = node
