"""
Exceptions raised while parsing ABI files and rendering artifacts
"""

from typing import Optional


class SimpleABIError(Exception):
    """Base class for all errors raised by simpleabi"""


class ParseError(SimpleABIError, ValueError):
    """
    Malformed ABI source or an unresolvable interface reference.

    Attributes:
        line: 0-based line number of the offending line, if any
        token: Offending token, if any
        location: File path or URL being parsed, if known
    """

    def __init__(self,
                 message: str,
                 line: Optional[int] = None,
                 token: Optional[str] = None,
                 location: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.token = token
        self.location = location

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class RenderError(SimpleABIError):
    """An artifact could not be rendered from the interface model"""


class UsageError(SimpleABIError):
    """Invalid command line or pipeline arguments"""
