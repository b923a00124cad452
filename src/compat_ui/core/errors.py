"""
Error types for tag validation, nesting and boundary functions.
"""

from dataclasses import dataclass
from typing import Optional


class CompatUIError(Exception):
    """Base exception for all compat-ui errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class MissingRequiredAttribute(CompatUIError):
    """
    Raised when a tag is invoked without an attribute it requires.

    Examples:
    - grid without name
    - layout without type
    - ajaxproxy with neither cfc nor bind
    """

    pass


class InvalidAttributeValue(CompatUIError):
    """
    Raised when an attribute holds a value outside its allowed set.

    The message always lists the allowed values.
    """

    pass


class InvalidNesting(CompatUIError):
    """
    Raised when a child tag runs outside its required parent.

    Examples:
    - gridcolumn with no open grid
    - layoutarea with no open layout
    - closing a tag that is not the innermost open one
    """

    pass


class ConflictingAttributes(CompatUIError):
    """
    Raised when attributes (or attributes and body content) exclude each other.

    Examples:
    - div with bind and body content
    - two border layout areas at the same position
    """

    pass


class MissingArgument(CompatUIError):
    """Raised when a boundary function is called without a required argument."""

    pass


class InvalidArgument(CompatUIError):
    """Raised when a boundary function argument is out of range or malformed."""

    pass


class UnknownTag(CompatUIError):
    """Raised when the driver is asked to run a tag it has no definition for."""

    pass


@dataclass
class ErrorContext:
    """
    Where an error happened.

    Attributes:
        tag: Tag name (e.g. ``gridcolumn``)
        attribute: Optional attribute name the error is about
    """

    tag: str
    attribute: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "bx:gridcolumn[dataAlign]"
        """
        location = f"bx:{self.tag}"
        if self.attribute:
            location += f"[{self.attribute}]"
        return location
