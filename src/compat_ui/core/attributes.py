"""
Attribute specifications and validation.

Every tag declares its attributes once, as a tuple of ``AttributeSpec``
(see :mod:`compat_ui.core.tag_specs`). A tag invocation is validated
all-or-nothing: attributes are checked in declaration order and the first
failure is raised before anything is rendered.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from compat_ui.core.errors import (
    CompatUIError,
    ErrorContext,
    InvalidAttributeValue,
    MissingRequiredAttribute,
)

_TRUE = frozenset({"true", "yes", "1"})
_FALSE = frozenset({"false", "no", "0"})
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def is_js_identifier(value: str) -> bool:
    return bool(_IDENTIFIER_RE.match(value))


class AttributeKind(str, Enum):
    """How a raw attribute value is interpreted."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    IDENTIFIER = "identifier"  # JavaScript function or class name
    ANY = "any"  # Structured values (query rows, row data) passed through untouched


class AttributeSpec(BaseModel):
    """
    Declaration of one tag attribute.

    Example:
        AttributeSpec(name="selectMode", allowed_values=("none", "single", "multi"), default="none")
    """

    model_config = {"frozen": True}

    name: str
    required: bool = False
    allowed_values: tuple[str, ...] | None = None
    kind: AttributeKind = AttributeKind.STRING
    default: Any = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a single attribute value."""

    ok: bool
    value: Any = None
    message: str = ""
    error: type[CompatUIError] | None = None

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, message: str, error: type[CompatUIError]) -> ValidationResult:
        return cls(ok=False, message=message, error=error)

    def raise_for_failure(self, tag: str, attribute: str | None = None) -> None:
        """Raise the carried error if this result is a failure."""
        if not self.ok and self.error is not None:
            raise self.error(self.message, ErrorContext(tag=tag, attribute=attribute))


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate(spec: AttributeSpec, raw_value: Any, tag: str = "tag") -> ValidationResult:
    """Validate one attribute value against its spec.

    Args:
        spec: The attribute declaration.
        raw_value: The value supplied by the caller, or None when absent.
        tag: Display name of the tag (used in the "required" message).

    Returns:
        Success carrying the trimmed (or typed) value, or a failure
        carrying the message and error class.
    """
    if _is_empty(raw_value):
        if spec.required:
            return ValidationResult.failure(
                f"{spec.name} attribute is required for {tag}",
                MissingRequiredAttribute,
            )
        return ValidationResult.success(spec.default)

    if spec.kind == AttributeKind.ANY:
        return ValidationResult.success(raw_value)

    if spec.kind == AttributeKind.BOOLEAN:
        if isinstance(raw_value, bool):
            return ValidationResult.success(raw_value)
        text = str(raw_value).strip().lower()
        if text in _TRUE:
            return ValidationResult.success(True)
        if text in _FALSE:
            return ValidationResult.success(False)
        return ValidationResult.failure(
            f"{spec.name} attribute must be a boolean", InvalidAttributeValue
        )

    if spec.kind == AttributeKind.INTEGER:
        if isinstance(raw_value, bool):
            return ValidationResult.failure(
                f"{spec.name} attribute must be an integer", InvalidAttributeValue
            )
        if isinstance(raw_value, int):
            return ValidationResult.success(raw_value)
        text = str(raw_value).strip()
        if text.lstrip("-").isdigit():
            return ValidationResult.success(int(text))
        return ValidationResult.failure(
            f"{spec.name} attribute must be an integer", InvalidAttributeValue
        )

    value = str(raw_value).strip()
    if spec.kind == AttributeKind.IDENTIFIER and not is_js_identifier(value):
        return ValidationResult.failure(
            f"{spec.name} attribute must be a valid JavaScript function name",
            InvalidAttributeValue,
        )
    if spec.allowed_values is not None and value not in spec.allowed_values:
        return ValidationResult.failure(
            f"{spec.name} attribute must be one of: {', '.join(spec.allowed_values)}",
            InvalidAttributeValue,
        )
    return ValidationResult.success(value)


def validate_attributes(
    tag: str,
    display_name: str,
    specs: tuple[AttributeSpec, ...],
    raw: Mapping[str, Any],
) -> dict[str, Any]:
    """Validate a whole attribute set in declaration order.

    Attribute names are matched case-insensitively. Undeclared attributes
    are carried through under the name the caller used.

    Raises:
        MissingRequiredAttribute, InvalidAttributeValue: on the first failure.
    """
    supplied = {key.lower(): key for key in raw}
    validated: dict[str, Any] = {}
    consumed: set[str] = set()

    for spec in specs:
        key = supplied.get(spec.name.lower())
        raw_value = raw[key] if key is not None else None
        if key is not None:
            consumed.add(key)
        result = validate(spec, raw_value, display_name)
        result.raise_for_failure(tag, spec.name)
        validated[spec.name] = result.value

    for key, value in raw.items():
        if key not in consumed:
            validated[key] = value

    return validated
