"""Core compat-ui functionality: attribute validation, component context, bind parsing, pagination."""

from .attributes import AttributeKind, AttributeSpec, ValidationResult, validate, validate_attributes
from .bind import CfcCall, Generic, UrlBind, parse_bind
from .config import UIConfig, load_config
from .context import (
    ComponentContext,
    ComponentFrame,
    FrameKind,
    GridColumn,
    GridRow,
    IdGenerator,
    LayoutArea,
)
from .errors import (
    CompatUIError,
    ConflictingAttributes,
    ErrorContext,
    InvalidArgument,
    InvalidAttributeValue,
    InvalidNesting,
    MissingArgument,
    MissingRequiredAttribute,
    UnknownTag,
)
from .pagination import PaginationResult, paginate

__all__ = [
    "AttributeKind",
    "AttributeSpec",
    "ValidationResult",
    "validate",
    "validate_attributes",
    "CfcCall",
    "Generic",
    "UrlBind",
    "parse_bind",
    "UIConfig",
    "load_config",
    "ComponentContext",
    "ComponentFrame",
    "FrameKind",
    "GridColumn",
    "GridRow",
    "IdGenerator",
    "LayoutArea",
    "CompatUIError",
    "ConflictingAttributes",
    "ErrorContext",
    "InvalidArgument",
    "InvalidAttributeValue",
    "InvalidNesting",
    "MissingArgument",
    "MissingRequiredAttribute",
    "UnknownTag",
    "PaginationResult",
    "paginate",
]
