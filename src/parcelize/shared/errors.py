"""Parcelize Error Handling Module

This module defines the error handling system for Parcelize, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("auth_token",)


class ErrorCode(str, Enum):
    """Error codes for the Parcelize client."""

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_TIMEOUT = "API_TIMEOUT"
    API_INVALID_RESPONSE = "API_INVALID_RESPONSE"
    CLIENT_INITIALIZATION_FAILED = "CLIENT_INITIALIZATION_FAILED"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Parsing Errors
    PARSING_ERROR = "PARSING_ERROR"

    # Cache Errors
    CACHE_INVALID_CATEGORY = "CACHE_INVALID_CATEGORY"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"

    # Security Errors
    MISSING_AUTH_TOKEN = "MISSING_AUTH_TOKEN"  # noqa: S105  # nosec B105 - Error code constant

    # Host Runtime Errors
    INVALID_EXECUTION_CONTEXT = "INVALID_EXECUTION_CONTEXT"
    HTTP_DISABLED = "HTTP_DISABLED"

    # CLI Errors
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Enum and Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        elif val is None:
            coerced[key] = "None"
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization and prevent the auth
    token leaking into logs.

    Attributes:
        operation: Optional operation name that caused the error
        path: Optional API path associated with the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    path: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with sensitive keys removed.

        Args:
            mask_keys: Keys to exclude from additional_data. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with guaranteed additional_data key.

        Example:
            >>> context = ErrorContextModel(operation="fetch_hub_info")
            >>> context.safe_dict()
            {'operation': 'fetch_hub_info', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.path is not None:
            data["path"] = self.path

        additional = self.additional_data or {}
        data["additional_data"] = {
            key: value for key, value in additional.items() if key not in mask_keys
        }
        return data


ErrorContext = ErrorContextModel


class ParcelError(Exception):
    """Base exception class for all Parcelize errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize ParcelError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        formatted_message = f"{code.value}: {message}"
        super().__init__(formatted_message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            masked context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(ParcelError):
    """Domain-specific errors.

    Raised when caller-supplied arguments or cache categories violate the
    client's contract.
    """


class InfrastructureError(ParcelError):
    """Infrastructure-related errors.

    Raised when interacting with the Parcel API fails in a way the caller
    must see, such as the eager hub check during construction.
    """


class ParcelNetworkError(InfrastructureError):
    """Network-related errors (connection failures, timeouts, HTTP errors)."""


class ParcelParsingError(DomainError):
    """JSON decoding and response shape errors."""


class ApplicationError(ParcelError):
    """Application-level errors.

    Raised for configuration problems and when the host runtime is not
    able to run the client (not a server, HTTP disabled).
    """


class SecurityError(ParcelError):
    """Security-related errors, such as a missing auth token."""


def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> DomainError:
    """Create a validation error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return DomainError(
        ErrorCode.VALIDATION_ERROR,
        message,
        context,
        original_error,
    )


def create_api_error(
    message: str,
    path: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    code: ErrorCode = ErrorCode.API_REQUEST_FAILED,
) -> ParcelNetworkError:
    """Create an API error with context."""
    context = ErrorContext(
        operation=operation,
        path=path,
    )
    return ParcelNetworkError(
        code,
        message,
        context,
        original_error,
    )


def create_parsing_error(
    message: str,
    path: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ParcelParsingError:
    """Create a parsing error with context."""
    context = ErrorContext(
        operation=operation,
        path=path,
    )
    return ParcelParsingError(
        ErrorCode.PARSING_ERROR,
        message,
        context,
        original_error,
    )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIG_ERROR,
        message,
        context,
        original_error,
    )


class CliError(ApplicationError):
    """CLI-specific error with enhanced context for command-line operations."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_cli_output_error(
    message: str,
    command: str | None = None,
    output_type: str | None = None,
    original_error: Exception | None = None,
) -> CliError:
    """Create a CLI output error with context."""
    additional_data: dict[str, PrimitiveContextValue] = {}
    if command is not None:
        additional_data["command"] = command
    if output_type is not None:
        additional_data["output_type"] = output_type

    context = ErrorContext(
        operation="cli_output",
        additional_data=additional_data if additional_data else None,
    )
    return CliError(
        ErrorCode.CLI_OUTPUT_ERROR,
        message,
        context,
        original_error,
        command,
        exit_code=1,
    )
