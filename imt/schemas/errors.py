"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for the incremental Merkle tree.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

All tree errors are local and deterministic: they depend only on the
call arguments and the current tree state, and no mutation happens on
a failed call. Proof verification never raises.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library and CLI."""

    # Construction Errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"

    # Mutation / Lookup Errors
    TREE_FULL = "TREE_FULL"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    PROOF_DECODE_ERROR = "PROOF_DECODE_ERROR"

    # CLI Input
    LEAVES_FILE_ERROR = "LEAVES_FILE_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class IMTError(BaseModel):
    """
    Error model for structured error reporting.

    Used where an error has to be serialized (CLI JSON output) rather
    than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INDEX_OUT_OF_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "IMTException":
        """Convert this error model to a raisable exception."""
        return IMTException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class IMTException(Exception):
    """
    Base exception for all incremental Merkle tree errors.

    Carries structured error information and can be converted
    to/from IMTError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "IMT_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> IMTError:
        """Convert this exception to an IMTError model."""
        return IMTError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidArgumentException(IMTException):
    """Raised on a missing hash function, non-positive depth or arity."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if argument:
            full_details["argument"] = argument
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ARGUMENT,
            details=full_details,
        )


class CapacityExceededException(IMTException):
    """Raised when the initial leaves do not fit in arity^depth slots."""

    def __init__(
        self,
        message: str,
        capacity: int | None = None,
        requested: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if capacity is not None:
            details["capacity"] = capacity
        if requested is not None:
            details["requested"] = requested
        super().__init__(
            message=message,
            code=ErrorCodes.CAPACITY_EXCEEDED,
            details=details,
        )


class TreeFullException(IMTException):
    """Raised when inserting into a tree that already holds arity^depth leaves."""

    def __init__(self, message: str, capacity: int | None = None) -> None:
        details: dict[str, Any] = {}
        if capacity is not None:
            details["capacity"] = capacity
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_FULL,
            details=details,
        )


class IndexOutOfRangeException(IMTException):
    """Raised when a leaf index falls outside [0, size)."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        size: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if index is not None:
            details["index"] = index
        if size is not None:
            details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=details,
        )


class CanonicalizationException(IMTException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class ProofDecodeException(IMTException):
    """Exception raised when a serialized proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_DECODE_ERROR,
            details=details,
        )
