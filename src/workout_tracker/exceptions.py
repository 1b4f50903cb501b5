"""
Custom exceptions for the workout tracker.

This module defines a hierarchy of exceptions used throughout the core.
Each exception includes:
- A descriptive message
- An error code
- Optional details for debugging

Validation and position errors are user-facing and are turned into
blocking notices by the controller. Not-found, duplicate-id and
edit-session errors signal broken invariants and are allowed to propagate.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Workout errors
    WORKOUT_NOT_FOUND = "WORKOUT_NOT_FOUND"
    WORKOUT_ALREADY_EXISTS = "WORKOUT_ALREADY_EXISTS"
    WORKOUT_VALIDATION_ERROR = "WORKOUT_VALIDATION_ERROR"

    # Edit session errors
    EDIT_SESSION_INACTIVE = "EDIT_SESSION_INACTIVE"

    # Position errors
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"

    # Storage errors
    SNAPSHOT_CORRUPT = "SNAPSHOT_CORRUPT"


class ValidationReason(str, Enum):
    """Why raw workout input was rejected."""
    NON_FINITE = "NonFinite"
    NON_POSITIVE = "NonPositive"


class WorkoutTrackerError(Exception):
    """
    Base exception for all workout tracker errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(WorkoutTrackerError):
    """Raised when raw workout input is not a finite positive number."""

    def __init__(
        self,
        reason: ValidationReason,
        field: Optional[str] = None,
        message: str = "Inputs have to be positive numbers!",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["reason"] = reason.value
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.WORKOUT_VALIDATION_ERROR,
            details=error_details,
        )
        self.reason = reason
        self.field = field


# ============================================================================
# Not Found Errors
# ============================================================================

class NotFoundError(WorkoutTrackerError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            details=error_details,
        )


class WorkoutNotFoundError(NotFoundError):
    """Raised when a workout id is not in the store."""

    def __init__(self, workout_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            resource_type="Workout",
            resource_id=workout_id,
            details=details,
        )
        self.code = ErrorCode.WORKOUT_NOT_FOUND
        self.workout_id = workout_id


# ============================================================================
# Conflict Errors
# ============================================================================

class ConflictError(WorkoutTrackerError):
    """Raised when there's a resource conflict."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            details=details,
        )


class DuplicateWorkoutError(ConflictError):
    """Raised when adding a workout whose id is already stored."""

    def __init__(self, workout_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        error_details = details or {}
        error_details["workout_id"] = workout_id
        super().__init__(
            message=f"Workout with ID '{workout_id}' already exists",
            details=error_details,
        )
        self.code = ErrorCode.WORKOUT_ALREADY_EXISTS
        self.workout_id = workout_id


# ============================================================================
# Session, Position and Storage Errors
# ============================================================================

class EditSessionError(WorkoutTrackerError):
    """Raised when committing or cancelling while no edit is in progress."""

    def __init__(self, message: str = "No workout is being edited") -> None:
        super().__init__(message=message, code=ErrorCode.EDIT_SESSION_INACTIVE)


class PositionUnavailableError(WorkoutTrackerError):
    """Raised when the current position cannot be determined."""

    def __init__(
        self,
        message: str = "Could not get your position",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.POSITION_UNAVAILABLE,
            details=details,
        )


class SnapshotError(WorkoutTrackerError):
    """Raised when a persisted snapshot cannot be decoded or restored."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.SNAPSHOT_CORRUPT,
            details=details,
        )
