"""
Map Generation Engine - Custom Error Types
Structured exceptions for generation errors with recovery hints.
"""
from typing import Dict, Any, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the generation engine."""
    # General errors
    UNKNOWN = "UNKNOWN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Generation errors
    GENERATION_FAILED = "GENERATION_FAILED"
    UNKNOWN_TERRAIN = "UNKNOWN_TERRAIN"


class MapGenError(Exception):
    """
    Base exception for all map generation errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Additional context details
    - Recovery hints for the caller
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.UNKNOWN,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
        recovery_hint: Optional[str] = None,
        http_status: int = 500
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint
        self.http_status = http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON response."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
                "recoverable": self.recoverable,
                "recovery_hint": self.recovery_hint
            }
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# =============================================================================
# Parameter Errors
# =============================================================================

class ValidationError(MapGenError):
    """
    Raised when a parameter combination is structurally invalid.

    Always raised before any generation work begins. Retrying with the same
    parameters reproduces the error.
    """

    def __init__(self, field: str, message: str, value: Any = None):
        details = {"field": field}
        if value is not None:
            details["value"] = str(value)
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            details=details,
            recoverable=False,
            http_status=400,
            recovery_hint=f"Check the value for '{field}'"
        )
        self.field = field


class UnknownTerrainError(MapGenError):
    """Raised when no generator is registered for a terrain type."""

    def __init__(self, terrain: Any):
        super().__init__(
            code=ErrorCode.UNKNOWN_TERRAIN,
            message=f"Unknown terrain type: {terrain}",
            details={"terrain": str(terrain)},
            recoverable=False,
            http_status=400,
            recovery_hint="Use one of: House, Dungeon, Forest, Cave"
        )


class PresetNotFoundError(MapGenError):
    """Raised when a named preset does not exist."""

    def __init__(self, name: str):
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"Preset '{name}' not found",
            details={"preset": name},
            http_status=404,
            recovery_hint="List available presets and pick one by name"
        )


# =============================================================================
# Generation Errors
# =============================================================================

class GenerationFailure(MapGenError):
    """
    Raised when generation cannot produce a usable map.

    Generation is deterministic for a given seed, so the caller must vary the
    seed or the parameters to get a different outcome.
    """

    def __init__(self, reason: str = "Map generation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.GENERATION_FAILED,
            message=reason,
            details=details,
            recoverable=False,
            http_status=422,
            recovery_hint="Use a larger map, fewer or smaller rooms, or a different seed"
        )
