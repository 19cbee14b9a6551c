"""
Standard response envelopes for ruby-rails-docs command output.

Every command result follows one structure:

    {
        "success": bool,       # Required: operation success/failure
        "data": {...},         # Required: primary payload
        "error": str | null,   # Required: error message or null on success
        "meta": {              # Required: response metadata
            "version": "response-v2",
            "request_id": "cli_abc123"?,
            "warnings": ["..."]?,
            "telemetry": { ... }?
        }
    }

On failure ``data`` carries ``error_code``, ``error_type`` and, where one
exists, ``remediation`` and ``details``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union


class ErrorCode(str, Enum):
    """Machine-readable error codes, in SCREAMING_SNAKE_CASE."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED = "MISSING_REQUIRED"

    # External command errors
    COMMAND_FAILED = "COMMAND_FAILED"
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorType(str, Enum):
    """Error categories for routing and client-side handling."""

    VALIDATION = "validation"  # No retry, fix input
    EXTERNAL = "external"  # An external tool failed; inspect its diagnostic
    INTERNAL = "internal"


@dataclass
class ToolResponse:
    """
    Standard response structure for command output.

    Attributes:
        success: Whether the operation completed successfully
        data: The primary payload (operation-specific structured data)
        error: Error message if success is False, None otherwise
        meta: Response metadata including version identifier
    """

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=lambda: {"version": "response-v2"})


def _build_meta(
    *,
    request_id: Optional[str] = None,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Construct a metadata payload that always includes the response version."""
    meta: Dict[str, Any] = {"version": "response-v2"}
    if request_id:
        meta["request_id"] = request_id
    if warnings:
        meta["warnings"] = list(warnings)
    if telemetry:
        meta["telemetry"] = dict(telemetry)
    if extra:
        meta.update(dict(extra))
    return meta


def success_response(
    data: Optional[Mapping[str, Any]] = None,
    *,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Create a standardized success response.

    Args:
        data: Mapping used as the payload.
        warnings: Non-fatal issues to surface in ``meta.warnings``.
        telemetry: Timing/performance metadata.
        request_id: Correlation identifier propagated through logs.
        meta: Arbitrary extra metadata to merge into ``meta``.
    """
    return ToolResponse(
        success=True,
        data=dict(data or {}),
        error=None,
        meta=_build_meta(
            request_id=request_id,
            warnings=warnings,
            telemetry=telemetry,
            extra=meta,
        ),
    )


def error_response(
    message: str,
    *,
    data: Optional[Mapping[str, Any]] = None,
    error_code: Union[ErrorCode, str] = ErrorCode.INTERNAL_ERROR,
    error_type: Union[ErrorType, str] = ErrorType.INTERNAL,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Create a standardized error response.

    Example:
        >>> error_response(
        ...     "Missing --ruby-dir",
        ...     error_code=ErrorCode.MISSING_REQUIRED,
        ...     error_type=ErrorType.VALIDATION,
        ...     remediation="Pass --ruby-dir or set RUBY_RAILS_DOCS_RUBY_DIR",
        ... )
    """
    payload: Dict[str, Any] = dict(data or {})
    payload.setdefault(
        "error_code",
        error_code.value if isinstance(error_code, Enum) else error_code,
    )
    payload.setdefault(
        "error_type",
        error_type.value if isinstance(error_type, Enum) else error_type,
    )
    if remediation is not None:
        payload.setdefault("remediation", remediation)
    if details:
        payload.setdefault("details", dict(details))

    return ToolResponse(
        success=False,
        data=payload,
        error=message,
        meta=_build_meta(request_id=request_id, telemetry=telemetry),
    )
