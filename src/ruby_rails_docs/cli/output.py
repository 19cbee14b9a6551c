"""JSON output helpers for the ruby-rails-docs CLI.

This module provides the sole output mechanism for the CLI. Results go to
stdout and failures to stderr, both as response-v2 envelopes built by
ruby_rails_docs.core.responses. Log lines never share stdout with results.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Mapping, NoReturn, Sequence

from ruby_rails_docs.cli.logging import (
    generate_request_id,
    get_request_id,
    set_request_id,
)
from ruby_rails_docs.core.responses import (
    ErrorCode,
    ErrorType,
    error_response,
    success_response,
)


def _ensure_request_id() -> str:
    request_id = get_request_id()
    if request_id:
        return request_id
    request_id = generate_request_id()
    set_request_id(request_id)
    return request_id


def emit(data: Any) -> None:
    """Emit minified JSON to stdout."""
    print(json.dumps(data, separators=(",", ":"), default=str))


def emit_error(
    message: str,
    code: str = ErrorCode.INTERNAL_ERROR.value,
    *,
    error_type: str = ErrorType.INTERNAL.value,
    remediation: str | None = None,
    details: Mapping[str, Any] | None = None,
    exit_code: int = 1,
) -> NoReturn:
    """Emit error JSON to stderr and exit.

    Args:
        message: Human-readable error description.
        code: Error code in SCREAMING_SNAKE_CASE (e.g., COMMAND_FAILED).
        error_type: Error category for routing (validation, external, internal).
        remediation: Actionable guidance for resolving the error.
        details: Optional additional error context.
        exit_code: Process exit status (default 1).

    Raises:
        SystemExit: Always.
    """
    response = error_response(
        message,
        error_code=code,
        error_type=error_type,
        remediation=remediation,
        details=details,
        request_id=_ensure_request_id(),
    )
    print(json.dumps(asdict(response), separators=(",", ":"), default=str), file=sys.stderr)
    sys.exit(exit_code)


def emit_success(
    data: Any,
    *,
    warnings: Sequence[str] | None = None,
    telemetry: Mapping[str, Any] | None = None,
) -> None:
    """Emit success response envelope to stdout.

    Args:
        data: The operation-specific payload; non-dict data is wrapped
            under a ``result`` key.
        warnings: Non-fatal issues to surface in meta.warnings.
        telemetry: Timing/performance metadata.
    """
    if not isinstance(data, dict):
        data = {"result": data}
    response = success_response(
        data=data,
        warnings=warnings,
        telemetry=telemetry,
        request_id=_ensure_request_id(),
    )
    emit(asdict(response))
