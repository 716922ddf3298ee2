"""ServiceResult and ServiceError — the service-to-CLI contract.

Successful operations return a ServiceResult. Failures raise; the command
layer converts known failures into ``ServiceResult(ok=False)`` via
:func:`error_result`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"compile_css"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry, timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def error_result(op: str, code: str, exc: BaseException) -> ServiceResult:
    """Wrap a raised exception as a failed ServiceResult."""
    detail: dict[str, Any] = {"exception": type(exc).__name__}
    path = getattr(exc, "path", None) or getattr(exc, "filename", None)
    if path:
        detail["path"] = str(path)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=str(exc), detail=detail),
    )
