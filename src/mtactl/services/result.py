"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Every ManifestService method returns a ServiceResult. Core
functions raise :class:`~mtactl.domain.errors.MtaError`; the service layer
is the only place those exceptions become data.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from mtactl.domain.errors import MtaError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_module"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal findings, such as validation issues.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


def error_result(op: str, exc: MtaError, **detail: Any) -> ServiceResult:
    """Wrap a raised :class:`MtaError` as a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=exc.code, message=str(exc), detail=detail),
    )
