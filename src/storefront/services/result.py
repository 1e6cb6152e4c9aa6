"""ServiceResult and ServiceError: what the Storefront facade returns.

Mutating facade operations return a frozen ServiceResult instead of
raising, so presentation code renders success and failure the same
way. The CLI serializes it verbatim for ``--json``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Machine-readable ``code`` plus a user-facing ``message``."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one facade operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_item"``).
        data: Operation-specific, JSON-safe payload.
        warnings: Non-fatal issues, such as a failing subscriber.
        error: Populated when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail),
        )
