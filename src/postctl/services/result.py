"""ServiceResult and ServiceError — what every CorpusService operation returns.

INVARIANT: Service methods never raise for an expected failure (a missing
input directory, a bad page number, an unknown post). They return a
``ServiceResult`` with ``ok=False`` and a coded :class:`ServiceError`, which
``AppContext.emit`` turns into stderr output and exit status 1.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    ``code`` is stable (``EMPTY_INPUT``, ``NOT_FOUND``, ...); ``detail``
    carries the offending path or argument.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation, rendered as Rich text or ``--json``.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"build"``, ``"posts"``, ...).
        data: Operation-specific payload on success.
        warnings: Posts that failed to load and a rejected site config;
            none of these fail the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata such as ``duration_ms``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Build a failed result for *op*."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
