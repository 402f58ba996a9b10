"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from postctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="build", data={"count": 9})
        assert result.ok is True
        assert result.op == "build"
        assert result.data == {"count": 9}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="EMPTY_INPUT", message="no post files found")
        result = ServiceResult(ok=False, op="build", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "EMPTY_INPUT"

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="posts",
            data={"items": [{"path": "a.md"}]},
            warnings=["b.md: broken"],
            meta={"duration_ms": 4.2},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["items"][0]["path"] == "a.md"
        assert parsed["warnings"] == ["b.md: broken"]
        assert parsed["meta"]["duration_ms"] == 4.2

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="missing", detail={"path": "a.md"})
        assert error.detail["path"] == "a.md"

    def test_default_detail(self) -> None:
        assert ServiceError(code="E001", message="bad").detail == {}

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("show", "NOT_FOUND", "missing", path="a.md")
        assert result.ok is False
        assert result.op == "show"
        assert result.error == ServiceError(
            code="NOT_FOUND", message="missing", detail={"path": "a.md"}
        )
