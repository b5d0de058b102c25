"""Tests for the error taxonomy."""

from __future__ import annotations

import pytest

from toolrpc.errors import (
    DuplicateToolError,
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    RequestCancelledError,
    RpcError,
    ToolNotFoundError,
    UpstreamError,
    UpstreamServiceError,
)


class TestRpcErrors:
    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (ParseError(), -32700),
            (ProtocolError("Missing method."), -32600),
            (MethodNotFoundError("x"), -32601),
            (ToolNotFoundError("x"), -32601),
            (InvalidParamsError("bad"), -32602),
            (InternalError("boom"), -32603),
            (RequestCancelledError(), -32603),
        ],
    )
    def test_codes(self, exc: RpcError, code: int) -> None:
        assert exc.code == code
        assert exc.to_error()["code"] == code

    def test_data_omitted_when_null(self) -> None:
        assert ParseError().to_error() == {"code": -32700, "message": "Parse error"}

    def test_tool_not_found(self) -> None:
        exc = ToolNotFoundError("MapList")
        assert exc.to_error() == {"code": -32601, "message": "Tool not found", "data": "MapList"}
        assert exc.name == "MapList"

    def test_invalid_params_message_names_parameter(self) -> None:
        assert InvalidParamsError("detail", parameter="wkt").message == "Invalid params: 'wkt'"
        assert InvalidParamsError("detail").message == "Invalid params"

    def test_cancelled_data(self) -> None:
        assert RequestCancelledError().data == "Request cancelled."

    def test_str_includes_data(self) -> None:
        assert str(InternalError("boom")) == "Internal error: boom"


class TestUpstreamErrors:
    def test_unauthorized_category(self) -> None:
        exc = UpstreamError("401", unauthorized=True)
        assert exc.code == -32000
        assert exc.message == "Service authorization failed (invalid service token)"

    def test_generic_category(self) -> None:
        exc = UpstreamError("timeout")
        assert exc.code == -32001
        assert exc.message == "Service API error"

    @pytest.mark.parametrize(
        ("message", "status", "expected"),
        [
            ("Unauthorized", None, True),
            ("request was unauthorized", 500, True),
            ("forbidden", 403, True),
            ("nope", 401, True),
            ("server error", 500, False),
            ("connection refused", None, False),
        ],
    )
    def test_service_error_unauthorized(
        self, message: str, status: int | None, expected: bool
    ) -> None:
        assert UpstreamServiceError(message, status_code=status).unauthorized is expected


def test_duplicate_tool_error_message() -> None:
    exc = DuplicateToolError("MapList", "A.list", "B.list")
    assert "MapList" in str(exc)
    assert exc.first == "A.list"
