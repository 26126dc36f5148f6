"""
Tests for the error model and API error mapping.
"""

import pytest

from cdp_client.runtime.errors import (
    APIError, ArgumentError, CdpError, ErrorCode, InvalidPageError, MalformedRequestError,
    NotFoundError, TimeoutError, UnauthorizedError, api_error_from_response,
)


class TestApiErrorMapping:
    """Test mapping of error responses to exception classes."""

    @pytest.mark.parametrize("code,cls", [
        ("invalid_page_token", InvalidPageError),
        ("not_found", NotFoundError),
        ("unauthorized", UnauthorizedError),
        ("malformed_request", MalformedRequestError),
    ])
    def test_known_codes(self, code, cls):
        error = api_error_from_response(400, {"code": code, "message": "bad", "correlation_id": "corr-1"})

        assert type(error) is cls
        assert error.http_code == 400
        assert error.api_code == code
        assert error.api_message == "bad"
        assert error.correlation_id == "corr-1"

    def test_unknown_code(self):
        error = api_error_from_response(500, {"code": "brand_new", "message": "?"})
        assert type(error) is APIError

    def test_non_json_body(self):
        error = api_error_from_response(502, "Bad Gateway")
        assert type(error) is APIError
        assert error.api_message == "Bad Gateway"
        assert error.api_code is None

    def test_str(self):
        error = NotFoundError(404, "not_found", "missing", "corr-9")
        assert str(error) == "NotFoundError{httpCode: 404, apiCode: not_found, apiMessage: missing, correlationId: corr-9}"

    def test_api_errors_are_cdp_errors(self):
        assert isinstance(api_error_from_response(400, {"code": "not_found"}), CdpError)


class TestCdpError:
    """Test the base error."""

    def test_defaults(self):
        error = ArgumentError()
        assert error.code == ErrorCode.INVALID_ARGUMENT
        assert error.message == "Argument Error"

    def test_to_dict(self):
        cause = ValueError("inner")
        error = ArgumentError("bad amount", details={"amount": "-1"}, cause=cause)

        assert error.to_dict() == {
            "code": ErrorCode.INVALID_ARGUMENT.value,
            "message": "bad amount",
            "details": {"amount": "-1"},
            "cause": "inner",
        }
        assert "Caused by: inner" in str(error)

    def test_timeout_carries_operation(self):
        op = object()
        error = TimeoutError("slow", operation=op)
        assert error.operation is op
        assert error.code == ErrorCode.TIMEOUT
