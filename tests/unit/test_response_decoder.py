"""
Unit tests for envelope decoding and server error mapping.
"""

import json
from typing import List

import pytest

from deribit_http.errors import (
    ErrorKind,
    InvalidRequestError,
    NotFoundError,
    ProtocolViolationError,
    RateLimitedError,
    ResponseShapeError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from deribit_http.models.market_types import Ticker
from deribit_http.models.rpc_types import HttpResponse
from deribit_http.services.response_decoder import (
    decode_envelope,
    decode_response,
    map_rpc_error,
    parse_retry_after,
)
from deribit_http.services.stub_transport import raw_response


def envelope(status: int = 200, headers=None, **payload) -> HttpResponse:
    body = {"jsonrpc": "2.0", **payload}
    return raw_response(status, json.dumps(body), headers)


class TestErrorMapping:
    """Test server error code mapping."""

    def test_rate_limit_code(self):
        response = envelope(400, id=1, error={"code": 10028, "message": "too_many_requests"})
        with pytest.raises(RateLimitedError) as exc_info:
            decode_envelope(response, 1)
        assert exc_info.value.code == 10028
        assert exc_info.value.kind == ErrorKind.RATE_LIMITED

    def test_invalid_credentials_is_unauthorized(self):
        response = envelope(400, id=1, error={"code": 13004, "message": "invalid_credentials"})
        with pytest.raises(UnauthorizedError) as exc_info:
            decode_envelope(response, 1)
        assert exc_info.value.request_id == 1

    def test_unknown_code_is_server_error(self):
        response = envelope(400, id=1, error={"code": 11044, "message": "not_open_order"})
        with pytest.raises(ServerError) as exc_info:
            decode_envelope(response, 1)
        assert exc_info.value.code == 11044
        assert exc_info.value.message == "not_open_order"
        assert str(exc_info.value) == "[11044] not_open_order"

    @pytest.mark.parametrize("code,error_class", [
        (10000, UnauthorizedError),
        (13009, UnauthorizedError),
        (13021, UnauthorizedError),
        (13403, UnauthorizedError),
        (-32602, InvalidRequestError),
        (11050, InvalidRequestError),
        (-32601, NotFoundError),
        (13020, NotFoundError),
        (10009, ServerError),
    ])
    def test_code_table(self, code, error_class):
        assert type(map_rpc_error(code, "message")) is error_class

    def test_error_data_is_kept(self):
        data = {"param": "amount", "reason": "must be a multiple of contract size"}
        response = envelope(400, id=3, error={"code": -32602, "message": "Invalid params", "data": data})
        with pytest.raises(InvalidRequestError) as exc_info:
            decode_envelope(response, 3)
        assert exc_info.value.data == data
        assert exc_info.value.http_status == 400


class TestEnvelopeValidation:
    """Test envelope structure checks."""

    def test_result_and_timing(self):
        response = envelope(id=1, result=1700000000000, usIn=100, usOut=350, usDiff=250, testnet=True)
        result = decode_response(response, 1, int)

        assert result.result == 1700000000000
        assert result.timing.us_diff == 250
        assert result.timing.testnet is True
        assert result.timing.request_id == 1

    def test_us_diff_is_recomputed(self):
        decoded = decode_envelope(envelope(id=1, result=None, usIn=100, usOut=160, usDiff=1), 1)
        assert decoded.timing.us_diff == 60

    def test_missing_timing_is_omitted(self):
        decoded = decode_envelope(envelope(id=1, result=True), 1)
        assert decoded.timing.us_diff is None

    def test_null_result_is_a_result(self):
        decoded = decode_envelope(envelope(id=1, result=None), 1)
        assert decoded.error is None
        assert decoded.result is None

    def test_missing_id_is_accepted(self):
        decoded = decode_envelope(envelope(result="ok"), 5)
        assert decoded.result == "ok"

    def test_mismatched_id(self):
        with pytest.raises(ProtocolViolationError, match="does not match"):
            decode_envelope(envelope(id=2, result="ok"), 1)

    def test_both_result_and_error(self):
        response = envelope(id=1, result=1, error={"code": 1, "message": "x"})
        with pytest.raises(ProtocolViolationError):
            decode_envelope(response, 1)

    def test_neither_result_nor_error(self):
        with pytest.raises(ProtocolViolationError):
            decode_envelope(envelope(id=1), 1)

    def test_wrong_jsonrpc_marker(self):
        response = raw_response(200, json.dumps({"jsonrpc": "1.0", "id": 1, "result": 1}))
        with pytest.raises(ProtocolViolationError):
            decode_envelope(response, 1)

    def test_non_json_success(self):
        with pytest.raises(ProtocolViolationError):
            decode_envelope(raw_response(200, "<html>ok</html>"), 1)

    def test_non_json_error_status_is_transport(self):
        with pytest.raises(TransportError) as exc_info:
            decode_envelope(raw_response(502, "Bad Gateway"), 1)
        assert exc_info.value.http_status == 502

    def test_http_429_without_body(self):
        response = raw_response(429, "", {"Retry-After": "2"})
        with pytest.raises(RateLimitedError) as exc_info:
            decode_envelope(response, 1)
        assert exc_info.value.retry_after == 2.0
        assert exc_info.value.http_status == 429


class TestResultDecoding:
    """Test typed result decoding."""

    def test_typed_model(self):
        response = envelope(id=1, result={
            "instrument_name": "BTC-PERPETUAL",
            "timestamp": 1700000000000,
            "mark_price": 36000.5,
            "funding_8h": 0.0001
        })
        ticker = decode_response(response, 1, Ticker).result

        assert isinstance(ticker, Ticker)
        assert ticker.mark_price == 36000.5
        assert ticker.funding_8h == 0.0001

    def test_shape_mismatch(self):
        response = envelope(id=1, result={"unexpected": True})
        with pytest.raises(ResponseShapeError) as exc_info:
            decode_response(response, 1, Ticker)
        assert exc_info.value.expected == "Ticker"
        assert exc_info.value.raw == {"unexpected": True}

    def test_generic_list(self):
        response = envelope(id=1, result=["btc_usd", "eth_usd"])
        assert decode_response(response, 1, List[str]).result == ["btc_usd", "eth_usd"]

    def test_decoding_is_repeatable(self):
        response = envelope(id=1, result={"instrument_name": "ETH-PERPETUAL", "timestamp": 1})
        assert decode_response(response, 1, Ticker).result == decode_response(response, 1, Ticker).result


class TestRetryAfter:
    """Test Retry-After parsing."""

    def test_seconds(self):
        assert parse_retry_after("3") == 3.0
        assert parse_retry_after(" 0.5 ") == 0.5

    def test_http_date(self):
        assert parse_retry_after("Wed, 21 Oct 2015 07:28:05 GMT", now=1445412480.0) == 5.0

    def test_missing_or_garbage(self):
        assert parse_retry_after(None) is None
        assert parse_retry_after("soon") is None

    def test_past_date_clamps(self):
        assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT", now=1445412490.0) == 0.0
