"""
Unit tests for request building and request signing.
"""

import hashlib
import hmac
import json
from urllib.parse import parse_qsl

import pytest

from deribit_http.api import endpoints
from deribit_http.errors import EncodingFailedError, MissingCredentialError
from deribit_http.models.auth_types import ApiKeyCredentials
from deribit_http.models.rpc_types import AuthMode, HttpVerb, Placement
from deribit_http.models.trading_types import OrderRequest
from deribit_http.services.request_builder import RequestBuilder, serialize_params
from deribit_http.utils.clock import ManualClock
from deribit_http.utils.signature import (
    client_signature,
    generate_nonce,
    sign_request,
    signature_payload,
    verify_signature,
)


@pytest.fixture
def builder() -> RequestBuilder:
    return RequestBuilder(
        user_agent="test-agent/1.0",
        clock=ManualClock(epoch_ms=1700000000000),
        nonce_factory=lambda: "abcdefgh"
    )


class TestEndpointDescriptor:
    """Test endpoint descriptor defaults."""

    def test_public_read(self):
        assert endpoints.GET_TIME.path == "/api/v2/public/get_time"
        assert endpoints.GET_TIME.http_verb == HttpVerb.GET
        assert endpoints.GET_TIME.placement == Placement.QUERY
        assert endpoints.GET_TIME.auth == AuthMode.NONE
        assert endpoints.GET_TIME.is_idempotent is True

    def test_private_mutation(self):
        assert endpoints.BUY.http_verb == HttpVerb.POST
        assert endpoints.BUY.placement == Placement.JSON_BODY
        assert endpoints.BUY.auth == AuthMode.BEARER
        assert endpoints.BUY.is_idempotent is False

    def test_auth_exchange_never_replayed(self):
        assert endpoints.PUBLIC_AUTH.is_idempotent is False
        assert endpoints.PUBLIC_AUTH.auth == AuthMode.NONE

    def test_with_auth_copies(self):
        signed = endpoints.GET_ACCOUNT_SUMMARY.with_auth(AuthMode.SIGNED)
        assert signed.auth == AuthMode.SIGNED
        assert endpoints.GET_ACCOUNT_SUMMARY.auth == AuthMode.BEARER

    def test_endpoint_lookup(self):
        assert endpoints.endpoint_for("private/get_positions") is endpoints.GET_POSITIONS
        assert "public/auth" in endpoints.ENDPOINTS
        with pytest.raises(KeyError):
            endpoints.endpoint_for("public/does_not_exist")


class TestParameterSerialization:
    """Test parameter encoding."""

    def test_none_fields_are_dropped(self):
        assert serialize_params({"currency": "BTC", "kind": None}) == {"currency": "BTC"}
        assert serialize_params(None) == {}

    def test_model_uses_aliases(self):
        order = OrderRequest(instrument_name="BTC-PERPETUAL", amount=10, order_type="limit", price=50000.5)
        assert serialize_params(order) == {
            "instrument_name": "BTC-PERPETUAL",
            "amount": 10.0,
            "type": "limit",
            "price": 50000.5
        }

    def test_non_object_rejected(self):
        with pytest.raises(EncodingFailedError):
            serialize_params([1, 2, 3])
        with pytest.raises(EncodingFailedError):
            serialize_params("currency=BTC")

    def test_unserializable_rejected(self):
        with pytest.raises(EncodingFailedError):
            serialize_params({"value": object()})


class TestRequestBuilder:
    """Test request building."""

    def test_get_query_encoding(self, builder: RequestBuilder):
        request = builder.build(
            endpoints.GET_INSTRUMENTS,
            {"currency": "BTC", "kind": "option", "expired": False, "extra": None},
            request_id=7
        )

        assert request.verb == HttpVerb.GET
        assert request.path == "/api/v2/public/get_instruments"
        assert request.body is None
        assert request.query == {"currency": "BTC", "kind": "option", "expired": "false"}
        assert request.query_string == "currency=BTC&kind=option&expired=false"
        assert request.headers["User-Agent"] == "test-agent/1.0"
        assert "Authorization" not in request.headers

    def test_get_query_json_values_are_escaped(self, builder: RequestBuilder):
        request = builder.build(endpoints.GET_INSTRUMENTS, {"names": ["a b", "c"]}, request_id=1)

        assert request.query["names"] == '["a b","c"]'
        assert request.query_string == "names=%5B%22a%20b%22%2C%22c%22%5D"
        assert dict(parse_qsl(request.query_string)) == request.query

    def test_post_body(self, builder: RequestBuilder):
        order = OrderRequest(instrument_name="BTC-PERPETUAL", amount=10, order_type="market", label="l1")
        request = builder.build(endpoints.BUY, order, request_id=42, bearer_token="T")

        assert request.verb == HttpVerb.POST
        assert request.query == {}
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Authorization"] == "Bearer T"
        assert json.loads(request.body) == {
            "jsonrpc": "2.0",
            "id": 42,
            "method": "private/buy",
            "params": {"instrument_name": "BTC-PERPETUAL", "amount": 10.0, "type": "market", "label": "l1"}
        }
        assert " " not in request.body

    def test_body_reserializes_identically(self, builder: RequestBuilder):
        order = OrderRequest(instrument_name="ETH-PERPETUAL", contracts=3, order_type="limit", price=1800.25, post_only=True)
        request = builder.build(endpoints.SELL, order, request_id=3, bearer_token="T")

        parsed = json.loads(request.body)
        assert json.dumps(parsed, separators=(",", ":")) == request.body

    def test_bearer_without_token(self, builder: RequestBuilder):
        with pytest.raises(MissingCredentialError):
            builder.build(endpoints.GET_ACCOUNT_SUMMARY, {"currency": "BTC"}, request_id=1)

    def test_signed_without_api_key(self, builder: RequestBuilder):
        signed = endpoints.GET_ACCOUNT_SUMMARY.with_auth(AuthMode.SIGNED)
        with pytest.raises(MissingCredentialError):
            builder.build(signed, {"currency": "BTC"}, request_id=1)

    def test_default_headers(self):
        builder = RequestBuilder(default_headers={"X-Desk": "options", "User-Agent": "ignored"})
        request = builder.build(endpoints.GET_TIME, None, request_id=1)
        assert request.headers["X-Desk"] == "options"
        assert request.headers["User-Agent"].startswith("deribit-http-python/")


class TestSigning:
    """Test the deri-hmac-sha256 scheme."""

    def test_signature_fixture(self, builder: RequestBuilder):
        """Signed GET reproduces the documented canonical string."""
        signed = endpoints.GET_ACCOUNT_SUMMARY.with_auth(AuthMode.SIGNED)
        request = builder.build(
            signed,
            {"currency": "BTC"},
            request_id=1,
            credentials=ApiKeyCredentials(client_id="X", client_secret="S")
        )

        expected_sig = hmac.new(
            b"S",
            b"1700000000000\nabcdefgh\nGET\n/api/v2/private/get_account_summary\ncurrency=BTC\n",
            hashlib.sha256
        ).hexdigest()

        assert request.headers["Authorization"] == (
            f"deri-hmac-sha256 id=X,ts=1700000000000,sig={expected_sig},nonce=abcdefgh"
        )

    def test_signed_post_covers_body(self, builder: RequestBuilder):
        signed = endpoints.CANCEL.with_auth(AuthMode.SIGNED)
        credentials = ApiKeyCredentials(client_id="X", client_secret="S")
        request = builder.build(signed, {"order_id": "ETH-1"}, request_id=5, credentials=credentials)

        header = request.headers["Authorization"]
        fields = dict(part.split("=", 1) for part in header.split(" ", 1)[1].split(","))
        recomputed = sign_request("S", int(fields["ts"]), fields["nonce"], "POST", request.path, request.body)

        assert verify_signature(recomputed, fields["sig"])
        assert not verify_signature(recomputed, "0" * 64)

    def test_signature_payload_layout(self):
        payload = signature_payload(1, "n", "post", "/api/v2/private/buy", "{}")
        assert payload == "1\nn\nPOST\n/api/v2/private/buy\n{}\n"

    def test_client_signature(self):
        expected = hmac.new(b"S", b"1700000000000\nabcdefgh\n", hashlib.sha256).hexdigest()
        assert client_signature("S", 1700000000000, "abcdefgh") == expected

    def test_generate_nonce(self):
        nonce = generate_nonce()
        assert len(nonce) >= 8
        assert nonce.isalnum()
        assert generate_nonce() != nonce
