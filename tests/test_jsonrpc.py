"""Tests for JSON-RPC 2.0 message decoding, classification and formatting."""

import json

import pytest

from mcp_tool_server.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ErrorKind,
    JsonRpcError,
    build_error,
)
from mcp_tool_server.protocol.jsonrpc import (
    ACKNOWLEDGEMENT,
    Acknowledgement,
    JsonRpcNotification,
    JsonRpcRequest,
    classify_message,
    decode_message,
    encode_message,
    format_response,
)


class TestClassifyRequest:
    """Tests for classifying JSON-RPC requests."""

    def test_classifies_valid_request(self):
        """Should classify a message with an id as a request."""
        data = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "tools/list",
            "params": {"cursor": "abc"},
        }
        msg = classify_message(data)

        assert isinstance(msg, JsonRpcRequest)
        assert msg.id == 1
        assert msg.method == "tools/list"
        assert msg.params == {"cursor": "abc"}

    def test_accepts_string_id(self):
        """Should accept string IDs."""
        msg = classify_message({"jsonrpc": "2.0", "id": "req-123", "method": "test"})

        assert isinstance(msg, JsonRpcRequest)
        assert msg.id == "req-123"

    def test_explicit_null_id_is_a_request(self):
        """An explicit null id is distinct from an absent id."""
        msg = classify_message({"jsonrpc": "2.0", "id": None, "method": "initialize"})

        assert isinstance(msg, JsonRpcRequest)
        assert msg.id is None

    def test_zero_id_is_a_request(self):
        """Falsy ids still make a request."""
        msg = classify_message({"jsonrpc": "2.0", "id": 0, "method": "initialize"})

        assert isinstance(msg, JsonRpcRequest)
        assert msg.id == 0

    def test_request_without_params(self):
        """Should classify a request without params."""
        msg = classify_message({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})

        assert isinstance(msg, JsonRpcRequest)
        assert msg.params is None

    def test_rejects_missing_jsonrpc_version(self):
        """Should reject a request without the jsonrpc tag, echoing its id."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message({"id": 7, "method": "test"})

        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.msg_id == 7

    def test_rejects_wrong_jsonrpc_version(self):
        """Should reject a wrong jsonrpc version."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message({"jsonrpc": "1.0", "id": 1, "method": "test"})

        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.msg_id == 1

    def test_rejects_missing_method(self):
        """Should reject a request without method, echoing its id."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message({"jsonrpc": "2.0", "id": "abc"})

        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.msg_id == "abc"

    def test_rejects_non_string_method(self):
        """Should reject a request whose method is not a string."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message({"jsonrpc": "2.0", "id": 1, "method": 42})

        assert exc_info.value.code == INVALID_REQUEST

    def test_rejects_structured_id(self):
        """Should reject an object id and answer with a null id."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message({"jsonrpc": "2.0", "id": {"a": 1}, "method": "test"})

        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.msg_id is None


class TestClassifyNotification:
    """Tests for classifying JSON-RPC notifications."""

    def test_classifies_notification(self):
        """Should classify a message without id as a notification."""
        msg = classify_message({"jsonrpc": "2.0", "method": "notifications/initialized"})

        assert isinstance(msg, JsonRpcNotification)
        assert msg.method == "notifications/initialized"

    def test_notification_with_params(self):
        """Should keep notification params."""
        msg = classify_message(
            {"jsonrpc": "2.0", "method": "notifications/progress", "params": {"progress": 50}}
        )

        assert isinstance(msg, JsonRpcNotification)
        assert msg.params == {"progress": 50}

    def test_notification_version_tag_not_checked(self):
        """Notifications are accepted without a jsonrpc tag."""
        msg = classify_message({"method": "notifications/initialized"})

        assert isinstance(msg, JsonRpcNotification)

    def test_notification_with_non_string_method(self):
        """Notifications are never rejected, even with an odd method."""
        msg = classify_message({"method": 5})

        assert isinstance(msg, JsonRpcNotification)
        assert msg.method == "5"


class TestMalformedMessages:
    """Tests for messages that are neither requests nor notifications."""

    def test_rejects_message_without_id_or_method(self):
        """Should reject a message with neither id nor method."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message({"jsonrpc": "2.0", "params": {}})

        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.msg_id is None

    def test_rejects_non_object(self):
        """Should reject non-object messages."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message("just a string")

        assert exc_info.value.code == INVALID_REQUEST

    def test_rejects_batch(self):
        """Should reject arrays (batches are not supported)."""
        with pytest.raises(JsonRpcError) as exc_info:
            classify_message([{"jsonrpc": "2.0", "id": 1, "method": "test"}])

        assert exc_info.value.code == INVALID_REQUEST


class TestDecodeMessage:
    """Tests for decoding raw messages."""

    def test_decodes_json(self):
        """Should decode a JSON string."""
        assert decode_message('{"a": 1}') == {"a": 1}

    def test_invalid_json_is_parse_error(self):
        """Should return parse error for invalid JSON."""
        with pytest.raises(JsonRpcError) as exc_info:
            decode_message("not valid json{")

        assert exc_info.value.code == PARSE_ERROR
        assert exc_info.value.msg_id is None

    def test_oversized_message_is_parse_error(self):
        """Should reject messages above the size limit before parsing."""
        with pytest.raises(JsonRpcError) as exc_info:
            decode_message('{"a": "' + "x" * 100 + '"}', max_size=50)

        assert exc_info.value.code == PARSE_ERROR
        assert "too large" in exc_info.value.message

    def test_overlong_integer_is_parse_error(self):
        """An integer literal beyond the interpreter's digit limit is a parse error."""
        with pytest.raises(JsonRpcError) as exc_info:
            decode_message('{"a": ' + "9" * 5000 + "}")

        assert exc_info.value.code == PARSE_ERROR
        assert exc_info.value.msg_id is None

    def test_deep_nesting_is_parse_error(self):
        """Nesting too deep to decode is a parse error."""
        with pytest.raises(JsonRpcError) as exc_info:
            decode_message("[" * 200_000 + "]" * 200_000)

        assert exc_info.value.code == PARSE_ERROR


class TestFormatting:
    """Tests for formatting JSON-RPC envelopes."""

    def test_formats_success_response(self):
        """Should format a successful response."""
        response = format_response(1, {"tools": []})

        assert response == {"jsonrpc": "2.0", "id": 1, "result": {"tools": []}}

    def test_formats_error_response(self):
        """Should format an error response."""
        response = build_error(ErrorKind.METHOD_NOT_FOUND, "Unknown method: foo", "req-1")

        assert response == {
            "jsonrpc": "2.0",
            "id": "req-1",
            "error": {"code": -32601, "message": "Unknown method: foo"},
        }
        assert "result" not in response

    def test_error_to_envelope(self):
        """JsonRpcError should convert itself to an envelope."""
        error = JsonRpcError(INVALID_PARAMS, "bad", 3)

        assert error.kind is ErrorKind.INVALID_PARAMS
        assert error.to_envelope()["error"] == {"code": -32602, "message": "bad"}
        assert error.to_envelope()["id"] == 3

    def test_encode_message(self):
        """Should serialize envelopes to JSON."""
        encoded = encode_message(format_response("x", {"ok": True}))

        assert json.loads(encoded) == {"jsonrpc": "2.0", "id": "x", "result": {"ok": True}}

    def test_error_codes(self):
        """Should use the standard JSON-RPC error codes."""
        assert PARSE_ERROR == -32700
        assert INVALID_REQUEST == -32600
        assert METHOD_NOT_FOUND == -32601
        assert INVALID_PARAMS == -32602
        assert INTERNAL_ERROR == -32603


class TestAcknowledgement:
    """Tests for the acknowledgement marker."""

    def test_is_singleton(self):
        """Every acknowledgement is the same object."""
        assert Acknowledgement() is ACKNOWLEDGEMENT

    def test_is_not_an_envelope(self):
        """An acknowledgement carries no payload."""
        assert not isinstance(ACKNOWLEDGEMENT, dict)
        assert not ACKNOWLEDGEMENT
