"""Payload decoding tests."""

import json

from fixtures.histories import b64

from chronoscope.contracts import Payload, WorkflowExecutionFailedEventAttributes
from chronoscope.payloads import decode_payload, decode_payloads, json_snapshot


def test_empty_or_missing_payloads_decode_to_none():
    assert decode_payloads(None) is None
    assert decode_payloads([]) is None


def test_single_payload_decodes_to_text():
    assert decode_payloads([Payload(data=b64("hi"))]) == "hi"


def test_single_payload_without_data_renders_null():
    assert decode_payloads([Payload()]) == "null"


def test_multiple_payloads_join_into_bracketed_list():
    assert decode_payloads([Payload(), Payload()]) == "[null, null]"
    assert decode_payloads([Payload(data=b64("a")), Payload(data=b64("b"))]) == "[a, b]"


def test_malformed_base64_is_treated_as_absent():
    assert decode_payload(Payload(data="not base64!!")) == "null"
    assert decode_payloads([Payload(data=b64("ok")), Payload(data="%%%")]) == "[ok, null]"


def test_json_payload_text_is_returned_verbatim():
    text = json.dumps({"orderId": 7})
    assert decode_payloads([Payload.model_validate({"data": b64(text)})]) == text


def test_json_snapshot_uses_wire_names_and_compact_separators():
    attrs = WorkflowExecutionFailedEventAttributes.model_validate(
        {"failure": {"message": "boom"}, "retryState": "RETRY_STATE_TIMEOUT"}
    )
    assert json_snapshot(attrs) == (
        '{"failure":{"message":"boom"},"retryState":"RETRY_STATE_TIMEOUT"}'
    )
    assert json_snapshot({"message": "x"}) == '{"message":"x"}'
