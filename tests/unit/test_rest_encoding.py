"""Tests for Firestore REST value encoding."""

from datetime import UTC, datetime

import pytest

from storefront.infrastructure.firebase._rest_encoding import (
    decode_document,
    decode_value,
    document_id,
    encode_document,
    encode_value,
)


@pytest.mark.parametrize(
    ("value", "encoded"),
    [
        (None, {"nullValue": None}),
        (True, {"booleanValue": True}),
        (1712000000000, {"integerValue": "1712000000000"}),
        (1.5, {"doubleValue": 1.5}),
        ("Foxo", {"stringValue": "Foxo"}),
        (["a"], {"arrayValue": {"values": [{"stringValue": "a"}]}}),
    ],
)
def test_encode_value(value, encoded) -> None:
    assert encode_value(value) == encoded


def test_bool_is_not_encoded_as_integer() -> None:
    assert encode_value(False) == {"booleanValue": False}


def test_service_document_survives_encoding() -> None:
    """A service record decodes back to the same field map (createdAt stays an int)."""
    data = {
        "name": "Logo design",
        "price": "25",
        "sampleImages": ["https://cdn/a.png", "https://cdn/b.png"],
        "createdAt": 1712000000000,
        "meta": {"featured": True},
    }
    assert decode_document(encode_document(data)) == data


def test_decode_timestamp_and_empty_array() -> None:
    assert decode_value({"timestampValue": "2024-04-01T12:00:00Z"}) == datetime(
        2024, 4, 1, 12, tzinfo=UTC
    )
    assert decode_value({"arrayValue": {}}) == []


def test_decode_document_handles_missing_fields() -> None:
    assert decode_document(None) == {}
    assert decode_document({"name": "x"}) == {}


def test_document_id() -> None:
    name = "projects/p/databases/(default)/documents/services/abc123"
    assert document_id({"name": name}) == "abc123"
    assert document_id({}) == ""


def test_unsupported_type() -> None:
    with pytest.raises(TypeError):
        encode_value(object())
