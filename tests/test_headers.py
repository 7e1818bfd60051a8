import pytest

from signalwise import Headers, SchemaVersion
from signalwise.errors import InvalidHeaderValueError


def test_keys_are_case_insensitive():
    headers = Headers({"Correlation-ID": "abc"})
    assert headers["correlation-id"] == "abc"
    assert "CORRELATION-ID" in headers
    assert headers.correlation_id == "abc"
    assert list(headers) == ["correlation-id"]


def test_values_are_strings():
    headers = Headers({"response-required": True, "timeout": 10})
    assert headers["response-required"] == "true"
    assert headers["timeout"] == "10"


def test_insertion_order_is_kept():
    headers = Headers([("b", "1"), ("a", "2")], c="3")
    assert list(headers) == ["b", "a", "c"]


def test_mutators_return_new_headers():
    headers = Headers(a="1")
    updated = headers.set("b", "2")

    assert updated is not headers
    assert "b" not in headers
    assert updated == {"a": "1", "b": "2"}
    assert updated.remove("A") == headers
    assert headers.update({"A": "3"})["a"] == "3"
    assert headers["a"] == "1"


def test_schema_version():
    assert Headers().schema_version is None
    assert Headers(version=1).schema_version is SchemaVersion.V_1

    headers = Headers().with_schema_version(SchemaVersion.V_2)
    assert headers["version"] == "2"
    assert headers.schema_version is SchemaVersion.V_2


def test_unknown_schema_version_is_ignored():
    assert Headers(version=42).schema_version is None


def test_non_integer_schema_version():
    with pytest.raises(InvalidHeaderValueError):
        Headers(version="two").schema_version


def test_equality_and_hash():
    a = Headers({"Correlation-Id": "x"})
    b = Headers().with_correlation_id("x")
    assert a == b
    assert hash(a) == hash(b)
    assert Headers.from_json(a.to_json()) == a
