"""Unit tests for infra.json_adapter module."""

import json

import pytest

from core.employees import EmployeeList, build_sample_dataset
from core.equality import values_equal
from core.errors import DecodingError, EncodingError
from infra.json_adapter import JsonAdapter


@pytest.fixture()
def adapter() -> JsonAdapter:
    """Return a pretty-printing JSON adapter."""
    return JsonAdapter()


class TestJsonAdapter:
    """Tests for JsonAdapter."""

    def test_identity(self, adapter: JsonAdapter) -> None:
        """Default name and extension."""
        assert adapter.name == "json"
        assert adapter.extension == "json"

    def test_custom_name(self) -> None:
        """Name can be overridden for multiple JSON variants."""
        assert JsonAdapter(indent=None, name="json-compact").name == "json-compact"

    def test_validate_always_ok(self, adapter: JsonAdapter) -> None:
        """JSON has no schema; anything validates."""
        assert adapter.validate({"x": object()}).ok is True

    def test_encode_is_indented_utf8(self, adapter: JsonAdapter) -> None:
        """Output matches json.dumps(indent=2) as UTF-8."""
        dataset: dict = build_sample_dataset()
        assert adapter.encode(dataset) == json.dumps(dataset, indent=2).encode("utf-8")

    def test_compact_is_smaller(self) -> None:
        """indent=None produces a smaller payload."""
        dataset: dict = build_sample_dataset()
        assert len(JsonAdapter(indent=None).encode(dataset)) < len(
            JsonAdapter(indent=2).encode(dataset)
        )

    def test_round_trip_exact(self, adapter: JsonAdapter) -> None:
        """The sample dataset decodes to an identical structure."""
        dataset: dict = build_sample_dataset()
        assert adapter.decode(adapter.encode(dataset)) == dataset

    def test_float_salary_boundary(self, adapter: JsonAdapter) -> None:
        """12000.0 decodes as a float and still equals 12000."""
        decoded: dict = adapter.decode(adapter.encode({"salary": 12000.0}))
        assert isinstance(decoded["salary"], float)
        assert values_equal({"salary": 12000}, decoded)

    def test_tuple_becomes_list(self, adapter: JsonAdapter) -> None:
        """Tuples decode as lists but compare equal."""
        decoded: dict = adapter.decode(adapter.encode({"ids": (1, 2)}))
        assert decoded == {"ids": [1, 2]}
        assert values_equal({"ids": (1, 2)}, decoded)

    def test_non_ascii(self, adapter: JsonAdapter) -> None:
        """Non-ASCII names survive."""
        dataset: dict = {"name": "Français"}
        assert adapter.decode(adapter.encode(dataset)) == dataset

    def test_schema_round_trip(self, adapter: JsonAdapter) -> None:
        """Decoded employees equal the original under the schema."""
        dataset: dict = build_sample_dataset()
        assert values_equal(dataset, adapter.decode(adapter.encode(dataset)), EmployeeList)

    def test_encode_unserializable(self, adapter: JsonAdapter) -> None:
        """Non-JSON values raise EncodingError."""
        with pytest.raises(EncodingError, match="cannot encode"):
            adapter.encode({"raw": b"bytes"})

    def test_encode_nan_rejected(self, adapter: JsonAdapter) -> None:
        """NaN is not valid JSON."""
        with pytest.raises(EncodingError):
            adapter.encode({"salary": float("nan")})

    def test_decode_malformed(self, adapter: JsonAdapter) -> None:
        """Malformed JSON raises DecodingError."""
        with pytest.raises(DecodingError, match="malformed JSON"):
            adapter.decode(b'{"employee": [')

    def test_decode_invalid_utf8(self, adapter: JsonAdapter) -> None:
        """Non-UTF-8 bytes raise DecodingError."""
        with pytest.raises(DecodingError, match="not UTF-8"):
            adapter.decode(b"\xff\xfe\x00")
