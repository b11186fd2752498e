"""Unit tests for infra.protobuf_adapter module.

Tests strict schema validation (the protobuf ``verify`` step), binary
encoding through betterproto, decode shape, int → double drift, and
malformed payload handling.
"""

import pytest

from core.employees import EmployeeList, build_sample_dataset
from core.equality import values_equal
from core.errors import DecodingError, EncodingError
from core.records import ValidationOutcome
from infra.employee_pb import Employee, Employees
from infra.json_adapter import JsonAdapter
from infra.protobuf_adapter import ProtobufAdapter


@pytest.fixture()
def adapter() -> ProtobufAdapter:
    """Return a protobuf adapter bound to the employee schema."""
    return ProtobufAdapter(schema=EmployeeList)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestProtobufValidate:
    """Tests for ProtobufAdapter.validate."""

    def test_identity(self, adapter: ProtobufAdapter) -> None:
        """Default name and extension."""
        assert adapter.name == "protobuf"
        assert adapter.extension == "proto"

    def test_sample_dataset_valid(self, adapter: ProtobufAdapter) -> None:
        """The sample dataset passes."""
        assert adapter.validate(build_sample_dataset()).ok is True

    def test_string_id_rejected(self, adapter: ProtobufAdapter) -> None:
        """Strict mode rejects '1' for an int field and names the path."""
        dataset: dict = build_sample_dataset()
        dataset["employee"][1]["id"] = "2"
        outcome: ValidationOutcome = adapter.validate(dataset)
        assert outcome.ok is False
        assert "employee.1.id" in outcome.error

    def test_unknown_field_rejected(self, adapter: ProtobufAdapter) -> None:
        """Fields absent from the message are rejected."""
        dataset: dict = build_sample_dataset()
        dataset["employee"][0]["department"] = "IT"
        outcome: ValidationOutcome = adapter.validate(dataset)
        assert outcome.ok is False
        assert "department" in outcome.error

    def test_int32_overflow_rejected(self, adapter: ProtobufAdapter) -> None:
        """ids beyond int32 are rejected."""
        dataset: dict = build_sample_dataset()
        dataset["employee"][0]["id"] = 2**31
        assert adapter.validate(dataset).ok is False

    def test_missing_field_rejected(self, adapter: ProtobufAdapter) -> None:
        """Every declared field is required."""
        dataset: dict = build_sample_dataset()
        del dataset["employee"][2]["email"]
        outcome: ValidationOutcome = adapter.validate(dataset)
        assert outcome.ok is False
        assert "employee.2.email" in outcome.error

    def test_bool_for_int_rejected(self, adapter: ProtobufAdapter) -> None:
        """Strict mode does not treat True as 1."""
        dataset: dict = build_sample_dataset()
        dataset["employee"][0]["id"] = True
        assert adapter.validate(dataset).ok is False

    def test_non_mapping_rejected(self, adapter: ProtobufAdapter) -> None:
        """A bare list does not validate."""
        assert adapter.validate([1, 2, 3]).ok is False

    def test_validate_does_not_mutate(self, adapter: ProtobufAdapter) -> None:
        """Validation leaves the dataset untouched."""
        dataset: dict = build_sample_dataset()
        adapter.validate(dataset)
        assert dataset == build_sample_dataset()

    def test_error_list_truncated(self, adapter: ProtobufAdapter) -> None:
        """Long error lists are summarized."""
        dataset: dict = {"employee": [{"id": "x"} for _ in range(20)]}
        outcome: ValidationOutcome = adapter.validate(dataset)
        assert outcome.ok is False
        assert "more" in outcome.error


# ---------------------------------------------------------------------------
# Encode / Decode
# ---------------------------------------------------------------------------


class TestProtobufCodec:
    """Tests for ProtobufAdapter.encode / decode."""

    def test_encode_matches_message(self, adapter: ProtobufAdapter) -> None:
        """Encoding equals serializing the equivalent message."""
        dataset: dict = build_sample_dataset()
        expected: bytes = bytes(
            Employees(employee=[Employee(**e) for e in dataset["employee"]])
        )
        assert adapter.encode(dataset) == expected

    def test_smaller_than_json(self, adapter: ProtobufAdapter) -> None:
        """The binary payload is smaller than pretty JSON."""
        dataset: dict = build_sample_dataset()
        assert len(adapter.encode(dataset)) < len(JsonAdapter().encode(dataset))

    def test_decode_shape(self, adapter: ProtobufAdapter) -> None:
        """Decoded values use snake_case keys and include defaults."""
        decoded: dict = adapter.decode(adapter.encode(build_sample_dataset()))
        assert decoded["employee"][0] == {
            "id": 1,
            "name": "Ahmed",
            "salary": 12000.0,
            "email": "ahmed@entreprise.ma",
            "is_manager": False,
        }

    def test_salary_int_to_float_drift(self, adapter: ProtobufAdapter) -> None:
        """int salary comes back as float yet compares equal."""
        dataset: dict = build_sample_dataset()
        decoded: dict = adapter.decode(adapter.encode(dataset))
        assert isinstance(decoded["employee"][0]["salary"], float)
        assert values_equal(dataset, decoded, schema=EmployeeList)
        assert values_equal(dataset, decoded)

    def test_empty_list(self, adapter: ProtobufAdapter) -> None:
        """An empty dataset encodes to zero bytes and decodes to an empty list."""
        payload: bytes = adapter.encode({"employee": []})
        assert payload == b""
        assert adapter.decode(payload) == {"employee": []}

    def test_encode_non_mapping(self, adapter: ProtobufAdapter) -> None:
        """Non-mapping datasets raise EncodingError."""
        with pytest.raises(EncodingError, match="must be a mapping"):
            adapter.encode([1, 2])

    @pytest.mark.parametrize(
        "payload",
        [
            b"\xff" * 16,
            b"\x0b\x82\xaa\xa7\xae,CM\x8f\xa0C",
        ],
        ids=["overlong-varint", "corrupt-submessage"],
    )
    def test_decode_malformed(self, adapter: ProtobufAdapter, payload: bytes) -> None:
        """Corrupt payloads raise DecodingError, never a raw exception."""
        with pytest.raises(DecodingError, match="malformed Employees payload"):
            adapter.decode(payload)
