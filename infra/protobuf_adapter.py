"""Protocol Buffers format adapter.

Binary, schema-based format built on ``betterproto`` messages
(:mod:`infra.employee_pb`). Unlike the text adapters it validates the
dataset before encoding: protobuf silently coerces or drops values that
do not fit the wire types, so mismatches must be caught up front.

Validation:
    The dataset is checked against a Pydantic schema in **strict** mode
    (the counterpart of protobuf ``verify``): a string where an int is
    declared, an unknown field, or an ``id`` outside int32 all produce
    a failing :class:`~core.records.ValidationOutcome` listing every
    offending path. Validation never raises.

Decode shape:
    ``to_dict(casing=SNAKE, include_default_values=True)`` so field
    names match the dataset's snake_case keys and zero-valued fields
    (``is_manager=False``, ``salary=0``) are present rather than
    omitted.

Type drift:
    ``salary`` is a ``double``; an ``int`` salary decodes as ``float``
    (``12000`` → ``12000.0``), which :mod:`core.equality` treats as
    equal.

Example:
    >>> from core.employees import EmployeeList, build_sample_dataset
    >>> adapter = ProtobufAdapter(schema=EmployeeList)
    >>> dataset = build_sample_dataset()
    >>> adapter.validate(dataset).ok
    True
    >>> adapter.decode(adapter.encode(dataset))["employee"][0]["salary"]
    12000.0
"""

import struct
from typing import Any

import betterproto
from pydantic import BaseModel
from pydantic import ValidationError as SchemaViolation

from core.adapter import FormatAdapter
from core.employees import EmployeeList
from core.errors import DecodingError, EncodingError
from core.records import ValidationOutcome
from infra.employee_pb import Employees

_MAX_REPORTED_ERRORS: int = 10
"""Validation errors listed in a failure message before truncation."""


class ProtobufAdapter(FormatAdapter):
    """Adapter for protobuf binary messages.

    Args:
        schema: Pydantic model the dataset must satisfy in strict mode.
        message_type: betterproto message class matching ``schema``.
        name: Adapter name. Defaults to ``"protobuf"``.
    """

    extension: str = "proto"

    def __init__(
        self,
        schema: type[BaseModel] = EmployeeList,
        message_type: type[betterproto.Message] = Employees,
        name: str = "protobuf",
    ) -> None:
        self.name = name
        self._schema: type[BaseModel] = schema
        self._message_type: type[betterproto.Message] = message_type

    def validate(self, dataset: Any) -> ValidationOutcome:
        try:
            self._schema.model_validate(dataset, strict=True)
        except SchemaViolation as exc:
            return ValidationOutcome.failure(_format_violation(exc))
        return ValidationOutcome.success()

    def encode(self, dataset: Any) -> bytes:
        if not isinstance(dataset, dict):
            raise EncodingError(
                f"protobuf dataset must be a mapping, got {type(dataset).__name__}"
            )
        try:
            message: betterproto.Message = self._message_type().from_dict(dataset)
            return bytes(message)
        except (TypeError, ValueError, AttributeError, KeyError, struct.error) as exc:
            raise EncodingError(
                f"cannot encode dataset as {self._message_type.__name__}: {exc}"
            ) from exc

    def decode(self, payload: bytes) -> Any:
        try:
            message: betterproto.Message = self._message_type().parse(payload)
            # Corrupt sub-messages can surface only while converting
            return message.to_dict(
                casing=betterproto.Casing.SNAKE,
                include_default_values=True,
            )
        except (
            ValueError, IndexError, KeyError, TypeError, AttributeError, EOFError, struct.error,
        ) as exc:
            raise DecodingError(
                f"malformed {self._message_type.__name__} payload: "
                f"{type(exc).__name__}: {exc}"
            ) from exc


def _format_violation(exc: SchemaViolation) -> str:
    """Render Pydantic errors as ``path: message; path: message``."""
    details: list[str] = []
    for error in exc.errors()[:_MAX_REPORTED_ERRORS]:
        path: str = ".".join(str(part) for part in error["loc"]) or "<root>"
        details.append(f"{path}: {error['msg']}")
    remaining: int = exc.error_count() - len(details)
    if remaining > 0:
        details.append(f"... and {remaining} more")
    return "; ".join(details)
