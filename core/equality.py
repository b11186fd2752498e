"""Round-trip equality relation.

Decoders of loosely-typed formats do not always reproduce the exact
Python types of the original dataset: JSON may turn ``12000.0`` into
``12000``, XML turns every scalar into text, and protobuf turns an
``int`` salary into a ``double``. Raw ``==`` would flag all of these as
mismatches, so equality is defined per declared schema.

Equality rules:
    With a schema (a Pydantic model class):
        Both values are validated in lax mode and their ``model_dump()``
        outputs compared. ``"12000"`` equals ``12000`` for a ``float``
        field; ``"true"`` equals ``True`` for a ``bool`` field. If the
        decoded value does not validate, the values are unequal. If the
        original does not validate, the structural rules below apply.
        Values compare at the schema's declared precision: both sides of
        a ``float`` field are coerced first, so an int salary above
        ``2**53`` that a ``double`` rounds still compares equal.
        Structural comparison is exact and flags that loss.
    Without a schema (structural):
        - ``bool`` equals only ``bool``.
        - ``int`` and ``float`` compare by numeric value
          (``12000 == 12000.0``).
        - ``str`` never equals a number.
        - ``list`` and ``tuple`` compare element-wise.
        - ``dict`` compares key sets, then values per key.
        - Anything else falls back to ``==``.

Example:
    >>> values_equal({"id": 1, "salary": 12000}, {"id": 1, "salary": 12000.0})
    True
    >>> values_equal({"id": 1}, {"id": "1"})
    False
"""

import logging
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as SchemaViolation

logger: logging.Logger = logging.getLogger(__name__)


def values_equal(
    expected: Any,
    actual: Any,
    schema: type[BaseModel] | None = None,
) -> bool:
    """Compare a decoded value against the original dataset.

    Args:
        expected: Original dataset.
        actual: Decoded reconstruction.
        schema: Declared dataset schema. ``None`` for structural
            comparison.

    Returns:
        ``True`` if the values are semantically equal.
    """
    if schema is None:
        return structurally_equal(expected, actual)

    try:
        expected_dump: dict[str, Any] = schema.model_validate(expected).model_dump()
    except SchemaViolation:
        logger.debug(
            "Original does not match %s, comparing structurally",
            schema.__name__,
        )
        return structurally_equal(expected, actual)

    try:
        actual_dump: dict[str, Any] = schema.model_validate(actual).model_dump()
    except SchemaViolation as exc:
        logger.debug(
            "Decoded value does not match %s: %d error(s)",
            schema.__name__,
            exc.error_count(),
        )
        return False

    return structurally_equal(expected_dump, actual_dump)


def structurally_equal(expected: Any, actual: Any) -> bool:
    """Deep value comparison with numeric int/float unification.

    See the module docstring for the exact rules.
    """
    if isinstance(expected, bool) or isinstance(actual, bool):
        return (
            isinstance(expected, bool)
            and isinstance(actual, bool)
            and expected == actual
        )

    if _is_number(expected) or _is_number(actual):
        return _is_number(expected) and _is_number(actual) and expected == actual

    if isinstance(expected, dict):
        if not isinstance(actual, dict) or expected.keys() != actual.keys():
            return False
        return all(structurally_equal(expected[k], actual[k]) for k in expected)

    if isinstance(expected, (list, tuple)):
        if not isinstance(actual, (list, tuple)) or len(expected) != len(actual):
            return False
        return all(structurally_equal(e, a) for e, a in zip(expected, actual))

    return bool(expected == actual)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
