"""JSON format adapter.

Self-describing text format: no schema, so :meth:`validate` always
succeeds. Encodes with the standard library ``json`` module as
pretty-printed UTF-8 (``indent=2`` by default).

Type drift:
    JSON has no tuple and no bytes type; tuples decode as lists and
    bytes are rejected at encode time. ``12000.0`` decodes as a float
    and ``12000`` as an int; :func:`core.equality.values_equal` treats
    them as equal.

Example:
    >>> adapter = JsonAdapter(indent=None)
    >>> adapter.encode({"id": 1})
    b'{"id": 1}'
    >>> adapter.decode(b'{"id": 1}')
    {'id': 1}
"""

import json
from typing import Any

from core.adapter import FormatAdapter
from core.errors import DecodingError, EncodingError


class JsonAdapter(FormatAdapter):
    """Adapter for JSON text.

    Args:
        indent: Indentation passed to ``json.dumps``. ``None`` for the
            compact single-line form.
        name: Adapter name. Defaults to ``"json"``.
    """

    extension: str = "json"

    def __init__(self, indent: int | None = 2, name: str = "json") -> None:
        self.name = name
        self._indent: int | None = indent

    def encode(self, dataset: Any) -> bytes:
        try:
            text: str = json.dumps(dataset, indent=self._indent, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"cannot encode dataset as JSON: {exc}") from exc
        return text.encode("utf-8")

    def decode(self, payload: bytes) -> Any:
        try:
            return json.loads(payload.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise DecodingError(f"JSON payload is not UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DecodingError(f"malformed JSON: {exc}") from exc
