"""XML format adapter.

Text format with tags. The dataset mapping is written as children of a
single root element (``<root>`` by default), pretty-printed with two
spaces, no XML declaration.

Mapping rules (encode):
    - ``dict`` → one child element per key (keys must be valid XML
      names).
    - ``list`` / ``tuple`` → the element repeated once per item, all
      named by the enclosing key. Lists of lists are rejected.
    - ``bool`` → ``true`` / ``false``; numbers → ``str(value)``;
      ``str`` → text; ``None`` → empty element.

Mapping rules (decode):
    - An element with children → ``dict``; repeated tags → ``list``.
    - Tags listed in ``list_tags`` always decode to a ``list``, so a
      one-item list survives the round-trip.
    - A leaf element → its text (``""`` if empty).

Type drift:
    Every scalar comes back as ``str``. Round-trip equality therefore
    needs a declared schema (see :mod:`core.equality`). Empty lists and
    empty dicts do not survive.

Example:
    >>> adapter = XmlAdapter(list_tags={"employee"})
    >>> payload = adapter.encode({"employee": [{"id": 1, "is_manager": False}]})
    >>> adapter.decode(payload)
    {'employee': [{'id': '1', 'is_manager': 'false'}]}
"""

import re
import xml.etree.ElementTree as ET
from typing import Any, Iterable

from core.adapter import FormatAdapter
from core.errors import DecodingError, EncodingError

_XML_NAME: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")
"""Conservative subset of XML element names (ASCII only)."""

_ILLEGAL_XML_CHARS: re.Pattern[str] = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)
"""Characters XML 1.0 cannot carry, even escaped."""


class XmlAdapter(FormatAdapter):
    """Adapter for XML text built with :mod:`xml.etree.ElementTree`.

    Args:
        root_tag: Name of the wrapping root element.
        list_tags: Tags that always decode to lists.
        indent: Spaces per nesting level. ``0`` for no pretty-printing.
        name: Adapter name. Defaults to ``"xml"``.

    Raises:
        ValueError: If ``root_tag`` is not a valid element name.
    """

    extension: str = "xml"

    def __init__(
        self,
        root_tag: str = "root",
        list_tags: Iterable[str] = (),
        indent: int = 2,
        name: str = "xml",
    ) -> None:
        if not _XML_NAME.match(root_tag):
            raise ValueError(f"invalid XML root tag: {root_tag!r}")
        self.name = name
        self._root_tag: str = root_tag
        self._list_tags: frozenset[str] = frozenset(list_tags)
        self._indent: int = indent

    # ------------------------------------------------------------------
    # Encode
    # ------------------------------------------------------------------

    def encode(self, dataset: Any) -> bytes:
        if not isinstance(dataset, dict):
            raise EncodingError(
                f"XML dataset must be a mapping, got {type(dataset).__name__}"
            )
        root: ET.Element = ET.Element(self._root_tag)
        self._fill(root, dataset, path=self._root_tag)
        if self._indent > 0:
            ET.indent(root, space=" " * self._indent)
        return ET.tostring(root, encoding="unicode").encode("utf-8")

    def _fill(self, element: ET.Element, mapping: dict[Any, Any], path: str) -> None:
        for key, value in mapping.items():
            if not isinstance(key, str) or not _XML_NAME.match(key):
                raise EncodingError(f"{path}: key {key!r} is not a valid XML name")
            if isinstance(value, (list, tuple)):
                for index, item in enumerate(value):
                    if isinstance(item, (list, tuple)):
                        raise EncodingError(
                            f"{path}.{key}[{index}]: nested lists cannot be "
                            "represented in XML"
                        )
                    self._append(element, key, item, path=f"{path}.{key}[{index}]")
            else:
                self._append(element, key, value, path=f"{path}.{key}")

    def _append(self, parent: ET.Element, tag: str, value: Any, path: str) -> None:
        child: ET.Element = ET.SubElement(parent, tag)
        if isinstance(value, dict):
            self._fill(child, value, path=path)
        elif value is None:
            pass
        else:
            child.text = _scalar_text(value, path=path)

    # ------------------------------------------------------------------
    # Decode
    # ------------------------------------------------------------------

    def decode(self, payload: bytes) -> Any:
        try:
            root: ET.Element = ET.fromstring(payload)
        except ET.ParseError as exc:
            raise DecodingError(f"malformed XML: {exc}") from exc
        if root.tag != self._root_tag:
            raise DecodingError(
                f"unexpected root element <{root.tag}>, expected <{self._root_tag}>"
            )
        if len(root) == 0:
            return {}
        return self._to_value(root)

    def _to_value(self, element: ET.Element) -> Any:
        if len(element) == 0:
            return element.text or ""

        result: dict[str, Any] = {}
        for child in element:
            value: Any = self._to_value(child)
            if child.tag in result:
                existing: Any = result[child.tag]
                if isinstance(existing, list):
                    existing.append(value)
                else:
                    result[child.tag] = [existing, value]
            elif child.tag in self._list_tags:
                result[child.tag] = [value]
            else:
                result[child.tag] = value
        return result


def _scalar_text(value: Any, path: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        if _ILLEGAL_XML_CHARS.search(value):
            raise EncodingError(f"{path}: string contains characters illegal in XML")
        return value
    raise EncodingError(f"{path}: unsupported type {type(value).__name__}")
