"""Infrastructure layer for the serialization format benchmark.

This package provides the concrete JSON, XML and Protobuf format
adapters and the filesystem / in-memory artifact storage.
"""

from infra.json_adapter import JsonAdapter
from infra.protobuf_adapter import ProtobufAdapter
from infra.storage import FileStorage, MemoryStorage
from infra.xml_adapter import XmlAdapter

__all__: list[str] = [
    "FileStorage",
    "JsonAdapter",
    "MemoryStorage",
    "ProtobufAdapter",
    "XmlAdapter",
]
