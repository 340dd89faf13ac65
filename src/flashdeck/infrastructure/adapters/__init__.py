# Infrastructure Storage Adapters Package
from .json_storage import JsonCardStorage, JsonSessionStorage
from .key_value import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = [
    "FileKeyValueStore",
    "JsonCardStorage",
    "JsonSessionStorage",
    "KeyValueStore",
    "MemoryKeyValueStore",
]
