"""
Kind-tagged JSON encoding for values kept in the bot state stores.

Records and dialog state are stored as plain dicts carrying a ``kind`` key.
Types register themselves with :func:`register` so that :func:`decode` can
turn those dicts back into objects when a store is loaded.
"""
import hashlib
import json
import logging
from enum import Enum

logger = logging.getLogger(__name__)

KIND_KEY = 'kind'

_registry = {}


def _kind_value(kind):
    return kind.value if isinstance(kind, Enum) else kind


def register(cls):
    """
    Class decorator registering ``cls`` under its ``kind`` attribute.

    The class must provide ``to_dict()`` and a ``from_dict(data)`` classmethod.
    """
    kind = _kind_value(cls.kind)
    existing = _registry.get(kind)
    if existing is not None and existing is not cls:
        logger.warning(f"Kind '{kind}' already registered to {existing.__name__}, overwriting with {cls.__name__}")
    _registry[kind] = cls
    return cls


def registered_kinds():
    return sorted(_registry)


def encode(value):
    """Convert ``value`` into JSON-compatible data."""
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(key): encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode(item) for item in value]
    return value


def decode(value):
    """Inverse of :func:`encode` for every registered kind."""
    if isinstance(value, dict):
        cls = _registry.get(value.get(KIND_KEY))
        if cls is not None:
            return cls.from_dict(value)
        return {key: decode(item) for key, item in value.items()}
    if isinstance(value, list):
        return [decode(item) for item in value]
    return value


def fingerprint(data):
    """Stable hash of already-encoded data, used for change detection."""
    payload = json.dumps(data, sort_keys=True, separators=(',', ':'), default=str)
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()
