"""Namespaced key-value storage on top of the Django cache.

One namespace per storefront session (keyed by guest id). It stands in for the
device-local preferences store a mobile client would use for its token,
language and guest cart/wishlist.
"""
from __future__ import annotations

import json
from typing import Any, Optional, Set

from django.conf import settings
from django.core.cache import caches

from .logger import get_logger

logger = get_logger(__name__).bind(component="common", layer="storage")

_INDEX_KEY = "__keys__"


class KeyValueStorage:
    def __init__(self, namespace: str, cache=None, timeout: Optional[int] = None):
        if not namespace:
            raise ValueError("KeyValueStorage requires a namespace")
        self.namespace = namespace
        self.cache = cache if cache is not None else caches["default"]
        self.timeout = (
            timeout
            if timeout is not None
            else getattr(settings, "GUEST_STORAGE_TTL", 60 * 60 * 24 * 30)
        )
        prefix = getattr(settings, "STORAGE_KEY_PREFIX", "storage")
        self._prefix = f"{prefix}:{namespace}"
        self.logger = logger.bind(namespace=namespace)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def _index(self) -> Set[str]:
        return set(self.cache.get(self._key(_INDEX_KEY)) or [])

    def _write_index(self, keys: Set[str]) -> None:
        self.cache.set(self._key(_INDEX_KEY), sorted(keys), timeout=self.timeout)

    def _get(self, key: str, expected_type) -> Any:
        value = self.cache.get(self._key(key))
        if value is None:
            return None
        # bool is an int subclass; keep the two apart
        if expected_type is int and isinstance(value, bool):
            return None
        if not isinstance(value, expected_type):
            self.logger.debug(
                "Stored value has unexpected type",
                key=key,
                expected=expected_type.__name__,
                actual=type(value).__name__,
            )
            return None
        return value

    def _set(self, key: str, value: Any) -> bool:
        self.cache.set(self._key(key), value, timeout=self.timeout)
        keys = self._index()
        if key not in keys:
            keys.add(key)
            self._write_index(keys)
        return True

    def get_string(self, key: str) -> Optional[str]:
        return self._get(key, str)

    def set_string(self, key: str, value: str) -> bool:
        return self._set(key, str(value))

    def get_bool(self, key: str) -> Optional[bool]:
        return self._get(key, bool)

    def set_bool(self, key: str, value: bool) -> bool:
        return self._set(key, bool(value))

    def get_int(self, key: str) -> Optional[int]:
        return self._get(key, int)

    def set_int(self, key: str, value: int) -> bool:
        return self._set(key, int(value))

    def get_json(self, key: str) -> Any:
        raw = self.get_string(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            self.logger.warning("Stored JSON could not be decoded", key=key, error=str(exc))
            return None

    def set_json(self, key: str, value: Any) -> bool:
        return self.set_string(key, json.dumps(value))

    def remove(self, key: str) -> bool:
        self.cache.delete(self._key(key))
        keys = self._index()
        if key in keys:
            keys.discard(key)
            self._write_index(keys)
        return True

    def clear(self) -> bool:
        keys = self._index()
        for key in keys:
            self.cache.delete(self._key(key))
        self.cache.delete(self._key(_INDEX_KEY))
        self.logger.debug("Storage namespace cleared", removed=len(keys))
        return True

    def contains_key(self, key: str) -> bool:
        return self.cache.get(self._key(key)) is not None

    def get_all_keys(self) -> Set[str]:
        return {key for key in self._index() if self.contains_key(key)}
