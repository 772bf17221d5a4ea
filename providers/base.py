"""Generic storage contract used by the bot.

A provider stores *documents* (plain dicts) identified by a string id inside a
named *table*. Every method is a coroutine and maps to a single round trip to
the backing store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional


class ProviderNotReadyError(RuntimeError):
    """Raised when a provider is used before ``init()``."""


def _make_object(path: str, value: Any) -> Dict[str, Any]:
    keys = path.split(".")
    obj: Dict[str, Any] = {keys[-1]: value}
    for key in reversed(keys[:-1]):
        obj = {key: obj}
    return obj


def _merge_objects(target: Dict[str, Any], source: Mapping) -> Dict[str, Any]:
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(target.get(key), dict):
            _merge_objects(target[key], value)
        else:
            target[key] = value
    return target


class Provider(ABC):
    async def init(self) -> None:
        return None

    async def shutdown(self) -> None:
        return None

    @abstractmethod
    async def has_table(self, table: str) -> bool: ...

    @abstractmethod
    async def create_table(self, table: str) -> Any: ...

    @abstractmethod
    async def delete_table(self, table: str) -> Any: ...

    @abstractmethod
    async def get_keys(self, table: str) -> List[str]: ...

    @abstractmethod
    async def get(self, table: str, id: str) -> Optional[Dict[str, Any]]: ...

    @abstractmethod
    async def has(self, table: str, id: str) -> bool: ...

    @abstractmethod
    async def get_all(self, table: str, filter: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]: ...

    @abstractmethod
    async def create(self, table: str, id: str, doc: Any = None) -> Any: ...

    @abstractmethod
    async def update(self, table: str, id: str, doc: Any) -> Any: ...

    @abstractmethod
    async def delete(self, table: str, id: str) -> Any: ...

    async def replace(self, table: str, id: str, doc: Any) -> Any:
        return await self.create(table, id, doc)

    @staticmethod
    def parse_update_input(updated: Any) -> Dict[str, Any]:
        """Turn an update payload into a plain nested dict.

        Accepts ``None``, a mapping, or an iterable of update entries. Each
        entry carries ``data = (dotted_path, value)`` either as an attribute
        or as a ``"data"`` key; entries are expanded and merged in order::

            [{"data": ("prefs.lang", "en")}, {"data": ("prefs.tz", "UTC")}]
            -> {"prefs": {"lang": "en", "tz": "UTC"}}
        """
        if not updated:
            return {}
        if isinstance(updated, Mapping):
            return dict(updated)

        result: Dict[str, Any] = {}
        for entry in updated:
            data = entry["data"] if isinstance(entry, Mapping) else entry.data
            path, value = data
            _merge_objects(result, _make_object(path, value))
        return result

    @staticmethod
    def pack_data(data: Optional[Mapping], id: str) -> Dict[str, Any]:
        return {**(data or {}), "id": id}
