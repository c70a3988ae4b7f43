from __future__ import annotations

from typing import Any, Iterable, Protocol

from ..core.enums import DataMode


class CollectionStore(Protocol):
    """Generic collection CRUD over a key-value backend.

    Items are plain dicts keyed by `id`; services never see the backend.
    Writes are last-write-wins with no concurrency check.
    """

    @property
    def mode(self) -> DataMode:
        raise NotImplementedError

    def with_mode(self, mode: DataMode) -> "CollectionStore":
        """Sibling store bound to another data namespace."""
        raise NotImplementedError

    def get(self, collection: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    def add(self, collection: str, item: dict[str, Any]) -> None:
        """Insert, replacing any existing item with the same id."""
        raise NotImplementedError

    def add_many(self, collection: str, items: Iterable[dict[str, Any]]) -> int:
        raise NotImplementedError

    def update(self, collection: str, item: dict[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, collection: str, item_id: str) -> bool:
        raise NotImplementedError

    def truncate(self, collection: str) -> None:
        raise NotImplementedError

    def ping(self) -> bool:
        raise NotImplementedError
