"""
Document store contract for saved recipes, plus an in-process implementation.

Each user owns one collection of RecipeRecords. The store assigns ids and
timestamps, answers newest-first queries and pushes the fresh query result to
subscribers after every change.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Protocol, Tuple

from .exceptions import RecipeNotFoundError
from .models.record import RecipeRecord

logger = logging.getLogger(__name__)

Listener = Callable[[List[RecipeRecord]], None]
Unsubscribe = Callable[[], None]


class RecipeStore(Protocol):
    """What the pipeline needs from the document store."""

    def add(self, user_id: str, record: RecipeRecord) -> str: ...

    def set_favorite(self, user_id: str, recipe_id: str, value: bool) -> None: ...

    def delete(self, user_id: str, recipe_id: str) -> None: ...

    def list(self, user_id: str, favorites_only: bool = False) -> List[RecipeRecord]: ...

    def subscribe(self, user_id: str, callback: Listener, favorites_only: bool = False) -> Unsubscribe: ...


def toggle_favorite(store: RecipeStore, user_id: str, record: RecipeRecord) -> bool:
    """Flip the stored favorite flag of ``record`` and return the new value."""
    if record.id is None:
        raise ValueError("Record has not been saved yet")
    value = not record.isFavorite
    store.set_favorite(user_id, record.id, value)
    return value


class InMemoryRecipeStore:
    """Thread-safe RecipeStore kept in process memory."""

    def __init__(self, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self._clock = clock
        self._lock = threading.Lock()
        self._records: Dict[str, Dict[str, RecipeRecord]] = {}
        self._listeners: Dict[str, List[Tuple[Listener, bool]]] = {}

    def _query(self, user_id: str, favorites_only: bool) -> List[RecipeRecord]:
        records = self._records.get(user_id, {}).values()
        if favorites_only:
            records = [record for record in records if record.isFavorite]
        return sorted(records, key=lambda record: record.timestamp, reverse=True)

    def _notify(self, user_id: str) -> None:
        with self._lock:
            listeners = list(self._listeners.get(user_id, []))
            results = {flag: self._query(user_id, flag) for flag in (False, True)}
        for callback, favorites_only in listeners:
            callback(results[favorites_only])

    def add(self, user_id: str, record: RecipeRecord) -> str:
        recipe_id = uuid.uuid4().hex
        stored = record.model_copy(update={"id": recipe_id, "timestamp": self._clock()})
        with self._lock:
            self._records.setdefault(user_id, {})[recipe_id] = stored
        logger.info(f"Saved recipe '{record.title}' as {recipe_id}")
        self._notify(user_id)
        return recipe_id

    def get(self, user_id: str, recipe_id: str) -> RecipeRecord:
        with self._lock:
            try:
                return self._records[user_id][recipe_id]
            except KeyError:
                raise RecipeNotFoundError(recipe_id) from None

    def set_favorite(self, user_id: str, recipe_id: str, value: bool) -> None:
        with self._lock:
            records = self._records.get(user_id, {})
            if recipe_id not in records:
                raise RecipeNotFoundError(recipe_id)
            records[recipe_id] = records[recipe_id].model_copy(update={"isFavorite": value})
        self._notify(user_id)

    def delete(self, user_id: str, recipe_id: str) -> None:
        with self._lock:
            records = self._records.get(user_id, {})
            if records.pop(recipe_id, None) is None:
                raise RecipeNotFoundError(recipe_id)
        logger.info(f"Deleted recipe {recipe_id}")
        self._notify(user_id)

    def list(self, user_id: str, favorites_only: bool = False) -> List[RecipeRecord]:
        with self._lock:
            return self._query(user_id, favorites_only)

    def subscribe(self, user_id: str, callback: Listener, favorites_only: bool = False) -> Unsubscribe:
        entry = (callback, favorites_only)
        with self._lock:
            self._listeners.setdefault(user_id, []).append(entry)
            snapshot = self._query(user_id, favorites_only)
        callback(snapshot)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(user_id, [])
                if entry in listeners:
                    listeners.remove(entry)

        return unsubscribe
