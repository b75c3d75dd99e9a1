"""Preference store interface with SQLite and in-memory implementations."""

import sqlite3
from typing import Protocol

from weatherdash.storage import preference_repo


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class SqlitePreferenceStore:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, key: str) -> str | None:
        return preference_repo.get_preference(self.conn, key)

    def set(self, key: str, value: str) -> None:
        preference_repo.set_preference(self.conn, key, value)

    def items(self) -> dict[str, str]:
        return preference_repo.get_all_preferences(self.conn)


class MemoryPreferenceStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def items(self) -> dict[str, str]:
        return dict(sorted(self._data.items()))
