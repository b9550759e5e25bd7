# storage/kv.py
"""
Key-value collaborators used by the session gate and the match result store.

Two kinds are wired into the app:
- a durable store (survives restarts) holding the bearer token
- a session-scoped store (lives for the browser tab) holding the last match payload

Both expose the same get/set/remove surface so tests can swap in MemoryStore.
"""
from __future__ import annotations

import logging
import os
import uuid
from typing import Any, Callable, Dict, Mapping, MutableMapping, Optional, Tuple, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from config import BROWSER_COOKIE
from models import Base, StoredValue

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyValueStore:
    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def remove(self, key):
        self._data.pop(key, None)

    def __contains__(self, key) -> bool:
        return key in self._data


class SqlStore(KeyValueStore):
    """Durable store: one row per (browser scope, key) in a small SQLite (or any SQLAlchemy) database.

    Every browser gets its own scope, so a token saved by one visitor is
    invisible to every other visitor of the same server.
    """

    def __init__(self, url: str, scope: str):
        if not scope:
            raise ValueError("SqlStore needs a non-empty browser scope")
        self.scope = scope
        self.engine = create_engine(url, future=True)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, future=True)
        Base.metadata.create_all(self.engine)

    @classmethod
    def at_path(cls, db_path: str, scope: str) -> "SqlStore":
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        logger.info("Durable client state at %s", db_path)
        return cls(f"sqlite:///{db_path}", scope)

    def get(self, key):
        with self.Session() as s:
            row = s.get(StoredValue, (self.scope, key))
            return row.value if row else None

    def set(self, key, value):
        with self.Session() as s:
            row = s.get(StoredValue, (self.scope, key))
            if row is None:
                s.add(StoredValue(scope=self.scope, key=key, value=value))
            else:
                row.value = value
            s.commit()

    def remove(self, key):
        with self.Session() as s:
            row = s.get(StoredValue, (self.scope, key))
            if row is not None:
                s.delete(row)
                s.commit()


def resolve_browser_id(cookies: Mapping[str, str], state: MutableMapping) -> Tuple[str, bool]:
    """Id of the calling browser and whether the cookie carrying it still has to be written.

    The cookie wins; otherwise the id minted earlier in this tab session is reused;
    otherwise a fresh random id is minted. A fresh id never matches another browser's rows.
    """
    cookie_id = cookies.get(BROWSER_COOKIE)
    if cookie_id:
        state[BROWSER_COOKIE] = cookie_id
        return cookie_id, False
    minted = state.get(BROWSER_COOKIE)
    if not minted:
        minted = state[BROWSER_COOKIE] = uuid.uuid4().hex
    return minted, True


def session_cached(state: MutableMapping, key: str, factory: Callable[[], T]) -> T:
    """Object kept in session state under `key`; `factory` runs only when it is absent."""
    if key not in state:
        state[key] = factory()
    return state[key]


class StreamlitSessionStore(KeyValueStore):
    """Session-scoped store on top of `st.session_state` (or any mutable mapping)."""

    def __init__(self, state: Optional[MutableMapping] = None, prefix: str = "kv:"):
        if state is None:
            import streamlit as st
            state = st.session_state
        self._state = state
        self._prefix = prefix

    def get(self, key):
        return self._state.get(self._prefix + key)

    def set(self, key, value):
        self._state[self._prefix + key] = value

    def remove(self, key):
        self._state.pop(self._prefix + key, None)
