from typing import List, MutableMapping, Optional

from config import LOGIN_ROUTE


class Navigator:
    """Tracks the current route. Redirects from the core are plain `go()` calls."""

    def __init__(self, start: str = LOGIN_ROUTE):
        self.history: List[str] = [start]

    @property
    def current(self) -> str:
        return self.history[-1]

    def go(self, path: str) -> None:
        self.history.append(path)


class StreamlitNavigator(Navigator):
    """Keeps the route and its history in `st.session_state` so they survive script reruns."""

    ROUTE_KEY = "route"
    HISTORY_KEY = "route_history"
    MAX_HISTORY = 50

    def __init__(self, state: Optional[MutableMapping] = None, start: str = LOGIN_ROUTE):
        if state is None:
            import streamlit as st
            state = st.session_state
        self._state = state
        self._state.setdefault(self.ROUTE_KEY, start)
        self._state.setdefault(self.HISTORY_KEY, [self._state[self.ROUTE_KEY]])
        self.changed = False
        self.history = self._state[self.HISTORY_KEY]

    def go(self, path: str) -> None:
        super().go(path)
        del self.history[:-self.MAX_HISTORY]
        self._state[self.ROUTE_KEY] = path
        self.changed = True
