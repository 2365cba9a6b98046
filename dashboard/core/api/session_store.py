"""
Session Store
Holds the single admin bearer token used to authenticate backend calls
"""

from abc import ABC, abstractmethod
from typing import Optional

TOKEN_KEY = 'adminToken'


class SessionStore(ABC):
    """At most one token is resident; its presence is the only authentication signal"""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the stored token, or None when none was set or it was cleared"""

    @abstractmethod
    def set(self, token: str) -> None:
        """Store the token, overwriting any previous value"""

    @abstractmethod
    def clear(self) -> None:
        """Remove the token"""

    def has_token(self) -> bool:
        return bool(self.get())


class MemorySessionStore(SessionStore):
    """In-process store for scripts and tests"""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class StreamlitSessionStore(SessionStore):
    """Keeps the token in Streamlit session state so it survives reruns and page switches"""

    def __init__(self, key: str = TOKEN_KEY, state=None):
        if state is None:
            import streamlit as st
            state = st.session_state
        self.key = key
        self._state = state

    def get(self) -> Optional[str]:
        return self._state.get(self.key) or None

    def set(self, token: str) -> None:
        self._state[self.key] = token

    def clear(self) -> None:
        if self.key in self._state:
            del self._state[self.key]
