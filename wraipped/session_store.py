"""
Server-side session storage.

The browser only ever holds an opaque session id in a signed cookie;
tokens and artist lists stay on the server in a SessionStore.
"""

import copy
import threading
import time


class SessionStore:
    """Key-value store of session data, keyed by session id."""

    def get(self, sid):
        raise NotImplementedError

    def set(self, sid, data):
        raise NotImplementedError

    def destroy(self, sid):
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Process-local store. Everything is lost on restart."""

    def __init__(self, ttl=None, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._data = {}
        self._lock = threading.Lock()

    def get(self, sid):
        with self._lock:
            entry = self._data.get(sid)
            if entry is None:
                return None
            data, touched = entry
            if self.ttl is not None and self._clock() - touched > self.ttl:
                del self._data[sid]
                return None
            self._data[sid] = (data, self._clock())
            return copy.deepcopy(data)

    def set(self, sid, data):
        with self._lock:
            self._data[sid] = (copy.deepcopy(data), self._clock())

    def destroy(self, sid):
        with self._lock:
            self._data.pop(sid, None)

    def __len__(self):
        with self._lock:
            return len(self._data)
