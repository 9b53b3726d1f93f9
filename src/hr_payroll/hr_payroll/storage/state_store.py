from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Tuple, TypeVar

from ..core.constants import STORAGE_KEY
from . import codec
from .migrations import detect_version, migrate
from .repository import KeyValueStore
from .state import HRState

logger = logging.getLogger(__name__)

R = TypeVar("R")

Command = Callable[[HRState], Tuple[HRState, R]]


class StateStore:
    """Owns the current ``HRState`` snapshot.

    ``execute`` is the only read-modify-persist path: the command runs under a
    lock against the latest snapshot, the result is persisted, and only then
    does the cached snapshot move forward. A command that raises leaves both
    the cache and the backing store untouched.
    """

    def __init__(self, kv: KeyValueStore, *, key: str = STORAGE_KEY, seed: Optional[HRState] = None):
        self._kv = kv
        self._key = key
        self._seed = seed or HRState()
        self._state: Optional[HRState] = None
        self._lock = threading.Lock()

    def _load(self) -> HRState:
        raw = self._kv.get(self._key)
        if not raw:
            logger.info("No stored state under %r; starting from seed", self._key)
            return self._seed

        doc = codec.loads(raw)
        version = detect_version(doc)
        state = codec.decode_state(migrate(doc))
        if version != state.schema_version:
            # Persist the migrated shape so the legacy document is converted once.
            self._kv.set(self._key, codec.dumps(state))
        return state

    def snapshot(self) -> HRState:
        with self._lock:
            if self._state is None:
                self._state = self._load()
            return self._state

    def execute(self, command: Command) -> R:
        with self._lock:
            if self._state is None:
                self._state = self._load()
            next_state, result = command(self._state)
            if next_state is not self._state:
                self._kv.set(self._key, codec.dumps(next_state))
                self._state = next_state
            return result

    def reload(self) -> HRState:
        with self._lock:
            self._state = self._load()
            return self._state
