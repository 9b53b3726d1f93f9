from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Repository interface for the persisted portal document.

    Note (DIP): the state store depends on this interface, never on a concrete backend.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError
