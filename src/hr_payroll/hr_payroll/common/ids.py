from __future__ import annotations

import uuid
from typing import Callable

IdFactory = Callable[[str], str]


def new_id(prefix: str) -> str:
    """Opaque record id such as ``leave-3f9c0d1e2a4b``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
