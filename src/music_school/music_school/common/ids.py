from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Collection ids look like `t-1a2b3c4d5e6f`."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
