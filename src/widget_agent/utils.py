from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any


def new_widget_id(length: int = 8) -> str:
    """Short, client-scoped widget id (not a persistence key)."""
    if not 1 <= length <= 32:
        raise ValueError("length must be between 1 and 32")
    return uuid.uuid4().hex[:length]


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))
