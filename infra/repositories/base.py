import uuid
from typing import Any, Dict, Optional

from sqlalchemy import inspect


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


def row_to_dict(row: Any) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    out = {}
    for attr in inspect(row).mapper.column_attrs:
        # Notification.metadata_ is stored as "metadata"
        out[attr.key.rstrip("_")] = getattr(row, attr.key)
    return out
