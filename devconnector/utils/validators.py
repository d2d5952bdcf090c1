"""
Validators
"""
from typing import Any, List


def split_skills(value: Any) -> List[str]:
    """Normalize ``"js, node ,react"`` or a list into trimmed, non-empty skills."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return []
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]
