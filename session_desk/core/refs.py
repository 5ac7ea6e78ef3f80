"""
Reference normalization.

The backend sometimes embeds a referenced document (``{"_id": ..., ...}``)
where a bare identifier is expected. Everything that groups or compares by
id goes through ``normalize_ref`` first.
"""

from typing import Any


def normalize_ref(value: Any) -> str | None:
    """
    Reduce a bare id or an embedded document to its bare id.

    Args:
        value: String id, embedded dict with ``_id``/``id``, or None

    Returns:
        str | None: Bare identifier, None when the reference is empty
    """
    if value is None:
        return None
    if isinstance(value, dict):
        return normalize_ref(value.get("_id", value.get("id")))
    ref = getattr(value, "id", value)
    text = str(ref).strip()
    return text or None
