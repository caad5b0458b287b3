"""Identifier helpers."""

import uuid


def new_id(prefix: str) -> str:
    """Short unique id like ``conf_1f3a9c2b4d5e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
