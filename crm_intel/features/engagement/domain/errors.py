"""
Contract errors raised by the engagement pipeline.

Missing fields never raise; only a snapshot argument that is not a
collection at all is treated as a caller bug.
"""

from collections.abc import Iterable, Mapping
from typing import Any


class SnapshotContractError(TypeError):
    """Raised when an entity collection argument has the wrong shape."""


def require_collection(value: Any, name: str) -> tuple:
    """
    Freeze an entity collection into a tuple for the duration of one call.

    Strings, bytes and mappings are iterable but never a valid entity
    collection, so they are rejected along with None and scalars.
    """
    if value is None or isinstance(value, (str, bytes, Mapping)) or not isinstance(
        value, Iterable
    ):
        raise SnapshotContractError(
            f"{name} must be a collection of entities, got {type(value).__name__}"
        )
    return tuple(value)
