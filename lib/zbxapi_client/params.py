from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def is_pure_list(value: Any) -> bool:
    """True for containers that serialize as a JSON array.

    A mapping counts when its keys are exactly the integers ``0..n-1``.
    """
    if isinstance(value, (list, tuple)):
        return True
    if isinstance(value, Mapping):
        return all(
            isinstance(key, int) and not isinstance(key, bool) and key == index
            for index, key in enumerate(value.keys())
        )
    return False


def normalize_params(params: Any, default_params: Mapping[str, Any] | None = None) -> list[Any] | dict[str, Any]:
    """Shape caller-supplied params into a JSON array or object.

    Scalars become a one-element list, anything else that is not a container
    becomes an empty list. Lists are sent untouched; associative params are
    merged over ``default_params``, caller keys winning.
    """
    if isinstance(params, bool) or params is None:
        return []
    if isinstance(params, (str, int, float)):
        return [params]
    if not isinstance(params, (list, tuple, Mapping)):
        return []

    if is_pure_list(params):
        if isinstance(params, Mapping):
            return list(params.values())
        return list(params)

    return {**dict(default_params or {}), **dict(params)}
