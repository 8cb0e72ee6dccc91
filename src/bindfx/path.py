"""Dot-delimited property paths.

``"nested.x"`` addresses key ``x`` of the value stored under ``nested``.
Resolution stops one segment short of the leaf: callers get the container
and the leaf key, and decide for themselves whether to read or write it.
"""

from __future__ import annotations

from bindfx.errors import InvalidObjectPath
from bindfx.observable import ReactiveState


def _is_container(obj: object) -> bool:
    return isinstance(obj, (ReactiveState, dict))


def resolve_path(root: object, path: str) -> tuple[object, str]:
    """Walk ``path`` from ``root``. Returns ``(container, leaf_key)``.

    Raises InvalidObjectPath (with the full path) if an intermediate
    segment is missing or holds something other than a mapping.
    """
    *parents, leaf = path.split(".")
    container = root
    for part in parents:
        if not _is_container(container) or part not in container:
            raise InvalidObjectPath(path)
        container = container[part]
        if not _is_container(container):
            raise InvalidObjectPath(path)
    return container, leaf
