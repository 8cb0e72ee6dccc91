"""Identity tables for a reactivity domain: ids in, registries and bindings out.

Wrappers and targets are looked up by identity: wrappers by the integer id
they carry, targets by ``id()`` (the binding record keeps the target alive,
so its id cannot be reused while the record exists). Nothing here is
removed automatically; release() and unbind() are the disposal points.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bindfx.binding import BindingRecord
    from bindfx.registry import PropertyRegistry

# ID generation — shared by all domains so ids never collide across them.
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)


class Anchor:
    """The tables owned by one Domain."""

    __slots__ = ("registries", "bindings")

    def __init__(self) -> None:
        self.registries: dict[int, PropertyRegistry] = {}  # state_id -> registry
        self.bindings: dict[int, BindingRecord] = {}  # id(target) -> record

    def clear(self) -> None:
        self.registries.clear()
        self.bindings.clear()
