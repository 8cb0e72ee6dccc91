"""Watcher pipeline — validate and transform a write before it commits.

A watcher is ``fn(old_value, new_value)``. Its return value decides the
outcome:

    None            no signal; the proposed value stands
    REJECT          revert to the value held before the write
    Replace(value)  use ``value`` instead (the only way to commit None)
    anything else   use that value instead, falsy values included

Watchers run in registration order and each sees the output of the one
before it, so transforms compose left to right. A REJECT discards every
earlier transform in the same pass.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

Watcher = Callable[[Any, Any], Any]


class _Reject:
    __slots__ = ()

    def __repr__(self) -> str:
        return "REJECT"

    def __reduce__(self) -> str:
        return "REJECT"


REJECT = _Reject()


class Replace:
    """Explicit replacement. Lets a watcher commit a value that is None."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Replace({self.value!r})"


def evaluate(
    old_value: Any, proposed: Any, watchers: Iterable[Watcher]
) -> tuple[Any, bool]:
    """Run the watchers. Returns ``(value, reverted)``.

    ``reverted`` is true when the last watcher to act returned REJECT, i.e.
    the write ends as if it had never been made.
    """
    committed = proposed
    reverted = False
    for watcher in list(watchers):
        outcome = watcher(old_value, committed)
        if outcome is None:
            continue
        if outcome is REJECT:
            committed = old_value
            reverted = True
            continue
        committed = outcome.value if isinstance(outcome, Replace) else outcome
        reverted = False
    return committed, reverted


def run_watchers(old_value: Any, proposed: Any, watchers: Iterable[Watcher]) -> Any:
    """Return the value to commit. Exceptions from watchers propagate."""
    return evaluate(old_value, proposed, watchers)[0]
