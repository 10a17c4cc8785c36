"""Rotation policy for message and icon arrays.

``open_count`` is 1-based: the first presentation shows the first element.
Loop mode cycles forever; clamp mode sticks on the last element once the
sequence is exhausted.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def pick(sequence: Sequence[T], open_count: int, loop: bool) -> T | None:
    """Pick the element for *open_count* under the loop-or-clamp policy.

    Returns ``None`` for an empty sequence so callers fall through to the next
    precedence tier. An ``open_count`` of zero (counter read failure) behaves
    like the first open.

    Examples
    --------
    >>> pick(["a", "b", "c"], 4, loop=True)
    'a'
    >>> pick(["a", "b", "c"], 4, loop=False)
    'c'
    >>> pick(["a", "b"], 0, loop=True)
    'a'
    >>> pick([], 3, loop=True) is None
    True
    """

    if not sequence:
        return None
    index = max(open_count - 1, 0)
    if loop:
        return sequence[index % len(sequence)]
    return sequence[min(index, len(sequence) - 1)]
