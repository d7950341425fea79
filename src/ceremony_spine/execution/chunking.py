"""Split a sequence into contiguous, order-preserving batches."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from ceremony_spine.core.errors import ValidationError

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Partition ``items`` into ``ceil(len(items) / size)`` batches.

    Every batch holds ``size`` items except possibly the last.  Concatenating
    the batches gives back ``items`` exactly; an empty input gives ``[]``.

    >>> chunk([1, 2, 3, 4, 5], 2)
    [[1, 2], [3, 4], [5]]
    """
    if size < 1:
        raise ValidationError(f"batch size must be >= 1, got {size}", field="batch_size", value=size)
    return [list(items[start:start + size]) for start in range(0, len(items), size)]
