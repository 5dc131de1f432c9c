"""Gap-based rank allocation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kanterm.constants import RANK_GAP
from kanterm.core.errors import InsufficientRankSpace

if TYPE_CHECKING:
    from collections.abc import Sequence


def compute_rank(ranks: Sequence[int], current_index: int, target_index: int) -> int:
    """Compute the rank for moving the item at ``current_index`` to ``target_index``.

    ``target_index`` is a slot in the sequence as it is now, before the item is
    removed. Slot 0 places the item first and ``len(ranks)`` places it last.

    Raises:
        ValueError: The indices are equal or out of range.
        InsufficientRankSpace: The neighbors at the target slot are adjacent integers.
    """
    count = len(ranks)
    if current_index == target_index:
        raise ValueError("current and target index must differ")
    if not 0 <= current_index < count:
        raise ValueError(f"current index {current_index} out of range for {count} ranks")
    if not 0 <= target_index <= count:
        raise ValueError(f"target index {target_index} out of range for {count} ranks")

    if target_index == 0:
        return ranks[0] - RANK_GAP
    if target_index >= count:
        return ranks[-1] + RANK_GAP

    lower = ranks[target_index - 1]
    upper = ranks[target_index]
    gap = upper - lower
    if gap <= 1:
        raise InsufficientRankSpace(lower, upper)

    if target_index > current_index:
        return lower + gap // 2
    return upper - gap // 2
