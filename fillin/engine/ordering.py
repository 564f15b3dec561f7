"""Word ordering heuristics.

Two orderings feed the search:

- :func:`order_by_length_frequency` runs once, before the search, and puts
  words whose length is rare among the inputs first.
- :func:`rank_by_compatibility` runs after every assignment and puts the
  words with the fewest holes still open to them first.

Both rely on ``sorted`` being stable: ties keep their arrival order, which
decides the branch the search explores first.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from ..core.models import Hole
from .grid import FillinGrid


def order_by_length_frequency(words: Sequence[str]) -> List[str]:
    """Sort words by how many words share their length, rarest first.

    Words are grouped by length (shortest group first, original order inside
    each group) and the groups are then stable-sorted by size.
    """

    groups: Dict[int, List[str]] = defaultdict(list)
    for word in words:
        groups[len(word)].append(word)

    packed = [groups[length] for length in sorted(groups)]
    packed.sort(key=len)
    return [word for group in packed for word in group]


def compatibility_counts(
    words: Sequence[str], holes: Sequence[Hole], grid: FillinGrid
) -> List[Tuple[int, str]]:
    """Tag each word with the number of holes it could occupy right now."""

    return [(sum(1 for hole in holes if grid.fits(hole, word)), word) for word in words]


def rank_by_compatibility(
    words: Sequence[str], holes: Sequence[Hole], grid: FillinGrid
) -> List[str]:
    """Most-constrained-first ordering of ``words`` against the current grid.

    A word with no compatible hole sorts to the front so the search fails on
    the next step instead of exploring deeper.
    """

    keyed = compatibility_counts(words, holes, grid)
    return [word for _, word in sorted(keyed, key=lambda item: item[0])]
