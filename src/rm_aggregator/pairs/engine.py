"""
Shared-Episode Pair Engine

Ranks every pair of characters by how many episodes they appear in
together. The engine is a pure, synchronous function over a fully loaded
character list; it performs no I/O.

Ordering
--------
Pairs are sorted by shared episode count, highest first. Equal counts are
ordered by ascending ``left.id`` and then ascending ``right.id``, so the
output is fully determined by the input set regardless of upstream page
order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from ..upstream.models import Character

logger = logging.getLogger("rmapi.pairs")

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class CharacterPair:
    """Two distinct characters and the number of episodes they share.

    ``left`` always has the smaller id.
    """
    left: Character
    right: Character
    shared_episode_count: int


def shared_episode_count(a: Character, b: Character) -> int:
    """Size of the intersection of the two characters' episode sets."""
    return len(set(a.episodes).intersection(b.episodes))


def generate_pairs(characters: Sequence[Character]) -> List[CharacterPair]:
    """
    Build every pair with at least one shared episode, in canonical order.

    Each unordered pair is considered exactly once. Characters whose ids
    collide are never paired with each other.
    """
    ordered = sorted(characters, key=lambda c: c.id)
    episode_sets: List[FrozenSet[str]] = [frozenset(c.episodes) for c in ordered]

    pairs: List[CharacterPair] = []
    for i, left in enumerate(ordered):
        left_set = episode_sets[i]
        if not left_set:
            continue
        for j in range(i + 1, len(ordered)):
            right = ordered[j]
            if right.id == left.id:
                continue
            count = len(left_set.intersection(episode_sets[j]))
            if count:
                pairs.append(CharacterPair(left, right, count))
    return pairs


def compute_pairs(
    characters: Sequence[Character],
    min_shared: int = 0,
    max_shared: Optional[int] = None,
    limit: int = DEFAULT_LIMIT,
) -> List[CharacterPair]:
    """
    Rank, filter and truncate shared-episode pairs.

    Parameters
    ----------
    characters : Sequence[Character]
        The complete character collection.

    min_shared : int
        Inclusive lower bound on the shared episode count.

    max_shared : Optional[int]
        Inclusive upper bound; None means unbounded.

    limit : int
        Maximum number of pairs returned.

    Returns
    -------
    List[CharacterPair]
        Pairs sorted by shared count descending, ties broken by
        (left.id, right.id) ascending. Empty when ``min_shared > max_shared``.
    """
    if max_shared is not None and min_shared > max_shared:
        return []

    candidates = generate_pairs(characters)

    # generate_pairs already yields (left.id, right.id) order; sort is stable
    candidates.sort(key=lambda p: p.shared_episode_count, reverse=True)

    selected = [
        p for p in candidates
        if p.shared_episode_count >= min_shared
        and (max_shared is None or p.shared_episode_count <= max_shared)
    ][:limit]

    logger.debug(
        "Ranked %d characters into %d pairs; returning %d",
        len(characters),
        len(candidates),
        len(selected),
    )
    return selected
