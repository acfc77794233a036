"""
utils.py – Ring grouping & ID assignment utilities.

Ring grouping
-------------
Suspicious accounts are clustered with a union-find structure:
  1. every detected cycle unions its first member with each other member,
     when both are suspicious;
  2. every suspicious account unions with each directly adjacent
     (either direction) suspicious account.
Groups of one are discarded.  Surviving groups get sequential
RING_001, RING_002, … IDs in order of their first member in the ranked
suspicious list, so numbering never depends on set or dict iteration.
"""
from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

from .config import RING_SIZE_BONUS_MAX, RING_SIZE_BONUS_PER_MEMBER
from .graph_builder import Graph
from .models import FraudRing, SuspiciousAccount

log = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero for non-negative values (2.25 → 2.3)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class UnionFind:
    """Disjoint sets with iterative path compression."""

    def __init__(self, items: Iterable[str] = ()):
        self._parent: Dict[str, str] = {}
        for item in items:
            self.add(item)

    def add(self, item: str) -> None:
        self._parent.setdefault(item, item)

    def find(self, item: str) -> str:
        self.add(item)
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: str, b: str) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self._parent[ra] = rb


def _dominant_pattern(members: Sequence[str], by_id: Dict[str, SuspiciousAccount]) -> str:
    counts: Counter = Counter()
    for acc in members:
        counts.update(by_id[acc].detected_patterns)
    # most_common keeps first-encountered order among equal counts
    return counts.most_common(1)[0][0] if counts else "unknown"


def group_fraud_rings(
    suspicious: List[SuspiciousAccount],
    cycles: List[List[str]],
    graph: Graph,
) -> Tuple[List[FraudRing], List[SuspiciousAccount]]:
    """
    Cluster suspicious accounts into fraud rings.

    Returns
    -------
    rings      : list[FraudRing] in ring-id order
    suspicious : new SuspiciousAccount list (same order) with ring_id set
                 on every ring member; the input list is left untouched.
    """
    by_id = {s.account_id: s for s in suspicious}
    uf = UnionFind(by_id)

    for cycle in cycles:
        head = cycle[0]
        for acc in cycle[1:]:
            if head in by_id and acc in by_id:
                uf.union(head, acc)

    for acc in by_id:
        for nbr in graph.adj_out.get(acc, ()):
            if nbr in by_id:
                uf.union(acc, nbr)
        for nbr in graph.adj_in.get(acc, ()):
            if nbr in by_id:
                uf.union(acc, nbr)

    groups: Dict[str, List[str]] = {}
    for s in suspicious:
        groups.setdefault(uf.find(s.account_id), []).append(s.account_id)

    rings: List[FraudRing] = []
    ring_of: Dict[str, str] = {}
    for members in groups.values():
        if len(members) < 2:
            continue
        ring_id = f"RING_{len(rings) + 1:03d}"
        members = sorted(members)
        avg = sum(by_id[acc].suspicion_score for acc in members) / len(members)
        bonus = min(RING_SIZE_BONUS_MAX, len(members) * RING_SIZE_BONUS_PER_MEMBER)
        rings.append(FraudRing(
            ring_id=ring_id,
            member_accounts=members,
            pattern_type=_dominant_pattern(members, by_id),
            risk_score=min(100.0, round_half_up(avg + bonus)),
        ))
        for acc in members:
            ring_of[acc] = ring_id

    updated = [
        s.model_copy(update={"ring_id": ring_of[s.account_id]}) if s.account_id in ring_of else s
        for s in suspicious
    ]

    log.info(
        "Ring grouping: %d rings from %d suspicious accounts",
        len(rings),
        len(suspicious),
    )
    return rings, updated
