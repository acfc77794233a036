"""
cycle_detector.py – Detect circular fund routing (money-mule rings).

Strategy
--------
The out-adjacency sets are collapsed into a simple DiGraph (parallel
transfers merged) and NetworkX enumerates its simple cycles with Johnson's
algorithm, bounded to CYCLE_MAX_LEN accounts.  Loops shorter than
CYCLE_MIN_LEN (self-transfers, two-account round trips) are dropped.

Deduplication
-------------
A cycle's identity is its sorted member set joined into a single key.  Two
different edge sequences over the same accounts therefore count as ONE
cycle.  Scoring and ring grouping rely on this definition.

Performance
-----------
``length_bound`` stops the search from extending any path beyond
CYCLE_MAX_LEN accounts, which bounds the branching cost on dense graphs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set

import networkx as nx

from .config import CYCLE_MIN_LEN, CYCLE_MAX_LEN
from .graph_builder import Graph

log = logging.getLogger(__name__)


@dataclass
class CycleResult:
    cycle_accounts: Set[str] = field(default_factory=set)
    cycles: List[List[str]] = field(default_factory=list)
    account_patterns: Dict[str, Set[str]] = field(default_factory=dict)


def _cycle_key(path: List[str]) -> str:
    return "|".join(sorted(path))


def _account_digraph(graph: Graph) -> nx.DiGraph:
    """One node per account, one edge per distinct sender → receiver pair."""
    H = nx.DiGraph()
    H.add_nodes_from(graph.nodes)
    H.add_edges_from(
        (src, dst) for src in graph.adj_out for dst in sorted(graph.adj_out[src])
    )
    return H


def detect_cycles(
    graph: Graph,
    min_length: int = CYCLE_MIN_LEN,
    max_length: int = CYCLE_MAX_LEN,
) -> CycleResult:
    """
    Find closed loops of min_length..max_length accounts.

    Every member of a newly seen cycle is tagged ``cycle_length_<N>``.
    """
    result = CycleResult()
    seen: Set[str] = set()

    for cycle in nx.simple_cycles(_account_digraph(graph), length_bound=max_length):
        if len(cycle) < min_length:
            continue
        key = _cycle_key(cycle)
        if key in seen:
            continue
        seen.add(key)
        result.cycles.append(list(cycle))
        tag = f"cycle_length_{len(cycle)}"
        for acc in cycle:
            result.account_patterns.setdefault(acc, set()).add(tag)

    result.cycle_accounts = set(result.account_patterns)
    log.info(
        "Cycle detection: %d cycles, %d accounts",
        len(result.cycles),
        len(result.cycle_accounts),
    )
    return result
