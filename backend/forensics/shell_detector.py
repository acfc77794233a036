"""
shell_detector.py – Detect layered shell account networks.

Definition
----------
A shell candidate is any account with tx_count ≤ SHELL_MAX_TX.  Starting
from each candidate we walk outgoing adjacency.  Once the walk is at least
SHELL_MIN_CHAIN hops deep and reaches another low-activity account, every
account on the current path (start included) is a shell-network member.

The walk keeps extending through a neighbour when that neighbour is itself
low-activity OR the chain is still shorter than SHELL_MIN_CHAIN, so busier
accounts may sit near the start of a chain but never deep inside it.

Algorithm
---------
Iterative DFS with an explicit frame stack.  The path and its membership
set are pushed on descent and popped on backtrack, so sibling branches are
explored independently.  A walk stops extending once it marks a chain.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Set, Tuple

from .config import SHELL_MAX_TX, SHELL_MIN_CHAIN
from .graph_builder import Graph

log = logging.getLogger(__name__)


def detect_shell_networks(
    graph: Graph,
    max_tx: int = SHELL_MAX_TX,
    min_chain: int = SHELL_MIN_CHAIN,
) -> Set[str]:
    """Return the set of accounts tagged ``shell_network``."""
    members: Set[str] = set()
    nodes = graph.nodes
    adj_out = graph.adj_out

    def _low(acc: str) -> bool:
        return nodes[acc].txn_count <= max_tx

    candidates = [acc for acc in nodes if _low(acc)]

    for source in candidates:
        path: List[str] = [source]
        on_path: Set[str] = {source}
        # Stack frames: (depth, neighbour iterator) for the node at path[len(stack)-1]
        stack: List[Tuple[int, Iterator[str]]] = [(1, iter(sorted(adj_out[source])))]

        while stack:
            depth, neighbours = stack[-1]
            nbr = next(neighbours, None)
            if nbr is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if nbr in on_path:
                continue

            if depth >= min_chain and _low(nbr):
                members.update(on_path)
                members.add(nbr)
            elif _low(nbr) or depth < min_chain:
                path.append(nbr)
                on_path.add(nbr)
                stack.append((depth + 1, iter(sorted(adj_out[nbr]))))

    log.info(
        "Shell detection: %d candidates / %d accounts, %d shell-network members",
        len(candidates),
        len(nodes),
        len(members),
    )
    return members
