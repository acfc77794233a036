"""
velocity_detector.py – Detect accounts transacting abnormally fast.

An account with at least VELOCITY_MIN_TX transactions (sent + received) is
flagged ``high_velocity`` when VELOCITY_MIN_TX of them fall inside a single
VELOCITY_WINDOW_MINUTES window that starts at one of its transactions.
"""
from __future__ import annotations

import logging
from typing import Set

from .config import VELOCITY_MIN_TX, VELOCITY_WINDOW_MINUTES
from .graph_builder import Graph

log = logging.getLogger(__name__)


def detect_high_velocity(
    graph: Graph,
    min_tx: int = VELOCITY_MIN_TX,
    window_minutes: float = VELOCITY_WINDOW_MINUTES,
) -> Set[str]:
    flagged: Set[str] = set()
    window_ms = window_minutes * 60 * 1000

    for acc, node in graph.nodes.items():
        if len(node.transactions) < min_tx:
            continue
        times = sorted(txn.timestamp for txn in node.transactions)
        # min_tx transactions starting at i fit the window iff the
        # (min_tx-1)-th successor is still inside it
        for i in range(len(times) - min_tx + 1):
            if times[i + min_tx - 1] <= times[i] + window_ms:
                flagged.add(acc)
                break

    log.info("High-velocity accounts: %d", len(flagged))
    return flagged
