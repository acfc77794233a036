"""
smurf_detector.py – Detect smurfing patterns (fan-in / fan-out).

Smurfing (structuring)
-----------------------
  Fan-in  : FAN_THRESHOLD+ distinct senders → 1 receiver within a
            SMURF_WINDOW_HOURS window starting at one of its transfers.
  Fan-out : 1 sender → FAN_THRESHOLD+ distinct receivers within the same
            kind of window.

Both checks run independently; an account may carry both tags.

Performance
-----------
Two-pointer sliding window: O(n) per account instead of O(n²).
"""
from __future__ import annotations

import logging
from typing import Dict, List, Set

from .config import FAN_THRESHOLD, SMURF_WINDOW_HOURS
from .graph_builder import Edge, Graph

log = logging.getLogger(__name__)

_MS_PER_HOUR = 60 * 60 * 1000


def _sliding_window_unique(
    sorted_times: List[int],
    sorted_counterparts: List[str],
    window_ms: int,
    threshold: int,
) -> bool:
    """
    Two-pointer sliding window: True when some window of length window_ms
    (inclusive at both ends) holds >= threshold distinct counterparties.
    """
    n = len(sorted_times)
    if n < threshold:
        return False

    left = 0
    window: Dict[str, int] = {}

    for right in range(n):
        cp = sorted_counterparts[right]
        window[cp] = window.get(cp, 0) + 1

        while sorted_times[right] - sorted_times[left] > window_ms:
            lcp = sorted_counterparts[left]
            window[lcp] -= 1
            if window[lcp] == 0:
                del window[lcp]
            left += 1

        if len(window) >= threshold:
            return True

    return False


def _fans(edges: List[Edge], counterpart: str, window_ms: int, threshold: int) -> bool:
    ordered = sorted(edges, key=lambda e: e.timestamp)
    return _sliding_window_unique(
        [e.timestamp for e in ordered],
        [getattr(e, counterpart) for e in ordered],
        window_ms,
        threshold,
    )


def detect_fan_patterns(
    graph: Graph,
    threshold: int = FAN_THRESHOLD,
    window_hours: float = SMURF_WINDOW_HOURS,
) -> Dict[str, Set[str]]:
    """
    Return a mapping account → subset of {"fan_in", "fan_out"}.
    Accounts without either tag are absent.
    """
    fan_accounts: Dict[str, Set[str]] = {}
    window_ms = int(window_hours * _MS_PER_HOUR)

    for acc, node in graph.nodes.items():
        # ── Fan-in: many senders → one receiver ────────────────────────────
        if _fans(node.in_edges, "source", window_ms, threshold):
            fan_accounts.setdefault(acc, set()).add("fan_in")
        # ── Fan-out: one sender → many receivers ───────────────────────────
        if _fans(node.out_edges, "target", window_ms, threshold):
            fan_accounts.setdefault(acc, set()).add("fan_out")

    log.info(
        "Smurfing detection: %d fan-in, %d fan-out accounts",
        sum(1 for tags in fan_accounts.values() if "fan_in" in tags),
        sum(1 for tags in fan_accounts.values() if "fan_out" in tags),
    )
    return fan_accounts
