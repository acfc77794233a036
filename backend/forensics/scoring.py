"""
scoring.py – Suspicion scoring engine.

Scoring model
-------------
Every distinct tag an account holds adds a fixed number of points:

    cycle_length_<N>   SCORE_CYCLE          (per distinct cycle length)
    fan_in / fan_out   SCORE_FAN            (each)
    shell_network      SCORE_SHELL
    high_velocity      SCORE_HIGH_VELOCITY

raw scores are normalised against the highest raw score in the batch, so the
most-flagged account always scores 100.0.  Accounts without tags never appear.
Output is sorted by score descending, then account id ascending.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Set

from .config import SCORE_CYCLE, SCORE_FAN, SCORE_SHELL, SCORE_HIGH_VELOCITY
from .models import SuspiciousAccount
from .utils import round_half_up

log = logging.getLogger(__name__)

SHELL_TAG = "shell_network"
VELOCITY_TAG = "high_velocity"


def calculate_scores(
    cycle_patterns: Mapping[str, Set[str]],
    fan_patterns: Mapping[str, Set[str]],
    shell_accounts: Set[str],
    velocity_accounts: Set[str],
) -> List[SuspiciousAccount]:
    """
    Merge all detector outputs into a ranked list of SuspiciousAccount.
    """
    raw: Dict[str, int] = {}
    patterns: Dict[str, Set[str]] = {}

    def _add(acc: str, points: int, tag: str) -> None:
        tags = patterns.setdefault(acc, set())
        if tag in tags:
            return
        tags.add(tag)
        raw[acc] = raw.get(acc, 0) + points

    for acc, tags in cycle_patterns.items():
        for tag in tags:
            _add(acc, SCORE_CYCLE, tag)
    for acc, tags in fan_patterns.items():
        for tag in tags:
            _add(acc, SCORE_FAN, tag)
    for acc in shell_accounts:
        _add(acc, SCORE_SHELL, SHELL_TAG)
    for acc in velocity_accounts:
        _add(acc, SCORE_HIGH_VELOCITY, VELOCITY_TAG)

    max_raw = max(max(raw.values(), default=1), 1)

    suspicious = [
        SuspiciousAccount(
            account_id=acc,
            suspicion_score=min(100.0, round_half_up(score / max_raw * 100)),
            detected_patterns=sorted(patterns[acc]),
            raw_score=score,
        )
        for acc, score in raw.items()
    ]
    suspicious.sort(key=lambda s: (-s.suspicion_score, s.account_id))

    log.info("Scoring complete: %d accounts scored (max raw %d)", len(suspicious), max_raw)
    return suspicious
