"""
pipeline.py – Orchestrate the full forensics run.

    transactions → graph → {cycles, fans, shells, velocity} → scores → rings

Each call builds a fresh Graph and keeps no state between invocations, so
re-running on the same transactions reproduces the same result and a
date-range re-filter is simply a new end-to-end run on the narrowed slice.
"""
from __future__ import annotations

import concurrent.futures
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from .config import DETECTOR_WORKERS, PARALLEL_DETECTORS
from .cycle_detector import CycleResult, detect_cycles
from .exceptions import DegenerateInputError
from .graph_builder import Graph, build_graph
from .models import FraudRing, SuspiciousAccount, TransactionRecord
from .scoring import calculate_scores
from .shell_detector import detect_shell_networks
from .smurf_detector import detect_fan_patterns
from .utils import group_fraud_rings
from .velocity_detector import detect_high_velocity

log = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    graph: Graph
    suspicious: List[SuspiciousAccount] = field(default_factory=list)
    fraud_rings: List[FraudRing] = field(default_factory=list)
    cycle_result: CycleResult = field(default_factory=CycleResult)
    fan_accounts: Dict[str, Set[str]] = field(default_factory=dict)
    shell_accounts: Set[str] = field(default_factory=set)
    velocity_accounts: Set[str] = field(default_factory=set)
    processing_time_seconds: float = 0.0


def run_detection(graph: Graph, parallel: Optional[bool] = None) -> DetectionResult:
    """
    Run the four detectors over a built graph, then score and group rings.

    Detectors only read the graph.  With ``parallel`` each runs as its own
    thread-pool task; scoring starts only after all four have finished.
    """
    if parallel is None:
        parallel = PARALLEL_DETECTORS

    if parallel:
        with concurrent.futures.ThreadPoolExecutor(max_workers=DETECTOR_WORKERS) as pool:
            f_cycles   = pool.submit(detect_cycles, graph)
            f_fans     = pool.submit(detect_fan_patterns, graph)
            f_shells   = pool.submit(detect_shell_networks, graph)
            f_velocity = pool.submit(detect_high_velocity, graph)
            cycle_result      = f_cycles.result()
            fan_accounts      = f_fans.result()
            shell_accounts    = f_shells.result()
            velocity_accounts = f_velocity.result()
    else:
        cycle_result      = detect_cycles(graph)
        fan_accounts      = detect_fan_patterns(graph)
        shell_accounts    = detect_shell_networks(graph)
        velocity_accounts = detect_high_velocity(graph)

    scored = calculate_scores(
        cycle_result.account_patterns, fan_accounts, shell_accounts, velocity_accounts
    )
    fraud_rings, suspicious = group_fraud_rings(scored, cycle_result.cycles, graph)

    return DetectionResult(
        graph=graph,
        suspicious=suspicious,
        fraud_rings=fraud_rings,
        cycle_result=cycle_result,
        fan_accounts=fan_accounts,
        shell_accounts=shell_accounts,
        velocity_accounts=velocity_accounts,
    )


def analyze(
    transactions: Sequence[TransactionRecord],
    require_transactions: bool = False,
    parallel: Optional[bool] = None,
) -> DetectionResult:
    """
    Build the graph from already-validated records and run detection.

    An empty batch yields empty outputs unless ``require_transactions`` is
    set, in which case DegenerateInputError is raised before any stage runs.
    """
    if require_transactions and not transactions:
        raise DegenerateInputError()

    start_time = time.perf_counter()
    graph = build_graph(transactions)
    result = run_detection(graph, parallel=parallel)
    result.processing_time_seconds = round(time.perf_counter() - start_time, 3)

    log.info(
        "Analysis complete in %.3fs: %d transactions, %d suspicious accounts, %d rings",
        result.processing_time_seconds,
        len(transactions),
        len(result.suspicious),
        len(result.fraud_rings),
    )
    return result


def filter_by_date_range(
    transactions: Sequence[TransactionRecord], from_ms: int, to_ms: int
) -> List[TransactionRecord]:
    """Inclusive timestamp slice, input order preserved."""
    return [t for t in transactions if from_ms <= t.timestamp <= to_ms]


def analyze_date_range(
    transactions: Sequence[TransactionRecord],
    from_ms: int,
    to_ms: int,
    parallel: Optional[bool] = None,
) -> DetectionResult:
    """Re-run the whole pipeline on the transactions inside [from_ms, to_ms]."""
    subset = filter_by_date_range(transactions, from_ms, to_ms)
    log.info(
        "Date-range re-run: %d of %d transactions in [%d, %d]",
        len(subset),
        len(transactions),
        from_ms,
        to_ms,
    )
    return analyze(subset, parallel=parallel)
