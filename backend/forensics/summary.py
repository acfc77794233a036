"""
summary.py – Batch statistics and per-account investigation views.

Summary contents
----------------
  volume        : totals, average / largest / smallest transfer
  detection     : flagged accounts, rings, fraud rate, suspicious and
                  ring-linked volume, pattern distribution
  time          : first / last timestamp, span in days, transactions per day,
                  daily activity for the most recent active days
  flows         : highest-volume sender → receiver pairs (parallel
                  transfers aggregated)
  network       : density, average degree, weakly connected components,
                  average clustering (skipped for large graphs)

An empty batch produces a zero-valued summary.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Sequence

import networkx as nx
import pandas as pd

from .config import CLUSTERING_MAX_NODES, DAILY_ACTIVITY_DAYS, TOP_FLOWS
from .graph_builder import Graph
from .models import (
    AccountProfile,
    AnalysisSummary,
    DailyActivity,
    FlowSummary,
    NetworkStatistics,
    TransactionRecord,
)
from .pipeline import DetectionResult
from .utils import round_half_up

log = logging.getLogger(__name__)

_MS_PER_DAY = 86_400_000
_RECENT_TXN_LIMIT = 20


def _network_statistics(graph: Graph) -> NetworkStatistics:
    """Compute graph-level statistics on the collapsed (one edge per pair) graph."""
    G = nx.DiGraph(graph.to_networkx())
    n_nodes = G.number_of_nodes()
    n_edges = G.number_of_edges()

    if n_nodes == 0:
        return NetworkStatistics(
            total_nodes=0, total_edges=0, graph_density=0.0,
            avg_degree=0.0, connected_components=0, avg_clustering=0.0,
        )

    if n_nodes <= CLUSTERING_MAX_NODES:
        avg_clustering = round(nx.average_clustering(G.to_undirected()), 4)
    else:
        log.info("Graph too large for clustering computation; skipping.")
        avg_clustering = None

    return NetworkStatistics(
        total_nodes=n_nodes,
        total_edges=n_edges,
        graph_density=round(nx.density(G), 6),
        avg_degree=round((2 * n_edges) / n_nodes, 2),
        connected_components=nx.number_weakly_connected_components(G),
        avg_clustering=avg_clustering,
    )


def _transactions_frame(transactions: Sequence[TransactionRecord]) -> pd.DataFrame:
    df = pd.DataFrame(
        [t.model_dump() for t in transactions],
        columns=["transaction_id", "sender_id", "receiver_id", "amount", "timestamp"],
    )
    df["amount"] = df["amount"].astype(float)
    return df


def _top_flows(df: pd.DataFrame, limit: int) -> List[FlowSummary]:
    flows = (
        df.groupby(["sender_id", "receiver_id"])
        .agg(total_amount=("amount", "sum"), tx_count=("amount", "count"))
        .reset_index()
        .sort_values(
            ["total_amount", "sender_id", "receiver_id"],
            ascending=[False, True, True],
        )
        .head(limit)
    )
    return [
        FlowSummary(
            sender_id=row.sender_id,
            receiver_id=row.receiver_id,
            total_amount=round(float(row.total_amount), 2),
            tx_count=int(row.tx_count),
        )
        for row in flows.itertuples(index=False)
    ]


def _daily_activity(df: pd.DataFrame, days: int) -> List[DailyActivity]:
    dates = pd.to_datetime(df["timestamp"], unit="ms", utc=True).dt.strftime("%Y-%m-%d")
    daily = (
        df.assign(date=dates)
        .groupby("date")
        .agg(total_amount=("amount", "sum"), tx_count=("amount", "count"))
        .sort_index()
        .tail(days)
    )
    return [
        DailyActivity(
            date=str(date),
            total_amount=round(float(row.total_amount), 2),
            tx_count=int(row.tx_count),
        )
        for date, row in daily.iterrows()
    ]


def _pattern_distribution(result: DetectionResult) -> Dict[str, int]:
    counts: Counter = Counter()
    for acc in result.suspicious:
        counts.update(acc.detected_patterns)
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def summarize(
    result: DetectionResult, transactions: Sequence[TransactionRecord]
) -> AnalysisSummary:
    """Build the batch-level AnalysisSummary for one detection run."""
    graph = result.graph
    n_accounts = graph.number_of_nodes()
    n_txns = len(transactions)

    suspicious_volume = sum(
        graph.nodes[s.account_id].total_sent + graph.nodes[s.account_id].total_received
        for s in result.suspicious
    ) / 2
    ring_volume = sum(
        graph.nodes[acc].total_sent
        for ring in result.fraud_rings
        for acc in ring.member_accounts
    )
    fraud_rate = (
        round_half_up(len(result.suspicious) / n_accounts * 100) if n_accounts else 0.0
    )

    if n_txns:
        df = _transactions_frame(transactions)
        total_volume = float(df["amount"].sum())
        first_ts = int(df["timestamp"].min())
        last_ts = int(df["timestamp"].max())
        span_days = max(1, int(round_half_up((last_ts - first_ts) / _MS_PER_DAY, 0)))
        volume = {
            "total_volume": round(total_volume, 2),
            "avg_amount": round(total_volume / n_txns, 2),
            "max_amount": round(float(df["amount"].max()), 2),
            "min_amount": round(float(df["amount"].min()), 2),
        }
        top_flows = _top_flows(df, TOP_FLOWS)
        daily = _daily_activity(df, DAILY_ACTIVITY_DAYS)
    else:
        first_ts = last_ts = None
        span_days = 1
        volume = {"total_volume": 0.0, "avg_amount": 0.0, "max_amount": 0.0, "min_amount": 0.0}
        top_flows, daily = [], []

    summary = AnalysisSummary(
        total_accounts_analyzed=n_accounts,
        total_transactions=n_txns,
        **volume,
        suspicious_accounts_flagged=len(result.suspicious),
        fraud_rings_detected=len(result.fraud_rings),
        fraud_rate_percent=fraud_rate,
        suspicious_volume=round(suspicious_volume, 2),
        ring_volume=round(ring_volume, 2),
        first_timestamp=first_ts,
        last_timestamp=last_ts,
        span_days=span_days,
        txn_per_day=round_half_up(n_txns / span_days),
        pattern_distribution=_pattern_distribution(result),
        top_flows=top_flows,
        daily_activity=daily,
        network_statistics=_network_statistics(graph),
        processing_time_seconds=result.processing_time_seconds,
    )
    log.info(
        "Summary: %d accounts, %d transactions, %d flagged, %d rings",
        n_accounts,
        n_txns,
        summary.suspicious_accounts_flagged,
        summary.fraud_rings_detected,
    )
    return summary


def account_profile(result: DetectionResult, account_id: str) -> AccountProfile:
    """
    Investigator view of one account.

    Raises KeyError when the account does not appear in the graph.
    """
    node = result.graph.nodes[account_id]
    suspicious = next((s for s in result.suspicious if s.account_id == account_id), None)
    ring = None
    if suspicious is not None and suspicious.ring_id:
        ring = next(r for r in result.fraud_rings if r.ring_id == suspicious.ring_id)

    recent = sorted(
        result.graph.txn_by_account[account_id],
        key=lambda t: t.timestamp,
        reverse=True,
    )[:_RECENT_TXN_LIMIT]

    return AccountProfile(
        account_id=account_id,
        total_sent=node.total_sent,
        total_received=node.total_received,
        tx_count=node.txn_count,
        sent_to=sorted({e.target for e in node.out_edges}),
        received_from=sorted({e.source for e in node.in_edges}),
        recent_transactions=recent,
        suspicious=suspicious,
        ring=ring,
    )
