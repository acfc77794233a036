"""
models.py – Pydantic record models.
Defines the value objects the engine consumes and produces.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionRecord(BaseModel):
    """
    One already-validated money transfer.
    timestamp is epoch milliseconds.
    """
    model_config = ConfigDict(frozen=True)

    transaction_id: str = Field(..., min_length=1)
    sender_id: str = Field(..., min_length=1)
    receiver_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0.0)
    timestamp: int


class SuspiciousAccount(BaseModel):
    """
    An account holding at least one pattern tag.
    ring_id is filled in by ring grouping when the account joins a ring.
    """
    account_id: str
    suspicion_score: float = Field(..., ge=0.0, le=100.0)
    detected_patterns: List[str]
    raw_score: int
    ring_id: Optional[str] = None


class FraudRing(BaseModel):
    ring_id: str
    member_accounts: List[str] = Field(..., min_length=2)
    pattern_type: str
    risk_score: float = Field(..., ge=0.0, le=100.0)


class FlowSummary(BaseModel):
    sender_id: str
    receiver_id: str
    total_amount: float
    tx_count: int


class DailyActivity(BaseModel):
    date: str
    total_amount: float
    tx_count: int


class NetworkStatistics(BaseModel):
    total_nodes: int
    total_edges: int
    graph_density: float
    avg_degree: float
    connected_components: int
    avg_clustering: Optional[float] = None


class AnalysisSummary(BaseModel):
    total_accounts_analyzed: int
    total_transactions: int
    total_volume: float
    avg_amount: float
    max_amount: float
    min_amount: float
    suspicious_accounts_flagged: int
    fraud_rings_detected: int
    fraud_rate_percent: float
    suspicious_volume: float
    ring_volume: float
    first_timestamp: Optional[int] = None
    last_timestamp: Optional[int] = None
    span_days: int
    txn_per_day: float
    pattern_distribution: Dict[str, int]
    top_flows: List[FlowSummary]
    daily_activity: List[DailyActivity]
    network_statistics: NetworkStatistics
    processing_time_seconds: float


class AccountProfile(BaseModel):
    account_id: str
    total_sent: float
    total_received: float
    tx_count: int
    sent_to: List[str]
    received_from: List[str]
    recent_transactions: List[TransactionRecord]
    suspicious: Optional[SuspiciousAccount] = None
    ring: Optional[FraudRing] = None
