"""
graph_builder.py – Build the account graph from transaction records.

The graph is a multigraph: every transaction becomes its own Edge, so
repeated transfers between the same pair stay distinct.  Distinct
neighbours are additionally indexed in adjacency sets for cheap
reachability checks.

Node attributes
---------------
out_edges, in_edges  : list[Edge]
transactions         : list[TransactionRecord]  (both directions)
total_sent, total_received : float
txn_count            : int   (outgoing + incoming edges)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

import networkx as nx

from .models import TransactionRecord

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    amount: float
    timestamp: int
    transaction_id: str


@dataclass
class AccountNode:
    id: str
    out_edges: List[Edge] = field(default_factory=list)
    in_edges: List[Edge] = field(default_factory=list)
    transactions: List[TransactionRecord] = field(default_factory=list)
    total_sent: float = 0.0
    total_received: float = 0.0
    txn_count: int = 0


@dataclass
class Graph:
    nodes: Dict[str, AccountNode] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    adj_out: Dict[str, Set[str]] = field(default_factory=dict)
    adj_in: Dict[str, Set[str]] = field(default_factory=dict)
    txn_by_account: Dict[str, List[TransactionRecord]] = field(default_factory=dict)

    def _ensure(self, account_id: str) -> AccountNode:
        node = self.nodes.get(account_id)
        if node is None:
            node = AccountNode(id=account_id)
            self.nodes[account_id] = node
            self.adj_out[account_id] = set()
            self.adj_in[account_id] = set()
            self.txn_by_account[account_id] = node.transactions
        return node

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def number_of_edges(self) -> int:
        return len(self.edges)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export as a MultiDiGraph with one edge per transaction."""
        G = nx.MultiDiGraph()
        G.add_nodes_from([
            (acc, {
                "total_sent":     node.total_sent,
                "total_received": node.total_received,
                "tx_count":       node.txn_count,
            })
            for acc, node in self.nodes.items()
        ])
        G.add_edges_from([
            (e.source, e.target, {
                "transaction_id": e.transaction_id,
                "amount":         e.amount,
                "timestamp":      e.timestamp,
            })
            for e in self.edges
        ])
        return G


def build_graph(transactions: Iterable[TransactionRecord]) -> Graph:
    """
    Construct a fresh Graph in a single pass over already-validated records.
    No validation happens here.
    """
    G = Graph()

    for txn in transactions:
        sender = G._ensure(txn.sender_id)
        receiver = G._ensure(txn.receiver_id)

        edge = Edge(
            source=txn.sender_id,
            target=txn.receiver_id,
            amount=txn.amount,
            timestamp=txn.timestamp,
            transaction_id=txn.transaction_id,
        )
        G.edges.append(edge)
        G.adj_out[txn.sender_id].add(txn.receiver_id)
        G.adj_in[txn.receiver_id].add(txn.sender_id)

        sender.out_edges.append(edge)
        sender.total_sent += txn.amount
        sender.txn_count += 1
        sender.transactions.append(txn)

        receiver.in_edges.append(edge)
        receiver.total_received += txn.amount
        receiver.txn_count += 1
        receiver.transactions.append(txn)

    log.info("Graph built: %d nodes, %d edges", G.number_of_nodes(), G.number_of_edges())
    return G
