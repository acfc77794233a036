"""
Financial Forensics Engine – graph-based money-muling detection.
"""
from .exceptions import DegenerateInputError, ForensicsError, InputError
from .graph_builder import AccountNode, Edge, Graph, build_graph
from .models import FraudRing, SuspiciousAccount, TransactionRecord
from .pipeline import DetectionResult, analyze, analyze_date_range, run_detection
from .summary import account_profile, summarize

__version__ = "2.0.0"

__all__ = [
    "AccountNode",
    "DegenerateInputError",
    "DetectionResult",
    "Edge",
    "ForensicsError",
    "FraudRing",
    "Graph",
    "InputError",
    "SuspiciousAccount",
    "TransactionRecord",
    "account_profile",
    "analyze",
    "analyze_date_range",
    "build_graph",
    "run_detection",
    "summarize",
]
