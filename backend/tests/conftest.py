"""
Pytest configuration and shared fixtures for forensics engine tests.
"""
import itertools
from typing import Callable, List

import pytest

from forensics.models import TransactionRecord

HOUR_MS = 60 * 60 * 1000
MINUTE_MS = 60 * 1000
DAY_MS = 24 * HOUR_MS
BASE_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z


@pytest.fixture
def txn() -> Callable[..., TransactionRecord]:
    """Factory building TransactionRecords with auto-numbered ids."""
    counter = itertools.count(1)

    def _make(sender: str, receiver: str, amount: float = 100.0, ts: int = BASE_MS) -> TransactionRecord:
        return TransactionRecord(
            transaction_id=f"TXN_{next(counter):05d}",
            sender_id=sender,
            receiver_id=receiver,
            amount=amount,
            timestamp=ts,
        )

    return _make


@pytest.fixture
def cycle_transactions(txn) -> List[TransactionRecord]:
    """A → B → C → A, $1000 each at increasing timestamps."""
    return [
        txn("A", "B", 1000.0, BASE_MS),
        txn("B", "C", 1000.0, BASE_MS + HOUR_MS),
        txn("C", "A", 1000.0, BASE_MS + 2 * HOUR_MS),
    ]


@pytest.fixture
def fan_in_transactions(txn) -> List[TransactionRecord]:
    """Ten distinct senders pay H $100 each within two hours."""
    return [
        txn(f"S{i}", "H", 100.0, BASE_MS + i * 12 * MINUTE_MS)
        for i in range(10)
    ]


@pytest.fixture
def shell_chain_transactions(txn) -> List[TransactionRecord]:
    """Three-hop chain of low-activity accounts: P → Q → R → T."""
    return [
        txn("P", "Q", 5000.0, BASE_MS),
        txn("Q", "R", 4900.0, BASE_MS + HOUR_MS),
        txn("R", "T", 4800.0, BASE_MS + 2 * HOUR_MS),
    ]


@pytest.fixture
def two_txn_shell_transactions(txn) -> List[TransactionRecord]:
    """P has two lifetime transfers (in from busy X, out to Q), then Q → R → T."""
    txns = [txn("X", "P", 6000.0, BASE_MS - DAY_MS)]
    txns += [txn("X", f"Y{i}", 50.0, BASE_MS + (i + 1) * DAY_MS) for i in range(4)]
    txns += [
        txn("P", "Q", 5000.0, BASE_MS),
        txn("Q", "R", 4900.0, BASE_MS + HOUR_MS),
        txn("R", "T", 4800.0, BASE_MS + 2 * HOUR_MS),
    ]
    return txns
