"""
sample_data.py – Generate synthetic transactions that contain money-muling
patterns for demonstration and testing.

Patterns embedded:
- Circular routing of length 3 and 4
- Smurfing fan-in (12 senders → 1 hub) and fan-out (1 hub → 12 receivers)
- Shell / pass-through relay chain
- Random legitimate traffic among the first 15 accounts
"""
from __future__ import annotations

import random
from typing import List, Optional

from .models import TransactionRecord

_DEFAULT_NOW_MS = 1_767_225_600_000  # 2026-01-01T00:00:00Z


def generate_sample_transactions(
    seed: int = 42,
    now_ms: Optional[int] = None,
    n_normal: int = 60,
) -> List[TransactionRecord]:
    """Return a reproducible list of TransactionRecord for the given seed."""
    rng = random.Random(seed)
    now = _DEFAULT_NOW_MS if now_ms is None else now_ms
    accs = [f"ACC_{i:05d}" for i in range(1, 41)]
    rows: List[TransactionRecord] = []

    def _add_tx(sender: str, receiver: str, amount: float, offset_ms: float = 0) -> None:
        rows.append(TransactionRecord(
            transaction_id=f"TXN_{len(rows) + 1:06d}",
            sender_id=sender,
            receiver_id=receiver,
            amount=round(amount, 2),
            timestamp=int(now - offset_ms),
        ))

    # ── 1. Circular routing ───────────────────────────────────────────────
    _add_tx("ACC_00001", "ACC_00002", 5000, 7_200_000)
    _add_tx("ACC_00002", "ACC_00003", 4800, 6_900_000)
    _add_tx("ACC_00003", "ACC_00001", 4600, 6_600_000)

    _add_tx("ACC_00004", "ACC_00005", 10000, 5_000_000)
    _add_tx("ACC_00005", "ACC_00006", 9500, 4_800_000)
    _add_tx("ACC_00006", "ACC_00007", 9000, 4_600_000)
    _add_tx("ACC_00007", "ACC_00004", 8500, 4_400_000)

    # ── 2. Smurfing ───────────────────────────────────────────────────────
    for i in range(11, 23):
        _add_tx(accs[i], "ACC_00010", 1000 + rng.random() * 500, rng.random() * 50_000_000)
    for i in range(24, 36):
        _add_tx("ACC_00023", accs[i], 800 + rng.random() * 400, rng.random() * 40_000_000)

    # ── 3. Shell relay chain ──────────────────────────────────────────────
    _add_tx("ACC_00008", "ACC_00036", 20000, 3_000_000)
    _add_tx("ACC_00036", "ACC_00037", 19500, 2_900_000)
    _add_tx("ACC_00037", "ACC_00038", 19000, 2_800_000)
    _add_tx("ACC_00038", "ACC_00039", 18500, 2_700_000)
    _add_tx("ACC_00040", "ACC_00037", 500, 2_600_000)

    # ── 4. Normal traffic ─────────────────────────────────────────────────
    normal = accs[:15]
    for _ in range(n_normal):
        s, r = rng.choice(normal), rng.choice(normal)
        if s != r:
            _add_tx(s, r, 100 + rng.random() * 5000, rng.random() * 90_000_000)

    return rows
