"""
Unit tests for high-velocity detection.
"""
from conftest import BASE_MS, DAY_MS, MINUTE_MS
from forensics.graph_builder import build_graph
from forensics.velocity_detector import detect_high_velocity


class TestDetectHighVelocity:
    """Tests for detect_high_velocity."""

    def test_five_transfers_in_ten_minutes(self, txn):
        txns = [txn("V", f"R{i}", 10.0, BASE_MS + i * 2 * MINUTE_MS) for i in range(5)]

        assert detect_high_velocity(build_graph(txns)) == {"V"}

    def test_same_transfers_spread_over_days(self, txn):
        txns = [txn("V", f"R{i}", 10.0, BASE_MS + i * DAY_MS) for i in range(5)]

        assert detect_high_velocity(build_graph(txns)) == set()

    def test_four_transfers_not_enough(self, txn):
        txns = [txn("V", f"R{i}", 10.0, BASE_MS + i * MINUTE_MS) for i in range(4)]

        assert detect_high_velocity(build_graph(txns)) == set()

    def test_window_end_is_inclusive(self, txn):
        times = [0, 10, 20, 30, 60]
        txns = [txn("V", f"R{i}", 10.0, BASE_MS + t * MINUTE_MS) for i, t in enumerate(times)]

        assert detect_high_velocity(build_graph(txns)) == {"V"}

    def test_window_just_exceeded(self, txn):
        times = [0, 10, 20, 30]
        txns = [txn("V", f"R{i}", 10.0, BASE_MS + t * MINUTE_MS) for i, t in enumerate(times)]
        txns.append(txn("V", "R9", 10.0, BASE_MS + 60 * MINUTE_MS + 1))

        assert detect_high_velocity(build_graph(txns)) == set()

    def test_sent_and_received_both_count(self, txn):
        """Incoming and outgoing transfers share one timeline."""
        txns = [
            txn("S1", "V", 10.0, BASE_MS),
            txn("V", "R1", 10.0, BASE_MS + MINUTE_MS),
            txn("S2", "V", 10.0, BASE_MS + 2 * MINUTE_MS),
            txn("V", "R2", 10.0, BASE_MS + 3 * MINUTE_MS),
            txn("S3", "V", 10.0, BASE_MS + 4 * MINUTE_MS),
        ]
        assert detect_high_velocity(build_graph(txns)) == {"V"}

    def test_burst_late_in_history(self, txn):
        """The scan continues past quiet early activity."""
        txns = [txn("V", f"E{i}", 10.0, BASE_MS + i * DAY_MS) for i in range(3)]
        late = BASE_MS + 10 * DAY_MS
        txns += [txn("V", f"L{i}", 10.0, late + i * MINUTE_MS) for i in range(5)]

        assert detect_high_velocity(build_graph(txns)) == {"V"}

    def test_empty_graph(self):
        assert detect_high_velocity(build_graph([])) == set()
